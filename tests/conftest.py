from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest
from requests import Session

from comic_feeds.config import FeedConfig, Settings

TEST_TITLE_ID = "yabai"


def make_episode(**overrides: Any) -> dict[str, Any]:
    episode: dict[str, Any] = {
        "id": 101,
        "volume": "第1話",
        "sort_volume": 1,
        "page_count": 18,
        "title": "第1話 僕は殺したい",
        "publish_start": "2020-11-10T12:00:00.000+09:00",
        "publish_end": None,
        "member_publish_start": None,
        "member_publish_end": None,
        "status": "public",
        "page_url": "/comics/yabai/1",
        "ogp_url": "https://mangacross.jp/images/ogp/yabai/1.png",
        "list_image_url": "https://mangacross.jp/images/list/yabai/1.png",
        "list_image_double_url": "https://mangacross.jp/images/list/yabai/1@2x.png",
        "episode_next_date": "",
        "next_date_customize_text": "",
        "is_unlimited_comic": False,
    }
    episode.update(overrides)
    return episode


@pytest.fixture()
def episodes_payload() -> dict[str, Any]:
    return {
        "comic": {
            "episodes": [
                make_episode(id=103, sort_volume=3, title="第3話 僕は見つめた", page_url="/comics/yabai/3"),
                make_episode(id=101, sort_volume=1, title="第1話 僕は殺したい", page_url="/comics/yabai/1"),
                make_episode(
                    id=102,
                    sort_volume=2,
                    title="第2話 僕は盗んだ",
                    page_url="/comics/yabai/2",
                    publish_start=None,
                    status="member",
                ),
            ]
        }
    }


@pytest.fixture()
def mock_session(episodes_payload: dict[str, Any]) -> MagicMock:
    session = MagicMock(spec=Session)
    session.get.return_value.status_code = 200
    session.get.return_value.json.return_value = episodes_payload
    return session


@pytest.fixture()
def comic() -> FeedConfig:
    return FeedConfig(
        title_id=TEST_TITLE_ID,
        title="僕の心のヤバイやつ",
        link="https://feeds.kuminecraft.xyz",
        description="「僕の心のヤバイやつ」の非公式RSSリーダーです",
        created=datetime(2020, 11, 11, 12, 0, 0, tzinfo=timezone.utc),
    )


@pytest.fixture()
def settings() -> Settings:
    return Settings(upstream_url="https://upstream.test", request_timeout=5)
