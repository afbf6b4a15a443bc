"""Configuration helpers for the comic feed server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Tuple

from dotenv import load_dotenv


DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_UPSTREAM_URL = "https://mangacross.jp"
DEFAULT_REQUEST_TIMEOUT = 20

TRUTHY_VALUES = {"1", "true", "yes", "on"}

load_dotenv()


@dataclass(frozen=True, slots=True)
class FeedConfig:
    """Static metadata for one served comic."""

    title_id: str
    title: str
    link: str
    description: str
    created: datetime

    @property
    def slug(self) -> str:
        """Route prefix used for ``/<slug>.rss`` and ``/<slug>.atom``."""

        return self.title_id


COMICS: Tuple[FeedConfig, ...] = (
    FeedConfig(
        title_id="yabai",
        title="僕の心のヤバイやつ",
        link="https://feeds.kuminecraft.xyz",
        description="「僕の心のヤバイやつ」の非公式RSSリーダーです",
        created=datetime(2020, 11, 11, 12, 0, 0, tzinfo=timezone.utc),
    ),
)


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime configuration loaded from environment variables."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    upstream_url: str = DEFAULT_UPSTREAM_URL
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    silent_errors: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""

        return cls(
            host=os.getenv("FEEDS_HOST", DEFAULT_HOST),
            port=_get_int("FEEDS_PORT", DEFAULT_PORT),
            upstream_url=os.getenv("FEEDS_UPSTREAM_URL", DEFAULT_UPSTREAM_URL).rstrip("/"),
            request_timeout=_get_int("FEEDS_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            silent_errors=_get_bool("FEEDS_SILENT_ERRORS", False),
        )


def _get_int(var_name: str, default: int) -> int:
    """Read a positive integer environment variable, falling back to ``default``."""

    raw_value = os.getenv(var_name)
    if raw_value is None:
        return default
    try:
        value = int(raw_value)
    except ValueError:
        return default
    return value if value > 0 else default


def _get_bool(var_name: str, default: bool) -> bool:
    """Read a boolean environment variable; only ``TRUTHY_VALUES`` count as true."""

    raw_value = os.getenv(var_name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in TRUTHY_VALUES
