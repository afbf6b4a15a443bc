from datetime import timezone

import pytest

from comic_feeds.config import COMICS, DEFAULT_PORT, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("FEEDS_HOST", "FEEDS_PORT", "FEEDS_UPSTREAM_URL", "FEEDS_REQUEST_TIMEOUT", "FEEDS_SILENT_ERRORS"):
        monkeypatch.delenv(var, raising=False)


def test_defaults():
    settings = Settings.from_env()

    assert settings.host == "0.0.0.0"
    assert settings.port == 8080
    assert settings.upstream_url == "https://mangacross.jp"
    assert settings.request_timeout == 20
    assert settings.silent_errors is False


def test_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("FEEDS_HOST", "127.0.0.1")
    monkeypatch.setenv("FEEDS_PORT", "9090")
    monkeypatch.setenv("FEEDS_UPSTREAM_URL", "http://localhost:8000/")
    monkeypatch.setenv("FEEDS_REQUEST_TIMEOUT", "3")
    monkeypatch.setenv("FEEDS_SILENT_ERRORS", "yes")

    settings = Settings.from_env()

    assert settings.host == "127.0.0.1"
    assert settings.port == 9090
    assert settings.upstream_url == "http://localhost:8000"
    assert settings.request_timeout == 3
    assert settings.silent_errors is True


@pytest.mark.parametrize("raw", ["not-a-number", "0", "-5"])
def test_invalid_port_falls_back(monkeypatch: pytest.MonkeyPatch, raw: str):
    monkeypatch.setenv("FEEDS_PORT", raw)

    assert Settings.from_env().port == DEFAULT_PORT


@pytest.mark.parametrize("raw", ["0", "false", "off", ""])
def test_silent_errors_false_values(monkeypatch: pytest.MonkeyPatch, raw: str):
    monkeypatch.setenv("FEEDS_SILENT_ERRORS", raw)

    assert Settings.from_env().silent_errors is False


def test_yabai_comic():
    (comic,) = COMICS

    assert comic.title_id == "yabai"
    assert comic.slug == "yabai"
    assert comic.link == "https://feeds.kuminecraft.xyz"
    assert comic.created.tzinfo is timezone.utc
    assert (comic.created.year, comic.created.month, comic.created.day, comic.created.hour) == (2020, 11, 11, 12)
