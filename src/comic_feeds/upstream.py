"""Client for the mangacross comic API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

import requests

LOGGER = logging.getLogger(__name__)

UPSTREAM_BASE_URL = "https://mangacross.jp"
DEFAULT_TIMEOUT = 20


class UpstreamError(RuntimeError):
    """Raised when episode metadata cannot be obtained from the comic API."""


class UpstreamUnreachableError(UpstreamError):
    """Raised when the comic API cannot be reached or answers with an error status."""


class UpstreamDecodeError(UpstreamError):
    """Raised when the comic API response is not the expected JSON document."""


@dataclass(frozen=True, slots=True)
class Episode:
    """A single comic episode as described by the comic API."""

    id: int
    title: str
    page_url: str
    volume: str = ""
    sort_volume: int = 0
    page_count: int = 0
    publish_start: Optional[datetime] = None
    publish_end: Optional[datetime] = None
    member_publish_start: Optional[datetime] = None
    member_publish_end: Optional[datetime] = None
    status: str = ""
    ogp_url: str = ""
    list_image_url: str = ""
    list_image_double_url: str = ""
    episode_next_date: str = ""
    next_date_customize_text: str = ""
    is_unlimited_comic: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Episode":
        """Build an episode from one element of ``comic.episodes``.

        Null or missing fields other than ``id`` take their empty value.
        Raises ``KeyError``, ``TypeError`` or ``ValueError`` when ``id`` is
        missing or a field has the wrong JSON type.
        """

        return cls(
            id=_require_int(data["id"], "id"),
            title=_optional_str(data.get("title"), "title"),
            page_url=_optional_str(data.get("page_url"), "page_url"),
            volume=_optional_str(data.get("volume"), "volume"),
            sort_volume=_optional_int(data.get("sort_volume"), "sort_volume"),
            page_count=_optional_int(data.get("page_count"), "page_count"),
            publish_start=_parse_timestamp(data.get("publish_start")),
            publish_end=_parse_timestamp(data.get("publish_end")),
            member_publish_start=_parse_timestamp(data.get("member_publish_start")),
            member_publish_end=_parse_timestamp(data.get("member_publish_end")),
            status=_optional_str(data.get("status"), "status"),
            ogp_url=_optional_str(data.get("ogp_url"), "ogp_url"),
            list_image_url=_optional_str(data.get("list_image_url"), "list_image_url"),
            list_image_double_url=_optional_str(data.get("list_image_double_url"), "list_image_double_url"),
            episode_next_date=_optional_str(data.get("episode_next_date"), "episode_next_date"),
            next_date_customize_text=_optional_str(
                data.get("next_date_customize_text"), "next_date_customize_text"
            ),
            is_unlimited_comic=_optional_bool(data.get("is_unlimited_comic"), "is_unlimited_comic"),
        )


def build_comic_url(title_id: str, base_url: str = UPSTREAM_BASE_URL) -> str:
    """Return the API URL listing the episodes of ``title_id``."""

    return f"{base_url}/api/comics/{title_id}.json"


def fetch_episodes(
    title_id: str,
    base_url: str = UPSTREAM_BASE_URL,
    timeout: int = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> List[Episode]:
    """Download the episode list of a comic.

    Episodes are returned in the order the API lists them. The API also
    exposes ``sort_volume`` but it is not used to re-order the result.
    """

    url = build_comic_url(title_id, base_url)
    client = session if session is not None else requests
    LOGGER.info("Fetching episodes for %s from %s", title_id, url)

    try:
        response = client.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise UpstreamUnreachableError(
            f"Failed to get response for comic {title_id!r}: {exc}"
        ) from exc

    try:
        payload = response.json()
    except ValueError as exc:
        raise UpstreamDecodeError(f"Failed to decode response body for comic {title_id!r}") from exc

    episodes = parse_episodes(payload)
    LOGGER.info("Fetched %d episodes for %s", len(episodes), title_id)
    return episodes


def parse_episodes(payload: Any) -> List[Episode]:
    """Convert a decoded API document into episodes."""

    try:
        raw_episodes = payload["comic"]["episodes"]
        if not isinstance(raw_episodes, list):
            raise TypeError("comic.episodes is not a list")
        return [Episode.from_dict(raw) for raw in raw_episodes]
    except (KeyError, TypeError, ValueError) as exc:
        raise UpstreamDecodeError(f"Unexpected comic API document: {exc}") from exc


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp, keeping ``None`` for unpublished episodes."""

    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _require_int(value: Any, field: str) -> int:
    """Return ``value`` if it is an integer, rejecting booleans."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field} must be an integer")
    return value


def _optional_int(value: Any, field: str) -> int:
    """Return an integer field, reading null or missing as ``0``."""

    if value is None:
        return 0
    return _require_int(value, field)


def _optional_str(value: Any, field: str) -> str:
    """Return a string field, reading null or missing as ``""``."""

    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{field} must be a string")
    return value


def _optional_bool(value: Any, field: str) -> bool:
    """Return a boolean field, reading null or missing as ``False``."""

    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"{field} must be a boolean")
    return value
