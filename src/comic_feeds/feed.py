"""Feed records and RSS/Atom serialization for comic episodes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional, Sequence, Tuple

from feedgen.feed import FeedGenerator

from .config import FeedConfig
from .upstream import Episode, fetch_episodes

LOGGER = logging.getLogger(__name__)

SITE_URL = "https://mangacross.jp"


class FeedSerializationError(RuntimeError):
    """Raised when a feed cannot be converted to XML."""


@dataclass(frozen=True, slots=True)
class FeedItem:
    """Structured representation of a single feed entry."""

    title: str
    link: str
    created: Optional[datetime]
    id: str
    description: str


@dataclass(frozen=True, slots=True)
class Author:
    """Feed author; left empty for the comic feeds."""

    name: str = ""
    email: str = ""


@dataclass(frozen=True, slots=True)
class Feed:
    """A complete feed, built once per request."""

    title: str
    link: str
    description: str
    created: datetime
    author: Author = field(default_factory=Author)
    items: Tuple[FeedItem, ...] = ()


def episode_to_item(episode: Episode) -> FeedItem:
    """Map an upstream episode onto a feed item."""

    return FeedItem(
        title=episode.title,
        link=f"{SITE_URL}{episode.page_url}",
        created=episode.publish_start,
        id=str(episode.id),
        description=episode.title,
    )


def build_feed(
    config: FeedConfig,
    fetch: Callable[..., Sequence[Episode]] = fetch_episodes,
    **fetch_kwargs: Any,
) -> Feed:
    """Fetch the episodes of ``config`` and assemble a feed from them.

    Upstream errors are left to the caller.
    """

    episodes = fetch(config.title_id, **fetch_kwargs)
    items = tuple(episode_to_item(episode) for episode in episodes)
    return Feed(
        title=config.title,
        link=config.link,
        description=config.description,
        created=config.created,
        items=items,
    )


def render_rss(feed: Feed) -> bytes:
    """Serialize ``feed`` as an RSS 2.0 document."""

    try:
        return _generator_for(feed).rss_str(pretty=True)
    except (ValueError, TypeError) as exc:
        raise FeedSerializationError(f"Failed to render RSS feed {feed.title!r}: {exc}") from exc


def render_atom(feed: Feed) -> bytes:
    """Serialize ``feed`` as an Atom 1.0 document."""

    try:
        return _generator_for(feed).atom_str(pretty=True)
    except (ValueError, TypeError) as exc:
        raise FeedSerializationError(f"Failed to render Atom feed {feed.title!r}: {exc}") from exc


def _generator_for(feed: Feed) -> FeedGenerator:
    """Translate ``feed`` into a feedgen generator, keeping item order."""

    generator = FeedGenerator()
    generator.id(feed.link)
    generator.title(feed.title)
    generator.link(href=feed.link, rel="alternate")
    generator.description(feed.description)
    generator.updated(feed.created)
    generator.pubDate(feed.created)
    # feedgen rejects authors without a name
    if feed.author.name:
        author = {"name": feed.author.name}
        if feed.author.email:
            author["email"] = feed.author.email
        generator.author(author)

    for item in feed.items:
        entry = generator.add_entry(order="append")
        entry.id(item.id)
        entry.guid(item.id, permalink=False)
        # feedgen refuses entries without a title
        entry.title(item.title or item.id)
        entry.link(href=item.link)
        entry.description(item.description, isSummary=True)
        if item.created is not None:
            entry.published(item.created)
            entry.updated(item.created)
        else:
            # Atom requires <updated>; feedgen would otherwise stamp the render time
            entry.updated(feed.created)

    return generator
