"""HTTP surface serving one RSS and one Atom route per comic."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from flask import Flask, Response

from .config import COMICS, FeedConfig, Settings
from .feed import Feed, FeedSerializationError, build_feed, render_atom, render_rss
from .upstream import UpstreamError

LOGGER = logging.getLogger(__name__)

RSS_MIMETYPE = "application/rss+xml"
ATOM_MIMETYPE = "application/atom+xml"

FORMATS: dict[str, tuple[Callable[[Feed], bytes], str]] = {
    "rss": (render_rss, RSS_MIMETYPE),
    "atom": (render_atom, ATOM_MIMETYPE),
}


class FeedHandler:
    """View serving a single comic in a single syndication format."""

    def __init__(self, comic: FeedConfig, fmt: str, settings: Settings) -> None:
        if fmt not in FORMATS:
            raise ValueError(f"Unsupported feed format: {fmt}")
        self.comic = comic
        self.fmt = fmt
        self.settings = settings
        self.__name__ = f"{comic.slug}_{fmt}"

    def __call__(self) -> Response:
        render, mimetype = FORMATS[self.fmt]
        try:
            feed = build_feed(
                self.comic,
                base_url=self.settings.upstream_url,
                timeout=self.settings.request_timeout,
            )
        except UpstreamError as exc:
            LOGGER.error("Failed to build %s feed for %s: %s", self.fmt, self.comic.title_id, exc)
            return self._error_response(502, "Bad Gateway: comic API unavailable")

        try:
            body = render(feed)
        except FeedSerializationError as exc:
            LOGGER.error("Failed to serialize %s feed for %s: %s", self.fmt, self.comic.title_id, exc)
            return self._error_response(500, "Internal Server Error: feed serialization failed")

        LOGGER.info("Served %s feed for %s with %d items", self.fmt, self.comic.title_id, len(feed.items))
        return Response(body, status=200, mimetype=mimetype)

    def _error_response(self, status: int, message: str) -> Response:
        """Answer a failure according to the configured error policy."""

        if self.settings.silent_errors:
            # silent mode answers every failure with an empty 200
            return Response(b"", status=200)
        return Response(message, status=status, mimetype="text/plain")


def create_app(settings: Settings, comics: Iterable[FeedConfig] = COMICS) -> Flask:
    """Create the application and register ``/<slug>.rss`` and ``/<slug>.atom`` per comic."""

    app = Flask(__name__)
    for comic in comics:
        for fmt in FORMATS:
            handler = FeedHandler(comic, fmt, settings)
            app.add_url_rule(
                f"/{comic.slug}.{fmt}",
                endpoint=handler.__name__,
                view_func=handler,
                methods=["GET"],
            )
            LOGGER.debug("Registered /%s.%s", comic.slug, fmt)
    return app
