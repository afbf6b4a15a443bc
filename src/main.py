"""Entry point for the comic feed server."""

from __future__ import annotations

import logging

from comic_feeds import config, server

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
LOGGER = logging.getLogger(__name__)


def main() -> None:
    settings = config.Settings.from_env()
    app = server.create_app(settings)
    LOGGER.info(
        "Serving %d comics on %s:%d (silent errors: %s)",
        len(config.COMICS),
        settings.host,
        settings.port,
        settings.silent_errors,
    )
    app.run(host=settings.host, port=settings.port, threaded=True)


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    main()
