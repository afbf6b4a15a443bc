"""Unofficial RSS and Atom feeds for mangacross web comics."""

__all__ = [
    "config",
    "upstream",
    "feed",
    "server",
]
