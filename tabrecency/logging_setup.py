"""Logging configuration for the ``tabrecency`` logger tree."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def configure_logging(level: str | int = "WARNING") -> logging.Logger:
    """Route ``tabrecency`` records to stderr at ``level``.

    Calling this again only changes the level; the handler is installed once.
    """
    global _handler
    root = logging.getLogger("tabrecency")
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_handler)
    root.setLevel(level)
    return root
