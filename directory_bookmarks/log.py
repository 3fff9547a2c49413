"""Package logger for directory-bookmarks."""

from __future__ import annotations

import logging

logger = logging.getLogger("directory_bookmarks")

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | int = "WARNING") -> None:
    """Attach a stderr handler to the package logger at *level*.

    Safe to call more than once; the handler is only added the first time.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)
    if not any(getattr(h, "_directory_bookmarks", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._directory_bookmarks = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
