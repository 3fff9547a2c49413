"""HTTP bridge for directory-bookmarks."""

from __future__ import annotations

import logging

from ..config import Settings

# uvicorn only understands these names; anything else raises KeyError.
_UVICORN_LEVELS = (
    (logging.CRITICAL, "critical"),
    (logging.ERROR, "error"),
    (logging.WARNING, "warning"),
    (logging.INFO, "info"),
    (logging.DEBUG, "debug"),
)


def uvicorn_log_level(level: str) -> str:
    """Map a logging level name (``WARN``, ``info``, ...) to uvicorn's name.

    Unknown names fall back to ``"warning"``, same as ``configure_logging``.
    """
    name = str(level).strip().upper()
    if name == "TRACE":
        return "trace"
    number = logging.getLevelName(name)
    if not isinstance(number, int):
        return "warning"
    for threshold, uvicorn_name in _UVICORN_LEVELS:
        if number >= threshold:
            return uvicorn_name
    return "debug"


def main(
    port: int | None = None,
    host: str | None = None,
    settings: Settings | None = None,
) -> None:
    """Launch the web server."""
    import uvicorn

    from .. import load_settings, open_channel
    from .server import create_app

    settings = settings or load_settings()
    app = create_app(open_channel(settings))
    uvicorn.run(
        app,
        host=host or settings.web.host,
        port=port or settings.web.port,
        log_level=uvicorn_log_level(settings.logging.level),
    )
