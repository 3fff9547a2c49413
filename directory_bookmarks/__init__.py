"""Persist one bookmarked directory and gate file access through it."""

from __future__ import annotations

from .channel import CHANNEL_NAME, BookmarkChannel, MethodResult
from .config import Settings, load_settings
from .errors import BookmarkError, ErrorCode
from .gate import BOOKMARK_KEY, BookmarkGate, ResolvedBookmark
from .persistence import JsonPreferenceStore, MemoryPreferenceStore, PreferenceStore

__version__ = "0.1.0"


def open_channel(settings: Settings | None = None) -> BookmarkChannel:
    """Build a channel over the file-backed store named in *settings*."""
    settings = settings or load_settings()
    store = JsonPreferenceStore(settings.store.resolved_path)
    return BookmarkChannel(BookmarkGate(store, key=settings.store.key))


__all__ = [
    "BOOKMARK_KEY",
    "CHANNEL_NAME",
    "BookmarkChannel",
    "BookmarkError",
    "BookmarkGate",
    "ErrorCode",
    "JsonPreferenceStore",
    "MemoryPreferenceStore",
    "MethodResult",
    "PreferenceStore",
    "ResolvedBookmark",
    "Settings",
    "load_settings",
    "open_channel",
]
