"""Bookmarked-directory access gate.

One directory path is persisted in a :class:`PreferenceStore`.  Every file
operation reads that path once, checks it still names a directory, and only
then touches the filesystem.  The check and the action are separate calls,
so a directory removed in between surfaces as an I/O error code rather
than a validation code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .errors import BookmarkError, ErrorCode, from_os_error
from .log import logger
from .persistence import PreferenceStore

BOOKMARK_KEY = "bookmarked_directory"

_SEPARATORS = tuple(s for s in (os.sep, os.altsep, "/") if s)


@dataclass
class ResolvedBookmark:
    """A bookmark that was confirmed to exist at ``observed_at``."""

    path: str
    observed_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "createdAt": self.observed_at.isoformat(),
            "metadata": dict(self.metadata),
        }


def check_file_name(file_name: str) -> str:
    """Return *file_name* if it names a single entry inside a directory.

    Raises ``BookmarkError(INVALID_ARGUMENTS)`` for empty names, ``.`` and
    ``..``, names with a path separator or NUL, and absolute paths.
    """
    if not isinstance(file_name, str) or not file_name:
        raise BookmarkError(ErrorCode.INVALID_ARGUMENTS, "fileName is required")
    if file_name in (".", ".."):
        raise BookmarkError(
            ErrorCode.INVALID_ARGUMENTS, f"fileName {file_name!r} is not a file name"
        )
    if "\x00" in file_name or any(sep in file_name for sep in _SEPARATORS):
        raise BookmarkError(
            ErrorCode.INVALID_ARGUMENTS,
            f"fileName {file_name!r} must not contain a path separator",
        )
    if os.path.isabs(file_name) or os.path.splitdrive(file_name)[0]:
        raise BookmarkError(
            ErrorCode.INVALID_ARGUMENTS, f"fileName {file_name!r} must be relative"
        )
    return file_name


class BookmarkGate:
    """Gate file operations behind a single persisted directory bookmark."""

    def __init__(self, store: PreferenceStore, key: str = BOOKMARK_KEY) -> None:
        self.store = store
        self.key = key

    # -- bookmark -------------------------------------------------------------

    def save_bookmark(self, path: str) -> bool:
        """Persist *path* as the bookmark, replacing any previous one."""
        if not isinstance(path, str) or not path:
            raise BookmarkError(ErrorCode.INVALID_ARGUMENTS, "Path is required")
        try:
            if not os.path.isdir(path):
                raise BookmarkError(
                    ErrorCode.INVALID_PATH,
                    "Path does not exist or is not a directory",
                )
            stored = path if os.path.isabs(path) else os.path.abspath(path)
            self.store.put_string(self.key, stored)
        except OSError as exc:
            raise from_os_error(ErrorCode.SAVE_ERROR, exc) from exc
        logger.info("bookmarked directory %s", stored)
        return True

    def resolve_bookmark(self) -> ResolvedBookmark | None:
        """Return the bookmark if it still names a directory, else ``None``."""
        path = self.store.get_string(self.key)
        if path is None:
            return None
        try:
            if not Path(path).is_dir():
                logger.debug("bookmark %s is stale", path)
                return None
        except OSError as exc:
            raise from_os_error(ErrorCode.RESOLVE_ERROR, exc) from exc
        return ResolvedBookmark(path=path)

    def _directory(self) -> Path:
        path = self.store.get_string(self.key)
        if path is None:
            raise BookmarkError(
                ErrorCode.NO_DIRECTORY, "No bookmarked directory found"
            )
        directory = Path(path)
        if not directory.is_dir():
            raise BookmarkError(
                ErrorCode.INVALID_DIRECTORY, "Bookmarked directory is invalid"
            )
        return directory

    # -- files ----------------------------------------------------------------

    def save_file(self, file_name: str, data: bytes) -> bool:
        """Write *data* to *file_name* in the bookmark, truncating it first."""
        check_file_name(file_name)
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise BookmarkError(
                ErrorCode.INVALID_ARGUMENTS, "fileName and data are required"
            )
        try:
            target = self._directory() / file_name
            target.write_bytes(bytes(data))
        except OSError as exc:
            raise from_os_error(ErrorCode.SAVE_ERROR, exc) from exc
        logger.debug("wrote %d bytes to %s", len(data), target)
        return True

    def read_file(self, file_name: str) -> bytes:
        """Return the full contents of *file_name* in the bookmark."""
        check_file_name(file_name)
        try:
            target = self._directory() / file_name
            if not target.is_file():
                raise BookmarkError(ErrorCode.FILE_NOT_FOUND, "File does not exist")
            return target.read_bytes()
        except OSError as exc:
            raise from_os_error(ErrorCode.READ_ERROR, exc) from exc

    def list_files(self) -> list[str]:
        """Names of the regular files directly inside the bookmark.

        Order is whatever the directory enumeration yields.
        """
        try:
            directory = self._directory()
            try:
                with os.scandir(directory) as entries:
                    return [e.name for e in entries if e.is_file()]
            except PermissionError:
                logger.debug("listing %s denied", directory)
                return []
        except OSError as exc:
            raise from_os_error(ErrorCode.LIST_ERROR, exc) from exc

    # -- permissions ----------------------------------------------------------

    def has_write_permission(self) -> bool:
        """True when the bookmark is an existing directory we can write to."""
        path = self.store.get_string(self.key)
        if path is None:
            return False
        try:
            return os.path.isdir(path) and os.access(path, os.W_OK)
        except OSError as exc:
            raise from_os_error(ErrorCode.PERMISSION_ERROR, exc) from exc

    def request_write_permission(self) -> bool:
        """Same check as :meth:`has_write_permission`; no OS prompt is shown."""
        return self.has_write_permission()
