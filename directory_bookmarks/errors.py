"""Error codes returned across the bookmark channel."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Symbolic failure kinds. The value is the wire code."""

    INVALID_ARGUMENTS = "INVALID_ARGUMENTS"
    INVALID_PATH = "INVALID_PATH"
    NO_DIRECTORY = "NO_DIRECTORY"
    INVALID_DIRECTORY = "INVALID_DIRECTORY"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    SAVE_ERROR = "SAVE_ERROR"
    READ_ERROR = "READ_ERROR"
    RESOLVE_ERROR = "RESOLVE_ERROR"
    LIST_ERROR = "LIST_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"


class BookmarkError(Exception):
    """A typed failure from a bookmark operation."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


def from_os_error(code: ErrorCode, exc: OSError) -> BookmarkError:
    """Wrap an unexpected OS fault, keeping the system message."""
    return BookmarkError(code, str(exc) or type(exc).__name__)
