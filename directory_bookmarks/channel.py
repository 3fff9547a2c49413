"""Named-method dispatch for the bookmark gate.

Hosts call operations by name with a flat mapping of arguments:

    from directory_bookmarks.channel import BookmarkChannel

    channel = BookmarkChannel(gate)
    result = channel.handle("saveFile", {"fileName": "a.txt", "data": b"hi"})
    if result.ok:
        ...

Handlers are registered with ``@method_handler`` and receive the gate and
the raw argument mapping.  Each handler pulls its own arguments so that a
missing one is reported as ``INVALID_ARGUMENTS`` before the gate runs.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

from .errors import BookmarkError, ErrorCode
from .gate import BookmarkGate
from .log import logger

CHANNEL_NAME = "com.example.directory_bookmarks/bookmark"

SUCCESS = "success"
ERROR = "error"
NOT_IMPLEMENTED = "not_implemented"

Handler = Callable[[BookmarkGate, Mapping[str, Any]], Any]


@dataclass
class MethodResult:
    """Outcome of one channel call."""

    kind: str
    value: Any = None
    code: str = ""
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.kind == SUCCESS

    @classmethod
    def success(cls, value: Any = None) -> MethodResult:
        return cls(kind=SUCCESS, value=value)

    @classmethod
    def error(cls, code: ErrorCode | str, message: str) -> MethodResult:
        return cls(kind=ERROR, code=ErrorCode(code).value, message=message)

    @classmethod
    def not_implemented(cls, method: str) -> MethodResult:
        return cls(
            kind=NOT_IMPLEMENTED,
            code="NOT_IMPLEMENTED",
            message=f"Method {method!r} is not implemented",
        )

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "value": self.value}
        return {"ok": False, "code": self.code, "message": self.message}


@dataclass
class MethodHandler:
    """A registered channel method."""

    name: str
    callback: Handler
    description: str = ""


# Global registry - populated by @method_handler decorators at import time
_registry: dict[str, MethodHandler] = {}


def method_handler(name: str, description: str = "") -> Callable[[Handler], Handler]:
    """Decorator to register a function as a channel method."""

    def decorator(func: Handler) -> Handler:
        _registry[name] = MethodHandler(name=name, callback=func, description=description)
        return func

    return decorator


def get_registry() -> dict[str, MethodHandler]:
    """Return the current method registry."""
    return _registry


# -- argument helpers ---------------------------------------------------------


def _require_str(arguments: Mapping[str, Any], key: str, message: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str) or not value:
        raise BookmarkError(ErrorCode.INVALID_ARGUMENTS, message)
    return value


def _require_bytes(arguments: Mapping[str, Any], key: str, message: str) -> bytes:
    value = arguments.get(key)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, list) and all(
        isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 255
        for b in value
    ):
        return bytes(value)
    raise BookmarkError(ErrorCode.INVALID_ARGUMENTS, message)


# -- methods ------------------------------------------------------------------


@method_handler("saveDirectoryBookmark", description="Bookmark a directory")
def _save_bookmark(gate: BookmarkGate, arguments: Mapping[str, Any]) -> bool:
    path = _require_str(arguments, "path", "Path is required")
    return gate.save_bookmark(path)


@method_handler("resolveDirectoryBookmark", description="Resolve the bookmark")
def _resolve_bookmark(gate: BookmarkGate, arguments: Mapping[str, Any]) -> Any:
    resolved = gate.resolve_bookmark()
    return resolved.to_dict() if resolved is not None else None


@method_handler("saveFile", description="Write a file into the bookmark")
def _save_file(gate: BookmarkGate, arguments: Mapping[str, Any]) -> bool:
    message = "fileName and data are required"
    file_name = _require_str(arguments, "fileName", message)
    data = _require_bytes(arguments, "data", message)
    return gate.save_file(file_name, data)


@method_handler("readFile", description="Read a file from the bookmark")
def _read_file(gate: BookmarkGate, arguments: Mapping[str, Any]) -> bytes:
    file_name = _require_str(arguments, "fileName", "fileName is required")
    return gate.read_file(file_name)


@method_handler("listFiles", description="List files in the bookmark")
def _list_files(gate: BookmarkGate, arguments: Mapping[str, Any]) -> list[str]:
    return gate.list_files()


@method_handler("hasWritePermission", description="Check write access")
def _has_write_permission(gate: BookmarkGate, arguments: Mapping[str, Any]) -> bool:
    return gate.has_write_permission()


@method_handler("requestWritePermission", description="Check write access")
def _request_write_permission(
    gate: BookmarkGate, arguments: Mapping[str, Any]
) -> bool:
    return gate.request_write_permission()


class BookmarkChannel:
    """Dispatches named method calls to a :class:`BookmarkGate`."""

    name = CHANNEL_NAME

    def __init__(self, gate: BookmarkGate) -> None:
        self.gate = gate

    @property
    def methods(self) -> list[str]:
        return sorted(get_registry())

    def handle(
        self, method: str, arguments: Mapping[str, Any] | None = None
    ) -> MethodResult:
        """Run *method* with *arguments* and wrap the outcome."""
        handler = get_registry().get(method)
        if handler is None:
            logger.warning("unknown channel method %r", method)
            return MethodResult.not_implemented(method)
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            return MethodResult.error(
                ErrorCode.INVALID_ARGUMENTS, "arguments must be a mapping"
            )

        logger.debug("channel call %s(%s)", method, ", ".join(sorted(arguments)))
        try:
            value = handler.callback(self.gate, arguments)
        except BookmarkError as exc:
            logger.warning("%s failed: %s", method, exc)
            return MethodResult.error(exc.code, exc.message)
        return MethodResult.success(value)
