"""FastAPI server exposing the bookmark channel over HTTP."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any

from fastapi import Body, FastAPI
from fastapi.responses import JSONResponse

from ..channel import BookmarkChannel, MethodResult
from ..errors import ErrorCode

logger = logging.getLogger(__name__)

# Arguments and results that carry raw bytes travel as base64 strings.
_BINARY_ARGUMENTS = {"saveFile": "data"}
_BINARY_RESULTS = {"readFile"}


def _decode_arguments(method: str, arguments: dict[str, Any]) -> dict[str, Any] | None:
    key = _BINARY_ARGUMENTS.get(method)
    if key is None or not isinstance(arguments.get(key), str):
        return arguments
    try:
        decoded = base64.b64decode(arguments[key], validate=True)
    except (binascii.Error, ValueError):
        return None
    return {**arguments, key: decoded}


def _encode_result(method: str, result: MethodResult) -> dict[str, Any]:
    body = result.to_dict()
    if result.ok and method in _BINARY_RESULTS and result.value is not None:
        body["value"] = base64.b64encode(result.value).decode("ascii")
    return body


def create_app(channel: BookmarkChannel) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Directory Bookmarks")

    @app.get("/api/health")
    def health() -> dict:
        return {"status": "ok", "channel": channel.name}

    @app.get("/api/methods")
    def methods() -> dict:
        return {"methods": channel.methods}

    @app.post("/api/channel/{method}")
    def call(method: str, arguments: dict[str, Any] | None = Body(default=None)):
        """Invoke one channel method with a JSON object of arguments."""
        decoded = _decode_arguments(method, arguments or {})
        if decoded is None:
            result = MethodResult.error(
                ErrorCode.INVALID_ARGUMENTS, "data must be base64-encoded"
            )
        else:
            result = channel.handle(method, decoded)
        if result.kind == "not_implemented":
            return JSONResponse(status_code=404, content=result.to_dict())
        logger.debug("%s -> %s", method, result.kind)
        return _encode_result(method, result)

    return app
