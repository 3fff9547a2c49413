"""Key-value preference stores holding ``string -> string`` entries."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..log import logger
from ._base import JsonStore


@runtime_checkable
class PreferenceStore(Protocol):
    """Durable string key-value store owned by the host process."""

    def get_string(self, key: str, default: str | None = None) -> str | None: ...

    def put_string(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...

    def clear(self) -> None: ...


def _check_entry(key: str, value: str) -> None:
    if not isinstance(key, str):
        raise TypeError(f"preference key must be str, not {type(key).__name__}")
    if not isinstance(value, str):
        raise TypeError(f"preference value must be str, not {type(value).__name__}")


class JsonPreferenceStore(JsonStore):
    """Preferences persisted as a flat JSON object on disk.

    Every read goes back to the file so separate processes (or a restarted
    one) see the latest value.  A lock serializes read-modify-write within
    this process.
    """

    def __init__(self, path: Path) -> None:
        super().__init__(path)
        self._lock = threading.Lock()

    def load_all(self) -> dict[str, str]:
        """Return every string entry in the file."""
        raw = self.load_raw()
        return {k: v for k, v in raw.items() if isinstance(v, str)}  # type: ignore[union-attr]

    def get_string(self, key: str, default: str | None = None) -> str | None:
        with self._lock:
            return self.load_all().get(key, default)

    def put_string(self, key: str, value: str) -> None:
        _check_entry(key, value)
        with self._lock:
            data = self.load_all()
            data[key] = value
            self.save_raw(data, sort_keys=True)
        logger.debug("stored preference %r in %s", key, self.path)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self.load_all()
            if data.pop(key, None) is not None:
                self.save_raw(data, sort_keys=True)

    def clear(self) -> None:
        with self._lock:
            self.delete()


class MemoryPreferenceStore:
    """In-process preference store, for tests and embedding."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get_string(self, key: str, default: str | None = None) -> str | None:
        with self._lock:
            return self._data.get(key, default)

    def put_string(self, key: str, value: str) -> None:
        _check_entry(key, value)
        with self._lock:
            self._data[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._data)
