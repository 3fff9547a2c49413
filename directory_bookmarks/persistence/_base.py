"""Base JSON persistence store."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from ..log import logger


class JsonStore:
    """JSON file store with atomic write.

    Subclasses override ``_default()`` to provide the empty-state value
    (``{}`` for dicts, ``[]`` for lists).
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    # -- core I/O -------------------------------------------------------------

    def load_raw(self) -> dict | list:
        """Read and parse the JSON file, returning ``_default()`` on any error."""
        try:
            if self.path.exists():
                data = json.loads(self.path.read_text(encoding="utf-8"))
                if isinstance(data, type(self._default())):
                    return data
                logger.debug("unexpected JSON type in %s, ignoring", self.path)
        except (OSError, json.JSONDecodeError):
            logger.debug("failed to load JSON store from %s", self.path, exc_info=True)
        return self._default()

    def save_raw(self, data: dict | list, *, sort_keys: bool = False) -> None:
        """Write *data* as pretty-printed JSON, creating parents as needed.

        The file is written to a sibling temp file first and moved into
        place with ``os.replace`` so readers never see a half-written file.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        text = json.dumps(data, indent=2, ensure_ascii=False, sort_keys=sort_keys)
        fd, tmp = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp, self.path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise

    def delete(self) -> None:
        """Remove the backing file if present."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

    # -- override point -------------------------------------------------------

    def _default(self) -> dict | list:  # noqa: PLR6301
        """Return the empty-state value for this store (dict by default)."""
        return {}
