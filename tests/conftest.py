"""Shared test fixtures for the directory-bookmarks test suite."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from directory_bookmarks.channel import BookmarkChannel
from directory_bookmarks.gate import BookmarkGate
from directory_bookmarks.persistence import MemoryPreferenceStore


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point the settings file at tmp_path so nothing touches ~/."""
    monkeypatch.setenv("DIRECTORY_BOOKMARKS_CONFIG", str(tmp_path / "config.yaml"))


@pytest.fixture
def store() -> MemoryPreferenceStore:
    return MemoryPreferenceStore()


@pytest.fixture
def gate(store: MemoryPreferenceStore) -> BookmarkGate:
    return BookmarkGate(store)


@pytest.fixture
def bookmark_dir(tmp_path: Path) -> Path:
    """An existing, empty directory to bookmark."""
    d = tmp_path / "bookmarked"
    d.mkdir()
    return d


@pytest.fixture
def bookmarked_gate(gate: BookmarkGate, bookmark_dir: Path) -> BookmarkGate:
    """A gate whose bookmark already points at ``bookmark_dir``."""
    gate.save_bookmark(str(bookmark_dir))
    return gate


@pytest.fixture
def channel(gate: BookmarkGate) -> BookmarkChannel:
    return BookmarkChannel(gate)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers the CLI attaches so they don't outlive captured streams."""
    yield
    logger = logging.getLogger("directory_bookmarks")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
