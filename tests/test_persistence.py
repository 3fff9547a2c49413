"""Tests for persistence stores.

Each store is tested for:
  1. reads on an empty store return the default
  2. put then get round-trips
  3. a corrupt file reads as empty (graceful degradation)
  4. store-specific features
"""

from __future__ import annotations

import json
import threading

import pytest

from directory_bookmarks.persistence import (
    JsonPreferenceStore,
    JsonStore,
    MemoryPreferenceStore,
    PreferenceStore,
)


# ---------------------------------------------------------------------------
# Base JsonStore
# ---------------------------------------------------------------------------


class TestJsonStore:
    def test_load_raw_nonexistent(self, tmp_path):
        store = JsonStore(tmp_path / "nope.json")
        assert store.load_raw() == {}

    def test_save_and_load_raw_dict(self, tmp_path):
        store = JsonStore(tmp_path / "data.json")
        store.save_raw({"key": "value"})
        assert store.load_raw() == {"key": "value"}

    def test_load_raw_corrupt_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("not valid json{{{")
        assert JsonStore(path).load_raw() == {}

    def test_load_raw_wrong_type_returns_default(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        assert JsonStore(path).load_raw() == {}

    def test_save_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "deep" / "nested" / "store.json"
        store = JsonStore(path)
        store.save_raw({"a": 1})
        assert path.exists()
        assert store.load_raw() == {"a": 1}

    def test_save_leaves_no_temp_files(self, tmp_path):
        store = JsonStore(tmp_path / "data.json")
        store.save_raw({"a": 1})
        store.save_raw({"a": 2})
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]

    def test_delete_missing_file_is_noop(self, tmp_path):
        JsonStore(tmp_path / "missing.json").delete()


# ---------------------------------------------------------------------------
# JsonPreferenceStore
# ---------------------------------------------------------------------------


class TestJsonPreferenceStore:
    def test_get_missing_returns_default(self, tmp_path):
        store = JsonPreferenceStore(tmp_path / "prefs.json")
        assert store.get_string("k") is None
        assert store.get_string("k", "fallback") == "fallback"

    def test_round_trip(self, tmp_path):
        store = JsonPreferenceStore(tmp_path / "prefs.json")
        store.put_string("bookmarked_directory", "/data/docs")
        assert store.get_string("bookmarked_directory") == "/data/docs"

    def test_survives_new_instance(self, tmp_path):
        path = tmp_path / "prefs.json"
        JsonPreferenceStore(path).put_string("k", "v")
        assert JsonPreferenceStore(path).get_string("k") == "v"

    def test_overwrite_keeps_other_keys(self, tmp_path):
        path = tmp_path / "prefs.json"
        store = JsonPreferenceStore(path)
        store.put_string("a", "1")
        store.put_string("b", "2")
        store.put_string("a", "3")
        assert json.loads(path.read_text()) == {"a": "3", "b": "2"}

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("corrupt!!!{")
        store = JsonPreferenceStore(path)
        assert store.get_string("k") is None
        store.put_string("k", "v")
        assert store.get_string("k") == "v"

    def test_non_string_values_ignored_on_load(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"n": 3, "s": "x"}))
        assert JsonPreferenceStore(path).load_all() == {"s": "x"}

    def test_rejects_non_string_value(self, tmp_path):
        store = JsonPreferenceStore(tmp_path / "prefs.json")
        with pytest.raises(TypeError):
            store.put_string("k", 5)  # type: ignore[arg-type]

    def test_remove_and_clear(self, tmp_path):
        path = tmp_path / "prefs.json"
        store = JsonPreferenceStore(path)
        store.put_string("a", "1")
        store.put_string("b", "2")
        store.remove("a")
        assert store.get_string("a") is None
        assert store.get_string("b") == "2"
        store.clear()
        assert not path.exists()
        assert store.get_string("b") is None

    def test_write_failure_propagates(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = JsonPreferenceStore(blocker / "prefs.json")
        with pytest.raises(OSError):
            store.put_string("k", "v")

    def test_concurrent_puts_keep_every_key(self, tmp_path):
        store = JsonPreferenceStore(tmp_path / "prefs.json")

        def put(i: int) -> None:
            store.put_string(f"k{i}", str(i))

        threads = [threading.Thread(target=put, args=(i,)) for i in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(store.load_all()) == 16

    def test_satisfies_protocol(self, tmp_path):
        assert isinstance(JsonPreferenceStore(tmp_path / "p.json"), PreferenceStore)


# ---------------------------------------------------------------------------
# MemoryPreferenceStore
# ---------------------------------------------------------------------------


class TestMemoryPreferenceStore:
    def test_initial_values(self):
        store = MemoryPreferenceStore({"k": "v"})
        assert store.get_string("k") == "v"

    def test_initial_dict_is_copied(self):
        initial = {"k": "v"}
        store = MemoryPreferenceStore(initial)
        store.put_string("k", "w")
        assert initial == {"k": "v"}

    def test_remove_clear_snapshot(self):
        store = MemoryPreferenceStore()
        store.put_string("a", "1")
        store.put_string("b", "2")
        store.remove("a")
        store.remove("missing")
        assert store.snapshot() == {"b": "2"}
        store.clear()
        assert store.snapshot() == {}

    def test_rejects_non_string_key(self):
        with pytest.raises(TypeError):
            MemoryPreferenceStore().put_string(1, "v")  # type: ignore[arg-type]

    def test_satisfies_protocol(self):
        assert isinstance(MemoryPreferenceStore(), PreferenceStore)
