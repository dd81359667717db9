"""Tests for the key-value store backends."""

import json
import os
from unittest.mock import patch

import pytest

from mdcompose.services.store import JsonFileStore, KeyValueStore, MemoryStore
from mdcompose.utils.exceptions import StoreQuotaError, StoreWriteError


class TestMemoryStore:
    def test_get_missing_returns_none(self):
        assert MemoryStore().get_item("nope") is None

    def test_set_get_remove(self):
        store = MemoryStore()
        store.set_item("k", "v")
        assert store.get_item("k") == "v"
        assert "k" in store
        store.remove_item("k")
        assert store.get_item("k") is None

    def test_initial_data_and_clear(self):
        store = MemoryStore({"a": "1", "b": "2"})
        assert sorted(store.keys()) == ["a", "b"]
        store.clear()
        assert len(store) == 0

    def test_implements_protocol(self, tmp_path):
        assert isinstance(MemoryStore(), KeyValueStore)
        assert isinstance(JsonFileStore(str(tmp_path / "s.json")), KeyValueStore)


class TestJsonFileStore:
    def test_missing_file_is_empty(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "storage.json"))
        assert store.keys() == []

    def test_values_survive_reload(self, tmp_path):
        path = str(tmp_path / "storage.json")
        JsonFileStore(path).set_item("markdownContent", "# Title\nbody ✓")

        reloaded = JsonFileStore(path)
        assert reloaded.get_item("markdownContent") == "# Title\nbody ✓"

    def test_creates_parent_directory(self, tmp_path):
        path = str(tmp_path / "nested" / "dir" / "storage.json")
        JsonFileStore(path).set_item("k", "v")
        assert os.path.exists(path)

    def test_corrupt_file_loads_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonFileStore(str(path)).keys() == []

    def test_non_object_file_loads_empty(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert JsonFileStore(str(path)).keys() == []

    def test_non_string_values_are_skipped(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text(json.dumps({"a": "ok", "b": 3}), encoding="utf-8")
        store = JsonFileStore(str(path))
        assert store.keys() == ["a"]

    def test_remove_and_clear(self, tmp_path):
        path = str(tmp_path / "storage.json")
        store = JsonFileStore(path)
        store.set_item("a", "1")
        store.set_item("b", "2")
        store.remove_item("a")
        assert JsonFileStore(path).keys() == ["b"]
        store.clear()
        assert JsonFileStore(path).keys() == []

    def test_quota_exceeded_raises_and_keeps_state(self, tmp_path):
        path = str(tmp_path / "storage.json")
        store = JsonFileStore(path, quota_bytes=64)
        store.set_item("small", "x")

        with pytest.raises(StoreQuotaError) as excinfo:
            store.set_item("big", "y" * 100)

        assert excinfo.value.key == "big"
        assert excinfo.value.quota_bytes == 64
        assert store.get_item("big") is None
        assert JsonFileStore(path).keys() == ["small"]

    def test_quota_error_is_a_write_error(self):
        assert issubclass(StoreQuotaError, StoreWriteError)

    def test_unlimited_quota(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "s.json"), quota_bytes=None)
        store.set_item("big", "z" * 10_000)
        assert len(store.get_item("big")) == 10_000

    def test_os_error_becomes_store_write_error(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "s.json"))
        with patch("builtins.open", side_effect=PermissionError("read-only")):
            with pytest.raises(StoreWriteError, match="read-only"):
                store.set_item("k", "v")
        assert store.get_item("k") is None

    def test_size_bytes(self, tmp_path):
        store = JsonFileStore(str(tmp_path / "s.json"))
        store.set_item("k", "v")
        assert store.size_bytes == len('{"k": "v"}')
