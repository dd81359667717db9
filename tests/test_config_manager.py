"""Tests for config_manager module."""

import json
import os
import tempfile

from mdcompose.utils.config_manager import ConfigManager


class TestConfigManager:
    def _make_manager(self, tmp_dir, initial=None):
        path = os.path.join(tmp_dir, "settings.json")
        if initial is not None:
            with open(path, "w") as f:
                json.dump(initial, f)
        return ConfigManager(config_path=path)

    def test_get_default_value(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d)
            assert cm.get("nonexistent.key", "fallback") == "fallback"

    def test_defaults(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d)
            assert cm.get("editor.debounce_ms") == 500
            assert cm.get("storage.quota_bytes") == 5 * 1024 * 1024

    def test_first_run_writes_file(self):
        with tempfile.TemporaryDirectory() as d:
            self._make_manager(d)
            assert os.path.exists(os.path.join(d, "settings.json"))

    def test_set_and_get(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d)
            cm.set("editor.debounce_ms", 250, save_immediately=False)
            assert cm.get("editor.debounce_ms") == 250

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "settings.json")
            cm = ConfigManager(config_path=path)
            cm.set("window.width", 1234)
            cm2 = ConfigManager(config_path=path)
            assert cm2.get("window.width") == 1234

    def test_nested_key_path(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d)
            cm.set("a.b.c", 42, save_immediately=False)
            assert cm.get("a.b.c") == 42

    def test_missing_sections_merged(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d, initial={"window": {"width": 800}})
            assert cm.get("window.width") == 800
            assert cm.get("window.height") is not None
            assert cm.get("editor.debounce_ms") == 500

    def test_corrupt_file_uses_defaults(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "settings.json")
            with open(path, "w") as f:
                f.write("{broken")
            cm = ConfigManager(config_path=path)
            assert cm.get("editor.debounce_ms") == 500

    def test_non_object_file_uses_defaults(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d, initial=[1, 2, 3])
            assert cm.get("editor.debounce_ms") == 500

    def test_get_int_rejects_invalid(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d, initial={"editor": {"debounce_ms": "fast"}})
            assert cm.get_int("editor.debounce_ms", 500) == 500
            cm.set("editor.debounce_ms", -1, save_immediately=False)
            assert cm.get_int("editor.debounce_ms", 500) == 500
            cm.set("editor.debounce_ms", True, save_immediately=False)
            assert cm.get_int("editor.debounce_ms", 500) == 500
            cm.set("editor.debounce_ms", 120, save_immediately=False)
            assert cm.get_int("editor.debounce_ms", 500) == 120

    def test_save_returns_true(self):
        with tempfile.TemporaryDirectory() as d:
            cm = self._make_manager(d)
            assert cm.save() is True
