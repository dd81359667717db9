"""Pytest configuration for mdcompose tests.

Installs a fake ``gi.repository`` BEFORE any mdcompose module is imported.
GLib is replaced by a deterministic main loop with a virtual millisecond
clock so timer-driven behaviour can be stepped through; the GTK widget
namespaces are MagicMocks.
"""

import sys
import types
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest


class FakeMainContext:
    def __init__(self, glib: "FakeGLib") -> None:
        self._glib = glib

    def find_source_by_id(self, source_id: int):
        return self._glib._sources.get(source_id)


class FakeGLibError(Exception):
    """Stand-in for GLib.Error."""


class FakeGLib:
    """Minimal GLib main loop driven by ``advance``."""

    SOURCE_REMOVE = False
    SOURCE_CONTINUE = True
    Error = FakeGLibError

    def __init__(self) -> None:
        self.MainContext = SimpleNamespace(default=lambda: FakeMainContext(self))
        self.reset()

    def reset(self) -> None:
        self.now = 0
        self._next_id = 1
        self._sources: dict[int, list] = {}

    def timeout_add(self, interval_ms, callback, *args) -> int:
        source_id = self._next_id
        self._next_id += 1
        self._sources[source_id] = [self.now + interval_ms, interval_ms, callback, args]
        return source_id

    def idle_add(self, callback, *args) -> int:
        return self.timeout_add(0, callback, *args)

    def source_remove(self, source_id: int) -> bool:
        return self._sources.pop(source_id, None) is not None

    @property
    def pending_count(self) -> int:
        return len(self._sources)

    def advance(self, ms: int) -> None:
        """Move the clock forward, firing every source that falls due."""
        target = self.now + ms
        while True:
            due = [(src[0], sid) for sid, src in self._sources.items() if src[0] <= target]
            if not due:
                break
            when, source_id = min(due)
            source = self._sources[source_id]
            self.now = when
            keep = source[2](*source[3])
            if source_id in self._sources:
                if keep:
                    source[0] = self.now + max(source[1], 1)
                else:
                    del self._sources[source_id]
        self.now = target

    def run_idle(self) -> None:
        self.advance(0)


FAKE_GLIB = FakeGLib()

_gi = types.ModuleType("gi")
_gi.require_version = lambda *args, **kwargs: None
_repository = types.ModuleType("gi.repository")
_repository.GLib = FAKE_GLIB
_repository.Gtk = MagicMock()
_repository.Adw = MagicMock()
_repository.Gio = MagicMock()
_repository.Gdk = MagicMock()
_gi.repository = _repository

sys.modules["gi"] = _gi
sys.modules["gi.repository"] = _repository


@pytest.fixture(autouse=True)
def glib():
    """Fresh fake main loop for every test."""
    FAKE_GLIB.reset()
    return FAKE_GLIB


@pytest.fixture
def gtk_mocks():
    """Reset and return the mocked Gtk/Adw/Gdk namespaces."""
    for name in ("Gtk", "Adw", "Gdk", "Gio"):
        getattr(_repository, name).reset_mock(return_value=True, side_effect=True)
    return _repository


@pytest.fixture
def store():
    from mdcompose.services.store import MemoryStore

    return MemoryStore()


@pytest.fixture
def make_record():
    from mdcompose.services.file_record import FileRecord

    def _make(path: str, content: str = "", name: str | None = None) -> FileRecord:
        base = name or path.rsplit("/", 1)[-1]
        extension = base.rsplit(".", 1)[-1] if "." in base else ""
        return FileRecord(
            name=base,
            path=path,
            size=len(content.encode("utf-8")),
            extension=extension,
            content=content,
        )

    return _make
