"""Tests for the preview session controller."""

import pytest

from mdcompose.services.preview_session import (
    PreviewSessionController,
    PreviewState,
    parse_offset,
)
from mdcompose.services.store import MemoryStore
from mdcompose.utils.exceptions import StoreWriteError


class ReadOnlyStore(MemoryStore):
    def set_item(self, key, value):
        raise StoreWriteError(key, "read-only")


@pytest.fixture
def session(store):
    return PreviewSessionController(store)


class TestParseOffset:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 0),
            ("", 0),
            ("   ", 0),
            ("abc", 0),
            ("0", 0),
            ("240", 240),
            (" 240 ", 240),
            ("12.7", 12),
            ("+8", 8),
            ("-30", 0),
            ("99px", 99),
            ("²", 0),
            ("1²", 1),
            ("٣", 0),
        ],
    )
    def test_values(self, raw, expected):
        assert parse_offset(raw) == expected


class TestStateMachine:
    def test_starts_closed(self, session):
        assert session.state is PreviewState.CLOSED
        assert session.active_file is None

    def test_open_and_close(self, session, make_record):
        record = make_record("/a.md")
        session.open(record)
        assert session.state is PreviewState.OPEN
        assert session.active_file is record

        session.close()
        assert session.state is PreviewState.CLOSED
        assert session.active_file is record

    def test_reset_clears_active_file(self, session, make_record):
        session.open(make_record("/a.md"))
        session.reset()
        assert session.is_open is False
        assert session.active_file is None

    def test_removed_active_file_closes(self, session, make_record):
        session.open(make_record("/a.md"))
        assert session.on_file_removed(make_record("/a.md")) is True
        assert session.state is PreviewState.CLOSED
        assert session.active_file is None

    def test_removed_file_forgotten_when_already_closed(self, session, make_record):
        session.open(make_record("/a.md"))
        session.close()

        assert session.on_file_removed(make_record("/a.md")) is False
        assert session.active_file is None

    def test_removed_other_file_ignored(self, session, make_record):
        session.open(make_record("/a.md"))
        assert session.on_file_removed(make_record("/b.md")) is False
        assert session.state is PreviewState.OPEN

    def test_removed_with_nothing_open(self, session, make_record):
        assert session.on_file_removed(make_record("/a.md")) is False


class TestScrollPersistence:
    def test_roundtrip(self, store, session, make_record):
        record = make_record("/docs/guide.md")
        session.open(record)
        session.on_scroll(340)
        session.close()

        reopened = PreviewSessionController(store)
        assert reopened.restore_offset(record) == 340

    def test_unseen_file_restores_zero(self, session, make_record):
        assert session.restore_offset(make_record("/never.md")) == 0

    def test_every_scroll_is_written_immediately(self, store, session, make_record):
        session.open(make_record("/a.md"))
        for offset in (10, 20, 30):
            session.on_scroll(offset)
        assert store.write_count == 3
        assert store.get_item("scrollPosition:/a.md") == "30"

    def test_float_offset_truncated(self, store, session, make_record):
        session.open(make_record("/a.md"))
        session.on_scroll(123.9)
        assert store.get_item("scrollPosition:/a.md") == "123"

    def test_ignored_when_closed(self, store, session, make_record):
        session.open(make_record("/a.md"))
        session.close()
        assert session.on_scroll(50) is False
        assert store.write_count == 0

    def test_ignored_without_active_file(self, store, session):
        assert session.on_scroll(50) is False
        assert store.keys() == []

    def test_keyed_by_path_not_name(self, session, make_record):
        first = make_record("/one/notes.md")
        second = make_record("/two/notes.md")

        session.open(first)
        session.on_scroll(100)
        session.open(second)
        session.on_scroll(7)

        assert session.restore_offset(first) == 100
        assert session.restore_offset(second) == 7

    def test_unparsable_stored_value(self, store, session, make_record):
        store.set_item("scrollPosition:/a.md", "NaN")
        assert session.restore_offset(make_record("/a.md")) == 0

    def test_write_failure_does_not_raise(self, make_record):
        session = PreviewSessionController(ReadOnlyStore())
        session.open(make_record("/a.md"))
        assert session.on_scroll(10) is False
