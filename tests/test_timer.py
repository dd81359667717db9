"""Tests for the named GLib timer manager."""

from mdcompose.utils.timer import TimerManager, safe_remove_source


class TestSafeRemoveSource:
    def test_none_and_invalid_ids(self):
        assert safe_remove_source(None) is False
        assert safe_remove_source(0) is False
        assert safe_remove_source(-3) is False

    def test_unknown_id(self, glib):
        assert safe_remove_source(999) is False

    def test_removes_pending_source(self, glib):
        source_id = glib.timeout_add(100, lambda: False)
        assert safe_remove_source(source_id) is True
        assert glib.pending_count == 0


class TestTimerManager:
    def test_timeout_fires_once(self, glib):
        calls = []
        tm = TimerManager()
        tm.add_timeout("t", 50, calls.append, "fired")

        glib.advance(49)
        assert calls == []
        glib.advance(1)
        assert calls == ["fired"]
        glib.advance(500)
        assert calls == ["fired"]

    def test_fired_timer_is_untracked(self, glib):
        tm = TimerManager()
        tm.add_timeout("t", 10, lambda: None)
        assert tm.has_timer("t")
        glib.advance(10)
        assert not tm.has_timer("t")
        assert tm.get_timer_count() == 0

    def test_same_name_replaces_pending_timer(self, glib):
        calls = []
        tm = TimerManager()
        tm.add_timeout("t", 100, calls.append, "first")
        tm.add_timeout("t", 100, calls.append, "second")

        glib.advance(1000)
        assert calls == ["second"]
        assert glib.pending_count == 0

    def test_remove_timer(self, glib):
        calls = []
        tm = TimerManager()
        tm.add_timeout("t", 100, calls.append, "x")
        assert tm.remove_timer("t") is True
        assert tm.remove_timer("t") is False
        glib.advance(200)
        assert calls == []

    def test_remove_all(self, glib):
        tm = TimerManager()
        tm.add_timeout("a", 100, lambda: None)
        tm.add_timeout("b", 100, lambda: None)
        tm.add_idle("c", lambda: None)

        assert tm.remove_all() == 3
        assert tm.get_timer_count() == 0
        assert glib.pending_count == 0

    def test_idle_runs_on_next_iteration(self, glib):
        calls = []
        tm = TimerManager()
        tm.add_idle("idle", calls.append, 1)
        assert calls == []
        glib.run_idle()
        assert calls == [1]
        assert not tm.has_timer("idle")

    def test_rescheduling_from_callback_keeps_new_timer(self, glib):
        tm = TimerManager()
        calls = []

        def _again():
            calls.append(glib.now)
            if len(calls) < 2:
                tm.add_timeout("loop", 10, _again)

        tm.add_timeout("loop", 10, _again)
        glib.advance(10)
        assert tm.has_timer("loop")
        glib.advance(10)
        assert calls == [10, 20]
        assert not tm.has_timer("loop")
