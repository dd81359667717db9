"""
MD Compose - Timer Utilities

This module provides utility functions for handling GLib timers safely.
Every timer is one-shot and tracked by name, so a name can be rescheduled
or cancelled before it fires and all pending timers can be dropped when
their owner goes away.
"""

from collections.abc import Callable

from gi import require_version

require_version("Gtk", "4.0")
from gi.repository import GLib

from mdcompose.utils.logger import logger


def safe_remove_source(source_id: int | None) -> bool:
    """Safely remove a GLib source timer without generating warnings.

    Args:
        source_id: The GLib source ID to remove

    Returns:
        True if the source was removed, False otherwise
    """
    if source_id is None or source_id <= 0:
        return False

    try:
        context = GLib.MainContext.default()
        if context.find_source_by_id(source_id):
            return bool(GLib.source_remove(source_id))
        return False
    except Exception as e:
        logger.debug(f"Could not remove GLib source {source_id}: {e}")
        return False


class TimerManager:
    """Centralized manager for named one-shot GLib timers."""

    def __init__(self) -> None:
        """Initialize the timer manager."""
        self._timers: dict[str, int] = {}

    def _wrap_once(
        self, name: str, callback: Callable, args: tuple
    ) -> tuple[Callable[[], bool], dict[str, int]]:
        holder: dict[str, int] = {}

        def _fire() -> bool:
            # Only untrack if this source still owns the name
            if self._timers.get(name) == holder.get("id"):
                del self._timers[name]
            callback(*args)
            return GLib.SOURCE_REMOVE

        return _fire, holder

    def add_timeout(
        self,
        name: str,
        interval_ms: int,
        callback: Callable,
        *args,
    ) -> int | None:
        """Schedule a one-shot timeout, replacing any pending timer with the same name.

        Args:
            name: Unique identifier for this timer
            interval_ms: Delay in milliseconds
            callback: Function to call when the timer fires
            *args: Additional arguments for the callback

        Returns:
            The timer source ID, or None if failed
        """
        self.remove_timer(name)

        fire, holder = self._wrap_once(name, callback, args)
        try:
            timer_id = GLib.timeout_add(max(int(interval_ms), 0), fire)
        except Exception as e:
            logger.error(f"Failed to add timeout '{name}': {e}")
            return None

        holder["id"] = timer_id
        self._timers[name] = timer_id
        return timer_id

    def add_idle(self, name: str, callback: Callable, *args) -> int | None:
        """Run a callback once the main loop is idle.

        Args:
            name: Unique identifier for this timer
            callback: Function to call when idle
            *args: Additional arguments for the callback

        Returns:
            The timer source ID, or None if failed
        """
        self.remove_timer(name)

        fire, holder = self._wrap_once(name, callback, args)
        try:
            timer_id = GLib.idle_add(fire)
        except Exception as e:
            logger.error(f"Failed to add idle callback '{name}': {e}")
            return None

        holder["id"] = timer_id
        self._timers[name] = timer_id
        return timer_id

    def remove_timer(self, name: str) -> bool:
        """Remove a specific timer by name.

        Args:
            name: The timer name to remove

        Returns:
            True if timer was removed, False otherwise
        """
        timer_id = self._timers.pop(name, None)

        if timer_id is not None:
            return safe_remove_source(timer_id)

        return False

    def remove_all(self) -> int:
        """Remove all tracked timers.

        Returns:
            Number of timers removed
        """
        count = 0

        for name in tuple(self._timers.keys()):
            if self.remove_timer(name):
                count += 1

        self._timers.clear()
        return count

    def has_timer(self, name: str) -> bool:
        """Check if a timer is pending."""
        return name in self._timers

    def get_timer_count(self) -> int:
        """Get the number of pending timers."""
        return len(self._timers)

    def __del__(self) -> None:
        """Cleanup on destruction."""
        self.remove_all()
