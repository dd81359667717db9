"""
MD Compose - Debounced Writer

Coalesces rapid state changes into a single store write after a quiet period.
Each store key is its own stream: rescheduling a key drops the value that was
waiting on it, while other keys are left untouched.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mdcompose.config import DEFAULT_DEBOUNCE_MS
from mdcompose.utils.exceptions import StoreWriteError
from mdcompose.utils.logger import logger
from mdcompose.utils.timer import TimerManager

if TYPE_CHECKING:
    from mdcompose.services.store import KeyValueStore

_TIMER_PREFIX = "debounce:"


@dataclass
class _Pending:
    value: Any
    encode: Callable[[Any], str]
    generation: int


class PendingWrite:
    """Cancel handle for one scheduled write."""

    def __init__(self, writer: DebouncedWriter, key: str, generation: int) -> None:
        self._writer = writer
        self.key = key
        self._generation = generation

    @property
    def active(self) -> bool:
        """True while this write is still waiting to be committed."""
        return self._writer._is_current(self.key, self._generation)

    def cancel(self) -> bool:
        """Cancel the write if it has not been committed or superseded yet."""
        if not self.active:
            return False
        return self._writer.cancel(self.key)


class DebouncedWriter:
    """Schedules store writes that only land after a quiet period."""

    def __init__(
        self,
        store: KeyValueStore,
        timers: TimerManager | None = None,
        delay_ms: int = DEFAULT_DEBOUNCE_MS,
        on_error: Callable[[str, StoreWriteError], None] | None = None,
    ) -> None:
        """Create a writer.

        Args:
            store: Store receiving the committed values
            timers: Timer manager owning the debounce timeouts
            delay_ms: Default quiet period in milliseconds
            on_error: Called with the key and error when a commit fails
        """
        self.store = store
        self.delay_ms = delay_ms
        self.on_error = on_error
        self._timers = timers or TimerManager()
        self._pending: dict[str, _Pending] = {}
        self._generation = 0
        self._closed = False

    def schedule(
        self,
        key: str,
        value: Any,
        delay_ms: int | None = None,
        encode: Callable[[Any], str] | None = None,
    ) -> PendingWrite:
        """Schedule ``value`` to be written under ``key``.

        Any write still pending for ``key`` is superseded. The value is
        encoded only when the timer fires, so intermediate values are
        never serialized.

        Args:
            key: Store key, which also names the debounce stream
            value: Value to persist
            delay_ms: Quiet period before writing (defaults to the writer delay)
            encode: Converts the value to the stored string (defaults to str)

        Returns:
            Handle that can cancel this write
        """
        self._generation += 1
        if self._closed:
            logger.debug(f"Writer closed, dropping write of '{key}'")
            return PendingWrite(self, key, self._generation)

        self._pending[key] = _Pending(value, encode or str, self._generation)

        delay = self.delay_ms if delay_ms is None else delay_ms
        self._timers.add_timeout(_TIMER_PREFIX + key, delay, self._on_timeout, key)

        logger.debug(f"Scheduled write of '{key}' in {delay} ms")
        return PendingWrite(self, key, self._generation)

    def _on_timeout(self, key: str) -> None:
        self._commit(key)

    def _commit(self, key: str) -> bool:
        pending = self._pending.pop(key, None)
        if pending is None:
            return False

        try:
            self.store.set_item(key, pending.encode(pending.value))
        except StoreWriteError as e:
            logger.error(f"Debounced write failed: {e}")
            if self.on_error is not None:
                self.on_error(key, e)
            return False

        logger.debug(f"Committed debounced write of '{key}'")
        return True

    def _is_current(self, key: str, generation: int) -> bool:
        pending = self._pending.get(key)
        return pending is not None and pending.generation == generation

    def cancel(self, key: str) -> bool:
        """Drop the pending write for ``key`` without committing it.

        Returns:
            True if a write was pending
        """
        self._timers.remove_timer(_TIMER_PREFIX + key)
        return self._pending.pop(key, None) is not None

    def cancel_all(self) -> int:
        """Drop every pending write.

        Returns:
            Number of writes that were dropped
        """
        count = 0
        for key in tuple(self._pending):
            if self.cancel(key):
                count += 1
        return count

    def flush(self, key: str) -> bool:
        """Commit the pending write for ``key`` right now.

        Returns:
            True if a value was written
        """
        self._timers.remove_timer(_TIMER_PREFIX + key)
        return self._commit(key)

    def flush_all(self) -> int:
        """Commit every pending write right now.

        Returns:
            Number of values written
        """
        return sum(1 for key in tuple(self._pending) if self.flush(key))

    def is_pending(self, key: str) -> bool:
        """Check whether a write is waiting for ``key``."""
        return key in self._pending

    @property
    def pending_count(self) -> int:
        """Number of streams with a write waiting."""
        return len(self._pending)

    def close(self) -> int:
        """Drop every pending write and ignore later ``schedule`` calls.

        Returns:
            Number of writes that were dropped
        """
        self._closed = True
        return self.cancel_all()

    @property
    def closed(self) -> bool:
        return self._closed
