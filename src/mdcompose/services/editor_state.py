"""
MD Compose - Editor State

Facade that wires the document text, the attached files and the preview
session to one store and one debounced writer. Everything is hydrated from
the store when the facade is created.
"""

from __future__ import annotations

from dataclasses import dataclass

from mdcompose.config import DEFAULT_DEBOUNCE_MS
from mdcompose.services.document_content import DocumentContentHolder
from mdcompose.services.file_collection import FileCollectionManager
from mdcompose.services.file_record import FileRecord
from mdcompose.services.preview_session import PreviewSessionController
from mdcompose.services.store import KeyValueStore, MemoryStore
from mdcompose.utils.debounce import DebouncedWriter
from mdcompose.utils.logger import logger
from mdcompose.utils.timer import TimerManager


@dataclass(frozen=True)
class EditorSnapshot:
    """Current in-memory editor state handed to export and clipboard code."""

    content: str
    files: tuple[FileRecord, ...]
    active_file: FileRecord | None
    preview_visible: bool


class EditorState:
    """Document text, attached files and preview session sharing one store."""

    def __init__(
        self,
        store: KeyValueStore | None = None,
        timers: TimerManager | None = None,
        delay_ms: int | None = None,
    ) -> None:
        """Create the managers and hydrate them.

        Args:
            store: Durable store (an in-memory store if omitted)
            timers: Timer manager used for debouncing
            delay_ms: Debounce delay (defaults to DEFAULT_DEBOUNCE_MS)
        """
        self.store = store if store is not None else MemoryStore()
        self.writer = DebouncedWriter(
            self.store,
            timers=timers,
            delay_ms=DEFAULT_DEBOUNCE_MS if delay_ms is None else delay_ms,
        )
        self.preview = PreviewSessionController(self.store)
        self.files = FileCollectionManager(self.store, self.writer, preview=self.preview)
        self.content = DocumentContentHolder(self.store, self.writer)
        self._closed = False

        self.content.hydrate()
        self.files.hydrate()

    def snapshot(self) -> EditorSnapshot:
        """Return the current state."""
        return EditorSnapshot(
            content=self.content.content,
            files=self.files.files,
            active_file=self.preview.active_file,
            preview_visible=self.preview.visible,
        )

    def flush(self) -> int:
        """Write every pending change now.

        Returns:
            Number of values written
        """
        return self.writer.flush_all()

    def teardown(self, flush: bool = False) -> None:
        """Stop all pending writes and refuse new ones.

        Edits made afterwards stay in memory and never reach the store.

        Args:
            flush: Write pending changes before cancelling
        """
        if self._closed:
            return
        self._closed = True

        if flush:
            self.flush()
        dropped = self.writer.close()
        self.preview.close()
        if dropped:
            logger.info(f"Discarded {dropped} pending writes on teardown")

    @property
    def closed(self) -> bool:
        return self._closed
