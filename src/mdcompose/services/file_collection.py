"""
MD Compose - File Collection Manager

Ordered list of attached files, unique by path. The list is persisted as a
JSON array under a single store key through the debounced writer.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Sequence
from typing import TYPE_CHECKING

from mdcompose.config import UPLOADED_FILES_KEY
from mdcompose.services.file_record import FileRecord
from mdcompose.services.store import KeyValueStore
from mdcompose.utils.debounce import DebouncedWriter
from mdcompose.utils.exceptions import InvalidFileRecordError
from mdcompose.utils.logger import logger

if TYPE_CHECKING:
    from mdcompose.services.preview_session import PreviewSessionController


def add_files(existing: Sequence[FileRecord], incoming: Iterable[FileRecord]) -> list[FileRecord]:
    """Append ``incoming`` to ``existing``, keeping the first record per path.

    Neither input is modified.
    """
    seen: set[str] = set()
    merged: list[FileRecord] = []
    for record in [*existing, *incoming]:
        if record.path in seen:
            continue
        seen.add(record.path)
        merged.append(record)
    return merged


def delete_at(existing: Sequence[FileRecord], index: int) -> list[FileRecord]:
    """Return ``existing`` without the record at ``index``.

    Raises:
        IndexError: If ``index`` is not in ``range(len(existing))``
    """
    if not 0 <= index < len(existing):
        raise IndexError(f"file index {index} out of range for {len(existing)} files")
    return [*existing[:index], *existing[index + 1 :]]


def encode_files(files: Sequence[FileRecord]) -> str:
    """Serialize a collection for the store."""
    return json.dumps([record.to_dict() for record in files], ensure_ascii=False)


def decode_files(raw: str | None) -> list[FileRecord]:
    """Decode a stored collection, returning [] for anything malformed."""
    if not raw:
        return []

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Stored file list is not valid JSON: {e}")
        return []

    if not isinstance(data, list):
        logger.warning("Stored file list is not an array, ignoring it")
        return []

    try:
        records = [FileRecord.from_dict(item) for item in data]
    except InvalidFileRecordError as e:
        logger.warning(f"Ignoring stored file list: {e}")
        return []

    return add_files([], records)


class FileCollectionManager:
    """Owns the attached files and keeps the store in sync."""

    def __init__(
        self,
        store: KeyValueStore,
        writer: DebouncedWriter,
        preview: PreviewSessionController | None = None,
        key: str = UPLOADED_FILES_KEY,
    ) -> None:
        self.store = store
        self.writer = writer
        self.preview = preview
        self.key = key
        self._files: list[FileRecord] = []

    def hydrate(self) -> list[FileRecord]:
        """Load the collection from the store.

        Returns:
            The loaded records (empty if nothing valid was stored)
        """
        self._files = decode_files(self.store.get_item(self.key))
        logger.info(f"Restored {len(self._files)} attached files")
        return list(self._files)

    def persist(self) -> None:
        """Schedule a debounced write of the current collection."""
        self.writer.schedule(self.key, list(self._files), encode=encode_files)

    def add_files(self, incoming: Iterable[FileRecord]) -> int:
        """Merge ``incoming`` into the collection, dropping duplicate paths.

        Returns:
            Number of records actually added
        """
        before = len(self._files)
        self._files = add_files(self._files, incoming)
        added = len(self._files) - before

        self.persist()
        logger.info(f"Added {added} files ({len(self._files)} total)")
        return added

    def delete_at(self, index: int) -> FileRecord:
        """Remove the record at ``index`` and return it.

        Closes the preview when the removed record is the one being shown.

        Raises:
            IndexError: If ``index`` is out of range
        """
        previous = self._files
        self._files = delete_at(previous, index)
        removed = previous[index]

        self.persist()
        if self.preview is not None:
            self.preview.on_file_removed(removed)

        logger.info(f"Removed attached file {removed.path}")
        return removed

    def clear_all(self) -> None:
        """Remove every record and close the preview."""
        self._files = []
        self.persist()
        if self.preview is not None:
            self.preview.reset()
        logger.info("Cleared all attached files")

    def find_by_path(self, path: str) -> FileRecord | None:
        """Return the record with ``path`` or None."""
        for record in self._files:
            if record.path == path:
                return record
        return None

    @property
    def files(self) -> tuple[FileRecord, ...]:
        return tuple(self._files)

    @property
    def count(self) -> int:
        return len(self._files)

    @property
    def total_size(self) -> int:
        return sum(record.size for record in self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(tuple(self._files))

    def __getitem__(self, index: int) -> FileRecord:
        return self._files[index]
