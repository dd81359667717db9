"""
MD Compose - Key-Value Store

Durable string-keyed, string-valued storage that survives restarts. Writes
are synchronous and keyed, with no transactions and no expiry.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from mdcompose.config import DEFAULT_STORE_QUOTA_BYTES, STORE_FILE_PATH
from mdcompose.utils.exceptions import StoreQuotaError, StoreWriteError
from mdcompose.utils.logger import logger


@runtime_checkable
class KeyValueStore(Protocol):
    """Interface shared by every store backend."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...

    def clear(self) -> None: ...


class MemoryStore:
    """In-memory store used for tests and ``--no-persist`` sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self.write_count = 0

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = str(value)
        self.write_count += 1

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def clear(self) -> None:
        self._data.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)


class JsonFileStore:
    """Store backed by a single JSON object file.

    The whole file is rewritten on every change. A write that would push the
    encoded file past ``quota_bytes`` is rejected and leaves both the file and
    the in-memory map untouched.
    """

    def __init__(
        self,
        path: str | None = None,
        quota_bytes: int | None = DEFAULT_STORE_QUOTA_BYTES,
    ) -> None:
        """Initialize the store and load any existing data.

        Args:
            path: Location of the JSON file (defaults to STORE_FILE_PATH)
            quota_bytes: Maximum encoded size of the file, None for unlimited
        """
        self.path = path or STORE_FILE_PATH
        self.quota_bytes = quota_bytes
        self._data: dict[str, str] = {}

        self._load()

    def _load(self) -> None:
        """Load the store file, falling back to an empty store."""
        if not os.path.exists(self.path):
            self._data = {}
            return

        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load store {self.path}: {e}")
            self._data = {}
            return

        if not isinstance(raw, dict):
            logger.warning(f"Ignoring store {self.path}: top level is not an object")
            self._data = {}
            return

        self._data = {str(k): v for k, v in raw.items() if isinstance(v, str)}
        skipped = len(raw) - len(self._data)
        if skipped:
            logger.warning(f"Skipped {skipped} non-string entries in {self.path}")
        logger.debug(f"Loaded {len(self._data)} store entries")

    def _write(self, key: str, data: dict[str, str]) -> None:
        """Encode and write ``data``, enforcing the quota.

        Raises:
            StoreQuotaError: If the encoded data exceeds the quota
            StoreWriteError: If the file cannot be written
        """
        encoded = json.dumps(data, ensure_ascii=False)
        size = len(encoded.encode("utf-8"))
        if self.quota_bytes is not None and size > self.quota_bytes:
            raise StoreQuotaError(key, size, self.quota_bytes)

        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(encoded)
        except OSError as e:
            raise StoreWriteError(key, reason=str(e)) from e

    def get_item(self, key: str) -> str | None:
        """Return the stored string for ``key`` or None."""
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` and write the file.

        Raises:
            StoreQuotaError: If the write would exceed the quota
            StoreWriteError: If the file cannot be written
        """
        updated = dict(self._data)
        updated[key] = str(value)
        self._write(key, updated)
        self._data = updated

    def remove_item(self, key: str) -> None:
        """Delete ``key`` if present."""
        if key not in self._data:
            return
        updated = dict(self._data)
        del updated[key]
        self._write(key, updated)
        self._data = updated

    def keys(self) -> list[str]:
        """Return every stored key."""
        return list(self._data)

    def clear(self) -> None:
        """Delete every key."""
        self._write("*", {})
        self._data = {}

    @property
    def size_bytes(self) -> int:
        """Encoded size of the current data."""
        return len(json.dumps(self._data, ensure_ascii=False).encode("utf-8"))
