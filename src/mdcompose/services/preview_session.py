"""
MD Compose - Preview Session Controller

Tracks which attached file is shown in the preview dialog and remembers
how far each file was scrolled. Offsets are written straight to the store
on every scroll event and are keyed by file path.
"""

from __future__ import annotations

from enum import Enum

from mdcompose.config import SCROLL_KEY_PREFIX
from mdcompose.services.file_record import FileRecord
from mdcompose.services.store import KeyValueStore
from mdcompose.utils.exceptions import StoreWriteError
from mdcompose.utils.logger import logger


class PreviewState(Enum):
    """Visibility of the preview dialog."""

    CLOSED = "closed"
    OPEN = "open"


def parse_offset(raw: str | None) -> int:
    """Parse a stored scroll offset, keeping only its integer part.

    Missing, blank, negative or unparsable values all give 0.
    """
    if raw is None:
        return 0

    text = raw.strip()
    sign = ""
    if text[:1] in ("+", "-"):
        sign, text = text[0], text[1:]

    digits = ""
    for char in text:
        if char not in "0123456789":
            break
        digits += char

    if not digits or sign == "-":
        return 0
    return int(digits)


class PreviewSessionController:
    """Owns the active preview file, dialog visibility and scroll offsets."""

    def __init__(self, store: KeyValueStore, key_prefix: str = SCROLL_KEY_PREFIX) -> None:
        self.store = store
        self.key_prefix = key_prefix
        self.active_file: FileRecord | None = None
        self.visible: bool = False

    @property
    def state(self) -> PreviewState:
        return PreviewState.OPEN if self.visible else PreviewState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.visible

    def scroll_key(self, file: FileRecord) -> str:
        """Store key holding the scroll offset of ``file``."""
        return f"{self.key_prefix}{file.path}"

    def open(self, file: FileRecord) -> None:
        """Show ``file`` in the preview."""
        self.active_file = file
        self.visible = True
        logger.debug(f"Preview opened for {file.path}")

    def close(self) -> None:
        """Hide the preview; the active file is kept."""
        if self.visible:
            logger.debug("Preview closed")
        self.visible = False

    def reset(self) -> None:
        """Hide the preview and forget the active file."""
        self.active_file = None
        self.visible = False

    def on_file_removed(self, record: FileRecord) -> bool:
        """Close the preview and forget ``record`` if it is the active file.

        Returns:
            True if the preview was closed
        """
        if self.active_file is None or self.active_file.path != record.path:
            return False

        was_visible = self.visible
        self.reset()
        if was_visible:
            logger.debug(f"Preview closed, {record.path} was removed")
        return was_visible

    def on_scroll(self, offset: int | float) -> bool:
        """Persist the scroll offset of the visible file immediately.

        Args:
            offset: Raw vertical scroll offset reported by the viewer

        Returns:
            True if the offset was written
        """
        if not self.visible or self.active_file is None:
            return False

        value = max(int(offset), 0)
        try:
            self.store.set_item(self.scroll_key(self.active_file), str(value))
        except StoreWriteError as e:
            logger.error(f"Failed to save scroll position: {e}")
            return False
        return True

    def restore_offset(self, file: FileRecord) -> int:
        """Return the last saved scroll offset for ``file`` (0 if none)."""
        return parse_offset(self.store.get_item(self.scroll_key(file)))
