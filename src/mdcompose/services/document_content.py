"""
MD Compose - Document Content Holder

Holds the free-text Markdown the user is writing.
"""

from mdcompose.config import MARKDOWN_CONTENT_KEY
from mdcompose.services.store import KeyValueStore
from mdcompose.utils.debounce import DebouncedWriter
from mdcompose.utils.logger import logger


class DocumentContentHolder:
    """Owns the document text and persists it through the debounced writer."""

    def __init__(
        self,
        store: KeyValueStore,
        writer: DebouncedWriter,
        key: str = MARKDOWN_CONTENT_KEY,
    ) -> None:
        self.store = store
        self.writer = writer
        self.key = key
        self._content = ""

    def hydrate(self) -> str:
        """Load the stored text, defaulting to an empty document."""
        self._content = self.store.get_item(self.key) or ""
        logger.debug(f"Restored document content ({len(self._content)} chars)")
        return self._content

    def set_content(self, text: str) -> None:
        """Replace the document text and schedule a write."""
        if text == self._content:
            return
        self._content = text
        self.writer.schedule(self.key, text)

    @property
    def content(self) -> str:
        return self._content
