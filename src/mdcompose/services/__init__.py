"""
MD Compose - Services Package

Editor state, persistence and file ingestion.
"""

from mdcompose.services.editor_state import EditorSnapshot, EditorState
from mdcompose.services.file_record import FileRecord
from mdcompose.services.store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "EditorSnapshot",
    "EditorState",
    "FileRecord",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
]
