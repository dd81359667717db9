"""
MD Compose - File Record Model

Data model for one attached file.
"""

from dataclasses import dataclass
from typing import Any

from mdcompose.utils.exceptions import InvalidFileRecordError

_STRING_FIELDS = ("name", "path", "extension", "content")


@dataclass
class FileRecord:
    """One attached file's metadata and content.

    Attributes:
        name: Display name, not unique across different paths
        path: Full identifying path, used as the deduplication key
        size: Byte count
        extension: Language hint for the viewer, opaque to the core
        content: Full file content
    """

    name: str
    path: str
    size: int
    extension: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "path": self.path,
            "size": self.size,
            "extension": self.extension,
            "content": self.content,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "FileRecord":
        """Create a FileRecord from a decoded JSON object.

        Args:
            data: Decoded JSON value

        Returns:
            New FileRecord instance

        Raises:
            InvalidFileRecordError: If the payload does not describe a file
        """
        if not isinstance(data, dict):
            raise InvalidFileRecordError(f"expected an object, got {type(data).__name__}")

        for field_name in _STRING_FIELDS:
            if field_name not in data:
                raise InvalidFileRecordError("missing field", field=field_name)
            if not isinstance(data[field_name], str):
                raise InvalidFileRecordError("expected a string", field=field_name)

        size = data.get("size")
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise InvalidFileRecordError("expected a non-negative integer", field="size")

        return cls(
            name=data["name"],
            path=data["path"],
            size=size,
            extension=data["extension"],
            content=data["content"],
        )
