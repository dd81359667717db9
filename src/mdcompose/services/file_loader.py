"""
MD Compose - File Loader

Builds file records from local files picked by the user.
"""

import os

from mdcompose.config import MAX_FILE_SIZE_BYTES
from mdcompose.services.file_record import FileRecord
from mdcompose.utils.exceptions import FileLoadError
from mdcompose.utils.logger import logger


def _record_path(file_path: str, base_dir: str | None) -> str:
    absolute = os.path.abspath(file_path)
    if base_dir:
        base = os.path.abspath(base_dir)
        if os.path.commonpath([absolute, base]) == base:
            return os.path.relpath(absolute, base)
    return absolute


def load_file_record(file_path: str, base_dir: str | None = None) -> FileRecord:
    """Read a local text file into a FileRecord.

    Args:
        file_path: File to read
        base_dir: Optional directory the record path is made relative to

    Returns:
        The new record

    Raises:
        FileLoadError: If the file is missing, unreadable or too large
    """
    if not os.path.isfile(file_path):
        raise FileLoadError(file_path, "not a regular file")

    try:
        size = os.path.getsize(file_path)
        if size > MAX_FILE_SIZE_BYTES:
            raise FileLoadError(file_path, f"larger than {MAX_FILE_SIZE_BYTES} bytes")
        with open(file_path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise FileLoadError(file_path, str(e)) from e

    name = os.path.basename(file_path)
    extension = os.path.splitext(name)[1].lstrip(".").lower()

    return FileRecord(
        name=name,
        path=_record_path(file_path, base_dir),
        size=len(data),
        extension=extension,
        content=data.decode("utf-8", errors="replace"),
    )


def load_file_records(
    file_paths: list[str], base_dir: str | None = None
) -> tuple[list[FileRecord], list[str]]:
    """Load several files, skipping the ones that fail.

    Returns:
        Tuple of (loaded records, paths that could not be loaded)
    """
    records: list[FileRecord] = []
    failed: list[str] = []

    for file_path in file_paths:
        try:
            records.append(load_file_record(file_path, base_dir))
        except FileLoadError as e:
            logger.warning(str(e))
            failed.append(file_path)

    return records, failed
