"""
MD Compose - Format Utilities Module

This module provides shared utility functions for formatting values.
"""

from mdcompose.utils.exceptions import StoreQuotaError, StoreWriteError
from mdcompose.utils.i18n import _

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_file_size(size_bytes: int | float) -> str:
    """Format file size in human-readable format.

    Scaling stops at GB, so very large values keep growing in GB
    (e.g. 1024**4 bytes is "1024.00 GB").

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string with two decimals (e.g., "1.50 KB")
    """
    size = float(max(size_bytes, 0))
    unit_index = 0

    while size >= 1024 and unit_index < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1

    return f"{size:.2f} {_SIZE_UNITS[unit_index]}"


def format_store_error(error: StoreWriteError) -> str:
    """Describe a failed store write for the user."""
    if isinstance(error, StoreQuotaError):
        return _("Storage is full, recent changes will not be restored")
    return _("Changes could not be saved, they will not be restored")
