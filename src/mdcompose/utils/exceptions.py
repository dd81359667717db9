"""
MD Compose - Custom Exceptions Module

This module defines custom exception classes for specific error cases
in the MD Compose application.
"""


class MdComposeError(Exception):
    """Base exception for all MD Compose errors.

    All custom exceptions should inherit from this class to allow
    catching any MD Compose-specific error.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class StoreError(MdComposeError):
    """Raised when the durable key-value store cannot be used."""


class StoreWriteError(StoreError):
    """Raised when a value cannot be written to the store."""

    def __init__(self, key: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            key: Store key that failed to be written
            reason: Optional reason for the failure
        """
        self.key = key
        self.reason = reason

        msg = f"Failed to write store key '{key}'"
        if reason:
            msg += f": {reason}"

        super().__init__(msg, details=f"key={key}")


class StoreQuotaError(StoreWriteError):
    """Raised when a write would exceed the store quota."""

    def __init__(self, key: str, required_bytes: int, quota_bytes: int) -> None:
        """Initialize the exception.

        Args:
            key: Store key being written
            required_bytes: Size the store would reach with the write
            quota_bytes: Configured store quota
        """
        self.required_bytes = required_bytes
        self.quota_bytes = quota_bytes
        super().__init__(
            key,
            reason=f"quota exceeded ({required_bytes} > {quota_bytes} bytes)",
        )


class InvalidFileRecordError(MdComposeError):
    """Raised when a persisted file record cannot be decoded."""

    def __init__(self, reason: str, field: str | None = None) -> None:
        """Initialize the exception.

        Args:
            reason: Why the record was rejected
            field: Optional name of the offending field
        """
        self.reason = reason
        self.field = field

        msg = f"Invalid file record: {reason}"
        super().__init__(msg, details=f"field={field}" if field else None)


class FileLoadError(MdComposeError):
    """Raised when a local file cannot be attached."""

    def __init__(self, file_path: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            file_path: Path of the file that could not be loaded
            reason: Optional reason for the failure
        """
        self.file_path = file_path
        self.reason = reason

        msg = f"Cannot attach file: {file_path}"
        if reason:
            msg += f" - {reason}"

        super().__init__(msg, details=f"path={file_path}")


class ConfigurationError(MdComposeError):
    """Raised when there's a configuration-related error."""

    def __init__(self, setting_name: str | None = None, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            setting_name: Optional name of the problematic setting
            reason: Optional reason for the error
        """
        self.setting_name = setting_name
        self.reason = reason

        if setting_name:
            msg = f"Configuration error for '{setting_name}'"
        else:
            msg = "Configuration error"

        if reason:
            msg += f": {reason}"

        super().__init__(msg)


# Exception hierarchy summary:
# MdComposeError (base)
# ├── StoreError
# │   └── StoreWriteError
# │       └── StoreQuotaError
# ├── InvalidFileRecordError
# ├── FileLoadError
# └── ConfigurationError
