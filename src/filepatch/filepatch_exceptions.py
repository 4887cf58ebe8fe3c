"""Exception classes for the file patch workflow."""

from typing import Any


class FilePatchError(Exception):
    """Base exception for file patch operations."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class FileAccessError(FilePatchError):
    """Raised when the target file cannot be located, read or written."""


class BinaryFileError(FilePatchError):
    """Raised when the target file is a binary artifact."""


class VersionControlError(FilePatchError):
    """Raised when a git operation fails."""


class InvalidRequestError(FilePatchError):
    """Raised when a file patch request is missing required fields."""
