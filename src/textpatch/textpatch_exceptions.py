"""Custom exceptions for text patch operations."""

from typing import Any


class PatchError(Exception):
    """Base exception for text patch operations."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class EmptySearchError(PatchError):
    """Raised when the search fragment contains no non-whitespace tokens."""


class NotFoundError(PatchError):
    """Raised when neither the exact nor the relaxed pass finds the search fragment."""


class NoEffectiveChangeError(PatchError):
    """Raised when a match was found but replacing it leaves the body unchanged."""
