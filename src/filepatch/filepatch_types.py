"""Request and result types for the file patch workflow."""

from dataclasses import dataclass
from typing import Any, Dict

from filepatch.filepatch_exceptions import InvalidRequestError
from textpatch import MatchStrategy


@dataclass
class FilePatchRequest:
    """A request to patch a single file."""

    path: str
    search: str
    replacement: str
    dry_run: bool = False
    commit: bool = False
    commit_message: str | None = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilePatchRequest":
        """
        Build a request from a JSON-style parameter dictionary.

        Args:
            data: Dictionary with 'path', 'search' and 'replace' (or 'replacement') keys,
                and optional 'dry_run', 'commit' and 'commit_message' keys

        Returns:
            Validated request

        Raises:
            InvalidRequestError: If a required field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise InvalidRequestError(f"Request must be an object, got {type(data).__name__}")

        replacement_key = 'replacement' if 'replacement' in data else 'replace'

        for key in ('path', 'search', replacement_key):
            if key not in data:
                raise InvalidRequestError(f"Request is missing required field '{key}'")

            if not isinstance(data[key], str):
                raise InvalidRequestError(f"Request field '{key}' must be a string")

        for key in ('dry_run', 'commit'):
            if key in data and not isinstance(data[key], bool):
                raise InvalidRequestError(f"Request field '{key}' must be a boolean")

        commit_message = data.get('commit_message')
        if commit_message is not None and not isinstance(commit_message, str):
            raise InvalidRequestError("Request field 'commit_message' must be a string")

        return cls(
            path=data['path'],
            search=data['search'],
            replacement=data[replacement_key],
            dry_run=data.get('dry_run', False),
            commit=data.get('commit', False),
            commit_message=commit_message
        )


@dataclass
class FilePatchResult:
    """Result of patching a file."""

    path: str
    strategy: MatchStrategy
    diff: str
    message: str
    dry_run: bool = False
    bytes_written: int = 0
    committed: bool = False
