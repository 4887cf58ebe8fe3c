"""Shared dataclasses for text patch operations."""

from dataclasses import dataclass
from enum import Enum

from textpatch.textpatch_exceptions import EmptySearchError


class MatchStrategy(Enum):
    """Which pass located the search fragment."""

    EXACT = "exact"
    RELAXED = "relaxed"


@dataclass(frozen=True)
class PatchRequest:
    """A single search/replace request against a text body."""

    body: str
    search: str
    replacement: str

    def __post_init__(self) -> None:
        if not self.search.split():
            raise EmptySearchError(
                "Search fragment is empty after whitespace normalization",
                {'search': self.search}
            )


@dataclass
class MatchResult:
    """Result of attempting to locate (and optionally replace) a search fragment."""

    matched: bool
    strategy: MatchStrategy | None = None
    body: str | None = None  # Replaced body, None if nothing was replaced
    start: int = -1  # Offset of the matched span in the original body
    end: int = -1
    matched_text: str = ""
    occurrences: int = 0  # Non-overlapping candidates found by the winning strategy
