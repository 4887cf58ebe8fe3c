"""Search fragment matcher with exact and whitespace-relaxed passes."""

import logging
import re
from typing import List, Pattern, cast

from textpatch.textpatch_exceptions import EmptySearchError, NoEffectiveChangeError, NotFoundError
from textpatch.textpatch_types import MatchResult, MatchStrategy, PatchRequest


def tokenize(search: str) -> List[str]:
    """
    Split a search fragment into whitespace-delimited tokens.

    Args:
        search: Search fragment

    Returns:
        List of non-empty tokens
    """
    return search.split()


def build_relaxed_pattern(tokens: List[str]) -> Pattern[str]:
    """
    Build a pattern that matches the tokens in order, separated by any whitespace.

    Each token is escaped so regex metacharacters are matched literally.

    Args:
        tokens: Non-empty list of tokens

    Returns:
        Compiled pattern

    Raises:
        EmptySearchError: If there are no tokens
    """
    if not tokens:
        raise EmptySearchError("Search fragment is empty after whitespace normalization")

    return re.compile(r'\s+'.join(re.escape(token) for token in tokens))


class PatchMatcher:
    """Locates a search fragment in a body and replaces the first occurrence."""

    def __init__(self) -> None:
        """Initialize the matcher."""
        self._logger = logging.getLogger("PatchMatcher")

    def find(self, body: str, search: str) -> MatchResult:
        """
        Locate the search fragment without replacing it.

        The exact pass is tried first. The relaxed pass is only tried if the
        fragment is not a literal substring of the body.

        Args:
            body: Text to search
            search: Fragment to look for

        Returns:
            MatchResult describing the first match, with matched=False if none found

        Raises:
            EmptySearchError: If the search fragment has no non-whitespace tokens
        """
        tokens = tokenize(search)
        if not tokens:
            raise EmptySearchError(
                "Search fragment is empty after whitespace normalization",
                {'search': search}
            )

        start = body.find(search)
        if start != -1:
            return MatchResult(
                matched=True,
                strategy=MatchStrategy.EXACT,
                start=start,
                end=start + len(search),
                matched_text=search,
                occurrences=body.count(search)
            )

        pattern = build_relaxed_pattern(tokens)
        match = pattern.search(body)
        if match is None:
            return MatchResult(matched=False)

        return MatchResult(
            matched=True,
            strategy=MatchStrategy.RELAXED,
            start=match.start(),
            end=match.end(),
            matched_text=match.group(0),
            occurrences=sum(1 for _ in pattern.finditer(body))
        )

    def apply(self, request: PatchRequest) -> MatchResult:
        """
        Replace the first match of the request's search fragment.

        Args:
            request: The patch request

        Returns:
            MatchResult with the replaced body

        Raises:
            EmptySearchError: If the search fragment has no non-whitespace tokens
            NotFoundError: If neither pass finds the fragment
            NoEffectiveChangeError: If the replacement leaves the body unchanged
        """
        result = self.find(request.body, request.search)

        if not result.matched:
            raise NotFoundError(
                "Search fragment not found (exact and whitespace-relaxed matching both failed)",
                {
                    'search_tokens': tokenize(request.search),
                    'suggestion': 'Read the current content and supply a search fragment copied from it.'
                }
            )

        strategy = cast(MatchStrategy, result.strategy)
        new_body = request.body[:result.start] + request.replacement + request.body[result.end:]

        if new_body == request.body:
            raise NoEffectiveChangeError(
                "Replacement produced no change to the body",
                {
                    'strategy': strategy.value,
                    'span': [result.start, result.end]
                }
            )

        if result.occurrences > 1:
            self._logger.debug(
                "%d candidate matches for %s pass, replacing the first at offset %d",
                result.occurrences, strategy.value, result.start
            )

        self._logger.debug("Applied %s match at [%d, %d)", strategy.value, result.start, result.end)
        result.body = new_body
        return result


def apply_patch(body: str, search: str, replacement: str) -> MatchResult:
    """
    Replace the first occurrence of a search fragment in a body.

    Args:
        body: Text to patch
        search: Fragment to look for
        replacement: Text to put in its place

    Returns:
        MatchResult with the replaced body
    """
    return PatchMatcher().apply(PatchRequest(body, search, replacement))
