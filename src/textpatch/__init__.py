"""
Search/replace text patching.

This package locates a search fragment in a text body, either verbatim or
with whitespace differences between tokens tolerated, and replaces the
first occurrence.
"""

from textpatch.textpatch_exceptions import (
    EmptySearchError,
    NoEffectiveChangeError,
    NotFoundError,
    PatchError,
)
from textpatch.textpatch_matcher import PatchMatcher, apply_patch, build_relaxed_pattern, tokenize
from textpatch.textpatch_types import MatchResult, MatchStrategy, PatchRequest

__all__ = [
    # Exceptions
    'PatchError',
    'EmptySearchError',
    'NotFoundError',
    'NoEffectiveChangeError',
    # Types
    'MatchStrategy',
    'PatchRequest',
    'MatchResult',
    # Core
    'PatchMatcher',
    'apply_patch',
    'build_relaxed_pattern',
    'tokenize',
]
