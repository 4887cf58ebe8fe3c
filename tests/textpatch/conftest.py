"""Shared fixtures for text patch tests."""

import pytest

from textpatch.textpatch_matcher import PatchMatcher
from textpatch.textpatch_types import PatchRequest


@pytest.fixture
def matcher():
    """Create a patch matcher for testing."""
    return PatchMatcher()


@pytest.fixture
def make_request():
    """Factory for patch requests."""
    def _create_request(body: str, search: str, replacement: str) -> PatchRequest:
        return PatchRequest(body=body, search=search, replacement=replacement)
    return _create_request
