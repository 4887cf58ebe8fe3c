"""Shared fixtures for file patch tests."""

from unittest.mock import MagicMock

import pytest

from filepatch.filepatch_applier import FilePatchApplier
from filepatch.filepatch_git import GitRepository
from filepatch.filepatch_settings import FilePatchSettings


@pytest.fixture
def settings(tmp_path):
    """Default settings rooted at a temporary directory."""
    return FilePatchSettings.create_default(str(tmp_path))


@pytest.fixture
def mock_git():
    """Git repository double that records commits."""
    git = MagicMock(spec=GitRepository)
    git.is_repository.return_value = True
    git.commit.return_value = "0123abcd"
    return git


@pytest.fixture
def applier(settings, mock_git):
    """File patch applier using the mock git repository."""
    return FilePatchApplier(settings, git=mock_git)


@pytest.fixture
def write_file(tmp_path):
    """Factory that writes a file below the temporary root and returns its path."""
    def _write(name: str, content: str | bytes):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)

        else:
            # newline='' so tests control the exact line endings
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(content)

        return path
    return _write
