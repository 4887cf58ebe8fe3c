"""Tests for the git collaborator."""

import shutil
import subprocess
from unittest.mock import patch

import pytest

from filepatch.filepatch_exceptions import VersionControlError
from filepatch.filepatch_git import GitRepository


def completed(args, returncode=0, stdout="", stderr=""):
    """Build a CompletedProcess for mocked subprocess calls."""
    return subprocess.CompletedProcess(args=args, returncode=returncode, stdout=stdout, stderr=stderr)


class TestGitRepository:
    """Test GitRepository with subprocess mocked out."""

    def test_is_repository_true(self, tmp_path):
        """Test detecting a working tree."""
        repo = GitRepository(tmp_path)

        with patch('filepatch.filepatch_git.subprocess.run') as mock_run:
            mock_run.return_value = completed([], stdout="true\n")
            assert repo.is_repository() is True

        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "rev-parse", "--is-inside-work-tree"]
        assert kwargs['cwd'] == tmp_path

    def test_is_repository_false(self, tmp_path):
        """Test a directory that is not a working tree."""
        repo = GitRepository(tmp_path)

        with patch('filepatch.filepatch_git.subprocess.run') as mock_run:
            mock_run.return_value = completed([], returncode=128, stderr="fatal: not a git repository")
            assert repo.is_repository() is False

    def test_is_repository_without_git(self, tmp_path):
        """Test that a missing git executable means no repository."""
        repo = GitRepository(tmp_path)

        with patch('filepatch.filepatch_git.subprocess.run', side_effect=FileNotFoundError("git")):
            assert repo.is_repository() is False

    def test_commit(self, tmp_path):
        """Test staging and committing a file."""
        repo = GitRepository(tmp_path)

        with patch('filepatch.filepatch_git.subprocess.run') as mock_run:
            mock_run.side_effect = [
                completed([]),
                completed([], stdout="[main abc] msg\n"),
                completed([], stdout="abc123\n"),
            ]
            assert repo.commit("src/app.py", "Update app") == "abc123"

        commands = [call[0][0] for call in mock_run.call_args_list]
        assert commands == [
            ["git", "add", "--", "src/app.py"],
            ["git", "commit", "-m", "Update app", "--", "src/app.py"],
            ["git", "rev-parse", "HEAD"],
        ]

    def test_commit_failure(self, tmp_path):
        """Test that a failing git command raises VersionControlError."""
        repo = GitRepository(tmp_path)

        with patch('filepatch.filepatch_git.subprocess.run') as mock_run:
            mock_run.side_effect = [
                completed([]),
                completed(["git", "commit"], returncode=1, stdout="nothing to commit"),
            ]

            with pytest.raises(VersionControlError) as exc_info:
                repo.commit("app.py", "msg")

        assert "git commit failed: nothing to commit" in str(exc_info.value)
        assert exc_info.value.error_details['returncode'] == 1

    def test_git_not_installed(self, tmp_path):
        """Test that a missing git executable raises VersionControlError."""
        repo = GitRepository(tmp_path, git_executable="no-such-git")

        with patch('filepatch.filepatch_git.subprocess.run', side_effect=FileNotFoundError("no-such-git")):
            with pytest.raises(VersionControlError) as exc_info:
                repo.commit("app.py", "msg")

        assert "Failed to run git" in str(exc_info.value)


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
class TestGitRepositoryIntegration:
    """Test GitRepository against a real repository."""

    @pytest.fixture
    def repo_dir(self, tmp_path, monkeypatch):
        """Initialise an empty repository with a committer identity."""
        for name in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
            monkeypatch.setenv(name, "Patch Tester")

        for name in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
            monkeypatch.setenv(name, "tester@example.com")

        subprocess.run(["git", "init", "-q"], cwd=tmp_path, check=True)
        return tmp_path

    def test_commit(self, repo_dir):
        """Test committing a file and finding it in the new commit."""
        repo = GitRepository(repo_dir)
        target = repo_dir / "notes.txt"
        target.write_text("first\n", encoding='utf-8')

        assert repo.is_repository() is True
        commit_hash = repo.commit("notes.txt", "Add notes")
        assert len(commit_hash) == 40

        shown = subprocess.run(
            ["git", "show", "--name-only", "--format=%s", commit_hash],
            cwd=repo_dir, capture_output=True, text=True, check=True
        )
        assert shown.stdout.split() == ["Add", "notes", "notes.txt"]

    def test_not_a_repository(self, tmp_path, monkeypatch):
        """Test that a plain directory is not a working tree."""
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
        plain = tmp_path / "plain"
        plain.mkdir()

        assert GitRepository(plain).is_repository() is False
