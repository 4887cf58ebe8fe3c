"""Git operations run after a file has been patched."""

import logging
import subprocess
from pathlib import Path
from typing import List

from filepatch.filepatch_exceptions import VersionControlError


class GitRepository:
    """Thin wrapper around the git command line for a single working tree."""

    def __init__(self, root: str | Path, git_executable: str = "git"):
        """
        Initialize the repository wrapper.

        Args:
            root: Directory inside the working tree; all commands run here
            git_executable: Name or path of the git executable
        """
        self._root = Path(root)
        self._git = git_executable
        self._logger = logging.getLogger("GitRepository")

    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        """
        Run a git command in the repository root.

        Args:
            args: Arguments following the git executable

        Returns:
            Completed process with text output

        Raises:
            VersionControlError: If git cannot be started
        """
        command = [self._git, *args]
        self._logger.debug("Running %s in %s", command, self._root)

        try:
            return subprocess.run(
                command,
                cwd=self._root,
                capture_output=True,
                text=True,
                check=False
            )

        except OSError as e:
            raise VersionControlError(f"Failed to run git: {str(e)}") from e

    def _check(self, process: subprocess.CompletedProcess, action: str) -> str:
        if process.returncode != 0:
            message = process.stderr.strip() or process.stdout.strip() or "unknown error"
            raise VersionControlError(
                f"git {action} failed: {message}",
                {'returncode': process.returncode, 'args': process.args}
            )

        return process.stdout

    def is_repository(self) -> bool:
        """Check whether the root directory is inside a git working tree."""
        try:
            process = self._run(["rev-parse", "--is-inside-work-tree"])

        except VersionControlError:
            return False

        return process.returncode == 0 and process.stdout.strip() == "true"

    def commit(self, path: str | Path, message: str) -> str:
        """
        Stage a single file and commit it.

        Args:
            path: File path, absolute or relative to the root
            message: Commit message

        Returns:
            Hash of the new commit

        Raises:
            VersionControlError: If staging or committing fails
        """
        self._check(self._run(["add", "--", str(path)]), "add")
        self._check(self._run(["commit", "-m", message, "--", str(path)]), "commit")
        commit_hash = self._check(self._run(["rev-parse", "HEAD"]), "rev-parse").strip()
        self._logger.info("Committed %s as %s", path, commit_hash)
        return commit_hash
