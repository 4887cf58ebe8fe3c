"""Apply search/replace patches to files on disk."""

import difflib
import logging
import tempfile
from pathlib import Path
from typing import Tuple, cast

from filepatch.filepatch_exceptions import BinaryFileError, FileAccessError, VersionControlError
from filepatch.filepatch_git import GitRepository
from filepatch.filepatch_settings import FilePatchSettings
from filepatch.filepatch_types import FilePatchRequest, FilePatchResult
from textpatch import MatchStrategy, PatchMatcher, PatchRequest


# Number of leading bytes inspected for NUL characters
BINARY_SNIFF_BYTES = 8192


def make_unified_diff(original: str, modified: str, display_path: str) -> str:
    """
    Build a unified diff between two versions of a file.

    Args:
        original: Content before patching
        modified: Content after patching
        display_path: Path shown in the diff headers

    Returns:
        Unified diff text
    """
    diff_lines = difflib.unified_diff(
        original.splitlines(keepends=True),
        modified.splitlines(keepends=True),
        fromfile=f"a/{display_path}",
        tofile=f"b/{display_path}"
    )

    result = []
    for line in diff_lines:
        if not line.endswith(('\n', '\r')):
            line += '\n'

        result.append(line)

    return ''.join(result)


class FilePatchApplier:
    """Reads a file, patches it with a PatchMatcher and writes the result back."""

    def __init__(self, settings: FilePatchSettings, git: GitRepository | None = None):
        """
        Initialize the applier.

        Args:
            settings: File patch settings; paths are resolved against settings.root
            git: Repository used for commits, created from settings.root if not given
        """
        self._settings = settings
        self._root = Path(settings.root).expanduser().resolve()
        self._git = git if git is not None else GitRepository(self._root)
        self._matcher = PatchMatcher()
        self._logger = logging.getLogger("FilePatchApplier")

    def resolve_path(self, path_str: str) -> Tuple[Path, str]:
        """
        Resolve a path against the root directory.

        Args:
            path_str: Absolute path, or path relative to the root

        Returns:
            Tuple of (absolute path, display path relative to the root)

        Raises:
            FileAccessError: If the path is empty or outside the root
        """
        if not path_str or not path_str.strip():
            raise FileAccessError("path: parameter must not be empty")

        path = Path(path_str).expanduser()
        if not path.is_absolute():
            path = self._root / path

        try:
            resolved = path.resolve()

        except (OSError, RuntimeError) as e:
            raise FileAccessError(f"Failed to resolve path '{path_str}': {str(e)}") from e

        if not resolved.is_relative_to(self._root):
            raise FileAccessError(
                f"Path is outside the patch root: {path_str}",
                {'root': str(self._root), 'path': str(resolved)}
            )

        return resolved, resolved.relative_to(self._root).as_posix()

    def _check_patchable(self, path: Path, display_path: str) -> None:
        """
        Reject files that cannot be patched as text.

        Raises:
            FileAccessError: If the file is missing, not a regular file or too large
            BinaryFileError: If the file is a binary artifact
        """
        if not path.exists():
            raise FileAccessError(f"File does not exist: {display_path}")

        if not path.is_file():
            raise FileAccessError(f"Path is not a file: {display_path}")

        if self._settings.is_binary_extension(path.suffix):
            raise BinaryFileError(
                f"Refusing to patch binary file: {display_path}",
                {'extension': path.suffix}
            )

        size = path.stat().st_size
        if size > self._settings.max_file_size_bytes:
            size_mb = size / (1024 * 1024)
            raise FileAccessError(
                f"File too large: {size_mb:.1f}MB (max: {self._settings.max_file_size_mb}MB)"
            )

        try:
            with open(path, 'rb') as f:
                head = f.read(BINARY_SNIFF_BYTES)

        except OSError as e:
            raise FileAccessError(f"Failed to read file: {str(e)}") from e

        if b'\0' in head:
            raise BinaryFileError(
                f"Refusing to patch binary file: {display_path}",
                {'reason': 'file contains NUL bytes'}
            )

    def _read(self, path: Path) -> str:
        encoding = self._settings.encoding

        try:
            # newline='' keeps the file's own line endings intact
            with open(path, 'r', encoding=encoding, newline='') as f:
                return f.read()

        except UnicodeDecodeError as e:
            raise FileAccessError(
                f"Failed to decode file with encoding '{encoding}': {str(e)}. Try a different encoding."
            ) from e

        except PermissionError as e:
            raise FileAccessError(f"Permission denied reading file: {str(e)}") from e

        except OSError as e:
            raise FileAccessError(f"Failed to read file: {str(e)}") from e

    def _write(self, path: Path, content: str) -> int:
        """
        Replace the file's content atomically, keeping its permission bits.

        Returns:
            Number of bytes written
        """
        encoding = self._settings.encoding
        tmp_path: Path | None = None

        try:
            mode = path.stat().st_mode

            # Write to temporary file first, then rename for atomicity
            with tempfile.NamedTemporaryFile(
                mode='w',
                encoding=encoding,
                newline='',
                dir=path.parent,
                delete=False,
                suffix='.tmp'
            ) as tmp_file:
                tmp_path = Path(tmp_file.name)
                tmp_file.write(content)

            tmp_path.chmod(mode & 0o7777)
            tmp_path.replace(path)

        except PermissionError as e:
            self._discard(tmp_path)
            raise FileAccessError(f"Permission denied writing file: {str(e)}") from e

        except OSError as e:
            self._discard(tmp_path)
            raise FileAccessError(f"Failed to write file: {str(e)}") from e

        return len(content.encode(encoding))

    def _discard(self, tmp_path: Path | None) -> None:
        if tmp_path is None:
            return

        try:
            tmp_path.unlink(missing_ok=True)

        except OSError as e:
            self._logger.warning("Failed to remove temporary file %s: %s", tmp_path, e)

    def patch_file(self, request: FilePatchRequest) -> FilePatchResult:
        """
        Replace the first match of the request's search fragment in a file.

        Matcher errors (EmptySearchError, NotFoundError, NoEffectiveChangeError)
        propagate unchanged and leave the file untouched.

        Args:
            request: The file patch request

        Returns:
            FilePatchResult describing what was done

        Raises:
            FileAccessError: If the file cannot be located, read or written
            BinaryFileError: If the file is binary
            VersionControlError: If a commit is requested outside a git working
                tree (checked before writing) or the commit fails
        """
        path, display_path = self.resolve_path(request.path)
        self._check_patchable(path, display_path)

        original = self._read(path)
        match_result = self._matcher.apply(PatchRequest(original, request.search, request.replacement))
        modified = match_result.body if match_result.body is not None else original
        strategy = cast(MatchStrategy, match_result.strategy)

        diff = make_unified_diff(original, modified, display_path)

        if request.dry_run:
            self._logger.info("Dry run: %s match found in %s", strategy.value, display_path)
            return FilePatchResult(
                path=display_path,
                strategy=strategy,
                diff=diff,
                message=f"Patch can be applied to '{display_path}' ({strategy.value} match)",
                dry_run=True
            )

        commit = request.commit or self._settings.git_commit
        if commit and not self._git.is_repository():
            raise VersionControlError(
                f"Cannot commit '{display_path}': patch root is not inside a git working tree",
                {'root': str(self._root)}
            )

        bytes_written = self._write(path, modified)
        self._logger.info(
            "Patched %s using %s match (%d bytes written)", display_path, strategy.value, bytes_written
        )

        committed = False
        if commit:
            message = request.commit_message or self._settings.commit_message_template.format(path=display_path)
            self._git.commit(display_path, message)
            committed = True

        return FilePatchResult(
            path=display_path,
            strategy=strategy,
            diff=diff,
            message=f"Patch applied to '{display_path}' ({strategy.value} match)",
            bytes_written=bytes_written,
            committed=committed
        )
