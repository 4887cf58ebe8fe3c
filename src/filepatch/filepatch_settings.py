"""Settings for the file patch workflow."""

from dataclasses import dataclass, field
from typing import List


DEFAULT_BINARY_EXTENSIONS = [
    ".7z", ".a", ".bin", ".bmp", ".class", ".dll", ".dylib", ".exe", ".gif", ".gz",
    ".ico", ".jar", ".jpeg", ".jpg", ".mp3", ".mp4", ".o", ".pdf", ".png", ".pyc",
    ".so", ".tar", ".tgz", ".ttf", ".wasm", ".webp", ".woff", ".woff2", ".zip",
]


@dataclass
class FilePatchSettings:
    """
    Settings for patching files.

    Attributes:
        root: Directory that relative paths are resolved against and that patched files must live in
        encoding: Text encoding used to read and write files
        max_file_size_mb: Largest file that will be patched
        binary_extensions: File extensions that are always treated as binary
        git_commit: Commit every successful patch
        commit_message_template: Commit message, ``{path}`` is replaced with the patched file's path
    """
    root: str
    encoding: str = "utf-8"
    max_file_size_mb: int = 10
    binary_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_BINARY_EXTENSIONS))
    git_commit: bool = False
    commit_message_template: str = "Apply patch to {path}"

    @property
    def max_file_size_bytes(self) -> int:
        """Maximum file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    def is_binary_extension(self, suffix: str) -> bool:
        """Check if a file suffix names a known binary type."""
        return suffix.lower() in {ext.lower() for ext in self.binary_extensions}

    @classmethod
    def create_default(cls, root: str) -> "FilePatchSettings":
        """Create settings with default values for the given root directory."""
        return cls(root=root)
