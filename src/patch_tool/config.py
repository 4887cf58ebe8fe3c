"""
Configuration management for the patch tool.
"""

import codecs
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List

import yaml

from filepatch import DEFAULT_BINARY_EXTENSIONS, FilePatchSettings


DEFAULT_CONFIG_FILE = ".textpatch.yaml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when a configuration file cannot be loaded."""


@dataclass
class GitConfig:
    """Git settings."""
    commit: bool = False
    commit_message: str = "Apply patch to {path}"


@dataclass
class LoggingConfig:
    """Logging settings."""
    directory: str = "~/.textpatch/logs"
    level: str = "INFO"


@dataclass
class PatchToolConfig:
    """Configuration for the patch tool."""

    encoding: str = "utf-8"
    max_file_size_mb: int = 10
    binary_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_BINARY_EXTENSIONS))
    show_diff: bool = True
    git: GitConfig = field(default_factory=GitConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load_from_file(cls, config_path: str) -> 'PatchToolConfig':
        """Load configuration from YAML file."""
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)

        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse configuration file {config_path}: {e}") from e

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file {config_path} must contain a mapping")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PatchToolConfig':
        """Build configuration from a parsed YAML mapping, using defaults for missing keys."""
        defaults = cls()
        git_data = data.get('git') or {}
        logging_data = data.get('logging') or {}

        if not isinstance(git_data, dict) or not isinstance(logging_data, dict):
            raise ConfigError("'git' and 'logging' sections must be mappings")

        return cls(
            encoding=data.get('encoding', defaults.encoding),
            max_file_size_mb=data.get('max_file_size_mb', defaults.max_file_size_mb),
            binary_extensions=data.get('binary_extensions', defaults.binary_extensions),
            show_diff=data.get('show_diff', defaults.show_diff),
            git=GitConfig(
                commit=git_data.get('commit', defaults.git.commit),
                commit_message=git_data.get('commit_message', defaults.git.commit_message)
            ),
            logging=LoggingConfig(
                directory=logging_data.get('directory', defaults.logging.directory),
                level=logging_data.get('level', defaults.logging.level)
            )
        )

    @classmethod
    def create_default(cls) -> 'PatchToolConfig':
        """Create a default configuration."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a YAML-ready mapping."""
        return {
            'encoding': self.encoding,
            'max_file_size_mb': self.max_file_size_mb,
            'binary_extensions': list(self.binary_extensions),
            'show_diff': self.show_diff,
            'git': {
                'commit': self.git.commit,
                'commit_message': self.git.commit_message
            },
            'logging': {
                'directory': self.logging.directory,
                'level': self.logging.level
            }
        }

    def save_to_file(self, config_path: str) -> None:
        """Save configuration to YAML file."""
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=True)

    def to_settings(self, root: str) -> FilePatchSettings:
        """Build file patch settings for the given root directory."""
        return FilePatchSettings(
            root=root,
            encoding=self.encoding,
            max_file_size_mb=self.max_file_size_mb,
            binary_extensions=list(self.binary_extensions),
            git_commit=self.git.commit,
            commit_message_template=self.git.commit_message
        )

    def validate(self) -> List[str]:
        """Validate the configuration and return any errors."""
        errors = []

        if not isinstance(self.encoding, str):
            errors.append("'encoding' must be a string")

        else:
            try:
                codecs.lookup(self.encoding)

            except LookupError:
                errors.append(f"Unknown encoding '{self.encoding}'")

        if isinstance(self.max_file_size_mb, bool) or not isinstance(self.max_file_size_mb, int) \
                or self.max_file_size_mb <= 0:
            errors.append("'max_file_size_mb' must be a positive integer")

        if not isinstance(self.binary_extensions, list):
            errors.append("'binary_extensions' must be a list")

        else:
            for ext in self.binary_extensions:
                if not isinstance(ext, str) or not ext.startswith('.'):
                    errors.append(f"Binary extension {ext!r} must be a string starting with '.'")

        if not isinstance(self.show_diff, bool):
            errors.append("'show_diff' must be true or false")

        if not isinstance(self.git.commit, bool):
            errors.append("'git.commit' must be true or false")

        try:
            self.git.commit_message.format(path="file")

        except (AttributeError, KeyError, IndexError, ValueError):
            errors.append("'git.commit_message' may only use the {path} placeholder")

        if not isinstance(self.logging.directory, str) or not self.logging.directory:
            errors.append("'logging.directory' must be a non-empty string")

        if not isinstance(self.logging.level, str) or self.logging.level.upper() not in LOG_LEVELS:
            errors.append(f"'logging.level' must be one of {', '.join(LOG_LEVELS)}")

        return errors
