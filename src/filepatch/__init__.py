"""
File patching workflow.

Wraps the textpatch matcher with file access: binary file rejection,
atomic writes, before/after diffs and optional git commits.
"""

from filepatch.filepatch_applier import FilePatchApplier, make_unified_diff
from filepatch.filepatch_exceptions import (
    BinaryFileError,
    FileAccessError,
    FilePatchError,
    InvalidRequestError,
    VersionControlError,
)
from filepatch.filepatch_git import GitRepository
from filepatch.filepatch_settings import DEFAULT_BINARY_EXTENSIONS, FilePatchSettings
from filepatch.filepatch_types import FilePatchRequest, FilePatchResult

__all__ = [
    'FilePatchError',
    'FileAccessError',
    'BinaryFileError',
    'VersionControlError',
    'InvalidRequestError',
    'FilePatchSettings',
    'DEFAULT_BINARY_EXTENSIONS',
    'FilePatchRequest',
    'FilePatchResult',
    'FilePatchApplier',
    'GitRepository',
    'make_unified_diff',
]
