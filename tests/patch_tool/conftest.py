"""Shared fixtures for patch tool tests."""

import logging

import pytest

from patch_tool.config import PatchToolConfig


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo logging configuration done by the CLI."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()

    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)

    root.setLevel(saved_level)


@pytest.fixture
def project_root(tmp_path):
    """Directory that files are patched in."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def config_file(tmp_path):
    """Configuration file that logs below the temporary directory."""
    config = PatchToolConfig.create_default()
    config.logging.directory = str(tmp_path / "logs")
    path = tmp_path / "textpatch.yaml"
    config.save_to_file(str(path))
    return path


@pytest.fixture
def run_cli(project_root, config_file):
    """Run the CLI against the project root with the test configuration."""
    from patch_tool.cli import main

    def _run(*args: str) -> int:
        return main(['--root', str(project_root), '--config', str(config_file), *args])
    return _run
