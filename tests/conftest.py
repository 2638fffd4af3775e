"""Pytest configuration and shared fixtures."""

import logging
from contextlib import contextmanager
from pathlib import Path

import pytest

from mygit.repository import Repository
from mygit.storage import ObjectStore


@pytest.fixture
def git_dir(tmp_path: Path) -> Path:
    """Create a temporary .git directory structure."""
    git = tmp_path / ".git"
    git.mkdir()
    (git / "objects").mkdir()
    (git / "refs").mkdir()
    return git


@pytest.fixture
def store(git_dir: Path) -> ObjectStore:
    """Create an ObjectStore instance."""
    return ObjectStore(git_dir)


@pytest.fixture
def temp_repo(tmp_path: Path) -> Repository:
    """Create an initialized repository with a small nested workspace.

    Layout:
        a.txt        "x\\n"
        sub/b.txt    "y\\n"
    """
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    repo = Repository.init(workspace)

    (workspace / "a.txt").write_bytes(b"x\n")
    (workspace / "sub").mkdir()
    (workspace / "sub" / "b.txt").write_bytes(b"y\n")

    return repo


@pytest.fixture
def bare_root_logger():
    """Return a context manager that strips the root logger's handlers.

    pytest installs its capture handler for each test phase, so the
    stripping has to happen inside the test body.
    """

    @contextmanager
    def _bare():
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        root.handlers = []
        try:
            yield root
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers = handlers
            root.setLevel(level)

    return _bare
