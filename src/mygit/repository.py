"""Repository layout: the .git directory, its objects and its HEAD pointer."""

import logging
from pathlib import Path

from mygit.constants import (
    DEFAULT_BRANCH,
    GIT_DIR,
    HEAD_FILE,
    HEADS_PREFIX,
    OBJECTS_DIR,
    REFS_DIR,
    SYMREF_PREFIX,
)
from mygit.storage import ObjectStore

logger = logging.getLogger(__name__)


class RepositoryNotFoundError(Exception):
    """Raised when a workspace has no .git directory."""


class InvalidHeadError(Exception):
    """Raised when HEAD is missing or isn't a symbolic ref."""


class Repository:
    """A workspace and the .git directory at its root.

    Layout:
        <root>/.git/objects/<hex[:2]>/<hex[2:]>
        <root>/.git/HEAD                  # "ref: refs/heads/<name>\\n"
        <root>/.git/refs/

    Attributes:
        workspace_root: Directory whose contents get snapshotted
        git_dir: Path to the .git directory
    """

    def __init__(self, workspace_root: Path):
        self.workspace_root = Path(workspace_root)
        self.git_dir = self.workspace_root / GIT_DIR
        self.objects_dir = self.git_dir / OBJECTS_DIR
        self.refs_dir = self.git_dir / REFS_DIR
        self.head_file = self.git_dir / HEAD_FILE

    @classmethod
    def init(cls, workspace_root: Path, branch: str = DEFAULT_BRANCH) -> "Repository":
        """Create the .git layout and point HEAD at ``branch``.

        Re-initializing an existing repository keeps its objects and only
        rewrites HEAD.
        """
        if not branch or branch.startswith("/") or branch.endswith("/") or any(
            c.isspace() for c in branch
        ):
            raise ValueError(f"Invalid branch name: {branch!r}")

        repo = cls(workspace_root)
        for directory in (repo.git_dir, repo.objects_dir, repo.refs_dir):
            directory.mkdir(parents=True, exist_ok=True)
        repo.head_file.write_text(
            f"{SYMREF_PREFIX}{HEADS_PREFIX}{branch}\n", encoding="utf-8"
        )
        logger.debug("Initialized repository at %s on branch %s", repo.git_dir, branch)
        return repo

    @classmethod
    def open(cls, workspace_root: Path) -> "Repository":
        """Open an existing repository.

        Raises:
            RepositoryNotFoundError: If workspace_root has no .git directory
        """
        repo = cls(workspace_root)
        if not repo.git_dir.is_dir():
            raise RepositoryNotFoundError(
                f"Not a mygit repository (no {GIT_DIR}/ found in {workspace_root})"
            )
        return repo

    @property
    def store(self) -> ObjectStore:
        return ObjectStore(self.git_dir)

    def head_ref(self) -> str:
        """Return the ref HEAD points at, e.g. ``refs/heads/main``.

        Raises:
            InvalidHeadError: If HEAD is missing or not symbolic
        """
        try:
            content = self.head_file.read_text(encoding="utf-8").strip()
        except FileNotFoundError as e:
            raise InvalidHeadError(f"HEAD not found: {self.head_file}") from e

        if not content.startswith(SYMREF_PREFIX):
            raise InvalidHeadError(f"HEAD is not a symbolic ref: {content!r}")
        return content[len(SYMREF_PREFIX):].strip()
