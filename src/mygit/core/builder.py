"""Blob and tree builders.

The builder turns files into blob objects and directories into tree objects,
recursing depth-first so every child digest is known before its parent is
serialized.
"""

import logging
import os
from pathlib import Path
from typing import List

from mygit.constants import BLOB, GIT_DIR, MODE_DIR, MODE_FILE, TREE
from mygit.core.tree import TreeEntry, serialize_tree
from mygit.storage.framing import frame, hex_digest
from mygit.storage.object_store import ObjectStore

logger = logging.getLogger(__name__)


class NotAFileError(Exception):
    """Raised when a blob is requested for something that isn't a file."""


class NotADirError(Exception):
    """Raised when a tree is requested for something that isn't a directory."""


class ObjectBuilder:
    """Builder for blob and tree objects.

    Attributes:
        object_store: ObjectStore that receives every object built
    """

    def __init__(self, object_store: ObjectStore):
        self.object_store = object_store

    def build_leaf(self, path: Path, write: bool = True) -> str:
        """Store a file's content as a blob.

        The whole file is read into memory before hashing.

        Args:
            path: File to store
            write: Persist the blob (True) or only compute its digest (False)

        Returns:
            Hex digest of the blob

        Raises:
            NotAFileError: If path is a directory, doesn't exist, or is
                not a regular file
            OSError: If the file can't be read
        """
        path = Path(path)
        if path.is_dir():
            raise NotAFileError(f"Is a directory: {path}")
        if not path.exists():
            raise NotAFileError(f"No such file: {path}")
        if not path.is_file():
            raise NotAFileError(f"Not a regular file: {path}")

        content = path.read_bytes()
        framed = frame(BLOB, content)
        oid = hex_digest(framed)

        if write:
            self.object_store.put(oid, framed)
            logger.debug("Stored blob %s for %s", oid, path)
        return oid

    def build_tree(self, path: Path) -> str:
        """Snapshot a directory as a tree object.

        The reserved .git directory is skipped wherever it appears. A failure
        anywhere below ``path`` aborts the whole snapshot.

        Args:
            path: Directory to snapshot

        Returns:
            Hex digest of the root tree

        Raises:
            NotADirError: If path is not a directory
            NotAFileError: If a child is neither a directory nor a regular file
            OSError: If a child can't be listed or read
        """
        path = Path(path)
        if not path.is_dir():
            raise NotADirError(f"Not a directory: {path}")

        entries: List[TreeEntry] = []
        with os.scandir(path) as it:
            for child in it:
                if child.name == GIT_DIR:
                    continue
                child_path = Path(child.path)
                if child.is_dir():
                    oid = self.build_tree(child_path)
                    mode = MODE_DIR
                elif child.is_file():
                    oid = self.build_leaf(child_path)
                    mode = MODE_FILE
                else:
                    raise NotAFileError(f"Not a regular file: {child_path}")
                entries.append(TreeEntry(mode, child.name, bytes.fromhex(oid)))

        oid = self.object_store.write_object(TREE, serialize_tree(entries))
        logger.debug("Stored tree %s for %s (%d entries)", oid, path, len(entries))
        return oid
