"""Core engine layer for mygit.

This module provides the tree entry format, the blob and tree builders that
snapshot the filesystem, and the reader that lists stored objects.
"""

from mygit.core.builder import NotADirError, NotAFileError, ObjectBuilder
from mygit.core.reader import NotATreeError, ObjectReader
from mygit.core.tree import TreeEntry, iter_tree_entries, serialize_tree

__all__ = [
    "ObjectBuilder",
    "NotAFileError",
    "NotADirError",
    "ObjectReader",
    "NotATreeError",
    "TreeEntry",
    "iter_tree_entries",
    "serialize_tree",
]
