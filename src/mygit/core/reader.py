"""Reading and listing stored objects."""

from typing import List, Tuple

from mygit.constants import TREE
from mygit.core.tree import TreeEntry, iter_tree_entries
from mygit.storage.framing import parse_frame
from mygit.storage.object_store import Digest, ObjectStore


class NotATreeError(Exception):
    """Raised when a tree listing is requested for a non-tree object."""


class ObjectReader:
    """Reader that strips object frames and decodes tree payloads.

    Attributes:
        object_store: ObjectStore to read from

    Example:
        >>> reader = ObjectReader(store)
        >>> reader.read_object(oid)
        ('blob', b'hello\\n')
    """

    def __init__(self, object_store: ObjectStore):
        self.object_store = object_store

    def read_object(self, digest: Digest) -> Tuple[str, bytes]:
        """Fetch an object and split it into type and payload.

        Raises:
            ObjectNotFoundError: If the object isn't stored
            CorruptObjectError: If the stored bytes are damaged
            InvalidFrameError: If the frame header is malformed
        """
        framed = self.object_store.get(digest)
        return parse_frame(framed)

    def object_type(self, digest: Digest) -> str:
        return self.read_object(digest)[0]

    def object_size(self, digest: Digest) -> int:
        return len(self.read_object(digest)[1])

    def list_tree(self, digest: Digest) -> List[TreeEntry]:
        """Decode every entry of a tree object, in stored order.

        Raises:
            NotATreeError: If the object is not a tree
        """
        obj_type, payload = self.read_object(digest)
        if obj_type != TREE:
            raise NotATreeError(f"Object is not a tree: {obj_type}")
        return list(iter_tree_entries(payload))

    def list_tree_names(self, digest: Digest) -> List[str]:
        """Return the names of a tree's entries in stored (sorted) order."""
        return [entry.name for entry in self.list_tree(digest)]
