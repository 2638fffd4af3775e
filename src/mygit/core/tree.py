"""Tree object payload format.

A tree payload is the concatenation of ``<mode> <name>\\0<20-byte digest>``
for each entry, sorted by the byte-wise order of the entry name. The sort is
part of the format: it is what makes a directory's digest independent of the
order its children were enumerated in.
"""

import os
from typing import Any, Dict, Iterable, Iterator

from mygit.constants import BLOB, DIGEST_SIZE, MODE_DIR, TREE
from mygit.storage.framing import InvalidFrameError


class TreeEntry:
    """A single child of a tree object.

    Attributes:
        mode: "100644" for a file, "040000" for a subdirectory
        name: Base name of the child (no path separators)
        digest: Raw 20-byte digest of the referenced object
    """

    def __init__(self, mode: str, name: str, digest: bytes):
        self.mode = mode
        self.name = name
        self.digest = digest

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.name} {self.hex_digest[:7]})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        return (self.mode, self.name, self.digest) == (
            other.mode,
            other.name,
            other.digest,
        )

    @property
    def encoded_name(self) -> bytes:
        """Name as it appears on disk and in the payload."""
        return os.fsencode(self.name)

    @property
    def hex_digest(self) -> str:
        return self.digest.hex()

    @property
    def object_type(self) -> str:
        return TREE if self.mode == MODE_DIR else BLOB

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "mode": self.mode,
            "type": self.object_type,
            "digest": self.hex_digest,
            "name": self.name,
        }


def serialize_tree(entries: Iterable[TreeEntry]) -> bytes:
    """Pack entries into a tree payload.

    Entries are sorted by their encoded name before packing, whatever order
    they arrive in.
    """
    parts = []
    for entry in sorted(entries, key=lambda e: e.encoded_name):
        if len(entry.digest) != DIGEST_SIZE:
            raise ValueError(
                f"Entry {entry.name!r} digest must be {DIGEST_SIZE} bytes, "
                f"got {len(entry.digest)}"
            )
        parts.append(entry.mode.encode("ascii"))
        parts.append(b" ")
        parts.append(entry.encoded_name)
        parts.append(b"\0")
        parts.append(entry.digest)
    return b"".join(parts)


def iter_tree_entries(payload: bytes) -> Iterator[TreeEntry]:
    """Lazily parse a tree payload into entries, in stored order.

    Raises:
        InvalidFrameError: If an entry is truncated or lacks its separators
    """
    pos = 0
    end = len(payload)
    while pos < end:
        nul = payload.find(b"\0", pos)
        if nul == -1:
            if payload.find(b" ", pos) == -1:
                raise InvalidFrameError(f"Tree entry at offset {pos} has no mode")
            raise InvalidFrameError(f"Tree entry at offset {pos} has no name")
        space = payload.find(b" ", pos, nul)
        if space == -1 or space == pos:
            raise InvalidFrameError(f"Tree entry at offset {pos} has no mode")
        digest_end = nul + 1 + DIGEST_SIZE
        if digest_end > end:
            raise InvalidFrameError(f"Tree entry at offset {pos} is truncated")

        try:
            mode = payload[pos:space].decode("ascii")
        except UnicodeDecodeError as e:
            raise InvalidFrameError(
                f"Tree entry at offset {pos} has a non-ASCII mode"
            ) from e

        yield TreeEntry(
            mode=mode,
            name=os.fsdecode(payload[space + 1:nul]),
            digest=payload[nul + 1:digest_end],
        )
        pos = digest_end
