"""Storage layer for mygit.

This module provides object framing, SHA-1 digests and the zlib-compressed
loose object store.
"""

from mygit.storage.framing import (
    InvalidFrameError,
    digest,
    frame,
    hex_digest,
    parse_frame,
)
from mygit.storage.object_store import (
    CorruptObjectError,
    ObjectNotFoundError,
    ObjectStore,
)

__all__ = [
    "ObjectStore",
    "ObjectNotFoundError",
    "CorruptObjectError",
    "InvalidFrameError",
    "frame",
    "digest",
    "hex_digest",
    "parse_frame",
]
