"""Object framing and digest computation.

Every stored object is framed as ``<type> <length>\\0<payload>`` before it is
hashed or compressed. The digest always covers the whole frame, never the
bare payload, so a blob and a tree with identical payloads hash differently.
"""

import hashlib
from typing import Tuple

from mygit.constants import HASH_ALGORITHM


class InvalidFrameError(Exception):
    """Raised when a buffer lacks the ``type SP length NUL`` header."""

    pass


def frame(obj_type: str, payload: bytes) -> bytes:
    """Build the framed representation of an object.

    Args:
        obj_type: Object type token ("blob" or "tree")
        payload: Raw object content, may be empty

    Returns:
        Header followed by the payload, with no trailing padding

    Example:
        >>> frame("blob", b"hello\\n")
        b'blob 6\\x00hello\\n'
    """
    header = f"{obj_type} {len(payload)}\0".encode("ascii")
    return header + payload


def digest(framed: bytes) -> bytes:
    """Compute the raw 20-byte SHA-1 digest of a framed object."""
    return hashlib.new(HASH_ALGORITHM, framed).digest()


def hex_digest(framed: bytes) -> str:
    """Compute the 40-character lowercase hex digest of a framed object."""
    return hashlib.new(HASH_ALGORITHM, framed).hexdigest()


def parse_frame(framed: bytes) -> Tuple[str, bytes]:
    """Split a framed buffer into its declared type and payload.

    Args:
        framed: Buffer produced by :func:`frame`

    Returns:
        Tuple of (object type, payload)

    Raises:
        InvalidFrameError: If the header is missing or malformed, or the
            declared length disagrees with the payload
    """
    nul = framed.find(b"\0")
    if nul == -1:
        raise InvalidFrameError("Object header has no NUL separator")

    header = framed[:nul]
    obj_type, sep, length = header.partition(b" ")
    if not sep or not obj_type:
        raise InvalidFrameError(f"Malformed object header: {header!r}")
    if not length.isdigit():
        raise InvalidFrameError(f"Malformed object length: {length!r}")

    payload = framed[nul + 1:]
    if int(length) != len(payload):
        raise InvalidFrameError(
            f"Object length mismatch: header says {int(length)}, "
            f"payload has {len(payload)} bytes"
        )

    try:
        return obj_type.decode("ascii"), payload
    except UnicodeDecodeError as e:
        raise InvalidFrameError(f"Object type is not ASCII: {obj_type!r}") from e
