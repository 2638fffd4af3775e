"""Compressed, content-addressable object storage for mygit.

Objects are framed, hashed with SHA-1 and written zlib-compressed to
.git/objects/ using git's loose object layout. Paths are derived from the
digest alone; the store keeps no index or cache of its own.
"""

import logging
import os
import string
import tempfile
import zlib
from pathlib import Path
from typing import Union

from mygit.constants import (
    DIGEST_SIZE,
    HASH_LENGTH,
    OBJECT_FILE_MODE,
    OBJECTS_DIR,
    ZLIB_LEVEL,
)
from mygit.storage.framing import (
    InvalidFrameError,
    frame,
    hex_digest,
    parse_frame,
)

logger = logging.getLogger(__name__)

Digest = Union[str, bytes]


class ObjectNotFoundError(Exception):
    """Raised when an object cannot be found in the object store."""

    pass


class CorruptObjectError(Exception):
    """Raised when stored bytes fail to decompress or fail validation."""

    pass


class ObjectStore:
    """Loose object storage keyed by SHA-1 digest.

    Storage layout:
        .git/objects/<hex[:2]>/<hex[2:]>      # zlib-compressed framed object

    Attributes:
        git_dir: Path to the .git directory
        objects_dir: Path to the objects directory

    Example:
        >>> store = ObjectStore(Path(".git"))
        >>> oid = store.write_object("blob", b"hello\\n")
        >>> store.get(oid)
        b'blob 6\\x00hello\\n'
    """

    def __init__(self, git_dir: Path) -> None:
        """Initialize the object store.

        Args:
            git_dir: Path to .git directory

        Raises:
            ValueError: If git_dir doesn't exist
        """
        self.git_dir = Path(git_dir)
        self.objects_dir = self.git_dir / OBJECTS_DIR

        if not self.git_dir.exists():
            raise ValueError(f"Git directory not found: {git_dir}")

    def put(self, digest: Digest, framed: bytes) -> str:
        """Write a framed object under its digest.

        Writing a digest that is already present is a no-op, so repeated
        puts of the same object leave the store unchanged. The compressed
        bytes go to a temp file in the prefix directory first and are then
        renamed into place, so readers never see a partial object.

        Args:
            digest: SHA-1 of ``framed`` (40 hex characters or 20 raw bytes)
            framed: Framed object bytes

        Returns:
            Hex digest of the object

        Raises:
            OSError: If write fails (permissions, disk full, etc.)
        """
        oid = self._normalize(digest)
        object_path = self.object_path(oid)

        if object_path.exists():
            logger.debug("Object %s already stored, skipping write", oid)
            return oid

        object_path.parent.mkdir(parents=True, exist_ok=True)
        data = zlib.compress(framed, ZLIB_LEVEL)

        tmp_fd, tmp_path = tempfile.mkstemp(
            dir=object_path.parent,
            prefix=".tmp_",
        )
        try:
            with os.fdopen(tmp_fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, OBJECT_FILE_MODE)
            os.replace(tmp_path, object_path)
        except Exception:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

        logger.debug("Wrote object %s (%d bytes compressed)", oid, len(data))
        return oid

    def get(self, digest: Digest, verify: bool = True) -> bytes:
        """Read and decompress a framed object.

        Args:
            digest: Object digest (40 hex characters or 20 raw bytes)
            verify: Whether to recompute and check the digest (default: True)

        Returns:
            The framed object bytes

        Raises:
            ObjectNotFoundError: If no object is stored under the digest
            CorruptObjectError: If decompression, frame validation or
                digest verification fails
            ValueError: If the digest is malformed
        """
        oid = self._normalize(digest)
        object_path = self.object_path(oid)

        try:
            with open(object_path, "rb") as f:
                data = f.read()
        except FileNotFoundError as e:
            raise ObjectNotFoundError(f"Object not found: {oid}") from e

        try:
            framed = zlib.decompress(data)
        except zlib.error as e:
            raise CorruptObjectError(f"Object {oid} failed to decompress: {e}") from e

        try:
            parse_frame(framed)
        except InvalidFrameError as e:
            raise CorruptObjectError(f"Object {oid} has an invalid frame: {e}") from e

        if verify:
            actual = hex_digest(framed)
            if actual != oid:
                raise CorruptObjectError(
                    f"Object corrupted: expected {oid}, got {actual}"
                )

        return framed

    def write_object(self, obj_type: str, payload: bytes) -> str:
        """Frame, hash and store a payload.

        Args:
            obj_type: Object type token
            payload: Raw object content

        Returns:
            Hex digest of the stored object
        """
        framed = frame(obj_type, payload)
        return self.put(hex_digest(framed), framed)

    def exists(self, digest: Digest) -> bool:
        """Check if an object exists in the store."""
        try:
            oid = self._normalize(digest)
        except ValueError:
            return False
        return self.object_path(oid).exists()

    def object_path(self, digest: Digest) -> Path:
        """Get the filesystem path for an object.

        Uses git-like sharding: objects/<hex[:2]>/<hex[2:]>

        Example:
            >>> store.object_path("ce013625030ba8dba906f756967f9e9ca394464a")
            PosixPath('.git/objects/ce/013625030ba8dba906f756967f9e9ca394464a')
        """
        oid = self._normalize(digest)
        return self.objects_dir / oid[:2] / oid[2:]

    def _normalize(self, digest: Digest) -> str:
        """Return the lowercase hex form of a digest.

        Raises:
            ValueError: If the digest is not 20 raw bytes or 40 hex characters
        """
        if isinstance(digest, (bytes, bytearray)):
            if len(digest) != DIGEST_SIZE:
                raise ValueError(
                    f"Raw digest must be {DIGEST_SIZE} bytes, got {len(digest)}"
                )
            return bytes(digest).hex()

        if not isinstance(digest, str):
            raise ValueError(f"Digest must be str or bytes, got {type(digest)}")

        if len(digest) != HASH_LENGTH:
            raise ValueError(
                f"Digest must be {HASH_LENGTH} characters, got {len(digest)}"
            )

        if not all(c in string.hexdigits for c in digest):
            raise ValueError(f"Digest must be hexadecimal: {digest!r}")

        return digest.lower()
