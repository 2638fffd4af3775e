"""Unit tests for ObjectBuilder."""

import hashlib
import os
from pathlib import Path

import pytest

from mygit.core.builder import NotADirError, NotAFileError, ObjectBuilder
from mygit.core.reader import ObjectReader
from mygit.storage.object_store import ObjectStore

HELLO_BLOB = "ce013625030ba8dba906f756967f9e9ca394464a"
EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


def _blob_sha(content: bytes) -> bytes:
    return hashlib.sha1(b"blob %d\x00" % len(content) + content).digest()


def _tree_sha(payload: bytes) -> str:
    return hashlib.sha1(b"tree %d\x00" % len(payload) + payload).hexdigest()


def _stored_files(store: ObjectStore) -> dict:
    return {
        p.relative_to(store.objects_dir): p.read_bytes()
        for p in store.objects_dir.rglob("*")
        if p.is_file()
    }


@pytest.fixture
def builder(store: ObjectStore) -> ObjectBuilder:
    """Create an ObjectBuilder instance."""
    return ObjectBuilder(store)


@pytest.fixture
def source(tmp_path: Path) -> Path:
    """Create an empty directory to snapshot."""
    src = tmp_path / "src"
    src.mkdir()
    return src


class TestBuildLeaf:
    """Test blob building."""

    def test_build_leaf_hello(self, builder: ObjectBuilder, source: Path) -> None:
        """Test the well-known digest of a file containing "hello\\n"."""
        path = source / "hello.txt"
        path.write_bytes(b"hello\n")

        assert builder.build_leaf(path) == HELLO_BLOB
        assert builder.object_store.exists(HELLO_BLOB)

    def test_build_leaf_idempotent(self, builder: ObjectBuilder, source: Path) -> None:
        """Test that storing the same content twice changes nothing."""
        path = source / "data.bin"
        path.write_bytes(b"\x00\x01binary\xff")

        oid1 = builder.build_leaf(path)
        snapshot = _stored_files(builder.object_store)
        oid2 = builder.build_leaf(path)

        assert oid1 == oid2
        assert _stored_files(builder.object_store) == snapshot

    def test_build_leaf_same_content_different_files(
        self, builder: ObjectBuilder, source: Path
    ) -> None:
        """Test that file names don't affect blob digests."""
        (source / "one").write_bytes(b"same")
        (source / "two").write_bytes(b"same")
        assert builder.build_leaf(source / "one") == builder.build_leaf(source / "two")

    def test_build_leaf_empty_file(self, builder: ObjectBuilder, source: Path) -> None:
        path = source / "empty"
        path.write_bytes(b"")
        assert builder.build_leaf(path) == "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"

    def test_build_leaf_without_write(self, builder: ObjectBuilder, source: Path) -> None:
        """Test that write=False only computes the digest."""
        path = source / "hello.txt"
        path.write_bytes(b"hello\n")

        assert builder.build_leaf(path, write=False) == HELLO_BLOB
        assert not builder.object_store.exists(HELLO_BLOB)

    def test_build_leaf_rejects_directory(self, builder: ObjectBuilder, source: Path) -> None:
        with pytest.raises(NotAFileError, match="Is a directory"):
            builder.build_leaf(source)

    def test_build_leaf_missing_file(self, builder: ObjectBuilder, source: Path) -> None:
        with pytest.raises(NotAFileError, match="No such file"):
            builder.build_leaf(source / "missing")


class TestBuildTree:
    """Test tree building."""

    def test_build_tree_empty(self, builder: ObjectBuilder, source: Path) -> None:
        """Test that an empty directory gives the well-known empty tree."""
        oid = builder.build_tree(source)
        assert oid == EMPTY_TREE
        assert builder.object_store.get(oid) == b"tree 0\x00"

    def test_build_tree_single_file(self, builder: ObjectBuilder, source: Path) -> None:
        """Test the exact payload of a one-file directory."""
        (source / "hello.txt").write_bytes(b"hello\n")

        payload = b"100644 hello.txt\x00" + bytes.fromhex(HELLO_BLOB)
        assert builder.build_tree(source) == _tree_sha(payload)

    def test_build_tree_nested(self, builder: ObjectBuilder, source: Path) -> None:
        """Test that subdirectory digests are embedded in the parent."""
        (source / "a.txt").write_bytes(b"x\n")
        (source / "sub").mkdir()
        (source / "sub" / "b.txt").write_bytes(b"y\n")

        sub_payload = b"100644 b.txt\x00" + _blob_sha(b"y\n")
        sub_oid = _tree_sha(sub_payload)
        root_payload = (
            b"100644 a.txt\x00" + _blob_sha(b"x\n")
            + b"040000 sub\x00" + bytes.fromhex(sub_oid)
        )

        assert builder.build_tree(source) == _tree_sha(root_payload)
        assert builder.object_store.exists(sub_oid)

        reader = ObjectReader(builder.object_store)
        assert reader.list_tree_names(builder.build_tree(source)) == ["a.txt", "sub"]

    def test_build_tree_stores_every_object(
        self, builder: ObjectBuilder, source: Path
    ) -> None:
        """Test that every blob and subtree ends up in the store."""
        (source / "a.txt").write_bytes(b"x\n")
        (source / "sub").mkdir()
        (source / "sub" / "b.txt").write_bytes(b"y\n")

        builder.build_tree(source)
        for content in (b"x\n", b"y\n"):
            assert builder.object_store.exists(_blob_sha(content))

    def test_build_tree_deterministic_across_creation_order(
        self, builder: ObjectBuilder, tmp_path: Path
    ) -> None:
        """Test that creation order of children doesn't change the digest."""
        names = ["zeta", "Alpha", "mid", "beta.txt", "_x"]
        first = tmp_path / "first"
        second = tmp_path / "second"
        for root, order in ((first, names), (second, list(reversed(names)))):
            root.mkdir()
            for name in order:
                (root / name).write_text(f"content of {name}\n")
            (root / "dir").mkdir()
            (root / "dir" / "inner").write_text("inner\n")

        assert builder.build_tree(first) == builder.build_tree(second)

    def test_build_tree_empty_subdirectory(self, builder: ObjectBuilder, source: Path) -> None:
        """Test that an empty subdirectory is kept as an empty tree entry."""
        (source / "empty").mkdir()
        payload = b"040000 empty\x00" + bytes.fromhex(EMPTY_TREE)
        assert builder.build_tree(source) == _tree_sha(payload)

    def test_build_tree_skips_git_dir(self, builder: ObjectBuilder, source: Path) -> None:
        """Test that the store's own .git directory is never snapshotted."""
        (source / ".git").mkdir()
        (source / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
        (source / "sub").mkdir()
        (source / "sub" / ".git").mkdir()

        payload = b"040000 sub\x00" + bytes.fromhex(EMPTY_TREE)
        assert builder.build_tree(source) == _tree_sha(payload)

    def test_build_tree_keeps_other_dotfiles(
        self, builder: ObjectBuilder, source: Path
    ) -> None:
        (source / ".gitignore").write_bytes(b"*.tmp\n")
        reader = ObjectReader(builder.object_store)
        assert reader.list_tree_names(builder.build_tree(source)) == [".gitignore"]

    def test_build_tree_changes_with_content(
        self, builder: ObjectBuilder, source: Path
    ) -> None:
        """Test that editing a nested file changes the root digest."""
        (source / "sub").mkdir()
        (source / "sub" / "f").write_bytes(b"1")
        before = builder.build_tree(source)
        (source / "sub" / "f").write_bytes(b"2")
        assert builder.build_tree(source) != before

    def test_build_tree_rejects_file(self, builder: ObjectBuilder, source: Path) -> None:
        path = source / "file"
        path.write_bytes(b"")
        with pytest.raises(NotADirError, match="Not a directory"):
            builder.build_tree(path)

    def test_build_tree_rejects_missing(self, builder: ObjectBuilder, source: Path) -> None:
        with pytest.raises(NotADirError):
            builder.build_tree(source / "missing")

    def test_build_tree_aborts_on_child_failure(
        self, builder: ObjectBuilder, source: Path
    ) -> None:
        """Test that an unreadable child aborts the whole snapshot."""
        (source / "ok.txt").write_bytes(b"fine")
        (source / "dangling").symlink_to(source / "nowhere")

        with pytest.raises(NotAFileError):
            builder.build_tree(source)

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires os.mkfifo")
    def test_build_tree_rejects_fifo(self, builder: ObjectBuilder, source: Path) -> None:
        """Test that a named pipe aborts the snapshot instead of blocking on read."""
        (source / "ok.txt").write_bytes(b"fine")
        os.mkfifo(source / "pipe")

        with pytest.raises(NotAFileError, match="Not a regular file"):
            builder.build_tree(source)

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires os.mkfifo")
    def test_build_leaf_rejects_fifo(self, builder: ObjectBuilder, source: Path) -> None:
        os.mkfifo(source / "pipe")

        with pytest.raises(NotAFileError, match="Not a regular file"):
            builder.build_leaf(source / "pipe")
