"""Tree object and tree entry tests."""

import io
import pytest
from plumb.core.errors import MalformedTreeEntry
from plumb.core.objects import (
    Tree, TreeEntry, ObjectKind, MODE_FILE, MODE_DIR, iter_tree_entries
)

BLOB_HASH = '04fea06420ca60892f73becee3614f6d023a4b7f'


def test_tree_entry_creation():
    """Test creating a tree entry."""
    entry = TreeEntry(MODE_FILE, 'a' * 40, 'file.txt')
    assert entry.mode == '100644'
    assert entry.type == 'blob'
    assert entry.hash == 'a' * 40
    assert entry.name == b'file.txt'


def test_tree_entry_directory_type():
    """Test directory mode maps to tree type."""
    assert TreeEntry(MODE_DIR, 'a' * 40, 'sub').type == 'tree'


def test_tree_entry_encode():
    """Test entry layout is '<mode> <name>\\0' plus 20 raw bytes."""
    entry = TreeEntry(MODE_FILE, BLOB_HASH, b'hello.txt')
    assert entry.encode() == b'100644 hello.txt\0' + bytes.fromhex(BLOB_HASH)


def test_tree_entry_sorting_is_bytewise():
    """Test entries compare by raw name bytes."""
    upper = TreeEntry(MODE_FILE, 'a' * 40, 'Zebra')
    lower = TreeEntry(MODE_FILE, 'b' * 40, 'apple')
    assert upper < lower


def test_tree_creation():
    """Test creating empty tree."""
    tree = Tree()
    assert tree.entries == []
    assert tree.kind is ObjectKind.TREE
    assert tree.serialize() == b''


def test_tree_entries_sorted():
    """Test entries are kept in byte-wise name order."""
    tree = Tree()
    tree.add_entry(MODE_FILE, 'a' * 40, 'zebra.txt')
    tree.add_entry(MODE_FILE, 'b' * 40, 'apple.txt')
    tree.add_entry(MODE_DIR, 'c' * 40, 'middle')
    tree.add_entry(MODE_FILE, 'd' * 40, 'Upper')

    assert [e.name for e in tree.entries] == [b'Upper', b'apple.txt', b'middle', b'zebra.txt']


def test_tree_serialize_matches_git():
    """Test single-entry tree hash agrees with git write-tree."""
    tree = Tree()
    tree.add_entry(MODE_FILE, BLOB_HASH, 'hello.txt')
    assert tree.serialize() == b'100644 hello.txt\0' + bytes.fromhex(BLOB_HASH)
    assert tree.hash == '324ec1ee6443d763cf4540e8b6d6fa6ec541b1c7'


def test_tree_hash_independent_of_insert_order():
    """Test tree hash is deterministic."""
    tree1 = Tree()
    tree1.add_entry(MODE_FILE, 'a' * 40, 'one')
    tree1.add_entry(MODE_FILE, 'b' * 40, 'two')

    tree2 = Tree()
    tree2.add_entry(MODE_FILE, 'b' * 40, 'two')
    tree2.add_entry(MODE_FILE, 'a' * 40, 'one')

    assert tree1.compute_hash() == tree2.compute_hash()


def test_tree_roundtrip():
    """Test decoding a serialized tree yields the same triples in order."""
    tree1 = Tree()
    tree1.add_entry(MODE_FILE, 'a' * 40, 'file1.txt')
    tree1.add_entry(MODE_FILE, 'b' * 40, 'name with spaces')
    tree1.add_entry(MODE_DIR, 'c' * 40, 'subdir')
    tree1.add_entry(MODE_FILE, 'd' * 40, b'caf\xc3\xa9')

    tree2 = Tree()
    tree2.deserialize(tree1.serialize())

    assert tree2.entries == tree1.entries
    assert tree2.entries[2].name == b'name with spaces'
    assert tree2.entries[3].type == 'tree'


class TestIterTreeEntries:
    """Tests for lazy tree payload decoding."""

    def test_empty_payload(self):
        """Test an empty payload yields nothing."""
        assert list(iter_tree_entries(io.BytesIO(b''))) == []

    def test_is_lazy(self):
        """Test entries are produced one at a time."""
        payload = (
            TreeEntry(MODE_FILE, 'a' * 40, 'first').encode()
            + b'garbage without terminator'
        )
        entries = iter_tree_entries(io.BytesIO(payload))
        assert next(entries).name == b'first'
        with pytest.raises(MalformedTreeEntry):
            next(entries)

    def test_splits_on_first_space(self):
        """Test only the first space separates mode from name."""
        payload = b'100644 a b c\0' + bytes.fromhex(BLOB_HASH)
        (entry,) = iter_tree_entries(io.BytesIO(payload))
        assert entry.mode == '100644'
        assert entry.name == b'a b c'
        assert entry.hash == BLOB_HASH

    def test_short_hash(self):
        """Test fewer than 20 hash bytes is an error, not a truncation."""
        payload = b'100644 file\0' + bytes.fromhex(BLOB_HASH)[:12]
        with pytest.raises(MalformedTreeEntry, match="expected 20 hash bytes, got 12") as excinfo:
            list(iter_tree_entries(io.BytesIO(payload)))
        assert excinfo.value.offset == 0

    def test_missing_terminator(self):
        """Test a name running to end of payload is an error."""
        with pytest.raises(MalformedTreeEntry, match="missing NUL"):
            list(iter_tree_entries(io.BytesIO(b'100644 file')))

    @pytest.mark.parametrize('head', [b'100644file\0', b' file\0'])
    def test_missing_mode(self, head):
        """Test an entry without '<mode> ' is rejected."""
        payload = head + bytes(20)
        with pytest.raises(MalformedTreeEntry):
            list(iter_tree_entries(io.BytesIO(payload)))

    def test_error_offset_points_at_bad_entry(self):
        """Test the reported offset is where the broken entry starts."""
        good = TreeEntry(MODE_FILE, 'a' * 40, 'ok').encode()
        with pytest.raises(MalformedTreeEntry) as excinfo:
            list(iter_tree_entries(io.BytesIO(good + b'100644 bad\0xyz')))
        assert excinfo.value.offset == len(good)
