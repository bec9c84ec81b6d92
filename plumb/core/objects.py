"""Object model for Plumb: blobs, trees, commits and tree entries."""

import io
import os
import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import BinaryIO, Iterator, List, Optional, Union

from .errors import MalformedTreeEntry, UnknownKind
from .hash import object_hash

MODE_FILE = '100644'
MODE_DIR = '40000'

HASH_SIZE = 20

DEFAULT_IDENT = 'Plumb User <plumb@localhost>'


class ObjectKind(Enum):
    """The closed set of object kinds the store understands."""

    BLOB = 'blob'
    TREE = 'tree'
    COMMIT = 'commit'

    @classmethod
    def parse(cls, token: str) -> 'ObjectKind':
        """
        Look up a kind by its header token.

        Raises:
            UnknownKind: If token is not blob, tree or commit
        """
        for kind in cls:
            if kind.value == token:
                return kind
        raise UnknownKind(token)

    def __str__(self) -> str:
        return self.value


class PlumbObject(ABC):
    """Base class for all in-memory objects."""

    kind: ObjectKind

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to its payload bytes (no header).

        Returns:
            bytes: Object payload
        """
        pass

    @property
    def type(self) -> str:
        """Object kind name as written in the header."""
        return self.kind.value

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        Objects are hashed with a header containing the kind and size.
        Format: <kind> <size>\\0<payload>

        Returns:
            str: 40-character SHA-1 hash
        """
        if self._hash is None:
            self._hash = object_hash(self.type, self.serialize())
        return self._hash

    @property
    def hash(self) -> str:
        """40-character SHA-1 hash of the object."""
        return self.compute_hash()


class Blob(PlumbObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    kind = ObjectKind.BLOB

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    @classmethod
    def from_file(cls, filepath: Union[str, os.PathLike]) -> 'Blob':
        """Create blob from the full contents of a file."""
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


class TreeEntry:
    """
    A single (mode, name, hash) entry in a tree.

    ``name`` is the raw filename as bytes; ``hash`` is the child's
    40-character hex identity (stored as 20 raw bytes on disk).
    """

    def __init__(self, mode: str, obj_hash: str, name: Union[bytes, str]):
        self.mode = mode
        self.hash = obj_hash
        self.name = os.fsencode(name) if isinstance(name, str) else name

    @property
    def type(self) -> str:
        """Kind of the referenced object ('tree' or 'blob')."""
        return ObjectKind.TREE.value if self.mode == MODE_DIR else ObjectKind.BLOB.value

    @property
    def display_name(self) -> str:
        """Name decoded for printing; undecodable bytes survive as escapes."""
        return os.fsdecode(self.name)

    def encode(self) -> bytes:
        """Encode as ``<mode> <name>\\0<20 raw hash bytes>``."""
        return self.mode.encode('ascii') + b' ' + self.name + b'\0' + bytes.fromhex(self.hash)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        return (self.mode, self.name, self.hash) == (other.mode, other.name, other.hash)

    def __lt__(self, other: 'TreeEntry') -> bool:
        """Entries sort byte-wise by name."""
        return self.name < other.name

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.type} {self.hash[:7]} {self.display_name})"


def _read_through_nul(stream: BinaryIO) -> bytes:
    """Read bytes up to and including the next NUL, or until EOF."""
    buf = bytearray()
    while True:
        byte = stream.read(1)
        if not byte:
            break
        buf += byte
        if byte == b'\0':
            break
    return bytes(buf)


def iter_tree_entries(stream: BinaryIO) -> Iterator[TreeEntry]:
    """
    Lazily decode tree entries from a tree payload stream.

    Each entry is ``<mode> <name>\\0`` followed by 20 raw hash bytes. The
    mode ends at the first space, so names may themselves contain spaces.

    Args:
        stream: Binary reader positioned at the start of a tree payload

    Yields:
        TreeEntry: Entries in stored order

    Raises:
        MalformedTreeEntry: If the payload ends mid-entry or an entry
            lacks a mode
    """
    offset = 0
    while True:
        head = _read_through_nul(stream)
        if not head:
            return
        if not head.endswith(b'\0'):
            raise MalformedTreeEntry(offset, 'missing NUL after entry name')

        mode, sep, name = head[:-1].partition(b' ')
        if not sep or not mode:
            raise MalformedTreeEntry(offset, f"expected '<mode> <name>', got {head[:-1]!r}")
        try:
            mode_text = mode.decode('ascii')
        except UnicodeDecodeError:
            raise MalformedTreeEntry(offset, f"mode is not ASCII: {mode!r}")

        raw_hash = stream.read(HASH_SIZE)
        if len(raw_hash) != HASH_SIZE:
            raise MalformedTreeEntry(
                offset, f"expected {HASH_SIZE} hash bytes, got {len(raw_hash)}"
            )

        yield TreeEntry(mode_text, raw_hash.hex(), name)
        offset += len(head) + HASH_SIZE


class Tree(PlumbObject):
    """
    Represents directory structure.

    A tree contains entries pointing to blobs (files) and other trees
    (subdirectories), kept in byte-wise name order.
    """

    kind = ObjectKind.TREE

    def __init__(self):
        super().__init__()
        self.entries: List[TreeEntry] = []

    def add_entry(self, mode: str, obj_hash: str, name: Union[bytes, str]) -> None:
        """
        Add entry to tree.

        Args:
            mode: File mode ('100644' or '40000')
            obj_hash: Hex hash of the referenced object
            name: Entry name
        """
        self.entries.append(TreeEntry(mode, obj_hash, name))
        self.entries.sort()
        self._hash = None

    def serialize(self) -> bytes:
        """
        Serialize tree entries in sorted order.

        Format: <mode> <name>\\0<20-byte hash>, repeated.
        """
        return b''.join(entry.encode() for entry in sorted(self.entries))

    def deserialize(self, data: bytes) -> None:
        """Replace entries with those decoded from a tree payload."""
        self.entries = list(iter_tree_entries(io.BytesIO(data)))
        self._hash = None

    def __repr__(self) -> str:
        return f"Tree(entries={len(self.entries)})"


class Commit(PlumbObject):
    """
    Represents a commit.

    A commit captures:
    - Snapshot of project (tree hash)
    - Parent commit, if any
    - Author and committer info
    - Timestamp
    - Commit message
    """

    kind = ObjectKind.COMMIT

    def __init__(self):
        super().__init__()
        self.tree: str = ''
        self.parents: List[str] = []
        self.author: str = DEFAULT_IDENT
        self.author_time: int = 0
        self.author_timezone: str = '+0000'
        self.committer: str = DEFAULT_IDENT
        self.committer_time: int = 0
        self.committer_timezone: str = '+0000'
        self.message: str = ''

    def serialize(self) -> bytes:
        """
        Serialize commit.

        Format:
        tree <tree-hash>
        parent <parent-hash>  (optional)
        author Name <email> <timestamp> <timezone>
        committer Name <email> <timestamp> <timezone>

        <commit message>
        """
        lines = [f'tree {self.tree}']
        for parent in self.parents:
            lines.append(f'parent {parent}')
        lines.append(f'author {self.author} {self.author_time} {self.author_timezone}')
        lines.append(f'committer {self.committer} {self.committer_time} {self.committer_timezone}')
        lines.append('')

        message = self.message if self.message.endswith('\n') else self.message + '\n'
        return ('\n'.join(lines) + '\n' + message).encode('utf-8')

    @classmethod
    def create(
        cls,
        tree_hash: str,
        parent_hash: Optional[str],
        message: str,
        author: str = DEFAULT_IDENT,
        committer: Optional[str] = None,
        timestamp: Optional[int] = None,
        timezone: str = '+0000'
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            tree_hash: Hash of tree object
            parent_hash: Hash of the parent commit, or None for a root commit
            message: Commit message
            author: Author name and email (e.g., "Name <email>")
            committer: Committer name and email (defaults to author)
            timestamp: Unix timestamp (defaults to current time)
            timezone: Timezone offset (e.g., "+0000", "-0500")
        """
        commit = cls()
        commit.tree = tree_hash
        commit.parents = [parent_hash] if parent_hash else []
        commit.author = author
        commit.committer = committer or author
        commit.message = message

        if timestamp is None:
            timestamp = int(time.time())

        commit.author_time = timestamp
        commit.committer_time = timestamp
        commit.author_timezone = timezone
        commit.committer_timezone = timezone

        return commit

    def __repr__(self) -> str:
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"


def assemble_commit_payload(
    tree_hash: str,
    parent_hash: Optional[str],
    message: str,
    author: str = DEFAULT_IDENT,
    committer: Optional[str] = None,
    timestamp: Optional[int] = None,
    timezone: str = '+0000'
) -> bytes:
    """Build a commit payload ready for ``write_object(COMMIT, ...)``."""
    return Commit.create(
        tree_hash, parent_hash, message,
        author=author,
        committer=committer,
        timestamp=timestamp,
        timezone=timezone,
    ).serialize()
