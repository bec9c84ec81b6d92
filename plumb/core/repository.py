"""Repository and object store for Plumb."""

import io
import logging
import zlib
from pathlib import Path
from typing import Iterator, Optional, Union

from .config import Config
from .errors import (
    CorruptObject,
    InvalidSize,
    MalformedHeader,
    ObjectNotFound,
    RepositoryExists,
    StoreIOError,
    UnknownKind,
    WrongObjectKind,
)
from .hash import canonical_form, hash_object, is_hex_hash
from .objects import ObjectKind, PlumbObject, TreeEntry, iter_tree_entries

logger = logging.getLogger(__name__)

GIT_DIR_NAME = '.git'
MIN_ABBREV = 4


class ObjectReader:
    """
    A decoded object header plus a reader over its payload.

    ``stream`` never yields more than ``size`` bytes, even when the stored
    data carries trailing bytes after the payload. Reading from it is
    lenient: stopping early, or hitting EOF before ``size`` bytes, is not
    checked. ``read_all`` is the strict alternative.
    """

    def __init__(self, hash: str, kind: ObjectKind, size: int, stream: io.BufferedIOBase):
        self.hash = hash
        self.kind = kind
        self.size = size
        self.stream = stream

    def read_all(self) -> bytes:
        """
        Read the complete payload.

        Raises:
            CorruptObject: If fewer than ``size`` bytes are available
        """
        data = self.stream.read()
        if len(data) != self.size:
            raise CorruptObject(
                self.hash,
                detail=f"payload is {len(data)} bytes, header declares {self.size}"
            )
        return data

    def entries(self) -> Iterator[TreeEntry]:
        """
        Iterate tree entries from the payload. Only valid for trees.

        Raises:
            WrongObjectKind: If the object is not a tree
            MalformedTreeEntry: If the payload ends mid-entry
            CorruptObject: If the payload ends on an entry boundary short
                of the declared size
        """
        if self.kind is not ObjectKind.TREE:
            raise WrongObjectKind(self.hash, self.kind, ObjectKind.TREE)
        return self._sized_entries()

    def _sized_entries(self) -> Iterator[TreeEntry]:
        start = self.stream.tell()
        yield from iter_tree_entries(self.stream)
        consumed = self.stream.tell() - start
        if consumed != self.size:
            raise CorruptObject(
                self.hash,
                detail=f"tree payload is {consumed} bytes, header declares {self.size}"
            )

    def close(self) -> None:
        self.stream.close()

    def __enter__(self) -> 'ObjectReader':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ObjectReader({self.kind} {self.hash[:7]}, size={self.size})"


class Repository:
    """
    Represents a Plumb repository.

    A repository manages the .git directory structure and provides
    methods for reading and writing objects. The work tree is the
    directory containing .git.
    """

    def __init__(self, path: Union[str, Path] = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.git_dir = self.work_tree / GIT_DIR_NAME
        self.objects_dir = self.git_dir / 'objects'
        self.refs_dir = self.git_dir / 'refs'
        self.head_file = self.git_dir / 'HEAD'
        self.config_file = self.git_dir / 'config'

        self._config = None

    @property
    def config(self) -> Config:
        """Get Config instance for this repository."""
        if self._config is None:
            self._config = Config(self.config_file)
        return self._config

    @property
    def compression_level(self) -> int:
        """zlib level from ``core.compression`` (-1 means zlib's default)."""
        level = self.config.get_int('core', 'compression', -1)
        if not -1 <= level <= 9:
            raise ValueError(f"Invalid compression level {level}")
        return level

    def init(self) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .git directory structure:
        .git/
        ├── objects/       # Object database
        ├── refs/          # References
        ├── HEAD           # Current branch
        └── config         # Repository configuration

        Returns:
            Repository: self for method chaining

        Raises:
            RepositoryExists: If repository already exists
            StoreIOError: If the directories cannot be created
        """
        if self.git_dir.exists():
            raise RepositoryExists(self.git_dir)

        try:
            self.git_dir.mkdir(parents=True)
            self.objects_dir.mkdir()
            self.refs_dir.mkdir()
            self.head_file.write_text('ref: refs/heads/main\n')
        except OSError as e:
            raise StoreIOError(self.git_dir, f"Cannot initialize repository ({e.strerror})") from e

        self.config.set('core', 'repositoryformatversion', '0')
        logger.debug(f"Initialized repository in {self.git_dir}")
        return self

    @classmethod
    def find_repository(cls, path: Union[str, Path] = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a .git directory
        or reaches the filesystem root.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / GIT_DIR_NAME).is_dir():
                return cls(current)

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    def object_path(self, hash: str) -> Path:
        """
        Get filesystem path for an object.

        Objects are stored in subdirectories named by the first 2 characters
        of the hash, with the remaining 38 characters as the filename.
        Example: ab/cdef0123456789... for hash abcdef0123456789...

        Args:
            hash: 40-character SHA-1 hash

        Returns:
            Path: Full path to object file
        """
        return self.objects_dir / hash[:2] / hash[2:]

    def write_object(self, kind: Union[ObjectKind, str], payload: bytes) -> str:
        """
        Write an object to the store.

        Objects are stored compressed with zlib. The format is:
        <kind> <size>\\0<payload>

        Writing content that is already stored is a no-op.

        Args:
            kind: Object kind
            payload: Object payload

        Returns:
            str: SHA-1 hash of the object

        Raises:
            StoreIOError: If the object file or its directory cannot be written
        """
        if not isinstance(kind, ObjectKind):
            kind = ObjectKind.parse(kind)

        content = canonical_form(kind.value, payload)
        hash = hash_object(content)
        path = self.object_path(hash)

        if path.exists():
            logger.debug(f"Object {hash} already stored")
            return hash

        compressed = zlib.compress(content, self.compression_level)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(compressed)
        except OSError as e:
            raise StoreIOError(path, f"Cannot write {kind} {hash} ({e.strerror})") from e

        logger.debug(f"Wrote {kind} {hash} ({len(payload)} bytes)")
        return hash

    def store(self, obj: PlumbObject) -> str:
        """Write an in-memory Blob, Tree or Commit and return its hash."""
        return self.write_object(obj.kind, obj.serialize())

    def read_object(self, hash: str) -> ObjectReader:
        """
        Read an object from the store.

        Args:
            hash: 40-character SHA-1 hash

        Returns:
            ObjectReader: Kind, declared size and a bounded payload reader

        Raises:
            ObjectNotFound: If no object is stored under hash
            CorruptObject: If the stored data cannot be decompressed
            MalformedHeader: If the header is not <kind> <size>\\0
            UnknownKind: If the kind is not blob, tree or commit
            InvalidSize: If the size is not a non-negative integer
        """
        if not is_hex_hash(hash):
            raise ObjectNotFound(hash, reason='is not a valid object name')

        path = self.object_path(hash)
        try:
            compressed = path.read_bytes()
        except FileNotFoundError:
            raise ObjectNotFound(hash, path)
        except OSError as e:
            raise StoreIOError(path, f"Cannot read object {hash} ({e.strerror})") from e

        try:
            content = zlib.decompress(compressed)
        except zlib.error as e:
            raise CorruptObject(hash, path, str(e)) from e

        null_idx = content.find(b'\0')
        if null_idx == -1:
            raise MalformedHeader(hash, content[:32], 'no NUL terminator')

        raw_header = content[:null_idx]
        try:
            header = raw_header.decode('utf-8')
        except UnicodeDecodeError:
            raise MalformedHeader(hash, raw_header, 'header is not valid UTF-8')

        parts = header.split(' ')
        if len(parts) != 2:
            raise MalformedHeader(hash, raw_header, "expected '<kind> <size>'")
        kind_token, size_token = parts

        try:
            kind = ObjectKind.parse(kind_token)
        except UnknownKind:
            raise UnknownKind(kind_token, hash, raw_header)

        if not (size_token.isascii() and size_token.isdigit()):
            raise InvalidSize(size_token, hash, raw_header)
        size = int(size_token)

        start = null_idx + 1
        payload = content[start:start + size]
        return ObjectReader(hash, kind, size, io.BytesIO(payload))

    def object_exists(self, hash: str) -> bool:
        """
        Check if object exists in repository.

        Args:
            hash: 40-character SHA-1 hash

        Returns:
            bool: True if object exists
        """
        return is_hex_hash(hash) and self.object_path(hash).exists()

    def resolve_hash(self, name: str) -> str:
        """
        Expand an abbreviated hash to the full hash of a stored object.

        Args:
            name: Full hash, or unique prefix of at least 4 hex characters

        Returns:
            str: 40-character SHA-1 hash

        Raises:
            ObjectNotFound: If nothing matches or the prefix is ambiguous
        """
        name = name.lower()
        if is_hex_hash(name):
            return name
        if len(name) < MIN_ABBREV or not all(c in '0123456789abcdef' for c in name):
            raise ObjectNotFound(name, reason='is not a valid object name')

        matches = []
        subdir = self.objects_dir / name[:2]
        if subdir.is_dir():
            for obj_file in subdir.iterdir():
                full_hash = name[:2] + obj_file.name
                if full_hash.startswith(name):
                    matches.append(full_hash)

        if not matches:
            raise ObjectNotFound(name)
        if len(matches) > 1:
            raise ObjectNotFound(name, reason=f'is ambiguous ({len(matches)} candidates)')
        return matches[0]

    def write_tree(self) -> Optional[str]:
        """
        Snapshot the work tree into tree objects.

        Returns:
            Root tree hash, or None if the work tree holds no files
        """
        from .tree_builder import build_tree
        return build_tree(self, self.work_tree)

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
