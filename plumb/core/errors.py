"""Exceptions raised by the Plumb object store.

Every error carries the context needed to diagnose it (the object hash,
the filesystem path, or the offending header text) so callers never have
to re-derive it.
"""

from pathlib import Path
from typing import Optional, Union


class PlumbError(Exception):
    """Base class for all Plumb errors."""


class RepositoryExists(PlumbError):
    """``init`` was run where a store already exists."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Repository already exists at {path}")


class ObjectNotFound(PlumbError):
    """No object is stored under the requested hash."""

    def __init__(self, hash: str, path: Optional[Path] = None, reason: str = 'not found'):
        self.hash = hash
        self.path = path
        super().__init__(f"Object {hash} {reason}")


class CorruptObject(PlumbError):
    """Stored object could not be decompressed, or its payload is short."""

    def __init__(self, hash: str, path: Optional[Path] = None, detail: str = ''):
        self.hash = hash
        self.path = path
        message = f"Object {hash} is corrupt"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class MalformedHeader(PlumbError):
    """Object header is not of the form ``<kind> <size>\\0``."""

    def __init__(self, hash: str, header: Union[bytes, str], detail: str = 'invalid header'):
        self.hash = hash
        self.header = header
        super().__init__(f"Object {hash} has malformed header {header!r}: {detail}")


class UnknownKind(MalformedHeader):
    """Header names an object kind outside blob/tree/commit."""

    def __init__(self, kind: str, hash: str = '', header: Union[bytes, str] = b''):
        self.kind = kind
        super().__init__(hash, header or kind, f"unknown object kind {kind!r}")


class InvalidSize(MalformedHeader):
    """Header size token is not a non-negative decimal integer."""

    def __init__(self, size: str, hash: str = '', header: Union[bytes, str] = b''):
        self.size = size
        super().__init__(hash, header or size, f"invalid object size {size!r}")


class WrongObjectKind(PlumbError):
    """Object exists but is not of the kind the operation needs."""

    def __init__(self, hash: str, kind, expected):
        self.hash = hash
        self.kind = kind
        self.expected = expected
        super().__init__(f"Object {hash} is a {kind}, not a {expected}")


class MalformedTreeEntry(PlumbError):
    """Tree payload ended mid-entry or an entry is not ``<mode> <name>``."""

    def __init__(self, offset: int, detail: str):
        self.offset = offset
        super().__init__(f"Malformed tree entry at byte {offset}: {detail}")


class NotADirectory(PlumbError):
    """A tree can only be built from an existing directory."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Not a directory: {path}")


class StoreIOError(PlumbError):
    """Filesystem failure while reading or writing the store or work tree."""

    def __init__(self, path: Path, detail: str):
        self.path = path
        super().__init__(f"{detail}: {path}")
