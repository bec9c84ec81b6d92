"""Core functionality for Plumb.

This module contains the object store:
- Objects (Blob, Tree, Commit) and tree entry decoding
- Repository and on-disk object encoding
- Tree building from a directory hierarchy
- Configuration management
- Hashing utilities
- Errors

For the command-line interface, see plumb.cli
"""

from plumb.core.errors import (
    PlumbError,
    RepositoryExists,
    ObjectNotFound,
    CorruptObject,
    MalformedHeader,
    UnknownKind,
    InvalidSize,
    WrongObjectKind,
    MalformedTreeEntry,
    NotADirectory,
    StoreIOError,
)
from plumb.core.objects import (
    ObjectKind,
    PlumbObject,
    Blob,
    Tree,
    TreeEntry,
    Commit,
    iter_tree_entries,
    assemble_commit_payload,
)
from plumb.core.repository import Repository, ObjectReader
from plumb.core.tree_builder import build_tree
from plumb.core.hash import hash_object, hash_file, object_hash
from plumb.core.config import Config

__all__ = [
    'PlumbError',
    'RepositoryExists',
    'ObjectNotFound',
    'CorruptObject',
    'MalformedHeader',
    'UnknownKind',
    'InvalidSize',
    'WrongObjectKind',
    'MalformedTreeEntry',
    'NotADirectory',
    'StoreIOError',
    'ObjectKind',
    'PlumbObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'iter_tree_entries',
    'assemble_commit_payload',
    'Repository',
    'ObjectReader',
    'build_tree',
    'Config',
    'hash_object',
    'hash_file',
    'object_hash',
]
