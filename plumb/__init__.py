"""Plumb - a git-compatible content-addressable object store."""

__version__ = '0.1.0'

from plumb.core.repository import Repository
from plumb.core.objects import ObjectKind, PlumbObject, Blob, Tree, Commit
from plumb.core.tree_builder import build_tree

__all__ = [
    'Repository',
    'ObjectKind',
    'PlumbObject',
    'Blob',
    'Tree',
    'Commit',
    'build_tree',
]
