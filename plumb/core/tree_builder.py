"""Snapshot a directory hierarchy into tree and blob objects."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from .errors import NotADirectory, StoreIOError
from .objects import MODE_DIR, MODE_FILE, Blob, Tree
from .repository import GIT_DIR_NAME, Repository

logger = logging.getLogger(__name__)


def build_tree(repo: Repository, path: Union[str, Path]) -> Optional[str]:
    """
    Write blobs and trees for everything under path.

    Children are visited in byte-wise name order and written before the
    tree that references them. Directories with no files anywhere below
    them produce no object and no entry in their parent. Directories named
    .git are skipped at every level. Symlinks and special files are not
    representable and are skipped.

    Recursion depth follows directory depth, so pathologically deep
    hierarchies can exceed the interpreter's recursion limit.

    Args:
        repo: Repository whose object store receives the objects
        path: Directory to snapshot

    Returns:
        Hash of the tree for path, or None if it holds no files

    Raises:
        NotADirectory: If path is not an existing directory
        StoreIOError: If a directory or file cannot be read, or an object
            cannot be written
    """
    directory = Path(path)
    if not directory.is_dir():
        raise NotADirectory(directory)

    try:
        with os.scandir(directory) as it:
            children = sorted(it, key=lambda entry: os.fsencode(entry.name))
    except OSError as e:
        raise StoreIOError(directory, f"Cannot list directory ({e.strerror})") from e

    tree = Tree()
    for child in children:
        if child.name == GIT_DIR_NAME:
            continue

        if child.is_dir(follow_symlinks=False):
            child_hash = build_tree(repo, child.path)
            if child_hash is None:
                logger.debug(f"Omitting empty directory {child.path}")
                continue
            tree.add_entry(MODE_DIR, child_hash, child.name)

        elif child.is_file(follow_symlinks=False):
            try:
                blob = Blob.from_file(child.path)
            except OSError as e:
                raise StoreIOError(Path(child.path), f"Cannot read file ({e.strerror})") from e
            tree.add_entry(MODE_FILE, repo.store(blob), child.name)

        else:
            logger.debug(f"Skipping {child.path}: not a regular file or directory")

    if not tree.entries:
        return None

    return repo.store(tree)
