"""List tree contents."""

import os
import click
from plumb.core.errors import PlumbError
from plumb.core.hash import is_hex_hash
from plumb.core.objects import ObjectKind
from plumb.core.repository import Repository
from plumb.cli.commands.cat_file import format_entry
from plumb.cli.output import error


def resolve_tree(repo, object_hash: str) -> str:
    """
    Return the tree hash for a tree or commit hash.

    Raises:
        click.ClickException: If the object is a blob or a commit
            without a valid tree line
    """
    with repo.read_object(object_hash) as reader:
        if reader.kind is ObjectKind.TREE:
            return object_hash
        if reader.kind is ObjectKind.COMMIT:
            first_line = reader.read_all().split(b'\n', 1)[0]
            tree_hash = first_line[5:].decode('ascii', errors='replace')
            if first_line.startswith(b'tree ') and is_hex_hash(tree_hash):
                return tree_hash
            raise click.ClickException(f"Commit {object_hash} has no valid tree line")
        raise click.ClickException(f"Not a tree object: {object_hash}")


def display_tree(repo, tree_hash, prefix, recursive, name_only):
    """Print tree entries, descending into subtrees when recursive."""
    with repo.read_object(tree_hash) as reader:
        entries = list(reader.entries())

    for entry in entries:
        full_name = prefix + entry.name
        if recursive and entry.type == ObjectKind.TREE.value:
            display_tree(repo, entry.hash, full_name + b'/', recursive, name_only)
            continue

        path = os.fsdecode(full_name)
        click.echo(path if name_only else format_entry(entry, path))


@click.command('ls-tree')
@click.option('-r', '--recursive', is_flag=True, help='Recurse into sub-trees')
@click.option('--name-only', is_flag=True, help='Show only file names')
@click.argument('tree_ish')
def ls_tree_cmd(recursive, name_only, tree_ish):
    """
    List contents of a tree object.

    TREE_ISH is a tree or commit hash (or a unique prefix of one).

    Examples:
        plumb ls-tree abc123              # Show top-level entries
        plumb ls-tree --name-only abc123  # Only show names
        plumb ls-tree -r abc123           # Recursively list all files
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a plumb repository"))
        raise click.Abort()

    try:
        tree_hash = resolve_tree(repo, repo.resolve_hash(tree_ish))
        display_tree(repo, tree_hash, b'', recursive, name_only)
    except click.ClickException as e:
        click.echo(error(e.message))
        raise click.Abort()
    except PlumbError as e:
        click.echo(error(f"ls-tree failed: {e}"))
        raise click.Abort()
