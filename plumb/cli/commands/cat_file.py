"""Show object content, kind, or size."""

import click
from plumb.core.errors import PlumbError
from plumb.core.objects import ObjectKind
from plumb.core.repository import Repository, ObjectReader
from plumb.cli.output import error


def format_entry(entry, path=None) -> str:
    """Format a tree entry the way ls-tree and cat-file -p print it."""
    name = path if path is not None else entry.display_name
    return f"{entry.mode:0>6} {entry.type} {entry.hash}\t{name}"


def print_blob(reader: ObjectReader) -> None:
    click.echo(reader.read_all(), nl=False)


def print_tree(reader: ObjectReader) -> None:
    for entry in reader.entries():
        click.echo(format_entry(entry))


def print_commit(reader: ObjectReader) -> None:
    click.echo(reader.read_all().decode('utf-8', errors='replace'), nl=False)


# One printer per kind; adding an ObjectKind must add an entry here.
PRETTY_PRINTERS = {
    ObjectKind.BLOB: print_blob,
    ObjectKind.TREE: print_tree,
    ObjectKind.COMMIT: print_commit,
}


@click.command('cat-file')
@click.option('-t', 'show_type', is_flag=True, help='Show object type')
@click.option('-s', 'show_size', is_flag=True, help='Show object size')
@click.option('-p', 'pretty', is_flag=True, help='Pretty-print object content')
@click.argument('object_name')
def cat_file_cmd(show_type, show_size, pretty, object_name):
    """
    Show object content, type, or size.

    OBJECT_NAME is a full hash or a unique prefix of at least 4 characters.

    Examples:
        plumb cat-file -t abc123     # Show object type
        plumb cat-file -s abc123     # Show object size
        plumb cat-file -p abc123     # Pretty-print object content
    """
    if [show_type, show_size, pretty].count(True) != 1:
        click.echo(error("Specify exactly one of -t, -s or -p"))
        raise click.Abort()

    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a plumb repository"))
        raise click.Abort()

    try:
        full_hash = repo.resolve_hash(object_name)
        with repo.read_object(full_hash) as reader:
            if show_type:
                click.echo(reader.kind.value)
            elif show_size:
                click.echo(reader.size)
            else:
                PRETTY_PRINTERS[reader.kind](reader)
    except PlumbError as e:
        click.echo(error(f"cat-file failed: {e}"))
        raise click.Abort()
