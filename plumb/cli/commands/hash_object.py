"""Compute a file's blob hash and optionally store it."""

import click
from pathlib import Path
from plumb.core.errors import PlumbError
from plumb.core.hash import hash_file
from plumb.core.objects import ObjectKind
from plumb.core.repository import Repository
from plumb.cli.output import error


@click.command('hash-object')
@click.option('-w', '--write', is_flag=True, help='Write the object into the object database')
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def hash_object_cmd(write, file):
    """
    Compute the blob hash of FILE.

    Examples:
        plumb hash-object README.md      # Print the hash only
        plumb hash-object -w README.md   # Also store the blob
    """
    if not write:
        try:
            click.echo(hash_file(file))
        except OSError as e:
            click.echo(error(f"Cannot read {file}: {e.strerror}"))
            raise click.Abort()
        return

    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a plumb repository"))
        raise click.Abort()

    try:
        data = Path(file).read_bytes()
    except OSError as e:
        click.echo(error(f"Cannot read {file}: {e.strerror}"))
        raise click.Abort()

    try:
        click.echo(repo.write_object(ObjectKind.BLOB, data))
    except (PlumbError, ValueError) as e:
        click.echo(error(f"hash-object failed: {e}"))
        raise click.Abort()
