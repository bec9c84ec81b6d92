"""Write-tree command - snapshot the work tree into tree objects."""

import logging
import click
from plumb.core.errors import PlumbError
from plumb.core.repository import Repository
from plumb.cli.output import error

logger = logging.getLogger(__name__)


@click.command('write-tree')
def write_tree_cmd():
    """
    Store every file of the work tree and print the root tree hash.

    Directories with no files are left out. When the work tree holds no
    files at all nothing is written and nothing is printed.

    Examples:
        plumb write-tree
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a plumb repository"))
        raise click.Abort()

    try:
        tree_hash = repo.write_tree()
    except (PlumbError, ValueError) as e:
        click.echo(error(f"write-tree failed: {e}"))
        raise click.Abort()

    if tree_hash is None:
        logger.debug(f"Nothing to write in {repo.work_tree}")
        return

    click.echo(tree_hash)
