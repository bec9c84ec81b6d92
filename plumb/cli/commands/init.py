"""Initialize a new Plumb repository."""

import click
from pathlib import Path
from plumb.core.errors import PlumbError, RepositoryExists
from plumb.core.repository import Repository
from plumb.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
def init_cmd(path):
    """
    Initialize a new repository.

    Creates a .git directory holding the object database, refs, HEAD
    and config. The layout is readable by git itself.

    Examples:
        plumb init                  # Initialize in current directory
        plumb init my-project       # Initialize in my-project directory
    """
    repo = Repository(Path(path).resolve())

    try:
        repo.init()
    except RepositoryExists as e:
        click.echo(error(str(e)))
        click.echo(info("Use an empty directory or different path"))
        raise click.Abort()
    except PlumbError as e:
        click.echo(error(f"Failed to initialize repository: {e}"))
        raise click.Abort()

    click.echo(success(f"Initialized empty Plumb repository in {repo.git_dir}"))
