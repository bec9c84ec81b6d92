"""Main CLI entry point for Plumb."""

import logging

import click
from colorama import init

from plumb import __version__
from plumb.cli.commands import (init_cmd, hash_object_cmd, cat_file_cmd, ls_tree_cmd,
                                write_tree_cmd, commit_tree_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


@click.group()
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log object store activity to stderr')
def cli(verbose):
    """Plumbing commands for a git-compatible object store."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


# Register commands
cli.add_command(init_cmd)
cli.add_command(hash_object_cmd)
cli.add_command(cat_file_cmd)
cli.add_command(ls_tree_cmd)
cli.add_command(write_tree_cmd)
cli.add_command(commit_tree_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
