"""Commit-tree command - create a commit object for a tree."""

import click
from plumb.core.errors import PlumbError, WrongObjectKind
from plumb.core.objects import ObjectKind, assemble_commit_payload
from plumb.core.repository import Repository
from plumb.cli.output import error


def resolve_kind(repo, name: str, expected: ObjectKind) -> str:
    """Resolve name to a full hash and check the object's kind."""
    full_hash = repo.resolve_hash(name)
    with repo.read_object(full_hash) as reader:
        if reader.kind is not expected:
            raise WrongObjectKind(full_hash, reader.kind, expected)
    return full_hash


@click.command('commit-tree')
@click.argument('tree')
@click.option('-p', '--parent', help='Parent commit')
@click.option('-m', '--message', required=True, help='Commit message')
def commit_tree_cmd(tree, parent, message):
    """
    Create a commit object for TREE and print its hash.

    Author and committer come from user.name and user.email in the
    configuration (or PLUMB_USER_NAME / PLUMB_USER_EMAIL).

    Examples:
        plumb commit-tree abc123 -m "Initial commit"
        plumb commit-tree def456 -p abc789 -m "Second commit"
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a plumb repository"))
        raise click.Abort()

    try:
        tree_hash = resolve_kind(repo, tree, ObjectKind.TREE)
        parent_hash = resolve_kind(repo, parent, ObjectKind.COMMIT) if parent else None

        payload = assemble_commit_payload(
            tree_hash,
            parent_hash,
            message,
            author=repo.config.get_user_identity(),
        )
        commit_hash = repo.write_object(ObjectKind.COMMIT, payload)
    except (PlumbError, ValueError) as e:
        click.echo(error(f"commit-tree failed: {e}"))
        raise click.Abort()

    click.echo(commit_hash)
