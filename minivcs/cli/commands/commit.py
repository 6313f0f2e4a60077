"""Commit command - create a commit from staged changes."""

import click
from minivcs.cli.helpers import fail, handle_vcs_errors, open_repository
from minivcs.cli.output import success, info, INCORRECT_OPERANDS, MISSING_MESSAGE


@click.command('commit')
@click.argument('args', nargs=-1)
@click.option('--author', help='Author name and email (format: "Name <email>")')
@handle_vcs_errors
def commit_cmd(args, author):
    """
    Record changes to the repository.

    Creates a commit from the staged changes in the index and moves HEAD
    to it. The index is left as it is.

    Examples:
        minivcs commit "Initial commit"
        minivcs commit "Add feature" --author "Jane <jane@example.com>"
    """
    repo = open_repository()

    if not args:
        fail(MISSING_MESSAGE)
    if len(args) > 1:
        fail(INCORRECT_OPERANDS)

    commit_hash = repo.commits.commit(args[0], author=author)
    commit = repo.objects.get(commit_hash)

    click.echo(success(f"Created commit {commit_hash[:7]}"))
    click.echo(info(f"Author: {commit.author}"))
    if commit.parent:
        click.echo(info(f"Parent: {commit.parent[:7]}"))
    else:
        click.echo(info("(root commit)"))
    click.echo(info(f"Tree: {commit.tree[:7]}"))
