"""Initialize a new minivcs repository."""

import click
from pathlib import Path
from minivcs.core.repository import Repository
from minivcs.cli.helpers import fail, handle_vcs_errors
from minivcs.cli.output import success, info, INCORRECT_OPERANDS


@click.command('init')
@click.argument('args', nargs=-1)
@handle_vcs_errors
def init_cmd(args):
    """
    Initialize a new repository.

    Creates a .vcs directory with the object store, HEAD and the index.
    Takes an optional directory, which is created if missing.

    Examples:
        minivcs init                 # Initialize in current directory
        minivcs init my-project      # Initialize in my-project directory
    """
    if len(args) > 1:
        fail(INCORRECT_OPERANDS)

    repo_path = Path(args[0] if args else '.').resolve()

    try:
        repo = Repository(repo_path).init()
    except PermissionError:
        fail(f"Permission denied: Cannot create repository at {repo_path}")

    click.echo(success(f"Initialized empty repository in {repo.vcs_dir}"))
    click.echo(info("You can now start tracking files with:"))
    click.echo(info("  minivcs add <file>"))
    click.echo(info("  minivcs commit <message>"))
