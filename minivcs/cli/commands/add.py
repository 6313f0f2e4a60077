"""Add command - stage files for commit."""

import click
from pathlib import Path
from minivcs.cli.helpers import fail, handle_vcs_errors, open_repository, require_operands
from minivcs.cli.output import success, info, FILE_DOES_NOT_EXIST


@click.command('add')
@click.argument('args', nargs=-1)
@handle_vcs_errors
def add_cmd(args):
    """
    Add file contents to the staging area.

    Stage a file, or every file below a directory, for the next commit.
    Modified files must be added again to stage the new changes.

    Examples:
        minivcs add file.txt
        minivcs add src
    """
    repo = open_repository()
    require_operands(args, 1)

    target = Path.cwd() / args[0]
    if not target.exists():
        fail(FILE_DOES_NOT_EXIST)

    try:
        added = repo.staging.add(target)
    except FileNotFoundError:
        fail(FILE_DOES_NOT_EXIST)

    click.echo(success(f"Added {len(added)} file(s) to staging area"))
    for path in added:
        click.echo(info(f"  {click.format_filename(path)}"))
