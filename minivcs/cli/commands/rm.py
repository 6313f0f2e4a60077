"""Rm command - remove files from the staging area."""

import click
from pathlib import Path
from minivcs.cli.helpers import handle_vcs_errors, open_repository, require_operands
from minivcs.cli.output import success, info


@click.command('rm')
@click.argument('args', nargs=-1)
@click.option('--cached', is_flag=True, help='Only remove from the index, keep the file')
@handle_vcs_errors
def rm_cmd(args, cached):
    """
    Remove a file from the staging area.

    The file is also deleted from the working tree when the last commit
    tracks it, unless --cached is given. A file that was only staged is
    left on disk.

    Examples:
        minivcs rm file.txt
        minivcs rm --cached file.txt
    """
    repo = open_repository()
    require_operands(args, 1)

    deleted = repo.staging.unstage(Path.cwd() / args[0], remove_working_file=not cached)

    click.echo(success(f"Removed {click.format_filename(args[0])} from staging area"))
    if deleted:
        click.echo(info(f"  deleted {click.format_filename(args[0])} from working tree"))
