"""Log command - show commit history."""

import click
from datetime import datetime, timezone
from colorama import Fore, Style
from minivcs.cli.helpers import handle_vcs_errors, open_repository, require_operands
from minivcs.cli.output import info


def format_timestamp(timestamp: int) -> str:
    """Format a Unix timestamp as a UTC date."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%a %b %d %H:%M:%S %Y")


@click.command('log')
@click.argument('args', nargs=-1)
@handle_vcs_errors
def log_cmd(args):
    """
    Show commit history.

    Lists every commit from HEAD back to the first one, newest first.

    Examples:
        minivcs log
    """
    repo = open_repository()
    require_operands(args, 0)

    if repo.refs.read_head() is None:
        click.echo(info("Your current branch main has no commits yet."))
        return

    for commit_hash, commit in repo.commits.history():
        click.echo(f"{Fore.YELLOW}Commit: {commit_hash}{Style.RESET_ALL}")
        click.echo(f"Date: {format_timestamp(commit.author_time)}")
        click.echo(commit.message)
        click.echo()
