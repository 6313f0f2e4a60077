"""Status command - show working tree status."""

import click
from colorama import Fore, Style
from minivcs.cli.helpers import handle_vcs_errors, open_repository, require_operands
from minivcs.operations.status import compute_status


def _section(title, color, rows):
    click.echo(color + title + Style.RESET_ALL)
    for label, path in rows:
        click.echo(f"\t{color}{label}: {click.format_filename(path)}{Style.RESET_ALL}")
    click.echo()


@click.command('status')
@click.argument('args', nargs=-1)
@handle_vcs_errors
def status_cmd(args):
    """
    Show the working tree status.

    Displays:
    - Changes staged for commit (index vs the last commit)
    - Changes not staged for commit (working tree vs index)
    - Untracked files

    Examples:
        minivcs status
    """
    repo = open_repository()
    require_operands(args, 0)

    report = compute_status(repo)

    click.echo(f"On branch {Fore.CYAN}main{Style.RESET_ALL}")

    if report.has_staged:
        rows = [('new file', p) for p in report.staged_new]
        rows += [('modified', p) for p in report.staged_modified]
        rows += [('deleted', p) for p in report.staged_deleted]
        _section("Changes to be committed:", Fore.GREEN, sorted(rows, key=lambda r: r[1]))

    if report.has_unstaged:
        rows = [('modified', p) for p in report.unstaged_modified]
        rows += [('deleted', p) for p in report.unstaged_deleted]
        _section("Changes not staged for commit:", Fore.YELLOW, sorted(rows, key=lambda r: r[1]))

    if report.untracked:
        click.echo(Fore.RED + "Untracked files:" + Style.RESET_ALL)
        for path in report.untracked:
            click.echo(f"\t{Fore.RED}{click.format_filename(path)}{Style.RESET_ALL}")
        click.echo()

    if report.is_clean:
        click.echo("nothing to commit")
