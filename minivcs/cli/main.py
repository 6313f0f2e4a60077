"""Main CLI entry point for minivcs."""

import logging

import click
from colorama import init

from minivcs import __version__
from minivcs.cli.output import BANNER
from minivcs.cli.commands import (init_cmd, add_cmd, commit_cmd, rm_cmd,
                                  log_cmd, status_cmd, checkout_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class VcsGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=VcsGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log internal operations')
def cli(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(rm_cmd)
cli.add_command(log_cmd)
cli.add_command(status_cmd)
cli.add_command(checkout_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
