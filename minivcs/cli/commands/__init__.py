"""CLI commands for minivcs."""

from minivcs.cli.commands.init import init_cmd
from minivcs.cli.commands.add import add_cmd
from minivcs.cli.commands.commit import commit_cmd
from minivcs.cli.commands.rm import rm_cmd
from minivcs.cli.commands.log import log_cmd
from minivcs.cli.commands.status import status_cmd
from minivcs.cli.commands.checkout import checkout_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'rm_cmd', 'log_cmd', 'status_cmd',
           'checkout_cmd']
