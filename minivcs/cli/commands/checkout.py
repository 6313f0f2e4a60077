"""Checkout command - restore a file from a commit."""

import click
from pathlib import Path
from minivcs.core.errors import ObjectNotFound
from minivcs.operations.checkout import checkout_file
from minivcs.cli.helpers import fail, handle_vcs_errors, open_repository
from minivcs.cli.output import success, info, INCORRECT_OPERANDS, NO_COMMIT_WITH_ID


class SeparatorCommand(click.Command):
    """Command that records where '--' appeared; click's parser drops it."""

    def parse_args(self, ctx, args):
        ctx.meta['separator'] = args.index('--') if '--' in args else None
        return super().parse_args(ctx, args)


@click.command('checkout', cls=SeparatorCommand)
@click.argument('args', nargs=-1)
@click.pass_context
@handle_vcs_errors
def checkout_cmd(ctx, args):
    """
    Restore a file in the working tree from a commit.

    Takes the version of the file from the given commit, or from HEAD when
    no commit is given, and writes it over the working copy. The restored
    file is not staged. A file the commit does not record is removed.

    Examples:
        minivcs checkout -- file.txt
        minivcs checkout <commit-id> -- file.txt
    """
    repo = open_repository()

    separator = ctx.meta.get('separator')
    if separator is None or separator > 1 or len(args) - separator != 1:
        fail(INCORRECT_OPERANDS)

    commit_id = args[0] if separator == 1 else None
    file_arg = args[-1]

    try:
        written = checkout_file(repo, Path.cwd() / file_arg, commit_id)
    except ObjectNotFound as e:
        if commit_id is None or e.object_id != commit_id:
            raise
        fail(NO_COMMIT_WITH_ID.format(commit_id))

    name = click.format_filename(file_arg)
    if written:
        click.echo(success(f"Restored {name}"))
    else:
        click.echo(info(f"{name} is not recorded in that commit"))
