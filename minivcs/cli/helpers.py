"""Shared helpers for CLI commands."""

import functools
import logging
from pathlib import Path

import click

from minivcs.core.errors import (
    VcsError, NotARepository, AlreadyInitialized, PathNotTracked,
    PathOutsideRepository, NothingToCommit, EmptyCommitMessage,
)
from minivcs.core.repository import Repository
from minivcs.cli.output import (error, NOT_A_REPOSITORY, ALREADY_INITIALIZED,
                                INCORRECT_OPERANDS, NOT_TRACKED, OUTSIDE_REPOSITORY,
                                NOTHING_TO_COMMIT, MISSING_MESSAGE)

logger = logging.getLogger(__name__)

# Errors with a fixed user-facing message; anything else prints its own text
FIXED_MESSAGES = {
    NotARepository: NOT_A_REPOSITORY,
    AlreadyInitialized: ALREADY_INITIALIZED,
    PathNotTracked: NOT_TRACKED,
    PathOutsideRepository: OUTSIDE_REPOSITORY,
    NothingToCommit: NOTHING_TO_COMMIT,
    EmptyCommitMessage: MISSING_MESSAGE,
}


def fail(message: str) -> None:
    """Print an error message and abort the command."""
    click.echo(error(message))
    raise click.Abort()


def message_for(exc: VcsError) -> str:
    for kind, message in FIXED_MESSAGES.items():
        if isinstance(exc, kind):
            return message
    return str(exc)


def handle_vcs_errors(func):
    """
    Report core errors raised by a command instead of a traceback.

    Each VcsError is printed once, as its fixed message where it has one,
    and the command aborts with a non-zero exit status.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except VcsError as e:
            logger.debug("%s failed: %r", func.__name__, e)
            fail(message_for(e))
    return wrapper


def open_repository() -> Repository:
    """
    Find the repository containing the current directory.

    Raises:
        NotARepository: If the current directory is not inside one
    """
    return Repository.find_repository(Path.cwd())


def require_operands(args, count: int) -> None:
    """Abort with the fixed message unless exactly count operands were given."""
    if len(args) != count:
        fail(INCORRECT_OPERANDS)
