"""HEAD reference management for minivcs."""

import logging
from pathlib import Path
from typing import Optional
from .errors import CorruptObject
from .hash import NULL_ID, is_valid_id
from .objects import Commit
from minivcs.utils.fs import atomic_write

logger = logging.getLogger(__name__)


class RefManager:
    """
    Manages HEAD, the pointer to the most recent commit.

    HEAD holds a single commit id, or NULL_ID before the first commit.
    It is only ever replaced whole, via a temporary file and a rename.
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.head_file: Path = repo.head_file

    def read_head(self) -> Optional[str]:
        """
        Resolve HEAD to a commit id.

        Returns:
            Commit id or None if there are no commits yet

        Raises:
            CorruptObject: If HEAD does not hold a valid id
        """
        if not self.head_file.exists():
            return None

        content = self.head_file.read_text().strip()
        if not content or content == NULL_ID:
            return None

        if not is_valid_id(content):
            raise CorruptObject(f"HEAD does not contain a valid commit id: {content!r}")

        return content

    def update_head(self, commit_id: str) -> None:
        """
        Point HEAD at a commit.

        Args:
            commit_id: id of a stored commit

        Raises:
            ObjectNotFound: If the commit is not in the store
            CorruptObject: If the id names something other than a commit
        """
        self.repo.objects.get_typed(commit_id, Commit)
        self.write_head(commit_id)
        logger.debug("HEAD moved to %s", commit_id[:8])

    def write_head(self, value: str) -> None:
        """Atomically replace the HEAD file contents."""
        atomic_write(self.head_file, (value + '\n').encode())

    def reset_head(self) -> None:
        """Set HEAD to 'no commits yet'."""
        self.write_head(NULL_ID)
