"""Create commits from the index and walk commit history."""

import logging
from typing import Dict, Iterator, Optional, Tuple
from .errors import CorruptObject, EmptyCommitMessage, NothingToCommit
from .objects import Commit, Tree
from .tree_builder import TreeBuilder, flatten_tree

logger = logging.getLogger(__name__)


class CommitEngine:
    """
    Turns the staged index into a commit and advances HEAD.

    Write order is blobs (already stored by add), then trees, then the
    commit, then HEAD, so nothing on disk ever refers to a missing object.
    """

    def __init__(self, repo):
        self.repo = repo

    def commit(
        self,
        message: str,
        author: Optional[str] = None,
        timestamp: Optional[int] = None
    ) -> str:
        """
        Record the index as a new commit.

        Args:
            message: Commit message
            author: "Name <email>"; read from config when omitted
            timestamp: Unix timestamp; current time when omitted

        Returns:
            str: id of the new commit

        Raises:
            EmptyCommitMessage: If message is blank
            NothingToCommit: If the index is empty with no parent, or the
                tree would be identical to the parent's
        """
        if not message or not message.strip():
            raise EmptyCommitMessage("Please enter a commit message.")

        index = self.repo.load_index()
        parent = self.repo.refs.read_head()

        if len(index) == 0 and parent is None:
            raise NothingToCommit("No changes added to the commit")

        tree_id = TreeBuilder(self.repo.objects).build(index.entries)

        if parent is not None:
            parent_commit = self.repo.objects.get_typed(parent, Commit)
            if parent_commit.tree == tree_id:
                raise NothingToCommit("No changes added to the commit")

        if author is None:
            author = self.repo.config.get_author()

        new_commit = Commit.create(
            tree_hash=tree_id,
            parent_hash=parent,
            author=author,
            message=message,
            timestamp=timestamp
        )
        commit_id = self.repo.objects.put(new_commit)
        self.repo.refs.update_head(commit_id)

        logger.info("Created commit %s (tree %s)", commit_id[:8], tree_id[:8])
        return commit_id

    def read_commit(self, commit_id: str) -> Commit:
        """Read a commit, checking that it names a stored tree."""
        commit = self.repo.objects.get_typed(commit_id, Commit)
        self.repo.objects.get_typed(commit.tree, Tree)
        return commit

    def history(self, start: Optional[str] = None) -> Iterator[Tuple[str, Commit]]:
        """
        Walk commits from start (HEAD by default) back to the root.

        Yields:
            (commit id, Commit) pairs, newest first

        Raises:
            CorruptObject: If the parent chain loops back on itself
        """
        current = start if start is not None else self.repo.refs.read_head()
        seen = set()

        while current is not None:
            if current in seen:
                raise CorruptObject(f"Commit history contains a cycle at {current}")
            seen.add(current)

            commit = self.read_commit(current)
            yield current, commit
            current = commit.parent

    def head_files(self) -> Dict[str, Tuple[str, str]]:
        """
        Files recorded in the HEAD commit.

        Returns:
            Map of path to (mode, blob id); empty before the first commit
        """
        head = self.repo.refs.read_head()
        if head is None:
            return {}
        return flatten_tree(self.repo.objects, self.read_commit(head).tree)
