"""Restore single files from a commit into the working tree."""

import logging
import os
from pathlib import Path
from typing import Optional, Union
from minivcs.core.errors import InvalidPathLayout, ObjectNotFound, PathOutsideRepository
from minivcs.core.objects import Blob, MODE_EXECUTABLE
from minivcs.core.repository import VCS_DIR_NAME
from minivcs.core.tree_builder import lookup_path
from minivcs.utils.fs import atomic_write

logger = logging.getLogger(__name__)


def resolve_commit(repo, commit_id: Optional[str] = None) -> Optional[str]:
    """
    Pick the commit to read files from.

    Args:
        repo: Repository instance
        commit_id: Full commit id, or None for HEAD

    Returns:
        The commit id, or None when HEAD has no commits yet

    Raises:
        ObjectNotFound: If commit_id does not name a stored commit
    """
    if commit_id is None:
        return repo.refs.read_head()

    if not repo.objects.contains(commit_id):
        raise ObjectNotFound(commit_id)

    obj_type, _ = repo.objects.get_raw(commit_id)
    if obj_type != 'commit':
        raise ObjectNotFound(commit_id)

    return commit_id


def checkout_file(repo, path: Union[str, Path], commit_id: Optional[str] = None) -> bool:
    """
    Overwrite a working-tree file with its version from a commit.

    The index is left alone, so the restored file shows up as an unstaged
    change when it differs from what is staged. A path the commit does not
    record is deleted from the working tree.

    Args:
        repo: Repository instance
        path: File path, relative to the root or absolute inside it
        commit_id: Commit to read from; HEAD when omitted

    Returns:
        True if the file was written, False if the commit does not have it

    Raises:
        ObjectNotFound: If commit_id does not name a stored commit
        PathOutsideRepository: If path escapes the repository root
        InvalidPathLayout: If path names a directory
    """
    rel = repo.relative_path(path)
    if rel is None or rel.split('/')[0] == VCS_DIR_NAME:
        raise PathOutsideRepository(str(path))
    if not rel:
        raise InvalidPathLayout(str(path), "path names the repository root")

    source = resolve_commit(repo, commit_id)

    entry = None
    if source is not None:
        tree_id = repo.commits.read_commit(source).tree
        entry = lookup_path(repo.objects, tree_id, rel)

    full_path = repo.work_tree / rel

    if entry is None:
        if full_path.is_file():
            full_path.unlink()
            logger.debug("Removed %s, not recorded in %s", rel, source)
        return False

    if entry.type == 'tree' or full_path.is_dir():
        raise InvalidPathLayout(rel, "names a directory, not a file")

    blob = repo.objects.get_typed(entry.hash, Blob)
    full_path.parent.mkdir(parents=True, exist_ok=True)
    atomic_write(full_path, blob.data)
    os.chmod(full_path, 0o755 if entry.mode == MODE_EXECUTABLE else 0o644)

    logger.debug("Restored %s from %s", rel, source[:8])
    return True
