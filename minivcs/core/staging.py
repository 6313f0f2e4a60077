"""Staging area operations: add and remove paths from the index."""

import logging
from pathlib import Path
from typing import List, Union
from .errors import PathOutsideRepository, PathNotTracked, InvalidPathLayout
from .index import Index
from .objects import Blob
from .repository import VCS_DIR_NAME
from minivcs.utils.fs import to_posix

logger = logging.getLogger(__name__)


class StagingArea:
    """
    Records what will go into the next commit.

    Every mutation loads the index, applies the change and persists the
    whole index again. Blobs are always written to the object store before
    the index refers to them.
    """

    def __init__(self, repo):
        self.repo = repo

    def _relative(self, path: Union[str, Path]) -> str:
        rel = self.repo.relative_path(path)
        if rel is None:
            raise PathOutsideRepository(str(path))
        if rel == VCS_DIR_NAME or rel.startswith(VCS_DIR_NAME + '/'):
            raise PathOutsideRepository(str(path))
        return rel

    def stage(self, path: Union[str, Path], contents: bytes, mode: int = 0o100644) -> str:
        """
        Stage contents under path without reading the working tree.

        Args:
            path: Path relative to the repository root (or absolute inside it)
            contents: File contents to record
            mode: File mode recorded in the index

        Returns:
            str: Blob id of the staged contents

        Raises:
            PathOutsideRepository: If path escapes the repository root
        """
        rel = self._relative(path)
        if not rel:
            raise InvalidPathLayout(str(path), "path names the repository root")

        blob_id = self.repo.objects.put(Blob(contents))

        index = self.repo.load_index()
        index.add_entry(rel, blob_id, mode=mode, size=len(contents))
        index.persist()

        logger.debug("Staged %s as %s", rel, blob_id[:8])
        return blob_id

    def add(self, path: Union[str, Path]) -> List[str]:
        """
        Stage a working-tree file, or every file under a directory.

        Args:
            path: File or directory, relative to the root or absolute

        Returns:
            List of staged paths

        Raises:
            FileNotFoundError: If path does not exist
            PathOutsideRepository: If path escapes the repository root
        """
        rel = self._relative(path)
        full_path = self.repo.work_tree / rel if rel else self.repo.work_tree

        if full_path.is_dir():
            return self.stage_directory(path)
        return [self.stage_file(path)]

    def stage_file(self, path: Union[str, Path]) -> str:
        """
        Stage a single working-tree file.

        Returns:
            str: Path of the staged file, relative to the root
        """
        rel = self._relative(path)
        full_path = self.repo.work_tree / rel

        if not rel or not full_path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        index = self.repo.load_index()
        self._stage_into(index, full_path, rel)
        index.persist()
        return rel

    def stage_directory(self, path: Union[str, Path]) -> List[str]:
        """
        Stage every regular file below a directory.

        The .vcs directory is never descended into.

        Returns:
            List of staged paths, sorted
        """
        rel = self._relative(path)
        root = self.repo.work_tree / rel if rel else self.repo.work_tree

        if not root.is_dir():
            raise FileNotFoundError(f"Directory not found: {path}")

        index = self.repo.load_index()
        staged = []

        for file_path in sorted(root.rglob('*')):
            if not file_path.is_file():
                continue
            file_rel = to_posix(file_path.relative_to(self.repo.work_tree))
            if file_rel.split('/')[0] == VCS_DIR_NAME:
                continue
            self._stage_into(index, file_path, file_rel)
            staged.append(file_rel)

        if staged:
            index.persist()
        return staged

    def _stage_into(self, index: Index, full_path: Path, rel: str) -> None:
        blob_id = self.repo.objects.put(Blob.from_file(str(full_path)))
        stat = full_path.stat()

        index.add_entry(
            path=rel,
            object_id=blob_id,
            mode=stat.st_mode,
            size=stat.st_size,
            mtime=int(stat.st_mtime),
            mtime_ns=stat.st_mtime_ns % 1_000_000_000,
            ctime=int(stat.st_ctime),
            ctime_ns=stat.st_ctime_ns % 1_000_000_000,
            dev=stat.st_dev,
            ino=stat.st_ino,
            uid=stat.st_uid,
            gid=stat.st_gid
        )
        logger.debug("Staged %s as %s", rel, blob_id[:8])

    def unstage(self, path: Union[str, Path], remove_working_file: bool = True) -> bool:
        """
        Remove a path from the index.

        The working-tree file is deleted only if remove_working_file is set
        and the path is tracked by the HEAD commit; a file that was staged
        but never committed stays on disk.

        Args:
            path: Path relative to the root, or absolute inside it
            remove_working_file: Allow deleting the working-tree file

        Returns:
            True if the working-tree file was deleted

        Raises:
            PathNotTracked: If path is not in the index
        """
        rel = self._relative(path)

        index = self.repo.load_index()
        if rel not in index:
            raise PathNotTracked(rel)

        index.remove_entry(rel)
        index.persist()
        logger.debug("Unstaged %s", rel)

        if not remove_working_file:
            return False

        full_path = self.repo.work_tree / rel
        if rel in self.repo.commits.head_files() and full_path.is_file():
            full_path.unlink()
            logger.debug("Removed %s from working tree", rel)
            return True

        return False
