"""Working tree status: compare HEAD, the index and the working tree."""

from dataclasses import dataclass, field
from typing import Dict, List
from minivcs.core.objects import Blob
from minivcs.core.repository import VCS_DIR_NAME
from minivcs.utils.fs import to_posix


@dataclass
class StatusReport:
    """Paths grouped by how they differ between HEAD, index and working tree."""
    staged_new: List[str] = field(default_factory=list)
    staged_modified: List[str] = field(default_factory=list)
    staged_deleted: List[str] = field(default_factory=list)
    unstaged_modified: List[str] = field(default_factory=list)
    unstaged_deleted: List[str] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)

    @property
    def has_staged(self) -> bool:
        return bool(self.staged_new or self.staged_modified or self.staged_deleted)

    @property
    def has_unstaged(self) -> bool:
        return bool(self.unstaged_modified or self.unstaged_deleted)

    @property
    def is_clean(self) -> bool:
        return not (self.has_staged or self.has_unstaged or self.untracked)


def working_files(repo) -> Dict[str, str]:
    """
    Hash every file in the working tree.

    Returns:
        Map of '/'-separated path to the blob id its content would have
    """
    files = {}

    for path in repo.work_tree.rglob('*'):
        if not path.is_file():
            continue
        rel_path = path.relative_to(repo.work_tree)
        if rel_path.parts[0] == VCS_DIR_NAME:
            continue
        files[to_posix(rel_path)] = Blob.from_file(str(path)).hash

    return files


def compute_status(repo) -> StatusReport:
    """
    Compute the status of a repository.

    Staged changes compare the index with the HEAD commit; unstaged changes
    compare the working tree with the index. Every list is sorted.
    """
    head_files = {path: blob_id for path, (_, blob_id) in repo.commits.head_files().items()}
    index_files = {path: entry.object_id for path, entry in repo.load_index().entries.items()}
    work_files = working_files(repo)

    report = StatusReport()

    for path, index_id in index_files.items():
        if path not in head_files:
            report.staged_new.append(path)
        elif head_files[path] != index_id:
            report.staged_modified.append(path)

    for path in head_files:
        if path not in index_files:
            report.staged_deleted.append(path)

    for path, work_id in work_files.items():
        if path in index_files:
            if index_files[path] != work_id:
                report.unstaged_modified.append(path)
        else:
            report.untracked.append(path)

    for path in index_files:
        if path not in work_files:
            report.unstaged_deleted.append(path)

    for paths in (report.staged_new, report.staged_modified, report.staged_deleted,
                  report.unstaged_modified, report.unstaged_deleted, report.untracked):
        paths.sort()

    return report
