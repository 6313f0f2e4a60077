"""Repository layout and discovery for minivcs."""

import logging
from pathlib import Path
from typing import Optional, Union
from .config import Config, DEFAULT_REPO_CONFIG
from .errors import AlreadyInitialized, NotARepository
from .index import Index
from .object_store import ObjectStore

logger = logging.getLogger(__name__)

VCS_DIR_NAME = '.vcs'


def find_repository_root(path: Union[str, Path] = '.') -> Path:
    """
    Find the repository root by searching up the directory tree.

    Searches from the given path upwards until it finds a .vcs directory
    or reaches the filesystem root.

    Args:
        path: Starting path for search

    Returns:
        Path: Directory containing .vcs

    Raises:
        NotARepository: If no ancestor holds a repository
    """
    start = Path(path).resolve()
    current = start

    while True:
        if (current / VCS_DIR_NAME).is_dir():
            return current

        # Reached filesystem root
        if current == current.parent:
            raise NotARepository(start)

        current = current.parent


class Repository:
    """
    Represents a minivcs repository.

    A repository owns the .vcs directory and hands out the components that
    work on it: the object store, HEAD, the staging area and the commit
    engine. Every component receives the already-resolved root; none of
    them looks at the process working directory.
    """

    def __init__(self, path: Union[str, Path] = '.', verify_objects: bool = True):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
            verify_objects: Check content hashes when reading objects
        """
        self.work_tree = Path(path).resolve()
        self.vcs_dir = self.work_tree / VCS_DIR_NAME
        self.objects_dir = self.vcs_dir / 'objects'
        self.head_file = self.vcs_dir / 'HEAD'
        self.index_file = self.vcs_dir / 'index'
        self.config_file = self.vcs_dir / 'config'
        self.verify_objects = verify_objects

        # Built lazily to avoid circular imports
        self._objects = None
        self._ref_manager = None
        self._staging = None
        self._commit_engine = None

    @property
    def objects(self) -> ObjectStore:
        """Get ObjectStore instance."""
        if self._objects is None:
            self._objects = ObjectStore(self.objects_dir, verify=self.verify_objects)
        return self._objects

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def staging(self):
        """Get StagingArea instance."""
        if self._staging is None:
            from .staging import StagingArea
            self._staging = StagingArea(self)
        return self._staging

    @property
    def commits(self):
        """Get CommitEngine instance."""
        if self._commit_engine is None:
            from .commit_engine import CommitEngine
            self._commit_engine = CommitEngine(self)
        return self._commit_engine

    @property
    def config(self) -> Config:
        return Config(self.config_file)

    def load_index(self) -> Index:
        """Read the current index from disk."""
        return Index(self.index_file).load()

    def init(self) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .vcs directory structure:
        .vcs/
        ├── objects/       # Object database
        ├── HEAD           # Current commit (all zeros before the first commit)
        ├── index          # Staging area
        └── config         # Repository configuration

        Returns:
            Repository: self for method chaining

        Raises:
            AlreadyInitialized: If this directory or a parent is already a repository
        """
        try:
            existing = find_repository_root(self.work_tree)
        except NotARepository:
            existing = None

        if existing is not None:
            raise AlreadyInitialized(existing / VCS_DIR_NAME)

        self.work_tree.mkdir(parents=True, exist_ok=True)
        self.vcs_dir.mkdir()
        self.objects_dir.mkdir()

        self.refs.reset_head()
        Index(self.index_file).persist()
        self.config_file.write_text(DEFAULT_REPO_CONFIG)

        logger.info("Initialized empty repository in %s", self.vcs_dir)
        return self

    @classmethod
    def find_repository(cls, path: Union[str, Path] = '.') -> 'Repository':
        """
        Open the repository containing path.

        Raises:
            NotARepository: If path is not inside a repository
        """
        return cls(find_repository_root(path))

    def relative_path(self, path: Union[str, Path]) -> Optional[str]:
        """
        Express path relative to the work tree, '/'-separated.

        Relative inputs are taken relative to the work tree. Returns None
        when the path lies outside it.
        """
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.work_tree / candidate

        # Resolve the parent only so a symlinked file is tracked as itself
        if candidate.name in ('', '..'):
            resolved = candidate.resolve()
        else:
            resolved = candidate.parent.resolve() / candidate.name

        try:
            relative = resolved.relative_to(self.work_tree)
        except ValueError:
            return None

        if not relative.parts:
            return ''
        return relative.as_posix()

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
