"""Error types raised by the minivcs core.

Every failure the core can report has its own class so callers (the CLI in
particular) can map each one to a fixed message without parsing text.
"""


class VcsError(Exception):
    """Base class for all minivcs errors."""


class ObjectNotFound(VcsError):
    """Raised when no object with the requested id exists in the store."""

    def __init__(self, object_id: str):
        self.object_id = object_id
        super().__init__(f"Object {object_id} not found")


class CorruptObject(VcsError):
    """Raised when stored data cannot be trusted (bad header, hash mismatch, wrong kind)."""


class CorruptIndex(VcsError):
    """Raised when the index file fails its signature or checksum check."""


class InvalidPathLayout(VcsError):
    """Raised when staged paths cannot form a tree.

    Typical cause: the same path staged both as a file and as the parent
    directory of another staged file.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path layout at '{path}': {reason}")


class PathOutsideRepository(VcsError):
    """Raised when a path resolves outside the repository's working tree."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path '{path}' is outside the repository")


class PathNotTracked(VcsError):
    """Raised when removing a path that is not in the index."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path '{path}' is not tracked")


class NothingToCommit(VcsError):
    """Raised when a commit would record no change."""


class EmptyCommitMessage(VcsError):
    """Raised when a commit is attempted without a message."""


class AlreadyInitialized(VcsError):
    """Raised by init when the directory is already inside a repository."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Repository already exists at {path}")


class NotARepository(VcsError):
    """Raised when no repository marker is found from the starting directory upwards."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Not a repository (or any parent): {path}")
