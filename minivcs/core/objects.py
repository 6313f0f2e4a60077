"""Object model for minivcs: blobs, trees and commits."""

import time
from abc import ABC, abstractmethod
from bisect import insort
from typing import Optional, List
from .errors import CorruptObject
from .hash import hash_typed, ID_LENGTH
from minivcs.utils.fs import encode_path, decode_path

MODE_FILE = '100644'
MODE_EXECUTABLE = '100755'
MODE_TREE = '040000'

_RAW_ID_LENGTH = ID_LENGTH // 2


class VcsObject(ABC):
    """Base class for all stored objects."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to bytes.

        Returns:
            bytes: Serialized object data
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize object from bytes.

        Args:
            data: Serialized object data
        """
        pass

    @property
    def type(self) -> str:
        """
        Return object type name.

        Returns:
            str: Object type (blob, tree, commit)
        """
        return self.__class__.__name__.lower()

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        Objects are hashed with a header containing the type and size.
        Format: <type> <size>\\0<content>

        Returns:
            str: 64-character SHA-256 hash
        """
        if self._hash is None:
            self._hash = hash_typed(self.type, self.serialize())
        return self._hash

    @property
    def hash(self) -> str:
        """Object id of this object."""
        return self.compute_hash()


class Blob(VcsObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    @classmethod
    def from_file(cls, filepath: str) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


class TreeEntry:
    """
    Represents a single entry in a tree.

    Each entry contains:
    - mode: '100644' for a file, '100755' for an executable, '040000' for a subtree
    - type: Object type ('blob' or 'tree')
    - hash: id of the child object
    - name: Filename or directory name (a single path segment)
    """

    def __init__(self, mode: str, obj_type: str, obj_hash: str, name: str):
        self.mode = mode
        self.type = obj_type
        self.hash = obj_hash
        self.name = name

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.type} {self.hash[:7]} {self.name})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        return (self.mode, self.type, self.hash, self.name) == \
            (other.mode, other.type, other.hash, other.name)

    def __lt__(self, other: 'TreeEntry') -> bool:
        """Sort entries byte-wise by name for a canonical ordering."""
        return encode_path(self.name) < encode_path(other.name)


class Tree(VcsObject):
    """
    Represents directory structure.

    A tree contains entries pointing to blobs (files) and other trees
    (subdirectories). Entries are kept sorted so that identical directory
    contents always serialize to identical bytes.
    """

    def __init__(self):
        super().__init__()
        self.entries: List[TreeEntry] = []

    def add_entry(self, mode: str, obj_type: str, obj_hash: str, name: str) -> None:
        """
        Add entry to tree.

        Args:
            mode: File mode
            obj_type: Object type ('blob' or 'tree')
            obj_hash: Object hash
            name: Entry name
        """
        insort(self.entries, TreeEntry(mode, obj_type, obj_hash, name))
        self._hash = None

    def get_entry(self, name: str) -> Optional[TreeEntry]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def serialize(self) -> bytes:
        """
        Serialize tree.

        Format: <mode> <name>\\0<32-byte hash>, one record per entry,
        records ordered by name.

        Returns:
            bytes: Serialized tree data
        """
        result = bytearray()
        for entry in sorted(self.entries):
            result += f"{entry.mode} ".encode() + encode_path(entry.name) + b"\0"
            result += bytes.fromhex(entry.hash)
        return bytes(result)

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize tree.

        Args:
            data: Serialized tree data

        Raises:
            CorruptObject: If a record is truncated or malformed
        """
        self.entries = []
        pos = 0

        try:
            while pos < len(data):
                space_pos = data.index(b' ', pos)
                mode = data[pos:space_pos].decode()

                null_pos = data.index(b'\0', space_pos)
                name = decode_path(data[space_pos + 1:null_pos])

                hash_bytes = data[null_pos + 1:null_pos + 1 + _RAW_ID_LENGTH]
                if len(hash_bytes) != _RAW_ID_LENGTH:
                    raise CorruptObject(f"Truncated tree entry '{name}'")

                obj_type = 'tree' if mode == MODE_TREE else 'blob'
                self.entries.append(TreeEntry(mode, obj_type, hash_bytes.hex(), name))

                pos = null_pos + 1 + _RAW_ID_LENGTH
        except (ValueError, UnicodeDecodeError) as e:
            raise CorruptObject(f"Malformed tree data: {e}") from e

        self.entries.sort()
        self._hash = None

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Tree(entries={len(self.entries)})"


class Commit(VcsObject):
    """
    Represents a commit with metadata.

    A commit captures:
    - Snapshot of project (tree hash)
    - Parent commit for history (none for the first commit)
    - Author and committer info
    - Timestamp
    - Commit message
    """

    def __init__(self):
        super().__init__()
        self.tree: str = ''
        self.parent: Optional[str] = None
        self.author: str = ''
        self.author_time: int = 0
        self.author_timezone: str = '+0000'
        self.committer: str = ''
        self.committer_time: int = 0
        self.committer_timezone: str = '+0000'
        self.message: str = ''

    def serialize(self) -> bytes:
        """
        Serialize commit.

        Format:
        tree <tree-hash>
        parent <parent-hash>  (omitted for a root commit)
        author Name <email> <timestamp> <timezone>
        committer Name <email> <timestamp> <timezone>

        <commit message>

        Returns:
            bytes: Serialized commit data
        """
        lines = [f'tree {self.tree}']

        if self.parent:
            lines.append(f'parent {self.parent}')

        lines.append(f'author {self.author} {self.author_time} {self.author_timezone}')
        lines.append(f'committer {self.committer} {self.committer_time} {self.committer_timezone}')

        lines.append('')
        lines.append(self.message)

        return '\n'.join(lines).encode()

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize commit.

        Args:
            data: Serialized commit data

        Raises:
            CorruptObject: If the header is malformed or has no tree line
        """
        try:
            lines = data.decode().split('\n')
        except UnicodeDecodeError as e:
            raise CorruptObject(f"Commit is not valid UTF-8: {e}") from e

        self.tree = ''
        self.parent = None
        message_start = len(lines)

        try:
            for i, line in enumerate(lines):
                if not line:
                    message_start = i + 1
                    break

                if line.startswith('tree '):
                    self.tree = line[5:]

                elif line.startswith('parent '):
                    if self.parent is not None:
                        raise CorruptObject("Commit has more than one parent")
                    self.parent = line[7:]

                elif line.startswith('author '):
                    self.author, self.author_time, self.author_timezone = _parse_person(line[7:])

                elif line.startswith('committer '):
                    self.committer, self.committer_time, self.committer_timezone = _parse_person(line[10:])

                else:
                    raise CorruptObject(f"Unexpected commit header line: {line!r}")
        except ValueError as e:
            raise CorruptObject(f"Malformed commit header: {e}") from e

        if not self.tree:
            raise CorruptObject("Commit has no tree")

        self.message = '\n'.join(lines[message_start:])
        self._hash = None

    @classmethod
    def create(
        cls,
        tree_hash: str,
        parent_hash: Optional[str],
        author: str,
        message: str,
        committer: Optional[str] = None,
        timestamp: Optional[int] = None,
        timezone: str = '+0000'
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            tree_hash: Hash of tree object
            parent_hash: Hash of the parent commit, None for a root commit
            author: Author name and email (e.g., "Name <email>")
            message: Commit message
            committer: Committer name and email (defaults to author)
            timestamp: Unix timestamp (defaults to current time)
            timezone: Timezone offset (e.g., "+0000", "-0500")

        Returns:
            Commit: New commit object
        """
        commit = cls()
        commit.tree = tree_hash
        commit.parent = parent_hash
        commit.author = author
        commit.committer = committer or author
        commit.message = message

        if timestamp is None:
            timestamp = int(time.time())

        commit.author_time = timestamp
        commit.committer_time = timestamp
        commit.author_timezone = timezone
        commit.committer_timezone = timezone

        return commit

    def __repr__(self) -> str:
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"


def _parse_person(value: str):
    name, timestamp, timezone = value.rsplit(' ', 2)
    return name, int(timestamp), timezone


OBJECT_TYPES = {
    'blob': Blob,
    'tree': Tree,
    'commit': Commit,
}
