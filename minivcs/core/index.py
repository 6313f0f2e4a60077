"""Index (staging area) file format."""

import hashlib
import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional
from .errors import CorruptIndex
from .objects import MODE_FILE, MODE_EXECUTABLE
from minivcs.utils.fs import atomic_write, encode_path, decode_path

logger = logging.getLogger(__name__)

SIGNATURE = b'DIRC'
VERSION = 2

# ctime, ctime_ns, mtime, mtime_ns, dev, ino, mode, uid, gid, size, id, flags
_ENTRY_FORMAT = '>IIIIIIIIII32sH'
_ENTRY_SIZE = struct.calcsize(_ENTRY_FORMAT)
_CHECKSUM_SIZE = 32
_U32 = 0xFFFFFFFF


@dataclass
class IndexEntry:
    """
    Represents a single entry in the index.

    Stores metadata about a staged file including timestamps,
    permissions, and the id of the blob holding its content.
    """
    ctime: int          # Creation time (seconds)
    ctime_ns: int       # Creation time (nanoseconds)
    mtime: int          # Modification time (seconds)
    mtime_ns: int       # Modification time (nanoseconds)
    dev: int            # Device ID
    ino: int            # Inode number
    mode: int           # File mode/permissions
    uid: int            # User ID
    gid: int            # Group ID
    size: int           # File size
    object_id: str      # Blob id of content
    flags: int          # Flags (includes name length)
    path: str           # File path, '/'-separated, relative to the root

    @property
    def tree_mode(self) -> str:
        """Mode string used for this file in a tree."""
        return MODE_EXECUTABLE if self.mode & 0o111 else MODE_FILE

    def __repr__(self) -> str:
        return f"IndexEntry({self.mode:o} {self.object_id[:7]} {self.path})"


class Index:
    """
    The staging area mapping of path -> blob id.

    The whole file is read on load and rewritten on persist; there is at
    most one entry per path (the last add wins).
    """

    def __init__(self, index_path: Optional[Path] = None):
        """
        Initialize empty index.

        Args:
            index_path: File backing this index, if any
        """
        self.index_path = Path(index_path) if index_path else None
        self.entries: Dict[str, IndexEntry] = {}
        self.version: int = VERSION

    def add_entry(
        self,
        path: str,
        object_id: str,
        mode: int = 0o100644,
        size: int = 0,
        mtime: int = 0,
        mtime_ns: int = 0,
        ctime: int = 0,
        ctime_ns: int = 0,
        dev: int = 0,
        ino: int = 0,
        uid: int = 0,
        gid: int = 0
    ) -> IndexEntry:
        """
        Add or update entry in index.

        Args:
            path: File path relative to repository root
            object_id: Blob id of file content
            mode: File mode/permissions
            size: File size in bytes
            mtime: Modification time (seconds)
            mtime_ns: Modification time (nanoseconds)
            ctime: Creation time (seconds)
            ctime_ns: Creation time (nanoseconds)
            dev: Device ID
            ino: Inode number
            uid: User ID
            gid: Group ID

        Returns:
            IndexEntry: The stored entry
        """
        flags = len(encode_path(path)) & 0xFFF

        entry = IndexEntry(
            ctime=ctime & _U32,
            ctime_ns=ctime_ns & _U32,
            mtime=mtime & _U32,
            mtime_ns=mtime_ns & _U32,
            dev=dev & _U32,
            ino=ino & _U32,
            mode=mode & _U32,
            uid=uid & _U32,
            gid=gid & _U32,
            size=size & _U32,
            object_id=object_id,
            flags=flags,
            path=path
        )

        self.entries[path] = entry
        return entry

    def remove_entry(self, path: str) -> bool:
        """
        Remove entry from index.

        Returns:
            True if the path was present
        """
        return self.entries.pop(path, None) is not None

    def get_entry(self, path: str) -> Optional[IndexEntry]:
        """Get entry by path."""
        return self.entries.get(path)

    def serialize(self) -> bytes:
        """
        Encode the index in binary form.

        Format:
        - Header: 'DIRC' + version (4 bytes) + entry count (4 bytes)
        - Entries: sorted by path, each with metadata + NUL-terminated path,
          padded to 8-byte alignment
        - Checksum: SHA-256 of everything before it
        """
        content = bytearray()

        content.extend(SIGNATURE)
        content.extend(struct.pack('>I', self.version))
        content.extend(struct.pack('>I', len(self.entries)))

        for path in sorted(self.entries.keys()):
            entry = self.entries[path]
            path_bytes = encode_path(entry.path)

            content.extend(struct.pack(
                _ENTRY_FORMAT,
                entry.ctime,
                entry.ctime_ns,
                entry.mtime,
                entry.mtime_ns,
                entry.dev,
                entry.ino,
                entry.mode,
                entry.uid,
                entry.gid,
                entry.size,
                bytes.fromhex(entry.object_id),
                entry.flags
            ))
            content.extend(path_bytes)
            content.extend(b'\x00')

            entry_len = _ENTRY_SIZE + len(path_bytes) + 1
            content.extend(b'\x00' * ((8 - (entry_len % 8)) % 8))

        content.extend(hashlib.sha256(content).digest())
        return bytes(content)

    def deserialize(self, data: bytes) -> None:
        """
        Decode a binary index, replacing the current entries.

        Raises:
            CorruptIndex: On a bad signature, checksum or truncated entry
        """
        if len(data) < 12 + _CHECKSUM_SIZE:
            raise CorruptIndex("Index file is truncated")

        content = data[:-_CHECKSUM_SIZE]
        if hashlib.sha256(content).digest() != data[-_CHECKSUM_SIZE:]:
            raise CorruptIndex("Index checksum mismatch")

        signature = content[0:4]
        if signature != SIGNATURE:
            raise CorruptIndex(f"Invalid index signature: {signature!r}")

        self.version = struct.unpack('>I', content[4:8])[0]
        entry_count = struct.unpack('>I', content[8:12])[0]

        entries: Dict[str, IndexEntry] = {}
        offset = 12

        try:
            for _ in range(entry_count):
                fields = struct.unpack(_ENTRY_FORMAT, content[offset:offset + _ENTRY_SIZE])
                offset += _ENTRY_SIZE

                path_end = content.index(b'\x00', offset)
                path_bytes = content[offset:path_end]
                path = decode_path(path_bytes)
                offset = path_end + 1

                entry_len = _ENTRY_SIZE + len(path_bytes) + 1
                offset += (8 - (entry_len % 8)) % 8

                entries[path] = IndexEntry(
                    ctime=fields[0],
                    ctime_ns=fields[1],
                    mtime=fields[2],
                    mtime_ns=fields[3],
                    dev=fields[4],
                    ino=fields[5],
                    mode=fields[6],
                    uid=fields[7],
                    gid=fields[8],
                    size=fields[9],
                    object_id=fields[10].hex(),
                    flags=fields[11],
                    path=path
                )
        except (struct.error, ValueError) as e:
            raise CorruptIndex(f"Malformed index entry: {e}") from e

        self.entries = entries

    def load(self) -> 'Index':
        """
        Read the index from its backing file.

        A missing file is an empty index.
        """
        if self.index_path is None or not self.index_path.exists():
            self.entries = {}
            return self

        self.deserialize(self.index_path.read_bytes())
        logger.debug("Loaded index with %d entries", len(self.entries))
        return self

    def persist(self) -> None:
        """Rewrite the full index file atomically."""
        if self.index_path is None:
            raise ValueError("Index has no backing file")

        atomic_write(self.index_path, self.serialize())
        logger.debug("Persisted index with %d entries", len(self.entries))

    def __contains__(self, path: str) -> bool:
        return path in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.entries))

    def __len__(self) -> int:
        """Number of entries in index."""
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Index(entries={len(self.entries)})"
