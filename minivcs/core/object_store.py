"""Content-addressed object store for minivcs."""

import logging
import zlib
from pathlib import Path
from typing import Iterator, Tuple, Type, TypeVar
from .errors import ObjectNotFound, CorruptObject
from .hash import frame, hash_object, is_valid_id
from .objects import VcsObject, OBJECT_TYPES
from minivcs.utils.fs import atomic_write

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=VcsObject)


class ObjectStore:
    """
    Loose-object database under .vcs/objects.

    Objects are stored compressed with zlib in subdirectories named by the
    first 2 characters of the id, with the remaining 62 characters as the
    filename. The stored bytes are the framed object:
    <type> <size>\\0<content>

    The store is append-only: writing the same object twice is a no-op.
    """

    def __init__(self, objects_dir: Path, verify: bool = True):
        """
        Initialize object store.

        Args:
            objects_dir: Directory holding the loose objects
            verify: Recompute the id of every object read and compare it
                with the requested id
        """
        self.objects_dir = Path(objects_dir)
        self.verify = verify

    def object_path(self, object_id: str) -> Path:
        """
        Get filesystem path for an object.

        Example: ab/cdef0123... for id abcdef0123...
        """
        return self.objects_dir / object_id[:2] / object_id[2:]

    def put(self, obj: VcsObject) -> str:
        """
        Write object to the store.

        Args:
            obj: Object to write

        Returns:
            str: id of the object
        """
        return self.put_raw(obj.type, obj.serialize())

    def put_raw(self, obj_type: str, data: bytes) -> str:
        """
        Write a payload of the given type to the store.

        Args:
            obj_type: 'blob', 'tree' or 'commit'
            data: Object payload

        Returns:
            str: id of the object
        """
        if obj_type not in OBJECT_TYPES:
            raise ValueError(f"Unknown object type: {obj_type}")

        content = frame(obj_type, data)
        object_id = hash_object(content)

        if self.contains(object_id):
            logger.debug("Object %s already in store, skipped", object_id[:8])
            return object_id

        path = self.object_path(object_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        atomic_write(path, zlib.compress(content))
        logger.debug("Stored %s %s (%d bytes)", obj_type, object_id[:8], len(data))

        return object_id

    def get_raw(self, object_id: str) -> Tuple[str, bytes]:
        """
        Read an object's type and payload.

        Args:
            object_id: 64-character object id

        Returns:
            (type, payload)

        Raises:
            ObjectNotFound: If no object with that id is stored
            CorruptObject: If the stored bytes are damaged
        """
        if not is_valid_id(object_id):
            raise ObjectNotFound(object_id)

        path = self.object_path(object_id)
        if not path.is_file():
            raise ObjectNotFound(object_id)

        try:
            content = zlib.decompress(path.read_bytes())
        except zlib.error as e:
            raise CorruptObject(f"Object {object_id} cannot be decompressed: {e}") from e

        if self.verify and hash_object(content) != object_id:
            raise CorruptObject(f"Object {object_id} does not match its content hash")

        try:
            null_idx = content.index(b'\0')
            obj_type, size_str = content[:null_idx].decode().split(' ', 1)
            size = int(size_str)
        except (ValueError, UnicodeDecodeError) as e:
            raise CorruptObject(f"Invalid header in object {object_id}") from e

        data = content[null_idx + 1:]
        if len(data) != size:
            raise CorruptObject(
                f"Object {object_id} size mismatch: expected {size}, got {len(data)}"
            )

        if obj_type not in OBJECT_TYPES:
            raise CorruptObject(f"Unknown object type in {object_id}: {obj_type}")

        return obj_type, data

    def get(self, object_id: str) -> VcsObject:
        """
        Read object from the store.

        Returns:
            VcsObject: Deserialized object (Blob, Tree, or Commit)
        """
        obj_type, data = self.get_raw(object_id)
        obj = OBJECT_TYPES[obj_type]()
        obj.deserialize(data)
        return obj

    def get_typed(self, object_id: str, cls: Type[T]) -> T:
        """
        Read an object that must be of a particular kind.

        Raises:
            CorruptObject: If the stored object is of a different kind
        """
        obj = self.get(object_id)
        if not isinstance(obj, cls):
            raise CorruptObject(
                f"Object {object_id} is a {obj.type}, expected {cls.__name__.lower()}"
            )
        return obj

    def contains(self, object_id: str) -> bool:
        """Check if object exists without reading it."""
        return is_valid_id(object_id) and self.object_path(object_id).is_file()

    def __contains__(self, object_id: str) -> bool:
        return self.contains(object_id)

    def __iter__(self) -> Iterator[str]:
        """Iterate over the ids of all stored objects."""
        if not self.objects_dir.exists():
            return
        for shard in sorted(self.objects_dir.iterdir()):
            if not shard.is_dir() or len(shard.name) != 2:
                continue
            for obj_file in sorted(shard.iterdir()):
                object_id = shard.name + obj_file.name
                if is_valid_id(object_id):
                    yield object_id

    def count(self) -> int:
        """Number of stored objects."""
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"ObjectStore(path={self.objects_dir})"
