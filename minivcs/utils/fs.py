"""Filesystem helpers shared by the object store, index and HEAD."""

import os
import tempfile
from pathlib import Path
from typing import Union


def atomic_write(path: Union[str, Path], data: bytes) -> None:
    """
    Replace the contents of path with data in a single rename.

    The data is written to a temporary file in the same directory, flushed
    to disk and renamed over the target, so readers see either the old
    contents or the new contents, never a partial write.

    Args:
        path: Destination file
        data: New file contents
    """
    path = Path(path)
    fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f'.tmp_{path.name}_')
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, str(path))
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def to_posix(path: Union[str, Path]) -> str:
    """Render a relative path with forward slashes, as stored in the index."""
    return Path(path).as_posix()



def encode_path(path: str) -> bytes:
    """
    Encode a path for the index or a tree record.

    Names that were not valid UTF-8 on disk arrive as surrogate escapes and
    are written back as their original bytes.
    """
    return path.encode('utf-8', 'surrogateescape')


def decode_path(data: bytes) -> str:
    return data.decode('utf-8', 'surrogateescape')
