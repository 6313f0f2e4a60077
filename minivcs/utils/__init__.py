"""Utilities module for common helper functions.

This module contains:
- Atomic file replacement
- Path normalisation
"""

from minivcs.utils.fs import atomic_write, to_posix, encode_path, decode_path

__all__ = [
    'atomic_write', 'to_posix', 'encode_path', 'decode_path',
]
