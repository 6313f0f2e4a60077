"""Hash utilities for minivcs."""

import hashlib

ID_LENGTH = 64
NULL_ID = '0' * ID_LENGTH


def hash_object(data: bytes) -> str:
    """
    Compute SHA-256 hash of data.

    Args:
        data: Bytes to hash

    Returns:
        64-character hex string
    """
    return hashlib.sha256(data).hexdigest()


def frame(obj_type: str, data: bytes) -> bytes:
    """
    Prefix data with its object header.

    Format: <type> <size>\\0<content>
    """
    return f"{obj_type} {len(data)}\0".encode() + data


def hash_typed(obj_type: str, data: bytes) -> str:
    """
    Compute the object id of a payload of the given type.

    The type tag is part of the hashed bytes, so a blob and a tree with
    identical payloads get different ids.

    Args:
        obj_type: 'blob', 'tree' or 'commit'
        data: Object payload

    Returns:
        64-character hex string
    """
    return hash_object(frame(obj_type, data))


def is_valid_id(value: str) -> bool:
    """Check that value looks like an object id."""
    if not isinstance(value, str) or len(value) != ID_LENGTH:
        return False
    return all(c in '0123456789abcdef' for c in value)
