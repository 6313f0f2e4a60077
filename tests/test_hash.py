"""Hash utilities tests."""

import pytest
from minivcs.core.hash import hash_object, hash_typed, frame, is_valid_id, NULL_ID


def test_hash_object_empty():
    """Test hashing empty bytes."""
    result = hash_object(b'')
    assert result == 'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'


def test_hash_object_deterministic():
    """Test hash consistency for same input."""
    data = b'hello world'
    assert hash_object(data) == hash_object(data)


def test_hash_object_different_data():
    """Test different data produces different hashes."""
    assert hash_object(b'hello') != hash_object(b'world')


def test_hash_object_single_byte_difference():
    assert hash_object(b'hello') != hash_object(b'hellp')


def test_frame_header():
    assert frame('blob', b'hello') == b'blob 5\0hello'
    assert frame('tree', b'') == b'tree 0\0'


def test_hash_typed_distinguishes_kinds():
    """Same payload under different kinds gets different ids."""
    assert hash_typed('blob', b'data') != hash_typed('tree', b'data')
    assert hash_typed('blob', b'data') == hash_object(b'blob 4\0data')


def test_hash_typed_empty_payload():
    result = hash_typed('blob', b'')
    assert is_valid_id(result)


@pytest.mark.parametrize('value,expected', [
    ('a' * 64, True),
    (NULL_ID, True),
    ('A' * 64, False),
    ('a' * 63, False),
    ('g' * 64, False),
    ('', False),
    (None, False),
])
def test_is_valid_id(value, expected):
    assert is_valid_id(value) is expected
