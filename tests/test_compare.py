import pytest

from pensieve.compare import group_near_duplicates, hamming_distance, is_near_duplicate
from pensieve.config import CollapseConfig


def _blob(first: int) -> bytes:
    return bytes([first]) + bytes(15)


def test_hamming_distance_counts_bits():
    assert hamming_distance(b"\xff\x00", b"\x0f\x01") == 5
    assert hamming_distance(b"", b"") == 0


def test_hamming_distance_rejects_length_mismatch():
    with pytest.raises(ValueError):
        hamming_distance(b"\x00", b"\x00\x00")


def test_is_near_duplicate():
    assert is_near_duplicate(_blob(0xFF), _blob(0xFE), 0.05)
    assert not is_near_duplicate(_blob(0xFF), _blob(0x00), 0.05)
    assert not is_near_duplicate(b"\x00", b"\x00\x00", 0.05)


def test_group_near_duplicates_preserves_order():
    blobs = [_blob(0xFF), _blob(0x00), _blob(0xFE), bytearray(16)]
    groups = group_near_duplicates(blobs, CollapseConfig(tolerance=0.05))
    assert sorted(groups.values()) == [[0, 2], [1, 3]]


def test_group_near_duplicates_enforces_size_class():
    config = CollapseConfig(tolerance=0.05, size_class=16)
    with pytest.raises(ValueError, match="Blob 1"):
        group_near_duplicates([_blob(0xFF), b"\x00\x00"], config)
