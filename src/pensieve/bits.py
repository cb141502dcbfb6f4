"""Bit extraction and chunking helpers."""

from __future__ import annotations

from typing import Iterator, Union

import numpy as np

BytesLike = Union[bytes, bytearray, memoryview]


def as_bytes(data: BytesLike | list[int] | tuple[int, ...]) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, int):
        raise TypeError(f"Expected a byte sequence; received int {data!r}")
    return bytes(data)


def bytes_to_bits(data: BytesLike) -> np.ndarray:
    """Unpack ``data`` into a flat uint8 array, most significant bit first."""
    arr = np.frombuffer(as_bytes(data), dtype=np.uint8)
    return np.unpackbits(arr)


def iter_chunks(bits: np.ndarray, chunk_size: int) -> Iterator[np.ndarray]:
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive.")
    for start in range(0, len(bits), chunk_size):
        # The final slice may be shorter than chunk_size.
        yield bits[start : start + chunk_size]
