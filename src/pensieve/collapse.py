"""Thresholded Bit Folding.

Maps a byte sequence to a fingerprint of the same length. Inputs whose bits
differ by less than the tolerance inside every chunk collapse to the same
fingerprint; a chunk whose ones count crosses its threshold changes it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .bits import BytesLike, as_bytes, bytes_to_bits, iter_chunks

logger = logging.getLogger(__name__)

MIN_TOLERANCE = 0.05
MAX_TOLERANCE = 0.25
FULL_WIDTH_BITS = 128
FULL_WIDTH_CHUNKS = 8
BITS_PER_SMALL_CHUNK = 16
OUTPUT_MASK = 0xAA


@dataclass(slots=True)
class CollapseTrace:
    """Intermediate values of a single collapse, ending with its output."""

    tolerance: float
    total_bits: int
    num_chunks: int
    chunk_size: int
    threshold: int
    chunk_sums: List[int] = field(default_factory=list)
    levels: List[int] = field(default_factory=list)
    output: bytes = b""

    @property
    def chunk_count(self) -> int:
        """Chunks actually produced, including a trailing remainder chunk."""
        return len(self.levels)

    @property
    def has_remainder(self) -> bool:
        return self.chunk_count > max(self.num_chunks, 1)


def clamp_tolerance(tolerance: float) -> float:
    """Clamp ``tolerance`` into [0.05, 0.25] and round it to single precision.

    ``NaN`` is not ordered against the bounds and passes through unchanged.
    """
    value = float(tolerance)
    if math.isnan(value):
        return value
    clamped = min(max(value, MIN_TOLERANCE), MAX_TOLERANCE)
    if clamped != value:
        logger.debug("Tolerance %r clamped to %r", tolerance, clamped)
    return float(np.float32(clamped))


def chunk_layout(total_bits: int) -> Tuple[int, int]:
    """Return ``(num_chunks, chunk_size)`` for an input of ``total_bits`` bits."""
    if total_bits >= FULL_WIDTH_BITS:
        num_chunks = FULL_WIDTH_CHUNKS
    else:
        # Zero for a single byte; the whole input then forms one chunk.
        num_chunks = total_bits // BITS_PER_SMALL_CHUNK
    chunk_size = total_bits // max(num_chunks, 1)
    return num_chunks, chunk_size


def chunk_threshold(tolerance: float, chunk_size: int) -> int:
    """Minimum ones count for a chunk of nominal size ``chunk_size`` to reach level 1."""
    clamped = clamp_tolerance(tolerance)
    if math.isnan(clamped):
        # A NaN threshold saturates to zero, so every chunk reaches level 1.
        return 0
    product = np.float32(clamped) * np.float32(chunk_size)
    return int(np.ceil(product))


def _synthesize(levels: List[int], length: int) -> bytes:
    positions = np.arange(length)
    base = np.asarray(levels, dtype=np.uint8)[positions % len(levels)] * np.uint8(255)
    mask = ((OUTPUT_MASK + positions) % 256).astype(np.uint8)
    return (base ^ mask).tobytes()


def trace_collapse(data: BytesLike, tolerance: float) -> CollapseTrace:
    payload = as_bytes(data)
    total_bits = len(payload) * 8
    clamped = clamp_tolerance(tolerance)

    if total_bits < 8:
        # Only reachable for empty input since lengths are whole bytes.
        logger.debug("Degenerate input of %d bits", total_bits)
        return CollapseTrace(
            tolerance=clamped,
            total_bits=total_bits,
            num_chunks=0,
            chunk_size=0,
            threshold=0,
            output=bytes(b ^ OUTPUT_MASK for b in payload),
        )

    bits = bytes_to_bits(payload)
    num_chunks, chunk_size = chunk_layout(total_bits)
    # A shorter remainder chunk is still judged against the nominal size.
    threshold = chunk_threshold(clamped, chunk_size)

    chunk_sums: List[int] = []
    levels: List[int] = []
    for chunk in iter_chunks(bits, chunk_size):
        ones = int(chunk.sum())
        chunk_sums.append(ones)
        levels.append(1 if ones >= threshold else 0)

    return CollapseTrace(
        tolerance=clamped,
        total_bits=total_bits,
        num_chunks=num_chunks,
        chunk_size=chunk_size,
        threshold=threshold,
        chunk_sums=chunk_sums,
        levels=levels,
        output=_synthesize(levels, len(payload)),
    )


def collapse(data: BytesLike, tolerance: float) -> bytes:
    """Return the TBF fingerprint of ``data``; always the same length as ``data``."""
    return trace_collapse(data, tolerance).output


def collapse_levels(data: BytesLike, tolerance: float) -> List[int]:
    """Per-chunk levels; equal-length inputs collapse together iff these match."""
    return trace_collapse(data, tolerance).levels
