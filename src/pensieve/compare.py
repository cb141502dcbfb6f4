"""Near-duplicate helpers built on TBF fingerprints."""

from __future__ import annotations

from typing import Dict, Iterable, List

import numpy as np

from .bits import BytesLike, as_bytes, bytes_to_bits
from .collapse import collapse
from .config import CollapseConfig


def hamming_distance(a: BytesLike, b: BytesLike) -> int:
    left, right = as_bytes(a), as_bytes(b)
    if len(left) != len(right):
        raise ValueError(f"Length mismatch: {len(left)} != {len(right)} bytes")
    return int(np.count_nonzero(bytes_to_bits(left) ^ bytes_to_bits(right)))


def is_near_duplicate(a: BytesLike, b: BytesLike, tolerance: float) -> bool:
    left, right = as_bytes(a), as_bytes(b)
    if len(left) != len(right):
        return False
    return collapse(left, tolerance) == collapse(right, tolerance)


def group_near_duplicates(blobs: Iterable[BytesLike], config: CollapseConfig) -> Dict[bytes, List[int]]:
    """Bucket blob indices by fingerprint.

    Buckets are keyed by the fingerprint and list indices in input order.
    """
    groups: Dict[bytes, List[int]] = {}
    tolerance = config.effective_tolerance
    for index, blob in enumerate(blobs):
        payload = as_bytes(blob)
        if config.size_class is not None and len(payload) != config.size_class:
            raise ValueError(
                f"Blob {index} is {len(payload)} bytes; expected size class {config.size_class}"
            )
        groups.setdefault(collapse(payload, tolerance), []).append(index)
    return groups
