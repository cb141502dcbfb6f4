"""Pensieve: Thresholded Bit Folding fingerprints."""

from .collapse import (
    CollapseTrace,
    chunk_layout,
    chunk_threshold,
    clamp_tolerance,
    collapse,
    collapse_levels,
    trace_collapse,
)
from .compare import group_near_duplicates, hamming_distance, is_near_duplicate
from .config import CollapseConfig, ConfigError

__all__ = [
    "CollapseConfig",
    "CollapseTrace",
    "ConfigError",
    "chunk_layout",
    "chunk_threshold",
    "clamp_tolerance",
    "collapse",
    "collapse_levels",
    "group_near_duplicates",
    "hamming_distance",
    "is_near_duplicate",
    "trace_collapse",
]
