"""Configuration dataclass for TBF fingerprinting."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict

from .collapse import MIN_TOLERANCE, clamp_tolerance

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration payload is malformed."""


@dataclass(slots=True)
class CollapseConfig:
    tolerance: float = MIN_TOLERANCE
    size_class: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.tolerance, bool) or not isinstance(self.tolerance, (int, float)):
            raise ConfigError(f"tolerance must be a number; received {self.tolerance!r}")
        if math.isnan(self.tolerance):
            raise ConfigError("tolerance must not be NaN.")
        if self.size_class is not None:
            if isinstance(self.size_class, bool) or not isinstance(self.size_class, int):
                raise ConfigError(f"size_class must be an integer; received {self.size_class!r}")
            if self.size_class <= 0:
                raise ConfigError("size_class must be positive.")

    @property
    def effective_tolerance(self) -> float:
        return clamp_tolerance(self.tolerance)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def dump(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(self.to_dict(), handle, indent=2)
        logger.info("Wrote collapse config to %s", path)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "CollapseConfig":
        if not isinstance(raw, dict):
            raise ConfigError("Config payload must be a JSON object.")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**raw)

    @classmethod
    def load(cls, path: Path) -> "CollapseConfig":
        with path.open("r", encoding="utf-8") as handle:
            try:
                raw = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
        config = cls.from_dict(raw)
        logger.info("Loaded collapse config from %s (tolerance=%s)", path, config.tolerance)
        return config
