import json
from pathlib import Path

import pytest

from pensieve.collapse import clamp_tolerance
from pensieve.config import CollapseConfig, ConfigError


def test_config_roundtrip(tmp_path: Path):
    path = tmp_path / "nested" / "collapse.json"
    CollapseConfig(tolerance=0.125, size_class=16).dump(path)
    loaded = CollapseConfig.load(path)
    assert loaded.tolerance == 0.125
    assert loaded.size_class == 16


def test_defaults():
    config = CollapseConfig.from_dict({})
    assert config.tolerance == 0.05
    assert config.size_class is None


def test_out_of_band_tolerance_is_kept_and_clamped_on_use():
    config = CollapseConfig(tolerance=0.9)
    assert config.tolerance == 0.9
    assert config.effective_tolerance == clamp_tolerance(0.25)


@pytest.mark.parametrize(
    "raw",
    [
        {"tolerance": "high"},
        {"tolerance": True},
        {"tolerance": float("nan")},
        {"size_class": 0},
        {"size_class": 2.5},
        {"chunks": 8},
    ],
)
def test_invalid_payloads_raise(raw):
    with pytest.raises(ConfigError):
        CollapseConfig.from_dict(raw)


def test_non_object_payload_raises(tmp_path: Path):
    path = tmp_path / "collapse.json"
    path.write_text(json.dumps([0.1]), encoding="utf-8")
    with pytest.raises(ConfigError):
        CollapseConfig.load(path)


def test_invalid_json_raises(tmp_path: Path):
    path = tmp_path / "collapse.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        CollapseConfig.load(path)
