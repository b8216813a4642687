"""
AMM configuration.

Four thresholds, fixed at engine construction. Values may come from code,
from a mapping (snake_case or the web app's camelCase keys), or from a YAML
file.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Union

import yaml


logger = logging.getLogger(__name__)

# camelCase keys used by the web app's config objects
_CAMEL_CASE_KEYS = {
    "volatilityThreshold": "volatility_threshold",
    "priceImpactThreshold": "price_impact_threshold",
    "stabilityWindow": "stability_window_ms",
    "emergencyThreshold": "emergency_threshold",
}


@dataclass(frozen=True)
class AMMConfig:
    # Percent volatility above which MIXED is used (and the fee surcharge applies)
    volatility_threshold: float = 10.0
    # Percent estimated impact above which MIXED is used
    price_impact_threshold: float = 5.0
    # Minimum dwell time (ms) before de-escalating to a less stabilizing algorithm
    stability_window_ms: int = 300_000
    # Percent volatility above which BEAT_DROP takes over
    emergency_threshold: float = 20.0

    def __post_init__(self) -> None:
        for name, val in (
            ("volatility_threshold", self.volatility_threshold),
            ("price_impact_threshold", self.price_impact_threshold),
            ("emergency_threshold", self.emergency_threshold),
        ):
            if not isinstance(val, (int, float)) or isinstance(val, bool):
                raise TypeError(f"{name} must be a number")
            if not math.isfinite(val) or val < 0:
                raise ValueError(f"{name} must be finite and non-negative: {val}")
        if not isinstance(self.stability_window_ms, int) or isinstance(self.stability_window_ms, bool):
            raise TypeError("stability_window_ms must be an int")
        if self.stability_window_ms < 0:
            raise ValueError(f"stability_window_ms must be non-negative: {self.stability_window_ms}")
        if self.volatility_threshold <= 0:
            # MIXED blend weight divides by this
            raise ValueError(f"volatility_threshold must be positive: {self.volatility_threshold}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AMMConfig":
        """Build a config from overrides; missing keys keep their defaults."""
        if not isinstance(data, Mapping):
            raise TypeError("config must be a mapping")
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name not in known:
                raise ValueError(f"unknown AMM config key: {key!r}")
            if name in kwargs:
                raise ValueError(f"duplicate AMM config key: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CONFIG = AMMConfig()


def load_config(path: Union[str, Path]) -> AMMConfig:
    """
    Load an `AMMConfig` from a YAML file.

    The file is either a flat mapping of thresholds or has them under a
    top-level `amm:` key. An empty file yields the defaults.
    """
    path = Path(path)
    obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    if obj is None:
        obj = {}
    if not isinstance(obj, Mapping):
        raise TypeError(f"config YAML must be a mapping: {path}")
    if "amm" in obj:
        obj = obj["amm"] or {}
    config = AMMConfig.from_mapping(obj)
    logger.debug("loaded AMM config from %s: %s", path, config)
    return config
