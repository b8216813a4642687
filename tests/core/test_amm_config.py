from __future__ import annotations

import pytest

from normaldance_amm.core.config import DEFAULT_CONFIG, AMMConfig, load_config
from normaldance_amm.core.selection import select_algorithm
from normaldance_amm.state.pools import Algorithm, LiquidityPool


POOL = LiquidityPool(pool_id="ton-ndt", reserve_a=1000.0, reserve_b=42700.0)


def test_defaults() -> None:
    assert DEFAULT_CONFIG.to_dict() == {
        "volatility_threshold": 10.0,
        "price_impact_threshold": 5.0,
        "stability_window_ms": 300_000,
        "emergency_threshold": 20.0,
    }


def test_from_mapping_accepts_camel_case() -> None:
    config = AMMConfig.from_mapping({"volatilityThreshold": 8.0, "stabilityWindow": 60_000})
    assert config.volatility_threshold == 8.0
    assert config.stability_window_ms == 60_000
    assert config.emergency_threshold == 20.0


def test_from_mapping_accepts_snake_case() -> None:
    assert AMMConfig.from_mapping({"emergency_threshold": 30.0}).emergency_threshold == 30.0


def test_from_mapping_rejects_unknown_and_duplicate_keys() -> None:
    with pytest.raises(ValueError):
        AMMConfig.from_mapping({"feeRate": 0.01})
    with pytest.raises(ValueError):
        AMMConfig.from_mapping({"volatilityThreshold": 8.0, "volatility_threshold": 9.0})
    with pytest.raises(TypeError):
        AMMConfig.from_mapping([("volatilityThreshold", 8.0)])  # type: ignore[arg-type]


def test_thresholds_are_independent() -> None:
    config = AMMConfig(volatility_threshold=30.0)
    assert config.emergency_threshold == 20.0
    # Emergency fires first; the volatility branch is unreachable
    assert select_algorithm(25.0, 10.0, POOL, config) is Algorithm.BEAT_DROP
    assert select_algorithm(15.0, 10.0, POOL, config) is Algorithm.HARMONY


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValueError):
        AMMConfig(price_impact_threshold=-1.0)
    with pytest.raises(ValueError):
        AMMConfig(volatility_threshold=0.0)
    with pytest.raises(ValueError):
        AMMConfig(emergency_threshold=float("inf"))
    with pytest.raises(TypeError):
        AMMConfig(stability_window_ms=True)
    with pytest.raises(TypeError):
        AMMConfig(stability_window_ms=1.5)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        AMMConfig(stability_window_ms=-1)


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------

def test_load_flat_yaml(tmp_path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("volatilityThreshold: 12\nemergencyThreshold: 24\n", encoding="utf-8")
    config = load_config(path)
    assert config.volatility_threshold == 12
    assert config.emergency_threshold == 24


def test_load_nested_yaml(tmp_path) -> None:
    path = tmp_path / "app.yaml"
    path.write_text("amm:\n  stabilityWindow: 0\n  priceImpactThreshold: 2.5\n", encoding="utf-8")
    config = load_config(str(path))
    assert config.stability_window_ms == 0
    assert config.price_impact_threshold == 2.5


def test_load_empty_yaml_gives_defaults(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == DEFAULT_CONFIG


def test_load_non_mapping_yaml_rejected(tmp_path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(path)
