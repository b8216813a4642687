from __future__ import annotations

import pytest

from normaldance_amm.core.volatility import VOLATILITY_WINDOW, estimate_volatility, volatility_of
from normaldance_amm.state.pools import LiquidityPool, PricePoint


def _pool_with_prices(prices: list[float]) -> LiquidityPool:
    history = tuple(PricePoint(timestamp=i, price=p, volume=1.0) for i, p in enumerate(prices))
    return LiquidityPool(pool_id="ton-ndt", reserve_a=1000.0, reserve_b=42700.0, price_history=history)


def test_empty_history_has_no_volatility() -> None:
    assert estimate_volatility(_pool_with_prices([])) == 0.0


def test_single_point_has_no_volatility() -> None:
    assert estimate_volatility(_pool_with_prices([42.7])) == 0.0


def test_flat_prices_have_zero_volatility() -> None:
    assert estimate_volatility(_pool_with_prices([42.7, 42.7, 42.7])) == 0.0


def test_population_stddev_over_mean() -> None:
    # mean 100, population stddev 10
    assert estimate_volatility(_pool_with_prices([90.0, 110.0])) == pytest.approx(10.0)


def test_only_recent_window_is_used() -> None:
    old = [1000.0, 1.0, 500.0, 3.0, 750.0]
    recent = [100.0] * VOLATILITY_WINDOW
    assert estimate_volatility(_pool_with_prices(old + recent)) == 0.0


def test_short_history_uses_all_points() -> None:
    # 5 of each: mean 100, stddev 5
    prices = [95.0, 105.0] * 5
    assert estimate_volatility(_pool_with_prices(prices)) == pytest.approx(5.0)


def test_zero_mean_yields_zero() -> None:
    assert estimate_volatility(_pool_with_prices([0.0, 0.0, 0.0])) == 0.0


def test_window_must_hold_two_points() -> None:
    with pytest.raises(ValueError):
        volatility_of((), window=1)


def test_identical_prices_are_exactly_zero() -> None:
    # Float means of repeated values are not exact; the estimate still must be
    assert estimate_volatility(_pool_with_prices([42.7] * VOLATILITY_WINDOW)) == 0.0
    assert estimate_volatility(_pool_with_prices([0.1] * 7)) == 0.0
