"""
Volatility estimate from a pool's recent price history.

volatility% = statistics.pstdev(prices) / statistics.fmean(prices) * 100
over the last VOLATILITY_WINDOW points.
"""

from __future__ import annotations

import math
import statistics
from typing import Sequence

from ..state.pools import LiquidityPool, PricePoint


VOLATILITY_WINDOW = 10


def volatility_of(history: Sequence[PricePoint], window: int = VOLATILITY_WINDOW) -> float:
    """
    Coefficient of variation (percent) of the last `window` prices.

    Fewer than 2 points means there is no signal yet and yields 0.0. A zero
    mean or a non-finite result also yields 0.0 so selection stays
    deterministic.
    """
    if window < 2:
        raise ValueError(f"window must be at least 2: {window}")
    if len(history) < 2:
        return 0.0

    prices = [p.price for p in history[-window:]]
    mean = statistics.fmean(prices)
    if mean == 0:
        return 0.0
    result = statistics.pstdev(prices) / mean * 100
    if not math.isfinite(result):
        return 0.0
    return result


def estimate_volatility(pool: LiquidityPool) -> float:
    return volatility_of(pool.price_history)
