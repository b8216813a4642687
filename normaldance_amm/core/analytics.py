"""
Read-only pool analytics for dashboards.

Uses the pool's cached volatility, not a fresh estimate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..state.pools import Algorithm, LiquidityPool, PricePoint
from .config import DEFAULT_CONFIG, AMMConfig
from .selection import select_algorithm


ANALYTICS_HISTORY_POINTS = 24
LIQUIDITY_SCORE_SCALE = 10_000


@dataclass(frozen=True)
class PoolAnalytics:
    current_price: float
    volatility: float
    total_liquidity: float
    recent_history: Tuple[PricePoint, ...]
    algorithm: Algorithm
    stability_score: float


def stability_score(volatility: float, total_liquidity: float) -> float:
    """0..100, higher is more stable: mean of a volatility score and a liquidity score."""
    volatility_score = max(0.0, 100 - volatility * 5)
    liquidity_score = min(100.0, total_liquidity / LIQUIDITY_SCORE_SCALE)
    return (volatility_score + liquidity_score) / 2


def pool_analytics(pool: LiquidityPool, config: AMMConfig = DEFAULT_CONFIG) -> PoolAnalytics:
    return PoolAnalytics(
        current_price=pool.spot_price,
        volatility=pool.volatility,
        total_liquidity=pool.total_liquidity,
        recent_history=pool.price_history[-ANALYTICS_HISTORY_POINTS:],
        algorithm=select_algorithm(pool.volatility, 0, pool, config),
        stability_score=stability_score(pool.volatility, pool.total_liquidity),
    )
