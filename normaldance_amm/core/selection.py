"""Algorithm selection for the hybrid AMM.

Decision order (first match wins):
  1. volatility > emergency_threshold        -> BEAT_DROP
  2. volatility > volatility_threshold       -> MIXED
  3. estimated impact > price_impact_threshold -> MIXED
  4. otherwise                               -> HARMONY

`apply_stability_window` layers hysteresis on top: moving to a more
stabilizing algorithm is immediate, moving back waits out the configured
stability window.
"""

from __future__ import annotations

from ..errors import UninitializedPoolError
from ..state.pools import Algorithm, LiquidityPool
from .config import DEFAULT_CONFIG, AMMConfig


# Higher rank = more stabilizing
_RANK = {
    Algorithm.HARMONY: 0,
    Algorithm.MIXED: 1,
    Algorithm.BEAT_DROP: 2,
}


def estimate_price_impact(amount: float, pool: LiquidityPool) -> float:
    """Rough impact estimate: trade size as a percent of total reserves."""
    if not pool.is_initialized:
        raise UninitializedPoolError(pool.pool_id)
    return amount / (pool.reserve_a + pool.reserve_b) * 100


def select_algorithm(
    volatility_percent: float,
    trade_amount: float,
    pool: LiquidityPool,
    config: AMMConfig = DEFAULT_CONFIG,
) -> Algorithm:
    # Extreme volatility overrides everything, including trade size.
    if volatility_percent > config.emergency_threshold:
        return Algorithm.BEAT_DROP
    if volatility_percent > config.volatility_threshold:
        return Algorithm.MIXED
    if estimate_price_impact(trade_amount, pool) > config.price_impact_threshold:
        return Algorithm.MIXED
    return Algorithm.HARMONY


def apply_stability_window(
    selected: Algorithm,
    pool: LiquidityPool,
    now_ms: int,
    config: AMMConfig = DEFAULT_CONFIG,
) -> Algorithm:
    """
    Hold the pool's current algorithm instead of de-escalating too early.

    Returns `selected` unless it ranks below `pool.algorithm` and fewer than
    `stability_window_ms` have passed since that algorithm became active.
    """
    current = pool.algorithm
    if current is None or config.stability_window_ms == 0:
        return selected
    if _RANK[selected] >= _RANK[current]:
        return selected
    if now_ms - pool.algorithm_since < config.stability_window_ms:
        return current
    return selected
