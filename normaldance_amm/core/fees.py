"""
Adaptive swap fees.

rate = BASE_FEE_RATE
       * HIGH_VOLATILITY_MULTIPLIER  if volatility > volatility_threshold
       * BEAT_DROP_MULTIPLIER        if algorithm is BEAT_DROP
fee  = amount * rate

The two adjustments are independent and commute. Fees are reported on the
quote only; collection is outside the core.
"""

from __future__ import annotations

from ..state.pools import Algorithm
from .config import DEFAULT_CONFIG


BASE_FEE_RATE = 0.0025  # 0.25%
HIGH_VOLATILITY_MULTIPLIER = 1.5
BEAT_DROP_MULTIPLIER = 0.8


def fee_rate(
    algorithm: Algorithm,
    volatility_percent: float,
    *,
    volatility_threshold: float = DEFAULT_CONFIG.volatility_threshold,
) -> float:
    rate = BASE_FEE_RATE
    if volatility_percent > volatility_threshold:
        rate *= HIGH_VOLATILITY_MULTIPLIER
    # Stabilizing trades are discounted.
    if algorithm is Algorithm.BEAT_DROP:
        rate *= BEAT_DROP_MULTIPLIER
    return rate


def compute_fee(
    amount: float,
    algorithm: Algorithm,
    volatility_percent: float,
    *,
    volatility_threshold: float = DEFAULT_CONFIG.volatility_threshold,
) -> float:
    if amount < 0:
        raise ValueError(f"amount must be non-negative: {amount}")
    return amount * fee_rate(algorithm, volatility_percent, volatility_threshold=volatility_threshold)
