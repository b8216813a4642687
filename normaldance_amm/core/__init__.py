"""
Core AMM algorithms
"""

from .analytics import PoolAnalytics, pool_analytics, stability_score
from .config import DEFAULT_CONFIG, AMMConfig, load_config
from .engine import AMMEngine
from .fees import compute_fee, fee_rate
from .liquidity import add_liquidity, create_pool, remove_liquidity
from .pool_state import append_price_point, apply_swap
from .pricing import (
    BEAT_DROP_PRICE_IMPACT,
    SwapOutcome,
    beat_drop_swap,
    harmony_swap,
    mixed_swap,
    price_swap,
    spot_rate,
)
from .selection import apply_stability_window, estimate_price_impact, select_algorithm
from .validation import validate_swap
from .volatility import VOLATILITY_WINDOW, estimate_volatility

__all__ = [
    "PoolAnalytics",
    "pool_analytics",
    "stability_score",
    "DEFAULT_CONFIG",
    "AMMConfig",
    "load_config",
    "AMMEngine",
    "compute_fee",
    "fee_rate",
    "add_liquidity",
    "create_pool",
    "remove_liquidity",
    "append_price_point",
    "apply_swap",
    "BEAT_DROP_PRICE_IMPACT",
    "SwapOutcome",
    "beat_drop_swap",
    "harmony_swap",
    "mixed_swap",
    "price_swap",
    "spot_rate",
    "apply_stability_window",
    "estimate_price_impact",
    "select_algorithm",
    "validate_swap",
    "VOLATILITY_WINDOW",
    "estimate_volatility",
]
