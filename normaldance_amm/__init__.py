"""
NormalDance hybrid AMM: volatility-adaptive swap pricing for two-asset pools.
"""

from .core import AMMConfig, AMMEngine, load_config
from .errors import (
    AMMError,
    InsufficientLiquidityError,
    PoolNotFoundError,
    PriceImpactExceededError,
    SlippageExceededError,
    UninitializedPoolError,
)
from .state import Algorithm, LiquidityPool, PricePoint, SwapQuote, SwapRequest

__all__ = [
    "AMMConfig",
    "AMMEngine",
    "load_config",
    "AMMError",
    "InsufficientLiquidityError",
    "PoolNotFoundError",
    "PriceImpactExceededError",
    "SlippageExceededError",
    "UninitializedPoolError",
    "Algorithm",
    "LiquidityPool",
    "PricePoint",
    "SwapQuote",
    "SwapRequest",
]
