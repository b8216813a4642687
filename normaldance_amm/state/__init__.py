"""
State models for the NormalDance hybrid AMM
"""

from .pools import (
    PRICE_HISTORY_LIMIT,
    Algorithm,
    LiquidityPool,
    PricePoint,
)
from .requests import SwapQuote, SwapRequest
from .repository import InMemoryPoolRepository, PoolRepository

__all__ = [
    "PRICE_HISTORY_LIMIT",
    "Algorithm",
    "LiquidityPool",
    "PricePoint",
    "SwapQuote",
    "SwapRequest",
    "InMemoryPoolRepository",
    "PoolRepository",
]
