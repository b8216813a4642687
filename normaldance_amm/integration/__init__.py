"""
Imperative shell: pool persistence encoding and serialized swap execution.
"""

from .pool_snapshot import (
    POOL_SNAPSHOT_VERSION,
    pool_from_dict,
    pool_from_json,
    pool_to_dict,
    pool_to_json,
)
from .swap_service import LiquidityChange, SwapExecution, SwapService

__all__ = [
    "POOL_SNAPSHOT_VERSION",
    "pool_from_dict",
    "pool_from_json",
    "pool_to_dict",
    "pool_to_json",
    "LiquidityChange",
    "SwapExecution",
    "SwapService",
]
