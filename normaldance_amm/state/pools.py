"""
Liquidity pool state for the hybrid AMM.

Pools are immutable snapshots. Every transition (swap, liquidity change)
returns a new `LiquidityPool`; persistence is the caller's concern.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional, Tuple

from ..errors import UninitializedPoolError


AssetId = str
Amount = float  # finite, non-negative

DEFAULT_ASSET_A = "TON"
DEFAULT_ASSET_B = "NDT"

# FIFO cap on price history (count-based, not time-based)
PRICE_HISTORY_LIMIT = 100


@unique
class Algorithm(Enum):
    """Pricing algorithm families."""

    HARMONY = "HARMONY"  # constant product
    BEAT_DROP = "BEAT_DROP"  # constant sum / fixed rate
    MIXED = "MIXED"  # linear blend of the two


def _require_amount(value: object, *, name: str) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise TypeError(f"{name} must be a number")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite: {value}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")
    return float(value)


def _require_timestamp(value: object, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")
    return value


@dataclass(frozen=True)
class PricePoint:
    """One observation in a pool's price history."""

    timestamp: int
    price: float
    volume: float

    def __post_init__(self) -> None:
        _require_timestamp(self.timestamp, name="timestamp")
        _require_amount(self.price, name="price")
        _require_amount(self.volume, name="volume")


@dataclass(frozen=True)
class LiquidityPool:
    """
    Two-asset liquidity pool snapshot.

    `price` is always quoted as asset_b per asset_a (reserve_b / reserve_a).
    `volatility` is a cached reporting value; pricing recomputes it from
    `price_history`.
    """

    pool_id: str
    reserve_a: Amount
    reserve_b: Amount
    asset_a: AssetId = DEFAULT_ASSET_A
    asset_b: AssetId = DEFAULT_ASSET_B
    total_liquidity: Amount = 0.0
    price_history: Tuple[PricePoint, ...] = ()
    volatility: float = 0.0
    last_update: int = 0
    algorithm: Optional[Algorithm] = None
    algorithm_since: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.pool_id, str) or not self.pool_id:
            raise ValueError("pool_id must be a non-empty string")
        for name, asset in (("asset_a", self.asset_a), ("asset_b", self.asset_b)):
            if not isinstance(asset, str) or not asset:
                raise ValueError(f"{name} must be a non-empty string")
        if self.asset_a == self.asset_b:
            raise ValueError(f"pool assets must be distinct: {self.asset_a}")
        _require_amount(self.reserve_a, name="reserve_a")
        _require_amount(self.reserve_b, name="reserve_b")
        _require_amount(self.total_liquidity, name="total_liquidity")
        _require_amount(self.volatility, name="volatility")
        _require_timestamp(self.last_update, name="last_update")
        _require_timestamp(self.algorithm_since, name="algorithm_since")
        if not isinstance(self.price_history, tuple):
            # Normalize lists so the snapshot stays hashable/immutable.
            object.__setattr__(self, "price_history", tuple(self.price_history))
        if len(self.price_history) > PRICE_HISTORY_LIMIT:
            raise ValueError(
                f"price_history exceeds {PRICE_HISTORY_LIMIT} entries: {len(self.price_history)}"
            )
        if self.algorithm is not None and not isinstance(self.algorithm, Algorithm):
            raise TypeError("algorithm must be an Algorithm or None")

    @property
    def is_initialized(self) -> bool:
        return self.reserve_a > 0 and self.reserve_b > 0

    @property
    def spot_price(self) -> float:
        """Current price of asset_a in units of asset_b."""
        if not self.is_initialized:
            raise UninitializedPoolError(self.pool_id)
        return self.reserve_b / self.reserve_a

    @property
    def assets(self) -> Tuple[AssetId, AssetId]:
        return self.asset_a, self.asset_b

    def reserves_for(self, from_asset: AssetId, to_asset: AssetId) -> Tuple[Amount, Amount]:
        """
        Return (reserve_in, reserve_out) for a trade direction.

        Raises:
            ValueError: If the assets are not exactly this pool's pair.
        """
        if from_asset == self.asset_a and to_asset == self.asset_b:
            return self.reserve_a, self.reserve_b
        if from_asset == self.asset_b and to_asset == self.asset_a:
            return self.reserve_b, self.reserve_a
        raise ValueError(
            f"pool {self.pool_id} trades {self.asset_a}/{self.asset_b}, not {from_asset}->{to_asset}"
        )
