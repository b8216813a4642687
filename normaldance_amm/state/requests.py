"""
Swap request and quote models.

A `SwapRequest` is what the caller asks for; a `SwapQuote` is what the
engine answers. Neither is persisted by the core.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .pools import Algorithm, AssetId


@dataclass(frozen=True)
class SwapRequest:
    """Exact-in swap of `amount` units of `from_asset` into `to_asset`."""

    from_asset: AssetId
    to_asset: AssetId
    amount: float
    slippage_tolerance_percent: float = 0.5
    max_price_impact_percent: Optional[float] = None

    def __post_init__(self) -> None:
        for name, asset in (("from_asset", self.from_asset), ("to_asset", self.to_asset)):
            if not isinstance(asset, str) or not asset:
                raise ValueError(f"{name} must be a non-empty string")
        if self.from_asset == self.to_asset:
            raise ValueError(f"from_asset and to_asset must differ: {self.from_asset}")
        for name, val in (
            ("amount", self.amount),
            ("slippage_tolerance_percent", self.slippage_tolerance_percent),
        ):
            if not isinstance(val, (int, float)) or isinstance(val, bool):
                raise TypeError(f"{name} must be a number")
            if not math.isfinite(val):
                raise ValueError(f"{name} must be finite: {val}")
        if self.amount <= 0:
            raise ValueError(f"amount must be positive: {self.amount}")
        if not 0 <= self.slippage_tolerance_percent <= 100:
            raise ValueError(
                f"slippage_tolerance_percent must be within [0, 100]: {self.slippage_tolerance_percent}"
            )
        if self.max_price_impact_percent is not None:
            cap = self.max_price_impact_percent
            if not isinstance(cap, (int, float)) or isinstance(cap, bool):
                raise TypeError("max_price_impact_percent must be a number")
            if not math.isfinite(cap) or cap < 0:
                raise ValueError(f"max_price_impact_percent must be finite and non-negative: {cap}")


@dataclass(frozen=True)
class SwapQuote:
    output_amount: float
    price_impact_percent: float
    algorithm: Algorithm
    fee_amount: float
    volatility_percent: float
    compute_duration_ms: float = 0.0
