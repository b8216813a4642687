"""
Pool state transitions for accepted swaps.

`apply_swap` assumes the swap already passed `validate_swap`; it does not
re-check anything. It returns a new snapshot and leaves the input alone.
"""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from ..state.pools import PRICE_HISTORY_LIMIT, LiquidityPool, PricePoint
from ..state.requests import SwapQuote, SwapRequest


def current_time_ms() -> int:
    return int(time.time() * 1000)


def append_price_point(
    history: Sequence[PricePoint],
    point: PricePoint,
    limit: int = PRICE_HISTORY_LIMIT,
) -> Tuple[PricePoint, ...]:
    """Append `point`, evicting the oldest entries beyond `limit`."""
    if limit <= 0:
        raise ValueError(f"limit must be positive: {limit}")
    extended = tuple(history) + (point,)
    if len(extended) > limit:
        extended = extended[-limit:]
    return extended


def apply_swap(
    pool: LiquidityPool,
    request: SwapRequest,
    quote: SwapQuote,
    *,
    now_ms: Optional[int] = None,
) -> LiquidityPool:
    """
    Apply an accepted swap to `pool`.

    The from-side reserve grows by request.amount and the to-side reserve
    shrinks by quote.output_amount. The recorded price is asset_b per
    asset_a after the swap.
    """
    ts = current_time_ms() if now_ms is None else now_ms

    if request.from_asset == pool.asset_a and request.to_asset == pool.asset_b:
        reserve_a = pool.reserve_a + request.amount
        reserve_b = pool.reserve_b - quote.output_amount
    elif request.from_asset == pool.asset_b and request.to_asset == pool.asset_a:
        reserve_a = pool.reserve_a - quote.output_amount
        reserve_b = pool.reserve_b + request.amount
    else:
        raise ValueError(
            f"pool {pool.pool_id} trades {pool.asset_a}/{pool.asset_b}, "
            f"not {request.from_asset}->{request.to_asset}"
        )

    point = PricePoint(timestamp=ts, price=reserve_b / reserve_a, volume=float(request.amount))

    algorithm_since = pool.algorithm_since
    if pool.algorithm is not quote.algorithm:
        algorithm_since = ts

    return replace(
        pool,
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        price_history=append_price_point(pool.price_history, point),
        volatility=quote.volatility_percent,
        last_update=ts,
        algorithm=quote.algorithm,
        algorithm_since=algorithm_since,
    )

