"""
Liquidity management operations: create pool, add/remove liquidity.

LP share math:
    first deposit:  lp = sqrt(amount_a * amount_b)
    later deposits: lp = min(amount_a / reserve_a, amount_b / reserve_b) * total_liquidity
    withdrawal:     amount_x = lp / total_liquidity * reserve_x
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Optional, Tuple

from ..errors import UninitializedPoolError
from ..state.pools import DEFAULT_ASSET_A, DEFAULT_ASSET_B, AssetId, LiquidityPool
from .pool_state import current_time_ms


def _require_positive(value: float, *, name: str) -> None:
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be positive and finite: {value}")


def create_pool(
    pool_id: str,
    amount_a: float,
    amount_b: float,
    *,
    asset_a: AssetId = DEFAULT_ASSET_A,
    asset_b: AssetId = DEFAULT_ASSET_B,
    now_ms: Optional[int] = None,
) -> Tuple[LiquidityPool, float]:
    """
    Create a pool seeded with the first deposit.

    Returns:
        Tuple of (pool, lp_minted)

    Raises:
        ValueError: If either amount is not positive
    """
    _require_positive(amount_a, name="amount_a")
    _require_positive(amount_b, name="amount_b")
    ts = current_time_ms() if now_ms is None else now_ms

    lp_minted = math.sqrt(amount_a * amount_b)
    pool = LiquidityPool(
        pool_id=pool_id,
        asset_a=asset_a,
        asset_b=asset_b,
        reserve_a=float(amount_a),
        reserve_b=float(amount_b),
        total_liquidity=lp_minted,
        last_update=ts,
    )
    return pool, lp_minted


def compute_lp_mint(pool: LiquidityPool, amount_a: float, amount_b: float) -> float:
    """LP shares for a deposit into an existing pool (limited by the scarcer side)."""
    if not pool.is_initialized:
        raise UninitializedPoolError(pool.pool_id)
    _require_positive(amount_a, name="amount_a")
    _require_positive(amount_b, name="amount_b")
    if pool.total_liquidity == 0:
        return math.sqrt(amount_a * amount_b)
    ratio = min(amount_a / pool.reserve_a, amount_b / pool.reserve_b)
    return ratio * pool.total_liquidity


def add_liquidity(
    pool: LiquidityPool,
    amount_a: float,
    amount_b: float,
    *,
    now_ms: Optional[int] = None,
) -> Tuple[LiquidityPool, float]:
    """
    Deposit both assets.

    Both reserves grow by the full deposited amounts; shares are minted for
    the scarcer side only, so an off-ratio deposit donates the excess to
    existing providers.

    Returns:
        Tuple of (new_pool, lp_minted)
    """
    lp_minted = compute_lp_mint(pool, amount_a, amount_b)
    ts = current_time_ms() if now_ms is None else now_ms
    new_pool = replace(
        pool,
        reserve_a=pool.reserve_a + amount_a,
        reserve_b=pool.reserve_b + amount_b,
        total_liquidity=pool.total_liquidity + lp_minted,
        last_update=ts,
    )
    return new_pool, lp_minted


def compute_lp_burn(pool: LiquidityPool, lp_amount: float) -> Tuple[float, float]:
    _require_positive(lp_amount, name="lp_amount")
    if pool.total_liquidity <= 0:
        raise ValueError(f"pool {pool.pool_id} has no liquidity")
    if lp_amount > pool.total_liquidity:
        raise ValueError(
            f"Cannot burn more LP than supply: {lp_amount} > {pool.total_liquidity}"
        )
    share = lp_amount / pool.total_liquidity
    return pool.reserve_a * share, pool.reserve_b * share


def remove_liquidity(
    pool: LiquidityPool,
    lp_amount: float,
    *,
    now_ms: Optional[int] = None,
) -> Tuple[LiquidityPool, float, float]:
    """
    Burn `lp_amount` shares for a pro-rata slice of both reserves.

    Burning the entire supply is rejected: it would leave the pool
    uninitialized.

    Returns:
        Tuple of (new_pool, amount_a_out, amount_b_out)
    """
    amount_a, amount_b = compute_lp_burn(pool, lp_amount)
    if lp_amount >= pool.total_liquidity:
        raise ValueError("Cannot burn the entire LP supply")
    ts = current_time_ms() if now_ms is None else now_ms
    new_pool = replace(
        pool,
        reserve_a=max(pool.reserve_a - amount_a, 0.0),
        reserve_b=max(pool.reserve_b - amount_b, 0.0),
        total_liquidity=max(pool.total_liquidity - lp_amount, 0.0),
        last_update=ts,
    )
    return new_pool, amount_a, amount_b
