"""
Swap pricing for the hybrid AMM.

Algorithm Design:
- HARMONY (constant product): k = Rin * Rout is conserved.
      new_Rin  = Rin + amount
      new_Rout = k / new_Rin
      out      = Rout - new_Rout
  Output approaches but never reaches Rout.
- BEAT_DROP (constant sum / fixed rate): the current spot rate Rout / Rin is
  frozen for the trade, out = amount * rate, and impact is pinned to
  BEAT_DROP_PRICE_IMPACT regardless of size.
- MIXED: both of the above are computed in full and crossfaded with
  weight = min(volatility / volatility_threshold, 1).

All three are O(1) and pure. `price_swap` is the dispatch entry point that
resolves trade direction from the request and guards the pool.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InsufficientLiquidityError, UninitializedPoolError
from ..state.pools import Algorithm, LiquidityPool
from ..state.requests import SwapRequest
from .config import DEFAULT_CONFIG, AMMConfig


BEAT_DROP_PRICE_IMPACT = 0.1  # percent


@dataclass(frozen=True)
class SwapOutcome:
    output_amount: float
    price_impact_percent: float


def _check_inputs(reserve_in: float, reserve_out: float, amount: float) -> None:
    if reserve_in <= 0 or reserve_out <= 0:
        raise ValueError(f"Reserves must be positive: ({reserve_in}, {reserve_out})")
    if amount <= 0:
        raise ValueError(f"amount must be positive: {amount}")


def harmony_swap(reserve_in: float, reserve_out: float, amount: float) -> SwapOutcome:
    """
    Constant-product quote.

    Price impact is |price_after - price_before| / price_before * 100 with
    price = reserve_out / reserve_in.
    """
    _check_inputs(reserve_in, reserve_out, amount)

    k = reserve_in * reserve_out
    new_reserve_in = reserve_in + amount
    new_reserve_out = k / new_reserve_in
    output_amount = reserve_out - new_reserve_out

    price_before = reserve_out / reserve_in
    price_after = new_reserve_out / new_reserve_in
    price_impact = abs(price_after - price_before) / price_before * 100

    return SwapOutcome(output_amount=output_amount, price_impact_percent=price_impact)


def beat_drop_swap(reserve_in: float, reserve_out: float, amount: float) -> SwapOutcome:
    """
    Fixed-rate quote at the current spot rate.

    Impact is insensitive to size, so a large enough trade can drain the
    reserve; `price_swap` rejects that case.
    """
    _check_inputs(reserve_in, reserve_out, amount)
    rate = reserve_out / reserve_in
    return SwapOutcome(output_amount=amount * rate, price_impact_percent=BEAT_DROP_PRICE_IMPACT)


def blend_weight(volatility_percent: float, volatility_threshold: float) -> float:
    if volatility_threshold <= 0:
        raise ValueError(f"volatility_threshold must be positive: {volatility_threshold}")
    return min(max(volatility_percent / volatility_threshold, 0.0), 1.0)


def mixed_swap(
    reserve_in: float,
    reserve_out: float,
    amount: float,
    volatility_percent: float,
    volatility_threshold: float = DEFAULT_CONFIG.volatility_threshold,
) -> SwapOutcome:
    harmony = harmony_swap(reserve_in, reserve_out, amount)
    beat_drop = beat_drop_swap(reserve_in, reserve_out, amount)
    weight = blend_weight(volatility_percent, volatility_threshold)

    output_amount = harmony.output_amount * (1 - weight) + beat_drop.output_amount * weight
    price_impact = harmony.price_impact_percent * (1 - weight) + beat_drop.price_impact_percent * weight
    return SwapOutcome(output_amount=output_amount, price_impact_percent=price_impact)


def spot_rate(pool: LiquidityPool, request: SwapRequest) -> float:
    """Units of `to_asset` per unit of `from_asset` at current reserves."""
    if not pool.is_initialized:
        raise UninitializedPoolError(pool.pool_id)
    reserve_in, reserve_out = pool.reserves_for(request.from_asset, request.to_asset)
    return reserve_out / reserve_in


def price_swap(
    algorithm: Algorithm,
    pool: LiquidityPool,
    request: SwapRequest,
    volatility_percent: float,
    config: AMMConfig = DEFAULT_CONFIG,
) -> SwapOutcome:
    """
    Price `request` against `pool` with the given algorithm.

    Raises:
        UninitializedPoolError: If either reserve is zero.
        InsufficientLiquidityError: If the output would reach the receiving reserve.
        ValueError: If the request's assets do not match the pool.
    """
    if not pool.is_initialized:
        raise UninitializedPoolError(pool.pool_id)
    reserve_in, reserve_out = pool.reserves_for(request.from_asset, request.to_asset)

    if algorithm is Algorithm.HARMONY:
        outcome = harmony_swap(reserve_in, reserve_out, request.amount)
    elif algorithm is Algorithm.BEAT_DROP:
        outcome = beat_drop_swap(reserve_in, reserve_out, request.amount)
    elif algorithm is Algorithm.MIXED:
        outcome = mixed_swap(
            reserve_in,
            reserve_out,
            request.amount,
            volatility_percent,
            config.volatility_threshold,
        )
    else:
        raise ValueError(f"unsupported algorithm: {algorithm!r}")

    if outcome.output_amount >= reserve_out:
        raise InsufficientLiquidityError(outcome.output_amount, reserve_out)
    return outcome
