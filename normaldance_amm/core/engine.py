"""Hybrid AMM engine.

``AMMEngine`` wires the pure pieces into one quote pipeline:

1. Estimate volatility from the pool's price history.
2. Select an algorithm (then apply the stability window).
3. Price the swap.
4. Compute the adaptive fee.
5. Validate slippage / price impact (raises on violation).

The engine holds only its configuration. It never stores pools; callers
pass a snapshot in and persist the snapshot returned by ``apply_swap``.
Callers that mutate the same pool concurrently must serialize
quote -> apply per pool (see ``normaldance_amm.integration.swap_service``).
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Tuple

from ..errors import AMMError
from ..state.pools import LiquidityPool
from ..state.requests import SwapQuote, SwapRequest
from .analytics import PoolAnalytics, pool_analytics
from .config import AMMConfig
from .fees import compute_fee
from .pool_state import apply_swap, current_time_ms
from .pricing import price_swap, spot_rate
from .selection import apply_stability_window, select_algorithm
from .validation import validate_swap
from .volatility import estimate_volatility


logger = logging.getLogger(__name__)


class AMMEngine:
    """Volatility-adaptive swap pricing over pool snapshots."""

    def __init__(self, config: Optional[AMMConfig] = None) -> None:
        self.config = config if config is not None else AMMConfig()

    def __repr__(self) -> str:
        return f"AMMEngine({self.config!r})"

    def quote(
        self,
        request: SwapRequest,
        pool: LiquidityPool,
        *,
        now_ms: Optional[int] = None,
    ) -> SwapQuote:
        """
        Price `request` against `pool` without touching the pool.

        Raises:
            UninitializedPoolError: Pool has a zero reserve.
            InsufficientLiquidityError: Output would drain the receiving reserve.
            SlippageExceededError: Output below the slippage-adjusted minimum.
            PriceImpactExceededError: Impact above the request's ceiling.
            ValueError: Request assets do not match the pool.
        """
        started = time.perf_counter()
        ts = current_time_ms() if now_ms is None else now_ms

        volatility = estimate_volatility(pool)
        selected = select_algorithm(volatility, request.amount, pool, self.config)
        algorithm = apply_stability_window(selected, pool, ts, self.config)
        if algorithm is not selected:
            logger.debug(
                "pool %s: holding %s over %s inside stability window",
                pool.pool_id,
                algorithm.value,
                selected.value,
            )

        outcome = price_swap(algorithm, pool, request, volatility, self.config)
        fee = compute_fee(
            request.amount,
            algorithm,
            volatility,
            volatility_threshold=self.config.volatility_threshold,
        )

        try:
            validate_swap(
                request,
                outcome.output_amount,
                outcome.price_impact_percent,
                spot_rate(pool, request),
            )
        except AMMError as exc:
            logger.warning("pool %s: swap rejected: %s", pool.pool_id, exc)
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        quote = SwapQuote(
            output_amount=outcome.output_amount,
            price_impact_percent=outcome.price_impact_percent,
            algorithm=algorithm,
            fee_amount=fee,
            volatility_percent=volatility,
            compute_duration_ms=elapsed_ms,
        )
        logger.debug(
            "pool %s: quoted %s %s -> %s %s via %s (impact %.4f%%, fee %s, volatility %.4f%%)",
            pool.pool_id,
            request.amount,
            request.from_asset,
            quote.output_amount,
            request.to_asset,
            algorithm.value,
            quote.price_impact_percent,
            fee,
            volatility,
        )
        return quote

    def apply_swap(
        self,
        pool: LiquidityPool,
        request: SwapRequest,
        quote: SwapQuote,
        *,
        now_ms: Optional[int] = None,
    ) -> LiquidityPool:
        return apply_swap(pool, request, quote, now_ms=now_ms)

    def swap(
        self,
        request: SwapRequest,
        pool: LiquidityPool,
        *,
        now_ms: Optional[int] = None,
    ) -> Tuple[SwapQuote, LiquidityPool]:
        """Quote and apply in one call. On rejection nothing is returned and `pool` is unchanged."""
        ts = current_time_ms() if now_ms is None else now_ms
        quote = self.quote(request, pool, now_ms=ts)
        return quote, apply_swap(pool, request, quote, now_ms=ts)

    def analytics(self, pool: LiquidityPool) -> PoolAnalytics:
        return pool_analytics(pool, self.config)
