"""
Swap limit checks (slippage and maximum price impact).

Runs after pricing and before any pool change, so a rejected swap never
touches the pool.
"""

from __future__ import annotations

from ..errors import PriceImpactExceededError, SlippageExceededError
from ..state.requests import SwapRequest


def min_acceptable_output(request: SwapRequest, current_rate: float) -> float:
    expected_output = request.amount * current_rate
    return expected_output * (1 - request.slippage_tolerance_percent / 100)


def validate_swap(
    request: SwapRequest,
    output_amount: float,
    price_impact_percent: float,
    current_rate: float,
) -> None:
    """
    Check a priced swap against the request's limits.

    Args:
        request: The swap being priced
        output_amount: Output computed by the pricing engine
        price_impact_percent: Impact computed by the pricing engine
        current_rate: Reference rate (to_asset per from_asset) the slippage
            tolerance is measured against

    Raises:
        SlippageExceededError: output_amount < expected * (1 - tolerance)
        PriceImpactExceededError: impact above request.max_price_impact_percent
    """
    if current_rate < 0:
        raise ValueError(f"current_rate must be non-negative: {current_rate}")

    expected_output = request.amount * current_rate
    min_output = min_acceptable_output(request, current_rate)
    if output_amount < min_output:
        raise SlippageExceededError(
            expected_output=expected_output,
            actual_output=output_amount,
            min_output=min_output,
        )

    cap = request.max_price_impact_percent
    if cap is not None and price_impact_percent > cap:
        raise PriceImpactExceededError(
            price_impact_percent=price_impact_percent,
            max_price_impact_percent=cap,
        )
