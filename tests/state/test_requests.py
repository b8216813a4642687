from __future__ import annotations

import pytest

from normaldance_amm.state.pools import Algorithm
from normaldance_amm.state.requests import SwapQuote, SwapRequest


def test_request_defaults() -> None:
    request = SwapRequest("TON", "NDT", 10.0)
    assert request.slippage_tolerance_percent == 0.5
    assert request.max_price_impact_percent is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"amount": 0.0},
        {"amount": -5.0},
        {"amount": float("nan")},
        {"to_asset": "TON"},
        {"from_asset": ""},
        {"slippage_tolerance_percent": -0.1},
        {"slippage_tolerance_percent": 150.0},
        {"max_price_impact_percent": -1.0},
        {"max_price_impact_percent": float("inf")},
    ],
)
def test_invalid_requests_rejected(kwargs: dict) -> None:
    base = {"from_asset": "TON", "to_asset": "NDT", "amount": 10.0}
    base.update(kwargs)
    with pytest.raises(ValueError):
        SwapRequest(**base)


def test_non_numeric_amount_rejected() -> None:
    with pytest.raises(TypeError):
        SwapRequest("TON", "NDT", "10")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        SwapRequest("TON", "NDT", 10.0, max_price_impact_percent=True)


def test_zero_impact_cap_is_allowed() -> None:
    assert SwapRequest("TON", "NDT", 1.0, max_price_impact_percent=0.0).max_price_impact_percent == 0.0


def test_quote_is_frozen() -> None:
    quote = SwapQuote(
        output_amount=1.0,
        price_impact_percent=0.1,
        algorithm=Algorithm.BEAT_DROP,
        fee_amount=0.0,
        volatility_percent=25.0,
    )
    with pytest.raises(AttributeError):
        quote.output_amount = 2.0  # type: ignore[misc]


def test_full_slippage_tolerance_is_the_limit() -> None:
    assert SwapRequest("TON", "NDT", 1.0, slippage_tolerance_percent=100.0).slippage_tolerance_percent == 100.0
    with pytest.raises(ValueError):
        SwapRequest("TON", "NDT", 1.0, slippage_tolerance_percent=100.5)
