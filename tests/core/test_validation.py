"""Tests for slippage and price impact limits."""

from __future__ import annotations

import pytest

from normaldance_amm.core.validation import min_acceptable_output, validate_swap
from normaldance_amm.errors import PriceImpactExceededError, SlippageExceededError
from normaldance_amm.state.requests import SwapRequest


RATE = 42.7


def _request(slippage: float, cap: float | None = None) -> SwapRequest:
    return SwapRequest(
        from_asset="TON",
        to_asset="NDT",
        amount=10.0,
        slippage_tolerance_percent=slippage,
        max_price_impact_percent=cap,
    )


# ---------------------------------------------------------------------------
# slippage
# ---------------------------------------------------------------------------

def test_output_within_tolerance_passes() -> None:
    # minimum 427 * 0.99 = 422.73
    validate_swap(_request(1.0), 422.77, 1.97, RATE)


def test_output_below_tolerance_is_rejected() -> None:
    with pytest.raises(SlippageExceededError) as excinfo:
        validate_swap(_request(0.5), 422.77, 1.97, RATE)
    err = excinfo.value
    assert err.expected_output == pytest.approx(427.0)
    assert err.actual_output == 422.77
    assert err.min_output == pytest.approx(427.0 * 0.995)


def test_output_equal_to_minimum_passes() -> None:
    request = _request(1.0)
    validate_swap(request, min_acceptable_output(request, RATE), 0.0, RATE)


def test_zero_tolerance_requires_full_rate() -> None:
    request = _request(0.0)
    validate_swap(request, 427.0, 0.1, RATE)
    with pytest.raises(SlippageExceededError):
        validate_swap(request, 426.99, 0.1, RATE)


def test_negative_rate_rejected() -> None:
    with pytest.raises(ValueError):
        validate_swap(_request(1.0), 1.0, 0.0, -1.0)


# ---------------------------------------------------------------------------
# price impact ceiling
# ---------------------------------------------------------------------------

def test_impact_above_cap_is_rejected() -> None:
    with pytest.raises(PriceImpactExceededError) as excinfo:
        validate_swap(_request(1.0, cap=1.0), 422.77, 1.97, RATE)
    assert excinfo.value.price_impact_percent == 1.97
    assert excinfo.value.max_price_impact_percent == 1.0


def test_impact_equal_to_cap_passes() -> None:
    validate_swap(_request(1.0, cap=1.97), 422.77, 1.97, RATE)


def test_no_cap_means_no_impact_check() -> None:
    validate_swap(_request(1.0), 422.77, 99.0, RATE)


def test_zero_cap_is_enforced() -> None:
    validate_swap(_request(1.0, cap=0.0), 427.0, 0.0, RATE)
    with pytest.raises(PriceImpactExceededError):
        validate_swap(_request(1.0, cap=0.0), 427.0, 0.1, RATE)


def test_slippage_is_checked_before_impact() -> None:
    with pytest.raises(SlippageExceededError):
        validate_swap(_request(0.5, cap=1.0), 400.0, 5.0, RATE)
