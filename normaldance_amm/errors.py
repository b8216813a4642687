"""Exception types for the hybrid AMM.

Domain rejections carry the values a caller needs to build a message
(expected vs. actual output, actual vs. allowed impact). Malformed
arguments raise plain ``ValueError``/``TypeError`` instead.
"""

from __future__ import annotations


class AMMError(Exception):
    """Base class for AMM rejections."""


class SlippageExceededError(AMMError):
    """Raised when the realized output is below the slippage-adjusted minimum."""

    def __init__(self, expected_output: float, actual_output: float, min_output: float) -> None:
        self.expected_output = expected_output
        self.actual_output = actual_output
        self.min_output = min_output
        super().__init__(
            f"slippage tolerance exceeded: expected {expected_output}, got {actual_output} "
            f"(minimum {min_output})"
        )


class PriceImpactExceededError(AMMError):
    """Raised when the price impact is above the caller's ceiling."""

    def __init__(self, price_impact_percent: float, max_price_impact_percent: float) -> None:
        self.price_impact_percent = price_impact_percent
        self.max_price_impact_percent = max_price_impact_percent
        super().__init__(
            f"price impact too high: {price_impact_percent:.2f}% > {max_price_impact_percent:.2f}%"
        )


class UninitializedPoolError(AMMError):
    """Raised when a pool with a zero reserve is asked to price a trade."""

    def __init__(self, pool_id: str) -> None:
        self.pool_id = pool_id
        super().__init__(f"pool {pool_id} is not initialized (zero reserve)")


class InsufficientLiquidityError(AMMError):
    """Raised when a trade would reach or exceed the receiving reserve."""

    def __init__(self, output_amount: float, reserve_out: float) -> None:
        self.output_amount = output_amount
        self.reserve_out = reserve_out
        super().__init__(
            f"cannot drain full reserve: output ({output_amount}) >= reserve_out ({reserve_out})"
        )


class PoolNotFoundError(AMMError, KeyError):
    """Raised when a repository has no pool under the requested id."""

    def __init__(self, pool_id: str) -> None:
        self.pool_id = pool_id
        super().__init__(f"pool not found: {pool_id}")

    def __str__(self) -> str:
        return f"pool not found: {self.pool_id}"
