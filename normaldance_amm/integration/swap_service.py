"""
Swap service: imperative shell around the functional AMM core.

- Loads pool snapshots from a `PoolRepository`.
- Serializes get -> quote -> apply -> save per pool with one lock per pool_id,
  so two swaps can never price against the same stale reserves.
- Saves only after the full pipeline succeeds; a rejected swap leaves the
  stored pool untouched.

Quotes without execution take no lock: they read one consistent snapshot.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from ..core import liquidity
from ..core.engine import AMMEngine
from ..core.pool_state import current_time_ms
from ..errors import AMMError, PoolNotFoundError
from ..state.pools import DEFAULT_ASSET_A, DEFAULT_ASSET_B, AssetId, LiquidityPool
from ..state.repository import PoolRepository
from ..state.requests import SwapQuote, SwapRequest


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapExecution:
    quote: SwapQuote
    pool: LiquidityPool


@dataclass(frozen=True)
class LiquidityChange:
    pool: LiquidityPool
    amount_a: float
    amount_b: float
    lp_tokens: float


class SwapService:
    def __init__(self, engine: AMMEngine, repository: PoolRepository) -> None:
        self.engine = engine
        self.repository = repository
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, pool_id: str) -> threading.Lock:
        """
        Return the lock serializing writes to `pool_id`.

        Locks are only created for pools the repository knows, so unknown
        ids never grow the lock table.

        Raises:
            PoolNotFoundError: Unknown pool_id.
        """
        with self._locks_guard:
            lock = self._locks.get(pool_id)
            if lock is None:
                self.repository.get(pool_id)
                lock = threading.Lock()
                self._locks[pool_id] = lock
            return lock

    def quote_swap(self, pool_id: str, request: SwapRequest, *, now_ms: Optional[int] = None) -> SwapQuote:
        pool = self.repository.get(pool_id)
        return self.engine.quote(request, pool, now_ms=now_ms)

    def execute_swap(
        self,
        pool_id: str,
        request: SwapRequest,
        *,
        now_ms: Optional[int] = None,
    ) -> SwapExecution:
        """
        Quote, validate, apply and persist one swap atomically per pool.

        Raises:
            PoolNotFoundError: Unknown pool_id.
            AMMError: Any pricing/validation rejection (pool is left unchanged).
        """
        with self._lock_for(pool_id):
            pool = self.repository.get(pool_id)
            ts = current_time_ms() if now_ms is None else now_ms
            try:
                quote, new_pool = self.engine.swap(request, pool, now_ms=ts)
            except AMMError:
                logger.warning(
                    "swap %s %s -> %s on pool %s rejected",
                    request.amount,
                    request.from_asset,
                    request.to_asset,
                    pool_id,
                )
                raise
            self.repository.save(new_pool)

        logger.info(
            "swap on pool %s: %s %s -> %s %s via %s (fee %s)",
            pool_id,
            request.amount,
            request.from_asset,
            quote.output_amount,
            request.to_asset,
            quote.algorithm.value,
            quote.fee_amount,
        )
        return SwapExecution(quote=quote, pool=new_pool)

    def create_pool(
        self,
        pool_id: str,
        amount_a: float,
        amount_b: float,
        *,
        asset_a: AssetId = DEFAULT_ASSET_A,
        asset_b: AssetId = DEFAULT_ASSET_B,
        now_ms: Optional[int] = None,
    ) -> LiquidityChange:
        # Under the table guard: no swap can lock this id until the pool is saved.
        with self._locks_guard:
            if pool_id in self._locks or _pool_exists(self.repository, pool_id):
                raise ValueError(f"pool already exists: {pool_id}")
            pool, lp_minted = liquidity.create_pool(
                pool_id, amount_a, amount_b, asset_a=asset_a, asset_b=asset_b, now_ms=now_ms
            )
            self.repository.save(pool)
            self._locks[pool_id] = threading.Lock()
        logger.info("created pool %s (%s/%s) with %s LP", pool_id, asset_a, asset_b, lp_minted)
        return LiquidityChange(pool=pool, amount_a=amount_a, amount_b=amount_b, lp_tokens=lp_minted)

    def add_liquidity(
        self,
        pool_id: str,
        amount_a: float,
        amount_b: float,
        *,
        now_ms: Optional[int] = None,
    ) -> LiquidityChange:
        with self._lock_for(pool_id):
            pool = self.repository.get(pool_id)
            new_pool, lp_minted = liquidity.add_liquidity(pool, amount_a, amount_b, now_ms=now_ms)
            self.repository.save(new_pool)
        logger.info("added liquidity to pool %s: %s/%s for %s LP", pool_id, amount_a, amount_b, lp_minted)
        return LiquidityChange(pool=new_pool, amount_a=amount_a, amount_b=amount_b, lp_tokens=lp_minted)

    def remove_liquidity(
        self,
        pool_id: str,
        lp_amount: float,
        *,
        now_ms: Optional[int] = None,
    ) -> LiquidityChange:
        with self._lock_for(pool_id):
            pool = self.repository.get(pool_id)
            new_pool, amount_a, amount_b = liquidity.remove_liquidity(pool, lp_amount, now_ms=now_ms)
            self.repository.save(new_pool)
        logger.info("removed %s LP from pool %s: %s/%s", lp_amount, pool_id, amount_a, amount_b)
        return LiquidityChange(pool=new_pool, amount_a=amount_a, amount_b=amount_b, lp_tokens=lp_amount)


def _pool_exists(repository: PoolRepository, pool_id: str) -> bool:
    try:
        repository.get(pool_id)
    except PoolNotFoundError:
        return False
    return True
