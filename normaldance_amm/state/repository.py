"""
Pool storage boundary.

Pricing never touches storage directly; callers load a snapshot through a
`PoolRepository`, run the pure core, and save the returned snapshot.
"""

from __future__ import annotations

from typing import Dict, Iterator, Protocol

from ..errors import PoolNotFoundError
from .pools import LiquidityPool


class PoolRepository(Protocol):
    def get(self, pool_id: str) -> LiquidityPool:
        """Return the stored pool or raise PoolNotFoundError."""
        ...

    def save(self, pool: LiquidityPool) -> None:
        ...


class InMemoryPoolRepository:
    """
    Dict-backed repository mapping pool_id -> LiquidityPool.

    Snapshots are immutable, so storing them by reference is safe.
    """

    def __init__(self) -> None:
        self._pools: Dict[str, LiquidityPool] = {}

    def get(self, pool_id: str) -> LiquidityPool:
        pool = self._pools.get(pool_id)
        if pool is None:
            raise PoolNotFoundError(pool_id)
        return pool

    def save(self, pool: LiquidityPool) -> None:
        self._pools[pool.pool_id] = pool

    def __contains__(self, pool_id: object) -> bool:
        return pool_id in self._pools

    def __iter__(self) -> Iterator[LiquidityPool]:
        return iter(list(self._pools.values()))

    def __len__(self) -> int:
        return len(self._pools)

    def __repr__(self) -> str:
        return f"InMemoryPoolRepository({len(self._pools)} pools)"
