from __future__ import annotations

import pytest

from normaldance_amm.errors import AMMError, PoolNotFoundError
from normaldance_amm.state.pools import LiquidityPool
from normaldance_amm.state.repository import InMemoryPoolRepository


def test_save_and_get() -> None:
    repo = InMemoryPoolRepository()
    pool = LiquidityPool(pool_id="ton-ndt", reserve_a=1.0, reserve_b=2.0)
    repo.save(pool)
    assert repo.get("ton-ndt") is pool
    assert "ton-ndt" in repo
    assert len(repo) == 1
    assert list(repo) == [pool]


def test_save_replaces_snapshot() -> None:
    repo = InMemoryPoolRepository()
    repo.save(LiquidityPool(pool_id="p", reserve_a=1.0, reserve_b=2.0))
    newer = LiquidityPool(pool_id="p", reserve_a=3.0, reserve_b=4.0)
    repo.save(newer)
    assert repo.get("p") is newer
    assert len(repo) == 1


def test_missing_pool() -> None:
    repo = InMemoryPoolRepository()
    with pytest.raises(PoolNotFoundError) as excinfo:
        repo.get("nope")
    assert excinfo.value.pool_id == "nope"
    assert str(excinfo.value) == "pool not found: nope"
    assert isinstance(excinfo.value, AMMError)
    assert isinstance(excinfo.value, KeyError)
    assert PoolNotFoundError.__doc__
