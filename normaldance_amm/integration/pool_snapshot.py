"""
Pool snapshot encoding for persistence layers.

Goals:
- JSON-compatible dicts (plain str/int/float/list) that a database row or a
  cache entry can hold as-is.
- Strict decoding: malformed input is rejected rather than coerced.
- Explicit versioning.
"""

from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Mapping

from ..state.pools import Algorithm, LiquidityPool, PricePoint


POOL_SNAPSHOT_VERSION = 1


def _require_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    if not value:
        raise ValueError(f"{name} must be non-empty")
    return value


def _require_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return int(value)


def _require_number(value: Any, *, name: str) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise TypeError(f"{name} must be a number")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite")
    return float(value)


def pool_to_dict(pool: LiquidityPool) -> Dict[str, Any]:
    return {
        "version": POOL_SNAPSHOT_VERSION,
        "pool_id": pool.pool_id,
        "asset_a": pool.asset_a,
        "asset_b": pool.asset_b,
        "reserve_a": pool.reserve_a,
        "reserve_b": pool.reserve_b,
        "total_liquidity": pool.total_liquidity,
        "volatility": pool.volatility,
        "last_update": pool.last_update,
        "algorithm": None if pool.algorithm is None else pool.algorithm.value,
        "algorithm_since": pool.algorithm_since,
        "price_history": [
            {"timestamp": p.timestamp, "price": p.price, "volume": p.volume}
            for p in pool.price_history
        ],
    }


def _price_history_from_list(raw: Any) -> List[PricePoint]:
    if not isinstance(raw, list):
        raise TypeError("price_history must be a list")
    points: List[PricePoint] = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, Mapping):
            raise TypeError(f"price_history[{i}] must be an object")
        points.append(
            PricePoint(
                timestamp=_require_int(entry.get("timestamp"), name=f"price_history[{i}].timestamp"),
                price=_require_number(entry.get("price"), name=f"price_history[{i}].price"),
                volume=_require_number(entry.get("volume"), name=f"price_history[{i}].volume"),
            )
        )
    return points


def pool_from_dict(data: Mapping[str, Any]) -> LiquidityPool:
    """
    Decode a snapshot produced by `pool_to_dict`.

    Raises:
        TypeError/ValueError: On a wrong version, missing field, or bad value.
    """
    if not isinstance(data, Mapping):
        raise TypeError("pool snapshot must be an object")
    version = data.get("version")
    if version != POOL_SNAPSHOT_VERSION:
        raise ValueError(f"unsupported pool snapshot version: {version!r}")

    algorithm_raw = data.get("algorithm")
    algorithm = None
    if algorithm_raw is not None:
        try:
            algorithm = Algorithm(_require_str(algorithm_raw, name="algorithm"))
        except ValueError as exc:
            raise ValueError(f"unknown algorithm: {algorithm_raw!r}") from exc

    return LiquidityPool(
        pool_id=_require_str(data.get("pool_id"), name="pool_id"),
        asset_a=_require_str(data.get("asset_a"), name="asset_a"),
        asset_b=_require_str(data.get("asset_b"), name="asset_b"),
        reserve_a=_require_number(data.get("reserve_a"), name="reserve_a"),
        reserve_b=_require_number(data.get("reserve_b"), name="reserve_b"),
        total_liquidity=_require_number(data.get("total_liquidity"), name="total_liquidity"),
        volatility=_require_number(data.get("volatility", 0.0), name="volatility"),
        last_update=_require_int(data.get("last_update", 0), name="last_update"),
        algorithm=algorithm,
        algorithm_since=_require_int(data.get("algorithm_since", 0), name="algorithm_since"),
        price_history=tuple(_price_history_from_list(data.get("price_history", []))),
    )


def pool_to_json(pool: LiquidityPool) -> str:
    return json.dumps(pool_to_dict(pool), sort_keys=True, separators=(",", ":"))


def pool_from_json(text: str) -> LiquidityPool:
    return pool_from_dict(json.loads(text))
