"""Tests for the in-process TTL cache and cache key builders."""

import pytest

from craftly.infrastructure.cache.keys import (
    buyer_orders_key,
    product_stats_key,
    seller_orders_key,
)
from craftly.infrastructure.cache.memory_cache import MemoryCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


async def test_hit_before_ttl_and_miss_at_ttl() -> None:
    """An entry is fresh while now - stored_at < ttl; exactly at ttl it is gone."""
    clock = FakeClock()
    cache = MemoryCache(clock=clock)
    await cache.set("k", {"a": 1}, ttl=10)

    clock.now += 9.999
    assert await cache.get("k") == {"a": 1}

    clock.now = 1010.0
    assert await cache.get("k") is None


async def test_values_are_copied() -> None:
    cache = MemoryCache()
    value = {"items": [1]}
    await cache.set("k", value)
    value["items"].append(2)
    cached = await cache.get("k")
    assert cached == {"items": [1]}
    cached["items"].append(3)
    assert await cache.get("k") == {"items": [1]}


async def test_delete_and_delete_pattern() -> None:
    cache = MemoryCache()
    await cache.set("orders:buyer:a", [])
    await cache.set("orders:buyer:b", [])
    await cache.set("product_stats:p", {})
    assert await cache.delete("orders:buyer:a") is True
    assert await cache.delete("orders:buyer:a") is False
    assert await cache.delete_pattern("orders:*") == 1
    assert await cache.get("product_stats:p") == {}


async def test_age_reports_seconds_since_set() -> None:
    clock = FakeClock()
    cache = MemoryCache(clock=clock)
    await cache.set("k", 1)
    clock.now += 2.5
    assert await cache.age("k") == pytest.approx(2.5)
    assert await cache.age("missing") is None


def test_cache_keys() -> None:
    assert buyer_orders_key("u1") == "orders:buyer:u1"
    assert seller_orders_key("s1") == "orders:seller:s1"
    assert product_stats_key("p1") == "product_stats:p1"


@pytest.mark.parametrize("bad", ["", "a:b"])
def test_cache_key_rejects_empty_or_separator(bad: str) -> None:
    with pytest.raises(ValueError):
        buyer_orders_key(bad)
