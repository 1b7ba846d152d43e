"""Timestamp caches used by the client repositories.

An entry is fresh while ``now - stored_at < ttl``; at exactly ``ttl``
seconds it is stale.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Hashable, Iterable
from typing import Generic, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

Clock = Callable[[], float]


class TtlCache(Generic[T]):
    """Holds a single value (e.g. the product list)."""

    def __init__(self, ttl_seconds: float, clock: Clock = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._value: T | None = None
        self._stored_at: float | None = None

    def is_valid(self) -> bool:
        if self._stored_at is None:
            return False
        return self._clock() - self._stored_at < self._ttl

    def get(self) -> T | None:
        return self._value if self.is_valid() else None

    def peek(self) -> T | None:
        """Last stored value even if stale."""
        return self._value

    def put(self, value: T) -> None:
        self._value = value
        self._stored_at = self._clock()

    def clear(self) -> None:
        self._value = None
        self._stored_at = None


class KeyedTtlCache(Generic[K, T]):
    """Per-key variant (e.g. product stats by product id)."""

    def __init__(self, ttl_seconds: float, clock: Clock = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[K, tuple[T, float]] = {}

    def is_valid(self, key: K) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._clock() - entry[1] < self._ttl

    def get(self, key: K) -> T | None:
        return self._entries[key][0] if self.is_valid(key) else None

    def peek(self, key: K) -> T | None:
        entry = self._entries.get(key)
        return entry[0] if entry is not None else None

    def put(self, key: K, value: T) -> None:
        self._entries[key] = (value, self._clock())

    def missing(self, keys: Iterable[K]) -> list[K]:
        """Keys without a fresh entry, in order and without duplicates."""
        return [k for k in dict.fromkeys(keys) if not self.is_valid(k)]

    def invalidate(self, key: K) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
