"""In-process TTL cache (default backend when Redis is disabled or unreachable).

An entry is fresh while ``now - stored_at < ttl``; at exactly ``ttl`` seconds
it has expired. There is no size bound: entries are dropped when read after
expiry or when invalidated.
"""

from __future__ import annotations

import asyncio
import copy
import fnmatch
import logging
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class MemoryCache:
    """Async-compatible dict cache keyed by string with monotonic timestamps."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, float, Any]] = {}
        self._lock = asyncio.Lock()

    def is_available(self) -> bool:
        return True

    def _is_fresh(self, stored_at: float, ttl: float) -> bool:
        return self._clock() - stored_at < ttl

    async def get(self, key: str) -> Any | None:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug("Cache MISS: %s", key)
                return None
            stored_at, ttl, value = entry
            if not self._is_fresh(stored_at, ttl):
                del self._entries[key]
                logger.debug("Cache EXPIRED: %s", key)
                return None
            logger.debug("Cache HIT: %s", key)
            return copy.deepcopy(value)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        async with self._lock:
            self._entries[key] = (self._clock(), float(ttl), copy.deepcopy(value))
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def delete(self, key: str) -> bool:
        async with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            logger.debug("Cache DELETE: %s", key)
        return removed

    async def delete_pattern(self, pattern: str) -> int:
        async with self._lock:
            keys = [k for k in self._entries if fnmatch.fnmatchcase(k, pattern)]
            for k in keys:
                del self._entries[k]
        if keys:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, len(keys))
        return len(keys)

    async def age(self, key: str) -> float | None:
        """Seconds since key was stored, or None if it is absent."""
        async with self._lock:
            entry = self._entries.get(key)
        return None if entry is None else self._clock() - entry[0]
