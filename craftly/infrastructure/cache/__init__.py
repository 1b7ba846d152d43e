"""Caching: protocol, in-process TTL cache, Redis service and key builders."""

from craftly.infrastructure.cache.cache_protocol import CacheProtocol
from craftly.infrastructure.cache.memory_cache import MemoryCache
from craftly.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheProtocol", "CacheService", "MemoryCache"]
