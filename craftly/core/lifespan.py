"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: Firestore client, Redis cache
(when enabled) and the WebSocket manager. No business logic here.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from craftly.core.config import get_settings
from craftly.infrastructure.firebase.client import close_firebase, init_firebase

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    create_app() already installs an in-process cache and a WebSocket
    manager on app.state; startup replaces the cache with Redis when it is
    enabled and reachable.
    """
    settings = get_settings()

    # ---- Startup ----
    init_firebase()

    redis_cache = None
    if settings.redis_enabled:
        from craftly.infrastructure.cache.redis_cache import CacheService

        redis_cache = CacheService()
        await redis_cache.connect()
        if redis_cache.is_available():
            app.state.cache = redis_cache
        else:
            logger.warning("Redis unavailable; using in-process cache")

    yield

    # ---- Shutdown ----
    if redis_cache is not None:
        await redis_cache.disconnect()
        logger.info("Cache disconnected")

    await close_firebase()
