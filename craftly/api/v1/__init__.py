"""API v1: routers and dependencies."""

from craftly.api.v1.router import api_router, root_router

__all__ = ["api_router", "root_router"]
