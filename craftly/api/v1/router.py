"""API router aggregation.

REST routes live under /api/<resource> (the paths the mobile and web
clients call); health and the chat WebSocket sit at the root.
"""

from fastapi import APIRouter

from craftly.api.v1.endpoints import (
    auth,
    cart,
    dashboard,
    favorites,
    health,
    messages,
    notifications,
    orders,
    products,
    profile,
    reviews,
    websocket as ws_endpoint,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(cart.router, prefix="/cart", tags=["cart"])
api_router.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
api_router.include_router(
    notifications.router, prefix="/notifications", tags=["notifications"]
)
api_router.include_router(messages.router, prefix="/messages", tags=["messages"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])

root_router = APIRouter()
root_router.include_router(health.router, prefix="/health", tags=["health"])
root_router.include_router(ws_endpoint.router, prefix="/ws", tags=["websocket"])
