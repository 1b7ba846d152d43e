"""Cart API: one cart document per user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from craftly.api.v1.dependencies import (
    CurrentUserId,
    DocId,
    ensure_same_user,
    get_cart_service,
)
from craftly.application.services.cart_service import CartService
from craftly.core.limiter import limit_writes
from craftly.schemas.cart import CartSaveRequest
from craftly.schemas.common import success_response

router = APIRouter()

CartServiceDep = Annotated[CartService, Depends(get_cart_service)]


@router.get("/{user_id}")
async def get_cart(user_id: DocId, uid: CurrentUserId, cart_service: CartServiceDep):
    """The user's cart items; empty when no cart was saved yet."""
    ensure_same_user(uid, user_id, "cart")
    items = await cart_service.get_items(user_id)
    return success_response({"userId": user_id, "items": items})


@router.post("")
@limit_writes
async def save_cart(
    request: Request, body: CartSaveRequest, uid: CurrentUserId, cart_service: CartServiceDep
):
    items = await cart_service.save(uid, body.items)
    return success_response(
        {"userId": uid, "items": items, "message": "Cart saved successfully"}
    )


@router.delete("")
@limit_writes
async def clear_cart(request: Request, uid: CurrentUserId, cart_service: CartServiceDep):
    await cart_service.clear(uid)
    return success_response({"userId": uid, "items": [], "message": "Cart cleared successfully"})
