"""Order API: checkout, buyer and seller listings, status updates.

Seller routes are declared before /{user_id} so "seller" is never taken for
a user ID.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from craftly.api.v1.dependencies import (
    CurrentUserId,
    DocId,
    ensure_same_user,
    get_order_service,
)
from craftly.application.services.order_service import OrderService
from craftly.core.config import get_settings
from craftly.core.limiter import limit_writes
from craftly.schemas.common import success_response
from craftly.schemas.order import (
    OrderCreateRequest,
    OrderStatusUpdateRequest,
    PaymentStatusUpdateRequest,
)

router = APIRouter()

OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]


def _page_size(limit: int | None) -> int:
    """Requested page size; missing or non-positive uses the default, capped at the max."""
    settings = get_settings()
    if limit is None or limit <= 0:
        limit = settings.orders_default_limit
    return min(limit, settings.orders_max_limit)


@router.post("", status_code=201)
@limit_writes
async def create_order(
    request: Request,
    body: OrderCreateRequest,
    uid: CurrentUserId,
    order_service: OrderServiceDep,
):
    order = await order_service.create_order(uid, body.to_payload())
    return success_response(order, "Order created successfully")


@router.get("/seller/{seller_id}/delivery-methods")
async def get_delivery_methods(seller_id: DocId, order_service: OrderServiceDep):
    """Seller's delivery options; the defaults when the seller is unknown."""
    methods = await order_service.get_delivery_methods(seller_id)
    return success_response(
        {
            "sellerId": methods.seller_id,
            "allowShipping": methods.allow_shipping,
            "allowPickup": methods.allow_pickup,
        }
    )


@router.get("/seller/{seller_id}")
async def get_seller_orders(
    seller_id: DocId, uid: CurrentUserId, order_service: OrderServiceDep
):
    ensure_same_user(uid, seller_id, "seller orders")
    orders, from_cache = await order_service.list_seller_orders(seller_id)
    data = {"sellerId": seller_id, "orders": orders, "count": len(orders)}
    if from_cache:
        data["fromCache"] = True
    return success_response(data)


@router.get("/{order_id}/details")
async def get_order_details(order_id: DocId, uid: CurrentUserId, order_service: OrderServiceDep):
    return success_response(await order_service.get_order_details(uid, order_id))


@router.get("/{user_id}")
async def get_user_orders(
    user_id: DocId,
    uid: CurrentUserId,
    order_service: OrderServiceDep,
    limit: int | None = None,
):
    """Newest orders of the buyer, first page only."""
    ensure_same_user(uid, user_id, "orders")
    page = await order_service.list_buyer_orders(user_id, _page_size(limit))
    return success_response(
        {
            "userId": user_id,
            "orders": page.orders,
            "count": len(page.orders),
            "total": page.total,
            "hasMore": page.has_more,
            "fromCache": page.from_cache,
        }
    )


@router.post("/{order_id}/status")
@limit_writes
async def update_order_status(
    request: Request,
    order_id: DocId,
    body: OrderStatusUpdateRequest,
    uid: CurrentUserId,
    order_service: OrderServiceDep,
):
    result = await order_service.update_status(uid, order_id, body.status)
    return success_response(result, "Order status updated successfully")


@router.post("/{order_id}/payment-status")
@limit_writes
async def update_payment_status(
    request: Request,
    order_id: DocId,
    body: PaymentStatusUpdateRequest,
    uid: CurrentUserId,
    order_service: OrderServiceDep,
):
    result = await order_service.update_payment_status(uid, order_id, body.payment_status)
    return success_response(result, "Payment status updated successfully")
