"""Order use cases: checkout, buyer and seller listings, status changes.

Buyer and seller listings are cached for a very short TTL (one second by
default) to absorb bursts of polling from the clients; every write that
touches an order drops the buyer's, each seller's and each product's
stats cache entries.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from craftly.application.dtos.order import DeliveryMethods, OrderPage
from craftly.application.services.order_validation import (
    seller_allows,
    validate_order_request,
)
from craftly.domain.enums import (
    NotificationType,
    OrderStatus,
    PaymentStatus,
    ShippingMethod,
)
from craftly.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from craftly.domain.roles import is_admin
from craftly.domain.validators import is_valid_document_id
from craftly.infrastructure.cache.keys import (
    buyer_orders_key,
    product_stats_key,
    seller_orders_key,
)
from craftly.shared.utils.datetime import as_datetime, utc_now

logger = logging.getLogger(__name__)


def newest_first(orders: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(orders, key=lambda o: as_datetime(o.get("createdAt")), reverse=True)


def seller_ids_of(order: dict[str, Any]) -> list[str]:
    """Distinct seller IDs of the order's items, in item order."""
    ids = [item.get("sellerId") for item in order.get("items") or []]
    return list(dict.fromkeys(i for i in ids if i))


def is_seller_in_order(order: dict[str, Any], uid: str) -> bool:
    return any(item.get("sellerId") == uid for item in order.get("items") or [])


def seller_view(order: dict[str, Any], seller_id: str) -> dict[str, Any] | None:
    """The order with the seller's own items and their total, or None if the seller has none."""
    items = [i for i in order.get("items") or [] if i.get("sellerId") == seller_id]
    if not items:
        return None
    total = sum(float(i.get("price") or 0) * float(i.get("quantity") or 0) for i in items)
    return {**order, "sellerItems": items, "sellerTotal": total}


class OrderService:
    def __init__(
        self,
        order_repo: Any,
        product_repo: Any,
        user_repo: Any,
        notification_repo: Any,
        cache: Any,
        *,
        cache_ttl: int = 1,
        seller_scan_limit: int = 200,
    ) -> None:
        self._orders = order_repo
        self._products = product_repo
        self._users = user_repo
        self._notifications = notification_repo
        self._cache = cache
        self._cache_ttl = cache_ttl
        self._seller_scan_limit = seller_scan_limit

    async def _invalidate(self, buyer_id: str | None, order: dict[str, Any]) -> None:
        keys: list[str] = []
        if buyer_id and is_valid_document_id(buyer_id):
            keys.append(buyer_orders_key(buyer_id))
        keys.extend(seller_orders_key(s) for s in seller_ids_of(order) if is_valid_document_id(s))
        product_ids = {item.get("productId") for item in order.get("items") or []}
        keys.extend(product_stats_key(p) for p in product_ids if is_valid_document_id(p))
        for key in keys:
            await self._cache.delete(key)

    async def _load_sellers(self, items: Any) -> dict[str, dict[str, Any] | None]:
        if not isinstance(items, list):
            return {}
        seller_ids = {
            i.get("sellerId")
            for i in items
            if isinstance(i, dict) and is_valid_document_id(i.get("sellerId"))
        }
        sellers: dict[str, dict[str, Any] | None] = {}
        for seller_id in seller_ids:
            try:
                sellers[seller_id] = await self._users.get_by_id(seller_id)
            except httpx.HTTPError as e:
                logger.error("Error validating seller %s: %s", seller_id, e)
                raise ValidationException("Failed to validate seller delivery methods") from e
        return sellers

    async def create_order(self, buyer_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Validate and store an order, then adjust stock and notify sellers.

        Stock updates and notifications are best effort: a failure is logged
        and does not undo the order.
        """
        sellers = await self._load_sellers(data.get("items"))
        validate_order_request(data, sellers)

        items = [
            {
                "productId": item["productId"],
                "productName": item["productName"],
                "quantity": item["quantity"],
                "price": item["price"],
                "image": item.get("image") or None,
                "sellerId": item.get("sellerId") or None,
            }
            for item in data["items"]
        ]
        seller_ids = list(dict.fromkeys(i["sellerId"] for i in items if i["sellerId"]))
        now = utc_now()
        order_id = self._orders.new_id()
        order = {
            "orderId": order_id,
            "buyerId": buyer_id,
            "sellerIds": seller_ids,
            "productIds": list(dict.fromkeys(i["productId"] for i in items)),
            "items": items,
            "totalAmount": data["totalAmount"],
            "orderStatus": OrderStatus.PENDING.value,
            "shippingMethod": data["shippingMethod"],
            "shippingAddress": dict(data["shippingAddress"]),
            "deliveryFee": data["deliveryFee"],
            "paymentMethod": data["paymentMethod"],
            "paymentStatus": PaymentStatus.PAID.value,
            "receiptImageUrl": data.get("receiptImageUrl") or None,
            "createdAt": now,
            "updatedAt": now,
        }
        await self._orders.create(order_id, order)
        logger.info("Order created: %s for buyer %s", order_id, buyer_id)

        for item in items:
            if not is_valid_document_id(item["productId"]):
                continue
            try:
                await self._products.decrement_stock(item["productId"], item["quantity"])
            except httpx.HTTPError as e:
                logger.warning("Could not update stock for product %s: %s", item["productId"], e)

        buyer_name = order["shippingAddress"].get("fullName")
        for seller_id in seller_ids:
            if seller_id == buyer_id or not is_valid_document_id(seller_id):
                continue
            try:
                await self._notifications.add(
                    seller_id,
                    {
                        "orderId": order_id,
                        "message": f"You have a new order from {buyer_name}",
                        "type": NotificationType.NEW_ORDER.value,
                        "isRead": False,
                        "createdAt": now,
                    },
                )
            except httpx.HTTPError as e:
                logger.warning("Could not create notification for seller %s: %s", seller_id, e)

        await self._invalidate(buyer_id, order)
        return {**order, "id": order_id}

    async def list_buyer_orders(self, buyer_id: str, limit: int) -> OrderPage:
        """First ``limit`` of the buyer's orders, newest first."""
        key = buyer_orders_key(buyer_id)
        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug("Serving buyer %s orders from cache", buyer_id)
            return OrderPage(
                orders=cached[:limit],
                total=len(cached),
                has_more=len(cached) > limit,
                from_cache=True,
            )
        orders = newest_first(await self._orders.list_by_buyer(buyer_id))
        await self._cache.set(key, orders, ttl=self._cache_ttl)
        logger.debug("Loaded %s/%s orders for buyer %s", min(limit, len(orders)), len(orders), buyer_id)
        return OrderPage(orders=orders[:limit], total=len(orders), has_more=len(orders) > limit)

    async def _require_order(self, order_id: str) -> dict[str, Any]:
        order = await self._orders.get_by_id(order_id)
        if order is None:
            raise ResourceNotFoundException("Order", order_id)
        return order

    async def get_order_details(self, uid: str, order_id: str) -> dict[str, Any]:
        order = await self._require_order(order_id)
        if uid != order.get("buyerId") and not is_seller_in_order(order, uid):
            raise AuthorizationException("Unauthorized to view this order", resource="order")
        return order

    async def list_seller_orders(self, seller_id: str) -> tuple[list[dict[str, Any]], bool]:
        """Orders among the most recent scan window that contain the seller's items.

        Returns:
            (orders with sellerItems and sellerTotal, served from cache)
        """
        key = seller_orders_key(seller_id)
        cached = await self._cache.get(key)
        if cached is not None:
            return cached, True
        recent = await self._orders.list_recent(self._seller_scan_limit)
        views = [v for v in (seller_view(o, seller_id) for o in recent) if v is not None]
        views = newest_first(views)
        await self._cache.set(key, views, ttl=self._cache_ttl)
        logger.debug("Found %s orders for seller %s", len(views), seller_id)
        return views, False

    async def get_delivery_methods(self, seller_id: str) -> DeliveryMethods:
        """Seller's delivery settings; defaults when the seller is missing or unreadable."""
        try:
            seller = await self._users.get_by_id(seller_id)
        except httpx.HTTPError as e:
            logger.error("Error fetching delivery methods for seller %s: %s", seller_id, e)
            seller = None
        return DeliveryMethods(
            seller_id=seller_id,
            allow_shipping=seller_allows(seller, ShippingMethod.LOCAL_DELIVERY.value),
            allow_pickup=seller_allows(seller, ShippingMethod.STORE_PICKUP.value),
        )

    async def _require_seller_or_admin(self, uid: str, order: dict[str, Any]) -> None:
        if is_seller_in_order(order, uid):
            return
        if is_admin(await self._users.get_by_id(uid)):
            return
        raise AuthorizationException(
            "Unauthorized - You are not a seller in this order", resource="order"
        )

    async def update_status(self, uid: str, order_id: str, status: str | None) -> dict[str, Any]:
        if not status:
            raise ValidationException("Order ID and status are required", field="status")
        if not OrderStatus.has_value(status):
            raise ValidationException(
                f"Invalid status. Must be one of: {', '.join(OrderStatus.values())}",
                field="status",
            )
        order = await self._require_order(order_id)
        await self._require_seller_or_admin(uid, order)
        await self._orders.update(order_id, {"orderStatus": status, "updatedAt": utc_now()})
        await self._invalidate(order.get("buyerId"), order)
        logger.info("Order %s status -> %s by %s", order_id, status, uid)
        return {"orderId": order_id, "status": status}

    async def update_payment_status(
        self, uid: str, order_id: str, payment_status: str | None
    ) -> dict[str, Any]:
        """Set payment status; marking a pending order paid also moves it to processing."""
        if not payment_status:
            raise ValidationException(
                "Order ID and payment status are required", field="paymentStatus"
            )
        if not PaymentStatus.has_value(payment_status):
            raise ValidationException(
                f"Invalid payment status. Must be one of: {', '.join(PaymentStatus.values())}",
                field="paymentStatus",
            )
        order = await self._require_order(order_id)
        await self._require_seller_or_admin(uid, order)
        updates: dict[str, Any] = {"paymentStatus": payment_status, "updatedAt": utc_now()}
        if (
            payment_status == PaymentStatus.PAID.value
            and order.get("orderStatus") == OrderStatus.PENDING.value
        ):
            updates["orderStatus"] = OrderStatus.PROCESSING.value
        await self._orders.update(order_id, updates)
        await self._invalidate(order.get("buyerId"), order)
        logger.info("Order %s payment status -> %s by %s", order_id, payment_status, uid)
        return {
            "orderId": order_id,
            "paymentStatus": payment_status,
            "orderStatus": updates.get("orderStatus", order.get("orderStatus")),
        }
