"""Seller dashboard: product, order and revenue figures."""

from __future__ import annotations

from typing import Any

from craftly.application.services.order_service import newest_first
from craftly.core.constants import LOW_STOCK_THRESHOLD, RECENT_SALES_LIMIT
from craftly.domain.enums import PaymentStatus, ProductStatus


class DashboardService:
    def __init__(self, product_repo: Any, order_repo: Any) -> None:
        self._products = product_repo
        self._orders = order_repo

    async def seller_stats(self, seller_id: str) -> dict[str, Any]:
        """Counts and revenue for the seller's active products.

        Revenue only counts paid orders; orders of any payment status count
        toward the order total and recent sales.
        """
        products = [
            p
            for p in await self._products.find(created_by=seller_id)
            if p.get("status") == ProductStatus.ACTIVE.value
        ]
        product_ids = {p["id"] for p in products}
        low_stock = sorted(
            (p for p in products if 0 < (p.get("stock") or 0) <= LOW_STOCK_THRESHOLD),
            key=lambda p: p.get("stock") or 0,
        )

        revenue = 0.0
        seller_orders: list[dict[str, Any]] = []
        for order in await self._orders.list_by_seller(seller_id):
            value = 0.0
            count = 0
            for item in order.get("items") or []:
                if item.get("productId") not in product_ids:
                    continue
                value += float(item.get("price") or 0) * float(item.get("quantity") or 0)
                count += int(item.get("quantity") or 0)
            if value <= 0:
                continue
            if order.get("paymentStatus") == PaymentStatus.PAID.value:
                revenue += value
            seller_orders.append({**order, "sellerItemsValue": value, "sellerItemCount": count})

        seller_orders = newest_first(seller_orders)
        return {
            "stats": {
                "products": len(products),
                "orders": len(seller_orders),
                "revenue": revenue,
            },
            "recentSales": seller_orders[:RECENT_SALES_LIMIT],
            "lowStockProducts": low_stock,
        }
