"""Checkout and order history for buyers and sellers."""

from __future__ import annotations

from typing import Any

from craftly.client.repositories.base import BaseRepository
from craftly.client.result import Result


class OrderRepository(BaseRepository):
    async def create_order(self, order: dict[str, Any]) -> Result[dict[str, Any]]:
        async def call() -> dict[str, Any]:
            self._require_user()
            return await self._api.post("/orders", order)

        return await self._run("creating order", call)

    async def get_my_orders(self, limit: int | None = None) -> Result[dict[str, Any]]:
        """First page of the buyer's orders: orders, count, total, hasMore."""

        async def call() -> dict[str, Any]:
            uid = self._require_user().uid
            return await self._api.get(f"/orders/{uid}", limit=limit)

        return await self._run("loading orders", call)

    async def get_seller_orders(self) -> Result[list[dict[str, Any]]]:
        async def call() -> list[dict[str, Any]]:
            uid = self._require_user().uid
            data = await self._api.get(f"/orders/seller/{uid}")
            return list(data.get("orders") or [])

        return await self._run("loading seller orders", call)

    async def get_order_details(self, order_id: str) -> Result[dict[str, Any]]:
        async def call() -> dict[str, Any]:
            self._require_user()
            return await self._api.get(f"/orders/{order_id}/details")

        return await self._run(f"loading order {order_id}", call)

    async def get_delivery_methods(self, seller_id: str) -> Result[dict[str, Any]]:
        return await self._run(
            f"loading delivery methods of seller {seller_id}",
            lambda: self._api.get(f"/orders/seller/{seller_id}/delivery-methods"),
        )

    async def update_order_status(self, order_id: str, status: str) -> Result[dict[str, Any]]:
        async def call() -> dict[str, Any]:
            self._require_user()
            return await self._api.post(f"/orders/{order_id}/status", {"status": status})

        return await self._run(f"updating status of order {order_id}", call)

    async def update_payment_status(
        self, order_id: str, payment_status: str
    ) -> Result[dict[str, Any]]:
        async def call() -> dict[str, Any]:
            self._require_user()
            return await self._api.post(
                f"/orders/{order_id}/payment-status", {"paymentStatus": payment_status}
            )

        return await self._run(f"updating payment status of order {order_id}", call)
