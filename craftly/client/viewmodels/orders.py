"""Buyer order history and seller order management."""

from __future__ import annotations

from craftly.client.repositories.orders import OrderRepository
from craftly.client.viewmodels.state import Loading, UiState, ViewModel


class OrdersViewModel(ViewModel):
    def __init__(self, repository: OrderRepository) -> None:
        super().__init__()
        self._repository = repository
        self.has_more = False

    async def load_my_orders(self, limit: int | None = None) -> UiState:
        self._set_state(Loading())
        result = await self._repository.get_my_orders(limit)
        if result.is_success:
            self.has_more = bool(result.value.get("hasMore"))
        return self._apply(result, lambda page: list(page.get("orders") or []))

    async def load_seller_orders(self) -> UiState:
        self._set_state(Loading())
        return self._apply(await self._repository.get_seller_orders())

    async def update_status(self, order_id: str, status: str) -> UiState:
        """Change an order's status and reload the seller's orders."""
        result = await self._repository.update_order_status(order_id, status)
        if result.is_failure:
            return self._apply(result)
        return await self.load_seller_orders()

    async def mark_paid(self, order_id: str) -> UiState:
        result = await self._repository.update_payment_status(order_id, "paid")
        if result.is_failure:
            return self._apply(result)
        return await self.load_seller_orders()
