"""Cart screen: items, totals and the add/update/remove actions."""

from __future__ import annotations

from craftly.client.models import CartItem
from craftly.client.repositories.cart import CartRepository
from craftly.client.viewmodels.state import Loading, Success, UiState, ViewModel


class CartViewModel(ViewModel):
    def __init__(self, repository: CartRepository) -> None:
        super().__init__()
        self._repository = repository

    @property
    def items(self) -> list[CartItem]:
        return list(self.state.data) if isinstance(self.state, Success) else []

    @property
    def total(self) -> float:
        return sum(item.subtotal for item in self.items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    async def load(self) -> UiState:
        self._set_state(Loading())
        return self._apply(await self._repository.get_cart())

    async def add(self, product: CartItem) -> UiState:
        return self._apply(await self._repository.add_to_cart(product))

    async def update_quantity(self, item_id: str, quantity: int) -> UiState:
        return self._apply(await self._repository.update_quantity(item_id, quantity))

    async def remove(self, item_id: str) -> UiState:
        return self._apply(await self._repository.remove_from_cart(item_id))

    async def clear(self) -> UiState:
        return self._apply(await self._repository.clear_cart())
