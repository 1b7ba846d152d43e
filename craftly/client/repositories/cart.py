"""Shopping cart with the client-side cart rules.

The server stores whatever list it is given; the rules below (no own
products, one seller per cart, quantities within stock) are enforced
here before the cart is saved.
"""

from __future__ import annotations

import time

from craftly.client.api_client import ApiClient
from craftly.client.cache import Clock, TtlCache
from craftly.client.config import get_client_settings
from craftly.client.errors import ClientError
from craftly.client.models import CartItem
from craftly.client.repositories.base import BaseRepository
from craftly.client.result import Result
from craftly.client.session import SessionStore

OWN_PRODUCT = "You cannot add your own product to your cart."
SINGLE_SELLER = (
    "You can only purchase items from one seller at a time. "
    "Please checkout your current order or clear your cart."
)


def _matches(item: CartItem, item_id: str) -> bool:
    return item.product_id == item_id or (bool(item.id) and item.id == item_id)


class CartRepository(BaseRepository):
    def __init__(
        self,
        api: ApiClient,
        session: SessionStore | None = None,
        *,
        ttl: float | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        super().__init__(api, session)
        if ttl is None:
            ttl = get_client_settings().cart_cache_ttl_seconds
        self._cache: TtlCache[list[CartItem]] = TtlCache(ttl, clock)

    async def _load(self) -> list[CartItem]:
        cached = self._cache.get()
        if cached is not None:
            return list(cached)
        uid = self._require_user().uid
        data = await self._api.get(f"/cart/{uid}")
        items = [CartItem.model_validate(i) for i in (data or {}).get("items") or []]
        self._cache.put(items)
        return list(items)

    async def _save(self, items: list[CartItem]) -> list[CartItem]:
        self._require_user()
        data = await self._api.post("/cart", {"items": [i.to_payload() for i in items]})
        saved = [CartItem.model_validate(i) for i in (data or {}).get("items") or []]
        self._cache.put(saved)
        return list(saved)

    async def get_cart(self) -> Result[list[CartItem]]:
        return await self._run("fetching cart", self._load)

    async def add_to_cart(self, product: CartItem) -> Result[list[CartItem]]:
        async def call() -> list[CartItem]:
            uid = self._require_user().uid
            items = await self._load()
            if product.created_by and product.created_by == uid:
                raise ClientError(OWN_PRODUCT)
            if items and items[0].created_by != product.created_by:
                raise ClientError(SINGLE_SELLER)

            index = next((n for n, i in enumerate(items) if i.product_id == product.product_id), None)
            if index is not None:
                existing = items[index]
                quantity = existing.quantity + product.quantity
                if quantity > existing.stock:
                    raise ClientError(
                        f"Cannot add that many items. Only {existing.stock} available. "
                        f"You already have {existing.quantity} in cart."
                    )
                items[index] = existing.model_copy(update={"quantity": quantity})
            else:
                if product.quantity > product.stock:
                    raise ClientError(
                        f"Cannot add that many items. Only {product.stock} available in stock."
                    )
                items.append(product)
            return await self._save(items)

        return await self._run("adding to cart", call)

    async def update_quantity(self, item_id: str, quantity: int) -> Result[list[CartItem]]:
        """Set an item's quantity; item_id matches the product id or the item id."""

        async def call() -> list[CartItem]:
            self._require_user()
            if quantity < 1:
                raise ClientError("Quantity must be at least 1")
            items = await self._load()
            index = next((n for n, i in enumerate(items) if _matches(i, item_id)), None)
            if index is None:
                raise ClientError("Item not found in cart")
            item = items[index]
            if quantity > item.stock:
                raise ClientError(
                    f"Cannot update quantity. Only {item.stock} available in stock."
                )
            items[index] = item.model_copy(update={"quantity": quantity})
            return await self._save(items)

        return await self._run("updating cart item", call)

    async def remove_from_cart(self, item_id: str) -> Result[list[CartItem]]:
        async def call() -> list[CartItem]:
            items = await self._load()
            return await self._save([i for i in items if not _matches(i, item_id)])

        return await self._run("removing from cart", call)

    async def save_cart(self, items: list[CartItem]) -> Result[list[CartItem]]:
        return await self._run("saving cart", lambda: self._save(items))

    async def clear_cart(self) -> Result[list[CartItem]]:
        async def call() -> list[CartItem]:
            self._require_user()
            await self._api.delete("/cart")
            self._cache.put([])
            return []

        return await self._run("clearing cart", call)

    def clear_cache(self) -> None:
        self._cache.clear()
