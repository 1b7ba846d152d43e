"""Server-side cart persistence. Cart rules (stock, single seller) live in the client."""

from __future__ import annotations

import logging
from typing import Any

from craftly.domain.exceptions import ValidationException

logger = logging.getLogger(__name__)


class CartService:
    def __init__(self, cart_repo: Any) -> None:
        self._carts = cart_repo

    async def get_items(self, uid: str) -> list[dict[str, Any]]:
        return await self._carts.get_items(uid)

    async def save(self, uid: str, items: Any) -> list[dict[str, Any]]:
        if not isinstance(items, list):
            raise ValidationException("Items must be an array", field="items")
        await self._carts.save_items(uid, items)
        logger.debug("Saved cart for %s (%s items)", uid, len(items))
        return items

    async def clear(self, uid: str) -> None:
        await self._carts.save_items(uid, [])
