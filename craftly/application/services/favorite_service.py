"""Favorited products per user."""

from __future__ import annotations

from typing import Any

from craftly.domain.exceptions import ValidationException
from craftly.domain.validators import is_valid_document_id


class FavoriteService:
    def __init__(self, favorite_repo: Any) -> None:
        self._favorites = favorite_repo

    async def list_product_ids(self, uid: str) -> list[str]:
        return await self._favorites.list_product_ids(uid)

    async def add(self, uid: str, product_id: Any) -> None:
        if not product_id:
            raise ValidationException("productId is required", field="productId")
        if not is_valid_document_id(product_id):
            raise ValidationException("Invalid productId", field="productId")
        await self._favorites.add(uid, product_id)

    async def remove(self, uid: str, product_id: str) -> None:
        await self._favorites.remove(uid, product_id)
