"""Firestore-backed order repository (orders/{id}).

Orders carry ``sellerIds`` and ``productIds`` arrays next to ``items`` so
seller and per-product lookups can use array-contains queries instead of
scanning the whole collection.
"""

from __future__ import annotations

from typing import Any

from craftly.infrastructure.firebase._rest_client import (
    DESCENDING,
    DocumentNotFoundError,
    FirestoreRESTClient,
)
from craftly.infrastructure.firebase.collections import COLLECTION_ORDERS
from craftly.infrastructure.firebase.repositories._helpers import collect, with_id


class FirestoreOrderRepository:
    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_ORDERS)

    def new_id(self) -> str:
        return self._coll.document().id

    async def create(self, order_id: str, data: dict[str, Any]) -> None:
        await self._coll.create(order_id, data)

    async def get_by_id(self, order_id: str) -> dict[str, Any] | None:
        doc = await self._coll.document(order_id).get()
        return with_id(doc) if doc else None

    async def list_by_buyer(self, buyer_id: str) -> list[dict[str, Any]]:
        """All of a buyer's orders, unsorted (single-field filter, no composite index)."""
        return await collect(self._coll.where("buyerId", "==", buyer_id).stream())

    async def list_recent(self, limit: int) -> list[dict[str, Any]]:
        """The newest orders across all buyers."""
        query = self._coll.order_by("createdAt", DESCENDING).limit(limit)
        return await collect(query.stream())

    async def list_by_seller(self, seller_id: str) -> list[dict[str, Any]]:
        return await collect(
            self._coll.where("sellerIds", "array-contains", seller_id).stream()
        )

    async def list_by_product(self, product_id: str) -> list[dict[str, Any]]:
        return await collect(
            self._coll.where("productIds", "array-contains", product_id).stream()
        )

    async def update(self, order_id: str, fields: dict[str, Any]) -> bool:
        try:
            await self._coll.document(order_id).update(fields)
        except DocumentNotFoundError:
            return False
        return True
