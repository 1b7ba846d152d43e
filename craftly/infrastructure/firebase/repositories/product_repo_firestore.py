"""Firestore-backed product repository (products/{id})."""

from __future__ import annotations

import logging
from typing import Any

from craftly.infrastructure.firebase._rest_client import (
    DocumentNotFoundError,
    FirestoreRESTClient,
)
from craftly.infrastructure.firebase.collections import COLLECTION_PRODUCTS
from craftly.infrastructure.firebase.repositories._helpers import collect, with_id

logger = logging.getLogger(__name__)


class FirestoreProductRepository:
    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_PRODUCTS)

    async def find(
        self,
        status: str | None = None,
        created_by: str | None = None,
    ) -> list[dict[str, Any]]:
        """Products filtered by status and/or creator (no filter lists everything)."""
        if status is None and created_by is None:
            return await collect(self._coll.stream())
        query = None
        if status is not None:
            query = self._coll.where("status", "==", status)
        if created_by is not None:
            query = (
                query.where("createdBy", "==", created_by)
                if query is not None
                else self._coll.where("createdBy", "==", created_by)
            )
        return await collect(query.stream())

    async def get_by_id(self, product_id: str) -> dict[str, Any] | None:
        doc = await self._coll.document(product_id).get()
        return with_id(doc) if doc else None

    async def create(self, data: dict[str, Any]) -> str:
        ref = await self._coll.add(data)
        return ref.id

    async def update(self, product_id: str, fields: dict[str, Any]) -> bool:
        try:
            await self._coll.document(product_id).update(fields)
        except DocumentNotFoundError:
            return False
        return True

    async def delete(self, product_id: str) -> None:
        await self._coll.document(product_id).delete()

    async def decrement_stock(self, product_id: str, quantity: int | float) -> int | None:
        """Subtract quantity from stock, never going below zero.

        Returns the new stock, or None when the product does not exist.
        """
        doc = await self._coll.document(product_id).get()
        if not doc:
            return None
        current = doc.get("stock") or 0
        new_stock = max(0, int(current - quantity))
        await self._coll.document(product_id).update({"stock": new_stock})
        logger.debug("Stock for %s: %s -> %s", product_id, current, new_stock)
        return new_stock
