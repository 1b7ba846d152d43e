"""Firestore-backed cart repository (carts/{uid}, one document per user)."""

from __future__ import annotations

from typing import Any

from craftly.infrastructure.firebase._rest_client import FirestoreRESTClient
from craftly.infrastructure.firebase.collections import COLLECTION_CARTS
from craftly.shared.utils.datetime import utc_now


class FirestoreCartRepository:
    def __init__(self, client: FirestoreRESTClient) -> None:
        self._coll = client.collection(COLLECTION_CARTS)

    async def get_items(self, uid: str) -> list[dict[str, Any]]:
        """Cart items for uid; empty when the user has no cart document."""
        doc = await self._coll.document(uid).get()
        if not doc:
            return []
        return list(doc.get("items") or [])

    async def save_items(self, uid: str, items: list[dict[str, Any]]) -> None:
        """Replace the cart's items (merge keeps any other fields on the document)."""
        await self._coll.document(uid).set(
            {"items": items, "updatedAt": utc_now(), "userId": uid},
            merge=True,
        )
