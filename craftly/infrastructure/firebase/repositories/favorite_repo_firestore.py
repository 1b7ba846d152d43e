"""Firestore-backed favorites (users/{uid}/favorites/{productId})."""

from __future__ import annotations

from craftly.infrastructure.firebase._rest_client import FirestoreRESTClient
from craftly.infrastructure.firebase.collections import (
    COLLECTION_USERS,
    SUBCOLLECTION_FAVORITES,
)
from craftly.shared.utils.datetime import utc_now


class FirestoreFavoriteRepository:
    def __init__(self, client: FirestoreRESTClient) -> None:
        self._users = client.collection(COLLECTION_USERS)

    def _favorites(self, uid: str):
        return self._users.document(uid).collection(SUBCOLLECTION_FAVORITES)

    async def list_product_ids(self, uid: str) -> list[str]:
        return [snapshot.id async for snapshot in self._favorites(uid).stream()]

    async def add(self, uid: str, product_id: str) -> None:
        """Favorite a product; adding it twice only refreshes addedAt."""
        await self._favorites(uid).document(product_id).set(
            {"productId": product_id, "addedAt": utc_now()}
        )

    async def remove(self, uid: str, product_id: str) -> None:
        await self._favorites(uid).document(product_id).delete()
