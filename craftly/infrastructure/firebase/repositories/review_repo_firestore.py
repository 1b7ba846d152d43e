"""Firestore-backed reviews (products/{pid}/reviews/{uid}).

The reviewer's uid is the document ID, which makes one review per user per
product a create precondition rather than a read-then-write check.
"""

from __future__ import annotations

from typing import Any

from craftly.infrastructure.firebase._rest_client import DESCENDING, FirestoreRESTClient
from craftly.infrastructure.firebase.collections import (
    COLLECTION_PRODUCTS,
    SUBCOLLECTION_REVIEWS,
)
from craftly.infrastructure.firebase.repositories._helpers import collect, with_id
from craftly.infrastructure.firebase.repositories.notification_repo_firestore import (
    FirestoreNotificationRepository,
)


class FirestoreReviewRepository:
    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._products = client.collection(COLLECTION_PRODUCTS)
        self._notifications = FirestoreNotificationRepository(client)

    def _reviews(self, product_id: str):
        return self._products.document(product_id).collection(SUBCOLLECTION_REVIEWS)

    async def get(self, product_id: str, uid: str) -> dict[str, Any] | None:
        doc = await self._reviews(product_id).document(uid).get()
        return with_id(doc) if doc else None

    async def list_for_product(self, product_id: str) -> list[dict[str, Any]]:
        query = self._reviews(product_id).order_by("createdAt", DESCENDING)
        return await collect(query.stream())

    async def create(
        self,
        product_id: str,
        uid: str,
        review: dict[str, Any],
        notify: tuple[str, dict[str, Any]] | None = None,
    ) -> None:
        """Write the review and, optionally, a notification (recipient, data) atomically.

        Raises DocumentExistsError if uid already reviewed the product.
        """
        batch = self._client.batch()
        batch.create(self._reviews(product_id).document(uid), review)
        if notify is not None:
            recipient, notification = notify
            batch.create(self._notifications.ref(recipient), notification)
        await batch.commit()
