"""Firestore-backed notifications (users/{uid}/notifications/{id})."""

from __future__ import annotations

from typing import Any

from craftly.infrastructure.firebase._rest_client import (
    DESCENDING,
    DocumentNotFoundError,
    FirestoreRESTClient,
)
from craftly.infrastructure.firebase.collections import (
    COLLECTION_USERS,
    SUBCOLLECTION_NOTIFICATIONS,
)
from craftly.infrastructure.firebase.repositories._helpers import collect
from craftly.shared.utils.datetime import utc_now


class FirestoreNotificationRepository:
    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._users = client.collection(COLLECTION_USERS)

    def _notifications(self, uid: str):
        return self._users.document(uid).collection(SUBCOLLECTION_NOTIFICATIONS)

    def ref(self, uid: str, notification_id: str | None = None):
        """Document reference for a notification (new ID when none is given)."""
        return self._notifications(uid).document(notification_id)

    async def list_for_user(self, uid: str) -> list[dict[str, Any]]:
        query = self._notifications(uid).order_by("createdAt", DESCENDING)
        return await collect(query.stream())

    async def add(self, uid: str, data: dict[str, Any]) -> str:
        ref = await self._notifications(uid).add(data)
        return ref.id

    async def mark_read(self, uid: str, notification_id: str) -> bool:
        """Returns False if the notification does not exist."""
        try:
            await self.ref(uid, notification_id).update(
                {"isRead": True, "readAt": utc_now()}
            )
        except DocumentNotFoundError:
            return False
        return True

    async def mark_all_read(self, uid: str) -> int:
        """Mark every unread notification read in one batch. Returns how many changed."""
        batch = self._client.batch()
        now = utc_now()
        async for snapshot in self._notifications(uid).where("isRead", "==", False).stream():
            batch.update(self.ref(uid, snapshot.id), {"isRead": True, "readAt": now})
        count = len(batch)
        await batch.commit()
        return count

    async def delete(self, uid: str, notification_id: str) -> None:
        await self.ref(uid, notification_id).delete()
