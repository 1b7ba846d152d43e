"""Firestore-backed conversations and messages.

conversations/{cid} holds participants, last-message preview and a per-user
``unreadCount`` map; messages live in conversations/{cid}/messages.
"""

from __future__ import annotations

from typing import Any

from craftly.infrastructure.firebase._rest_client import (
    ASCENDING,
    DESCENDING,
    DocumentExistsError,
    FirestoreRESTClient,
)
from craftly.infrastructure.firebase._rest_encoding import Increment
from craftly.infrastructure.firebase.collections import (
    COLLECTION_CONVERSATIONS,
    SUBCOLLECTION_MESSAGES,
)
from craftly.infrastructure.firebase.repositories._helpers import collect, with_id


class FirestoreConversationRepository:
    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_CONVERSATIONS)

    def _messages(self, conversation_id: str):
        return self._coll.document(conversation_id).collection(SUBCOLLECTION_MESSAGES)

    async def get(self, conversation_id: str) -> dict[str, Any] | None:
        doc = await self._coll.document(conversation_id).get()
        return with_id(doc) if doc else None

    async def create_if_missing(self, conversation_id: str, data: dict[str, Any]) -> bool:
        """Create the conversation unless it exists. Returns True if it was created."""
        try:
            await self._coll.create(conversation_id, data)
        except DocumentExistsError:
            return False
        return True

    async def list_for_participant(self, uid: str, limit: int) -> list[dict[str, Any]]:
        query = (
            self._coll.where("participants", "array-contains", uid)
            .order_by("lastMessageAt", DESCENDING)
            .limit(limit)
        )
        return await collect(query.stream())

    async def list_messages(self, conversation_id: str, limit: int) -> list[dict[str, Any]]:
        query = self._messages(conversation_id).order_by("createdAt", ASCENDING).limit(limit)
        return await collect(query.stream())

    async def add_message(
        self,
        conversation_id: str,
        message: dict[str, Any],
        receiver_id: str,
    ) -> str:
        """Store the message and update the conversation preview in one commit.

        The receiver's unread counter is incremented server-side.
        """
        ref = self._messages(conversation_id).document()
        batch = self._client.batch()
        batch.create(ref, message)
        batch.update(
            self._coll.document(conversation_id),
            {
                "lastMessage": message["text"],
                "lastMessageAt": message["createdAt"],
                "lastMessageBy": message["senderId"],
                f"unreadCount.{receiver_id}": Increment(1),
            },
        )
        await batch.commit()
        return ref.id

    async def reset_unread(self, conversation_id: str, uid: str) -> None:
        await self._coll.document(conversation_id).update({f"unreadCount.{uid}": 0})
