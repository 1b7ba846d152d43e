"""Firestore-backed user repository (users/{uid})."""

from __future__ import annotations

from typing import Any

from craftly.infrastructure.firebase._rest_client import (
    DocumentNotFoundError,
    FirestoreRESTClient,
)
from craftly.infrastructure.firebase.collections import COLLECTION_USERS
from craftly.infrastructure.firebase.repositories._helpers import with_id


class FirestoreUserRepository:
    """Reads and writes user documents. Emails are stored lowercased."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_USERS)

    async def get_by_id(self, uid: str) -> dict[str, Any] | None:
        doc = await self._coll.document(uid).get()
        return with_id(doc) if doc else None

    async def get_by_email(self, email: str) -> dict[str, Any] | None:
        """Return the user whose email matches (case-insensitive), or None."""
        query = self._coll.where("email", "==", email.strip().lower()).limit(1)
        async for snapshot in query.stream():
            return with_id(snapshot)
        return None

    async def create(self, uid: str, data: dict[str, Any]) -> None:
        """Create users/{uid}; raises DocumentExistsError if the uid is taken."""
        await self._coll.create(uid, data)

    async def update(self, uid: str, fields: dict[str, Any]) -> bool:
        """Update fields of an existing user. Returns False if the user does not exist."""
        try:
            await self._coll.document(uid).update(fields)
        except DocumentNotFoundError:
            return False
        return True
