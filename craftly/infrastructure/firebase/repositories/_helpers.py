"""Snapshot helpers shared by the Firestore repositories."""

from collections.abc import AsyncIterator
from typing import Any

from craftly.infrastructure.firebase._rest_client import DocumentSnapshot


def with_id(snapshot: DocumentSnapshot) -> dict[str, Any]:
    """Document data with its ID under "id" (the ID wins over a stored "id" field)."""
    return {**snapshot.to_dict(), "id": snapshot.id}


async def collect(stream: AsyncIterator[DocumentSnapshot]) -> list[dict[str, Any]]:
    return [with_id(snapshot) async for snapshot in stream]
