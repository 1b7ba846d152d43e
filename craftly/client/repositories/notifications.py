"""In-app notifications of the signed-in user."""

from __future__ import annotations

from typing import Any

from craftly.client.repositories.base import BaseRepository
from craftly.client.result import Result


class NotificationRepository(BaseRepository):
    async def get_notifications(self) -> Result[dict[str, Any]]:
        """``{"notifications": [...], "unreadCount": n}``"""

        async def call() -> dict[str, Any]:
            uid = self._require_user().uid
            return await self._api.get(f"/notifications/{uid}")

        return await self._run("loading notifications", call)

    async def mark_as_read(self, notification_id: str) -> Result[None]:
        async def call() -> None:
            uid = self._require_user().uid
            await self._api.put(f"/notifications/{uid}/{notification_id}/mark-as-read")

        return await self._run(f"marking notification {notification_id} read", call)

    async def mark_all_as_read(self) -> Result[int]:
        async def call() -> int:
            uid = self._require_user().uid
            data = await self._api.put(f"/notifications/{uid}/mark-all-as-read")
            return int(data.get("updated", 0))

        return await self._run("marking all notifications read", call)

    async def delete_notification(self, notification_id: str) -> Result[None]:
        async def call() -> None:
            uid = self._require_user().uid
            await self._api.delete(f"/notifications/{uid}/{notification_id}")

        return await self._run(f"deleting notification {notification_id}", call)
