"""In-app notifications (new orders, new reviews)."""

from __future__ import annotations

from typing import Any

from craftly.domain.exceptions import ResourceNotFoundException


class NotificationService:
    def __init__(self, notification_repo: Any) -> None:
        self._notifications = notification_repo

    async def list_notifications(self, uid: str) -> tuple[list[dict[str, Any]], int]:
        """Notifications newest first and how many are unread."""
        notifications = await self._notifications.list_for_user(uid)
        unread = sum(1 for n in notifications if not n.get("isRead"))
        return notifications, unread

    async def mark_as_read(self, uid: str, notification_id: str) -> None:
        if not await self._notifications.mark_read(uid, notification_id):
            raise ResourceNotFoundException("Notification", notification_id)

    async def mark_all_as_read(self, uid: str) -> int:
        return await self._notifications.mark_all_read(uid)

    async def delete(self, uid: str, notification_id: str) -> None:
        await self._notifications.delete(uid, notification_id)
