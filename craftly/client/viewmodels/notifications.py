from __future__ import annotations

from craftly.client.repositories.notifications import NotificationRepository
from craftly.client.viewmodels.state import Loading, UiState, ViewModel


class NotificationsViewModel(ViewModel):
    def __init__(self, repository: NotificationRepository) -> None:
        super().__init__()
        self._repository = repository
        self.unread_count = 0

    async def load(self) -> UiState:
        self._set_state(Loading())
        result = await self._repository.get_notifications()
        if result.is_success:
            self.unread_count = int(result.value.get("unreadCount", 0))
        return self._apply(result, lambda data: list(data.get("notifications") or []))

    async def mark_as_read(self, notification_id: str) -> UiState:
        result = await self._repository.mark_as_read(notification_id)
        if result.is_failure:
            return self._apply(result)
        return await self.load()

    async def mark_all_as_read(self) -> UiState:
        result = await self._repository.mark_all_as_read()
        if result.is_failure:
            return self._apply(result)
        return await self.load()

    async def delete(self, notification_id: str) -> UiState:
        result = await self._repository.delete_notification(notification_id)
        if result.is_failure:
            return self._apply(result)
        return await self.load()
