"""Chat screen for one conversation, kept current by a message listener."""

from __future__ import annotations

from typing import Any

from craftly.client.listeners import MessageListener
from craftly.client.repositories.messaging import MessagingRepository
from craftly.client.viewmodels.state import Error, Loading, Success, UiState, ViewModel, error_text


class ChatViewModel(ViewModel):
    """Success holds the conversation's messages, oldest first."""

    def __init__(self, repository: MessagingRepository) -> None:
        super().__init__()
        self._repository = repository
        self.conversation: dict[str, Any] | None = None
        self._messages: dict[str, dict[str, Any]] = {}
        self._listener: MessageListener | None = None

    @property
    def messages(self) -> list[dict[str, Any]]:
        return sorted(self._messages.values(), key=lambda m: str(m.get("createdAt") or ""))

    async def open(self, other_user_id: str, other_user_name: str = "") -> UiState:
        """Open (or create) the conversation, load its messages and mark it read."""
        self._set_state(Loading())
        result = await self._repository.get_or_create_conversation(other_user_id, other_user_name)
        if result.is_failure:
            self._set_state(Error(error_text(result.error)))
            return self.state
        self.conversation = result.value
        conversation_id = self.conversation["id"]
        messages = await self._repository.get_messages(conversation_id)
        if messages.is_success:
            self._merge(messages.value or [])
            await self._repository.mark_as_read(conversation_id)
        return self._apply(messages, lambda _: self.messages)

    def _merge(self, messages: list[dict[str, Any]]) -> None:
        for message in messages:
            self._messages[message.get("id") or str(len(self._messages))] = message

    def _on_messages(self, messages: list[dict[str, Any]]) -> None:
        self._merge(messages)
        self._set_state(Success(self.messages))

    def start_listening(self, interval: float | None = None) -> None:
        if self.conversation is None or self._listener is not None:
            return
        self._listener = self._repository.listen_to_messages(
            self.conversation["id"], self._on_messages, interval=interval
        )

    def stop_listening(self) -> None:
        if self._listener is not None:
            self._listener.unsubscribe()
            self._listener = None

    async def send(self, text: str) -> UiState:
        if self.conversation is None:
            self._set_state(Error("No conversation open"))
            return self.state
        result = await self._repository.send_message(self.conversation["id"], text)
        if result.is_failure:
            self._set_state(Error(error_text(result.error)))
            return self.state
        self._on_messages([result.value])
        return self.state
