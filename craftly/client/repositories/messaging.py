"""Buyer/seller chat through the REST API."""

from __future__ import annotations

from typing import Any

from craftly.client.errors import ClientError
from craftly.client.listeners import MessageCallback, MessageListener
from craftly.client.repositories.base import BaseRepository
from craftly.client.result import Result
from craftly.domain.conversations import build_conversation_id


class MessagingRepository(BaseRepository):
    def conversation_id_with(self, other_user_id: str) -> str:
        """Same ID the server derives for the signed-in user and other_user_id."""
        return build_conversation_id(self._require_user().uid, other_user_id)

    async def get_or_create_conversation(
        self, other_user_id: str, other_user_name: str = ""
    ) -> Result[dict[str, Any]]:
        async def call() -> dict[str, Any]:
            user = self._require_user()
            if other_user_id == user.uid:
                raise ClientError("You cannot message yourself")
            return await self._api.post(
                "/messages/conversations",
                {
                    "otherUserId": other_user_id,
                    "otherUserName": other_user_name,
                    "currentUserName": user.display_name,
                },
            )

        return await self._run("opening conversation", call)

    async def get_conversations(self) -> Result[dict[str, Any]]:
        """``{"conversations": [...], "count": n, "totalUnread": n}``"""

        async def call() -> dict[str, Any]:
            self._require_user()
            return await self._api.get("/messages/conversations")

        return await self._run("loading conversations", call)

    async def get_messages(self, conversation_id: str) -> Result[list[dict[str, Any]]]:
        async def call() -> list[dict[str, Any]]:
            self._require_user()
            data = await self._api.get(f"/messages/conversations/{conversation_id}/messages")
            return list(data.get("messages") or [])

        return await self._run(f"loading messages of {conversation_id}", call)

    async def send_message(self, conversation_id: str, text: str) -> Result[dict[str, Any]]:
        async def call() -> dict[str, Any]:
            user = self._require_user()
            if not text.strip():
                raise ClientError("Message text is required")
            return await self._api.post(
                f"/messages/conversations/{conversation_id}/messages",
                {"text": text.strip(), "senderName": user.display_name},
            )

        return await self._run(f"sending message to {conversation_id}", call)

    async def mark_as_read(self, conversation_id: str) -> Result[None]:
        async def call() -> None:
            self._require_user()
            await self._api.post(f"/messages/conversations/{conversation_id}/read")

        return await self._run(f"marking {conversation_id} read", call)

    def listen_to_messages(
        self,
        conversation_id: str,
        on_messages: MessageCallback,
        interval: float | None = None,
    ) -> MessageListener:
        """Start polling the conversation; call ``unsubscribe()`` on the handle to stop."""
        listener = MessageListener(self, conversation_id, on_messages, interval=interval)
        listener.start()
        return listener
