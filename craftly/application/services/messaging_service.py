"""Buyer/seller chat over the conversations collection.

Conversation IDs are derived from the two participant uids, so opening a
chat from either side reaches the same document. When a notifier (the
WebSocket connection manager) is given, each sent message is pushed to
both participants as a ``message`` event.
"""

from __future__ import annotations

import logging
from typing import Any

from craftly.domain.conversations import (
    build_conversation_id,
    other_participant,
    total_unread,
)
from craftly.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from craftly.domain.validators import is_valid_document_id
from craftly.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class MessagingService:
    def __init__(
        self,
        conversation_repo: Any,
        notifier: Any | None = None,
        *,
        conversations_limit: int = 50,
        messages_limit: int = 100,
    ) -> None:
        self._conversations = conversation_repo
        self._notifier = notifier
        self._conversations_limit = conversations_limit
        self._messages_limit = messages_limit

    async def get_or_create_conversation(
        self,
        current_uid: str,
        current_name: str | None,
        other_uid: str | None,
        other_name: str | None,
    ) -> dict[str, Any]:
        if not other_uid:
            raise ValidationException("otherUserId is required", field="otherUserId")
        if not is_valid_document_id(other_uid):
            raise ValidationException("Invalid otherUserId", field="otherUserId")
        try:
            conversation_id = build_conversation_id(current_uid, other_uid)
        except ValueError as e:
            raise ValidationException(str(e), field="otherUserId") from e

        existing = await self._conversations.get(conversation_id)
        if existing is not None:
            return existing
        now = utc_now()
        data = {
            "participants": [current_uid, other_uid],
            "participantNames": {
                current_uid: current_name or "",
                other_uid: other_name or "",
            },
            "lastMessage": "",
            "lastMessageAt": now,
            "lastMessageBy": None,
            "unreadCount": {current_uid: 0, other_uid: 0},
            "createdAt": now,
        }
        if await self._conversations.create_if_missing(conversation_id, data):
            logger.info("Conversation created: %s", conversation_id)
            return {**data, "id": conversation_id}
        # Created concurrently by the other participant.
        return await self._conversations.get(conversation_id) or {**data, "id": conversation_id}

    async def _require_participant(self, conversation_id: str, uid: str) -> dict[str, Any]:
        conversation = await self._conversations.get(conversation_id)
        if conversation is None:
            raise ResourceNotFoundException("Conversation", conversation_id)
        if uid not in (conversation.get("participants") or []):
            raise AuthorizationException(
                "You are not a participant in this conversation", resource="conversation"
            )
        return conversation

    async def send_message(
        self,
        conversation_id: str,
        sender_uid: str,
        sender_name: str | None,
        text: str | None,
    ) -> dict[str, Any]:
        """Append a message and bump the receiver's unread counter."""
        body = (text or "").strip()
        if not body:
            raise ValidationException("Message text is required", field="text")
        conversation = await self._require_participant(conversation_id, sender_uid)
        participants = conversation.get("participants") or []
        receiver = other_participant(participants, sender_uid)
        if receiver is None:
            raise ValidationException("Conversation has no other participant")
        if not sender_name:
            sender_name = (conversation.get("participantNames") or {}).get(sender_uid, "")
        message = {
            "senderId": sender_uid,
            "senderName": sender_name,
            "text": body,
            "createdAt": utc_now(),
            "read": False,
        }
        message_id = await self._conversations.add_message(conversation_id, message, receiver)
        sent = {**message, "id": message_id}
        if self._notifier is not None:
            event = {
                "type": "message",
                "conversationId": conversation_id,
                "message": {**sent, "createdAt": sent["createdAt"].isoformat()},
            }
            for uid in participants:
                await self._notifier.send_to_user(uid, event)
        return sent

    async def mark_conversation_read(self, conversation_id: str, uid: str) -> None:
        await self._require_participant(conversation_id, uid)
        await self._conversations.reset_unread(conversation_id, uid)

    async def list_conversations(self, uid: str) -> tuple[list[dict[str, Any]], int]:
        """The user's conversations (latest activity first) and their total unread count."""
        conversations = await self._conversations.list_for_participant(
            uid, self._conversations_limit
        )
        return conversations, total_unread(conversations, uid)

    async def list_messages(self, conversation_id: str, uid: str) -> list[dict[str, Any]]:
        await self._require_participant(conversation_id, uid)
        return await self._conversations.list_messages(conversation_id, self._messages_limit)
