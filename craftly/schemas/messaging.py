"""Messaging API schemas."""

from craftly.schemas.common import CamelModel


class ConversationCreateRequest(CamelModel):
    other_user_id: str | None = None
    other_user_name: str | None = None
    current_user_name: str | None = None


class MessageSendRequest(CamelModel):
    text: str | None = None
    sender_name: str | None = None
