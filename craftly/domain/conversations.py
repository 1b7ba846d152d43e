"""Conversation identity and unread bookkeeping for buyer/seller chat."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

CONVERSATION_ID_SEP = "_"


def build_conversation_id(uid_a: str, uid_b: str) -> str:
    """Deterministic ID for the conversation between two users.

    The IDs are sorted before joining, so the result does not depend on
    which participant opens the chat.
    """
    if not uid_a or not uid_b:
        raise ValueError("Both participant IDs are required")
    if uid_a == uid_b:
        raise ValueError("A conversation needs two different participants")
    return CONVERSATION_ID_SEP.join(sorted((uid_a, uid_b)))


def other_participant(participants: Sequence[str], uid: str) -> str | None:
    """The participant that is not uid, or None if there is none."""
    return next((p for p in participants if p != uid), None)


def unread_for(conversation: Mapping[str, Any], uid: str) -> int:
    counts = conversation.get("unreadCount") or {}
    value = counts.get(uid, 0)
    return int(value) if isinstance(value, (int, float)) else 0


def total_unread(conversations: Iterable[Mapping[str, Any]], uid: str) -> int:
    """Sum of uid's unread counters across conversations (badge count)."""
    return sum(unread_for(c, uid) for c in conversations)
