"""Messaging API: buyer/seller conversations and their messages."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from craftly.api.v1.dependencies import CurrentUserId, DocId, get_messaging_service
from craftly.application.services.messaging_service import MessagingService
from craftly.core.limiter import limit_writes
from craftly.schemas.common import success_response
from craftly.schemas.messaging import ConversationCreateRequest, MessageSendRequest

router = APIRouter()

MessagingServiceDep = Annotated[MessagingService, Depends(get_messaging_service)]


@router.post("/conversations")
@limit_writes
async def get_or_create_conversation(
    request: Request,
    body: ConversationCreateRequest,
    uid: CurrentUserId,
    messaging_service: MessagingServiceDep,
):
    """Open the conversation with another user, creating it on first contact."""
    conversation = await messaging_service.get_or_create_conversation(
        uid, body.current_user_name, body.other_user_id, body.other_user_name
    )
    return success_response(conversation)


@router.get("/conversations")
async def list_conversations(uid: CurrentUserId, messaging_service: MessagingServiceDep):
    conversations, unread = await messaging_service.list_conversations(uid)
    return success_response(
        {
            "conversations": conversations,
            "count": len(conversations),
            "totalUnread": unread,
        }
    )


@router.get("/conversations/{conversation_id}/messages")
async def list_messages(
    conversation_id: DocId, uid: CurrentUserId, messaging_service: MessagingServiceDep
):
    messages = await messaging_service.list_messages(conversation_id, uid)
    return success_response({"messages": messages, "count": len(messages)})


@router.post("/conversations/{conversation_id}/messages", status_code=201)
@limit_writes
async def send_message(
    request: Request,
    conversation_id: DocId,
    body: MessageSendRequest,
    uid: CurrentUserId,
    messaging_service: MessagingServiceDep,
):
    message = await messaging_service.send_message(
        conversation_id, uid, body.sender_name, body.text
    )
    return success_response(message)


@router.post("/conversations/{conversation_id}/read")
async def mark_conversation_read(
    conversation_id: DocId, uid: CurrentUserId, messaging_service: MessagingServiceDep
):
    await messaging_service.mark_conversation_read(conversation_id, uid)
    return success_response({"conversationId": conversation_id, "unreadCount": 0})
