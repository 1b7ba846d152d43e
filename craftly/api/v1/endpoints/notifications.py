"""Notification API (users/{uid}/notifications). Callers only reach their own."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from craftly.api.v1.dependencies import (
    CurrentUserId,
    DocId,
    ensure_same_user,
    get_notification_service,
)
from craftly.application.services.notification_service import NotificationService
from craftly.core.limiter import limit_writes
from craftly.schemas.common import success_response

router = APIRouter()

NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]


@router.get("/{user_id}")
async def get_notifications(
    user_id: DocId, uid: CurrentUserId, notification_service: NotificationServiceDep
):
    ensure_same_user(uid, user_id, "notifications")
    notifications, unread = await notification_service.list_notifications(user_id)
    return success_response({"notifications": notifications, "unreadCount": unread})


@router.put("/{user_id}/mark-all-as-read")
@limit_writes
async def mark_all_as_read(
    request: Request,
    user_id: DocId,
    uid: CurrentUserId,
    notification_service: NotificationServiceDep,
):
    ensure_same_user(uid, user_id, "notifications")
    count = await notification_service.mark_all_as_read(user_id)
    return success_response({"updated": count}, "All notifications marked as read")


@router.put("/{user_id}/{notification_id}/mark-as-read")
@limit_writes
async def mark_as_read(
    request: Request,
    user_id: DocId,
    notification_id: DocId,
    uid: CurrentUserId,
    notification_service: NotificationServiceDep,
):
    ensure_same_user(uid, user_id, "notifications")
    await notification_service.mark_as_read(user_id, notification_id)
    return success_response(message="Notification marked as read")


@router.delete("/{user_id}/{notification_id}")
@limit_writes
async def delete_notification(
    request: Request,
    user_id: DocId,
    notification_id: DocId,
    uid: CurrentUserId,
    notification_service: NotificationServiceDep,
):
    ensure_same_user(uid, user_id, "notifications")
    await notification_service.delete(user_id, notification_id)
    return success_response(message="Notification deleted")
