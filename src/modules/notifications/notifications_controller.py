# Notifications Controller

from fastapi import APIRouter, Depends, HTTPException

from src.auth.dependencies import get_current_user, require_role
from src.common.database.database import get_document_store
from src.common.store.document_store import DocumentStore
from src.common.utils.global_messages import GlobalMessages
from src.models.entities import User
from src.models.models import UserRole

from . import notifications_service as service
from .events import RoleBroadcast
from .fanout import notify
from .schemas import (
    BroadcastRequest,
    BroadcastResponse,
    NotificationResponse,
    NotificationsListResponse,
    MarkReadRequest,
    MarkReadResponse
)


router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=NotificationsListResponse)
async def get_notifications(
    limit: int = 20,
    unread_only: bool = False,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    """Get user's notifications."""
    notifications, unread_count = await service.get_user_notifications(
        store, current_user, limit, unread_only
    )

    return NotificationsListResponse(
        notifications=[
            NotificationResponse(
                id=n.id,
                title=n.title,
                message=n.message,
                type=n.type,
                read=n.read,
                related_id=n.related_id,
                link=n.link,
                created_at=n.created_at
            )
            for n in notifications
        ],
        unread_count=unread_count
    )


@router.post("/{notification_id}/read", response_model=MarkReadResponse)
async def mark_one_read(
    notification_id: str,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    """Mark a single notification as read."""
    found = await service.mark_as_read(store, current_user, notification_id)
    if not found:
        raise HTTPException(status_code=404, detail=GlobalMessages.NOTIFICATION_NOT_FOUND)
    return MarkReadResponse(success=True, marked_count=1)


@router.post("/mark-read", response_model=MarkReadResponse)
async def mark_read(
    request: MarkReadRequest,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    """Mark specific notifications as read."""
    count = await service.mark_notifications_read(store, current_user, request.notification_ids)
    return MarkReadResponse(success=True, marked_count=count)


@router.post("/mark-all-read", response_model=MarkReadResponse)
async def mark_all_read(
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    """Mark all notifications as read."""
    count = await service.mark_all_read(store, current_user)
    return MarkReadResponse(success=True, marked_count=count)


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: str,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(get_current_user)
):
    """Delete a notification."""
    deleted = await service.delete_notification(store, current_user, notification_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=GlobalMessages.NOTIFICATION_NOT_FOUND)
    return {"success": True}


@router.post("/broadcast", response_model=BroadcastResponse)
async def broadcast(
    request: BroadcastRequest,
    store: DocumentStore = Depends(get_document_store),
    current_user: User = Depends(require_role(UserRole.ADMIN))
):
    """Send a system notification to every user holding a role."""
    result = await notify(store, RoleBroadcast(**request.model_dump()))
    return BroadcastResponse(
        success=not result.failed,
        delivered_count=len(result.delivered),
        failed_count=len(result.failed)
    )
