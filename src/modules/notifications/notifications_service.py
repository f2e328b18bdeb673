# Notifications Service

from typing import List, Optional

from src.common.store.document_store import DocumentStore
from src.models.entities import Notification, User
from src.models.models import Collections, NotificationType


async def create_notification(store: DocumentStore, notification: Notification) -> str:
    """Write one notification record and return its id."""
    return await store.insert(Collections.NOTIFICATIONS, notification.to_document())


def build_notification(
    user_id: str,
    title: str,
    message: str,
    notification_type: NotificationType,
    related_id: Optional[str] = None,
    link: Optional[str] = None
) -> Notification:
    return Notification(
        user_id=user_id,
        title=title,
        message=message,
        type=notification_type,
        related_id=related_id,
        link=link
    )


async def _get_owned(store: DocumentStore, user: User, notification_id: str) -> Optional[Notification]:
    document = await store.find_one(Collections.NOTIFICATIONS, notification_id)
    if document is None or document.get("userId") != user.id:
        return None
    return Notification.model_validate(document)


async def get_user_notifications(
    store: DocumentStore,
    user: User,
    limit: int = 20,
    unread_only: bool = False
) -> tuple[List[Notification], int]:
    """Get notifications for a user, newest first, with unread count."""
    documents = await store.find_many(Collections.NOTIFICATIONS, {"userId": user.id})
    notifications = [Notification.model_validate(d) for d in documents]
    notifications.sort(key=lambda n: n.created_at, reverse=True)

    unread_count = sum(1 for n in notifications if not n.read)
    if unread_only:
        notifications = [n for n in notifications if not n.read]

    return notifications[:limit], unread_count


async def mark_as_read(store: DocumentStore, user: User, notification_id: str) -> bool:
    """
    Mark one notification as read.

    Idempotent: an already-read notification is left untouched. Returns False
    when the notification does not exist or belongs to someone else.
    """
    notification = await _get_owned(store, user, notification_id)
    if notification is None:
        return False
    if not notification.read:
        await store.update(Collections.NOTIFICATIONS, notification_id, {"read": True})
    return True


async def mark_notifications_read(store: DocumentStore, user: User, notification_ids: List[str]) -> int:
    """Mark notifications as read. Returns count of notifications found."""
    count = 0
    for notification_id in notification_ids:
        if await mark_as_read(store, user, notification_id):
            count += 1
    return count


async def mark_all_read(store: DocumentStore, user: User) -> int:
    """Mark all unread notifications as read for a user."""
    unread = await store.find_many(Collections.NOTIFICATIONS, {"userId": user.id, "read": False})
    for document in unread:
        await store.update(Collections.NOTIFICATIONS, document["id"], {"read": True})
    return len(unread)


async def delete_notification(store: DocumentStore, user: User, notification_id: str) -> bool:
    """Delete a notification. Returns True if deleted."""
    notification = await _get_owned(store, user, notification_id)
    if notification is None:
        return False
    return await store.delete(Collections.NOTIFICATIONS, notification_id)
