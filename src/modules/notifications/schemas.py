# Notifications Schemas

from typing import Optional, List
from pydantic import BaseModel
from datetime import datetime

from src.models.models import NotificationType, UserRole


class NotificationResponse(BaseModel):
    id: str
    title: str
    message: str
    type: NotificationType
    read: bool
    related_id: Optional[str] = None
    link: Optional[str] = None
    created_at: datetime


class NotificationsListResponse(BaseModel):
    notifications: List[NotificationResponse]
    unread_count: int


class MarkReadRequest(BaseModel):
    notification_ids: List[str]


class MarkReadResponse(BaseModel):
    success: bool
    marked_count: int


class BroadcastRequest(BaseModel):
    title: str
    message: str
    role: UserRole
    link: Optional[str] = None


class FanoutFailure(BaseModel):
    user_id: str
    error: str


class FanoutResult(BaseModel):
    """Per-recipient outcome of one notification fan-out."""
    delivered: List[str] = []
    failed: List[FanoutFailure] = []


class BroadcastResponse(BaseModel):
    success: bool
    delivered_count: int
    failed_count: int
