from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

NotificationType = Literal["like", "comment", "follow"]


class NotificationItem(BaseModel):
    id: UUID
    type: NotificationType
    actor_id: UUID
    actor_name: str
    actor_avatar: str
    content_preview: str | None
    unread: bool
    created_at: datetime


class NotificationListResponse(BaseModel):
    items: list[NotificationItem]


class UnreadCountResponse(BaseModel):
    unread_count: int
