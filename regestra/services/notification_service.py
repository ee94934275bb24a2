import logging
import uuid

from sqlalchemy.orm import Session

from regestra.core.config import settings
from regestra.models.notification import Notification
from regestra.models.user import User
from regestra.repositories.notification_repo import NotificationRepository
from regestra.repositories.user_repo import UserRepository
from regestra.schemas.common import GenericMessageResponse
from regestra.schemas.notification import NotificationItem, NotificationListResponse, UnreadCountResponse

logger = logging.getLogger(__name__)

ALLOWED_NOTIFICATION_TYPES = {"like", "comment", "follow"}
MAX_PREVIEW_LENGTH = 140


class NotificationService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.notification_repo = NotificationRepository(db)
        self.user_repo = UserRepository(db)

    def notify(
        self,
        *,
        recipient_id: uuid.UUID,
        actor_id: uuid.UUID,
        type: str,
        content_preview: str | None = None,
    ) -> Notification | None:
        """Stage a notification in the caller's transaction; the caller commits."""
        if type not in ALLOWED_NOTIFICATION_TYPES:
            raise ValueError(f"unsupported notification type: {type}")
        if recipient_id == actor_id:
            logger.debug("self notification suppressed", extra={"user_id": str(actor_id), "type": type})
            return None

        return self.notification_repo.create(
            recipient_user_id=recipient_id,
            actor_user_id=actor_id,
            type=type,
            content_preview=self._trim_preview(content_preview),
        )

    def list_for(self, *, user: User) -> NotificationListResponse:
        notifications = self.notification_repo.list_for_recipient(user.id, limit=settings.notification_list_limit)
        actors = self.user_repo.get_active_map({notification.actor_user_id for notification in notifications})

        items: list[NotificationItem] = []
        for notification in notifications:
            actor = actors.get(notification.actor_user_id)
            items.append(
                NotificationItem(
                    id=notification.id,
                    type=notification.type,
                    actor_id=notification.actor_user_id,
                    actor_name=actor.name if actor else settings.deleted_user_name,
                    actor_avatar=actor.avatar_url if actor else settings.deleted_user_avatar,
                    content_preview=notification.content_preview,
                    unread=notification.unread,
                    created_at=notification.created_at,
                )
            )
        return NotificationListResponse(items=items)

    def unread_count(self, *, user: User) -> UnreadCountResponse:
        return UnreadCountResponse(unread_count=self.notification_repo.count_unread(user.id))

    def mark_all_read(self, *, user: User) -> GenericMessageResponse:
        self.notification_repo.mark_all_read(user.id)
        self.db.commit()
        return GenericMessageResponse(message="notifications marked as read")

    def clear(self, *, user: User) -> GenericMessageResponse:
        self.notification_repo.delete_all(user.id)
        self.db.commit()
        return GenericMessageResponse(message="notifications cleared")

    def delete_one(self, *, user: User, notification_id: uuid.UUID) -> GenericMessageResponse:
        self.notification_repo.delete_one(notification_id=notification_id, recipient_user_id=user.id)
        self.db.commit()
        return GenericMessageResponse(message="notification deleted")

    def _trim_preview(self, content_preview: str | None) -> str | None:
        if content_preview is None:
            return None
        value = " ".join(content_preview.split())
        if not value:
            return None
        if len(value) <= MAX_PREVIEW_LENGTH:
            return value
        return value[: MAX_PREVIEW_LENGTH - 3].rstrip() + "..."
