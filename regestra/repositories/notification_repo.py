import uuid

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from regestra.models.notification import Notification


class NotificationRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def create(
        self,
        *,
        recipient_user_id: uuid.UUID,
        actor_user_id: uuid.UUID,
        type: str,
        content_preview: str | None,
    ) -> Notification:
        notification = Notification(
            recipient_user_id=recipient_user_id,
            actor_user_id=actor_user_id,
            type=type,
            content_preview=content_preview,
            unread=True,
        )
        self.db.add(notification)
        self.db.flush()
        return notification

    def list_for_recipient(self, recipient_user_id: uuid.UUID, *, limit: int) -> list[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.recipient_user_id == recipient_user_id)
            .order_by(Notification.created_at.desc())
            .limit(limit)
        )
        return list(self.db.scalars(stmt))

    def count_unread(self, recipient_user_id: uuid.UUID) -> int:
        stmt = select(func.count(Notification.id)).where(
            Notification.recipient_user_id == recipient_user_id,
            Notification.unread.is_(True),
        )
        return int(self.db.scalar(stmt) or 0)

    def mark_all_read(self, recipient_user_id: uuid.UUID) -> None:
        self.db.execute(
            update(Notification)
            .where(Notification.recipient_user_id == recipient_user_id, Notification.unread.is_(True))
            .values(unread=False)
            .execution_options(synchronize_session=False)
        )

    def delete_all(self, recipient_user_id: uuid.UUID) -> None:
        self.db.execute(delete(Notification).where(Notification.recipient_user_id == recipient_user_id))

    def delete_one(self, *, notification_id: uuid.UUID, recipient_user_id: uuid.UUID) -> None:
        self.db.execute(
            delete(Notification).where(
                Notification.id == notification_id,
                Notification.recipient_user_id == recipient_user_id,
            )
        )
