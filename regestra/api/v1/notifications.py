from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from regestra.api.deps import get_current_user
from regestra.db.session import get_db
from regestra.models.user import User
from regestra.schemas.common import GenericMessageResponse
from regestra.schemas.notification import NotificationListResponse, UnreadCountResponse
from regestra.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
def list_notifications(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return NotificationService(db).list_for(user=current_user)


@router.get("/unread-count", response_model=UnreadCountResponse)
def unread_count(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return NotificationService(db).unread_count(user=current_user)


@router.post("/read", response_model=GenericMessageResponse)
def mark_all_read(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return NotificationService(db).mark_all_read(user=current_user)


@router.delete("", response_model=GenericMessageResponse)
def clear_notifications(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return NotificationService(db).clear(user=current_user)


@router.delete("/{notification_id}", response_model=GenericMessageResponse)
def delete_notification(
    notification_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return NotificationService(db).delete_one(user=current_user, notification_id=notification_id)
