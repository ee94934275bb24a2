from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from regestra.api.deps import get_current_user
from regestra.db.session import get_db
from regestra.models.user import User
from regestra.schemas.post import SocialPostItem
from regestra.schemas.user import UserSummary
from regestra.services.social_service import SocialService

router = APIRouter(prefix="/social", tags=["social"])


@router.post("/follows/{target_user_id}/toggle", response_model=UserSummary)
def toggle_follow(
    target_user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).toggle_follow(user=current_user, target_user_id=target_user_id)


@router.post("/likes/artworks/{artwork_id}/toggle", response_model=UserSummary)
def toggle_artwork_like(
    artwork_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).toggle_artwork_like(user=current_user, artwork_id=artwork_id)


@router.post("/likes/posts/{post_id}/toggle", response_model=SocialPostItem)
def toggle_post_like(
    post_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).toggle_post_like(user=current_user, post_id=post_id)
