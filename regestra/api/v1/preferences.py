from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from regestra.api.deps import get_current_user
from regestra.db.session import get_db
from regestra.models.user import User
from regestra.schemas.common import GenericMessageResponse, ToggleStateResponse
from regestra.schemas.preference import PreferencesResponse
from regestra.services.preference_service import PreferenceService

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("", response_model=PreferencesResponse)
def get_preferences(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return PreferenceService(db).get_preferences(user=current_user)


@router.post("/hidden-posts/{post_id}/toggle", response_model=ToggleStateResponse)
def toggle_hide_post(
    post_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    active = PreferenceService(db).toggle_hide_post(user=current_user, post_id=post_id)
    return ToggleStateResponse(target_id=str(post_id), active=active)


@router.post("/hidden-artworks/{artwork_id}/toggle", response_model=ToggleStateResponse)
def toggle_hide_artwork(
    artwork_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    active = PreferenceService(db).toggle_hide_artwork(user=current_user, artwork_id=artwork_id)
    return ToggleStateResponse(target_id=str(artwork_id), active=active)


@router.post("/dismissed-recommendations/{artwork_id}", response_model=GenericMessageResponse)
def dismiss_recommendation(
    artwork_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    PreferenceService(db).dismiss_recommendation(user=current_user, artwork_id=artwork_id)
    return GenericMessageResponse(message="recommendation dismissed")
