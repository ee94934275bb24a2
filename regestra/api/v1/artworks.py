from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from regestra.api.deps import get_current_user
from regestra.db.session import get_db
from regestra.models.user import User
from regestra.schemas.artwork import (
    ArtworkItem,
    ArtworkListResponse,
    CreateArtworkRequest,
    EnhanceImageRequest,
    EnhanceImageResponse,
    RecordInteractionRequest,
)
from regestra.schemas.common import GenericMessageResponse
from regestra.services.artwork_service import ArtworkService

router = APIRouter(prefix="/artworks", tags=["artworks"])


@router.post("", response_model=ArtworkItem, status_code=status.HTTP_201_CREATED)
def create_artwork(
    payload: CreateArtworkRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ArtworkService(db).create_artwork(user=current_user, payload=payload)


@router.get("", response_model=ArtworkListResponse)
def list_artworks(
    artist_id: UUID | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=30, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ArtworkService(db).list_artworks(viewer=current_user, artist_id=artist_id, offset=offset, limit=limit)


@router.post("/enhance", response_model=EnhanceImageResponse)
def enhance_image(
    payload: EnhanceImageRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ArtworkService(db).enhance_image(payload=payload)


@router.get("/{artwork_id}", response_model=ArtworkItem)
def get_artwork(
    artwork_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ArtworkService(db).get_artwork(viewer=current_user, artwork_id=artwork_id)


@router.delete("/{artwork_id}", response_model=GenericMessageResponse)
def delete_artwork(
    artwork_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ArtworkService(db).delete_artwork(user=current_user, artwork_id=artwork_id)


@router.post("/{artwork_id}/interactions", response_model=GenericMessageResponse)
def record_interaction(
    artwork_id: UUID,
    payload: RecordInteractionRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ArtworkService(db).record_interaction(user=current_user, artwork_id=artwork_id, kind=payload.kind)
