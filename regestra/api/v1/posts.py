from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from regestra.api.deps import get_current_user
from regestra.db.session import get_db
from regestra.models.user import User
from regestra.schemas.common import GenericMessageResponse
from regestra.schemas.post import CreateCommentRequest, CreatePostRequest, SocialPostItem, SocialPostListResponse
from regestra.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=SocialPostItem, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: CreatePostRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return PostService(db).create_post(user=current_user, payload=payload)


@router.get("", response_model=SocialPostListResponse)
def list_posts(
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=30, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return PostService(db).list_posts(viewer=current_user, offset=offset, limit=limit)


@router.delete("/{post_id}", response_model=GenericMessageResponse)
def delete_post(
    post_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return PostService(db).delete_post(user=current_user, post_id=post_id)


@router.post("/{post_id}/comments", response_model=SocialPostItem)
def add_comment(
    post_id: UUID,
    payload: CreateCommentRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return PostService(db).add_comment(user=current_user, post_id=post_id, payload=payload)
