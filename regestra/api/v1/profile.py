from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from regestra.api.deps import get_current_identity, get_current_user
from regestra.core.security import IdentityClaims
from regestra.db.session import get_db
from regestra.models.user import User
from regestra.schemas.common import GenericMessageResponse
from regestra.schemas.user import (
    CreateProfileRequest,
    UpdateProfileRequest,
    UserListResponse,
    UserProfileResponse,
    UserPublic,
    UserSummary,
)
from regestra.services.user_service import UserService

router = APIRouter(tags=["profile"])


@router.post("/me", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def create_me(
    payload: CreateProfileRequest,
    identity: IdentityClaims = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return UserService(db).create_profile(identity=identity, payload=payload)


@router.get("/me", response_model=UserSummary)
def get_me(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return UserService(db).build_summary(current_user)


@router.patch("/me", response_model=UserPublic)
def update_me(
    payload: UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserService(db).update_profile(user=current_user, payload=payload)


@router.delete("/me", response_model=GenericMessageResponse)
def delete_me(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return UserService(db).delete_account(user=current_user)


@router.get("/users", response_model=UserListResponse)
def list_users(
    keyword: str | None = Query(default=None, max_length=64),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserService(db).list_users(user=current_user, keyword=keyword, offset=offset, limit=limit)


@router.get("/users/{user_id}", response_model=UserProfileResponse)
def get_user(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserService(db).get_profile(viewer=current_user, user_id=user_id)
