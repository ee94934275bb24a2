import uuid
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from regestra.core.config import ALLOWED_COMMISSION_STATUSES
from regestra.core.security import IdentityClaims
from regestra.models.user import User
from regestra.repositories.artwork_repo import ArtworkRepository
from regestra.repositories.collection_repo import CollectionRepository
from regestra.repositories.follow_repo import FollowRepository
from regestra.repositories.user_repo import UserRepository
from regestra.schemas.common import GenericMessageResponse
from regestra.schemas.user import (
    CreateProfileRequest,
    UpdateProfileRequest,
    UserListItem,
    UserListResponse,
    UserProfileResponse,
    UserPublic,
    UserStats,
    UserSummary,
)


class UserService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.user_repo = UserRepository(db)
        self.follow_repo = FollowRepository(db)
        self.artwork_repo = ArtworkRepository(db)
        self.collection_repo = CollectionRepository(db)

    def create_profile(self, *, identity: IdentityClaims, payload: CreateProfileRequest) -> UserPublic:
        if self.user_repo.get_by_id(identity.user_id, include_deleted=True):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="profile already exists")

        email = (payload.email or identity.email or "").strip().lower()
        if not email:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="email is required")
        name = payload.name.strip()
        if not name:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="name is required")
        username = payload.username.strip()

        if self.user_repo.get_by_email(email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="an account with this email already exists")
        if self.user_repo.get_by_username(username):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="this username is already taken")

        user = self.user_repo.create(
            user_pk=identity.user_id,
            email=email,
            role=payload.role,
            name=name,
            username=username,
            avatar_url=payload.avatar_url.strip(),
            bio=payload.bio.strip(),
        )
        self.db.commit()
        self.db.refresh(user)
        return UserPublic.model_validate(user)

    def get_profile(self, *, viewer: User, user_id: uuid.UUID) -> UserProfileResponse:
        target = self.user_repo.get_by_id(user_id)
        if not target:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="user not found")
        return UserProfileResponse(
            profile=UserPublic.model_validate(target),
            stats=self.build_stats(target),
            following=self.follow_repo.exists(follower_id=viewer.id, target_id=target.id),
        )

    def update_profile(self, *, user: User, payload: UpdateProfileRequest) -> UserPublic:
        if payload.name is not None and not payload.name.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="name is required")
        if payload.commission_status is not None and payload.commission_status not in ALLOWED_COMMISSION_STATUSES:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="unsupported commission status")
        if payload.username is not None:
            username = payload.username.strip()
            if len(username) < 3:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="username is too short")
            existing = self.user_repo.get_by_username(username)
            if existing and existing.id != user.id:
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="this username is already taken")
            user.username = username

        if payload.name is not None:
            user.name = payload.name.strip()
        if payload.avatar_url is not None:
            user.avatar_url = payload.avatar_url.strip()
        if payload.cover_image_url is not None:
            user.cover_image_url = payload.cover_image_url.strip() or None
        if payload.bio is not None:
            user.bio = payload.bio.strip()
        if payload.location is not None:
            user.location = payload.location.strip() or None
        if payload.website is not None:
            user.website = payload.website.strip() or None
        if payload.commission_status is not None:
            user.commission_status = payload.commission_status
        if payload.contact_email is not None:
            user.contact_email = payload.contact_email.strip() or None
        if payload.socials is not None:
            user.socials_json = {key: value.strip() for key, value in payload.socials.items() if value.strip()}

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return UserPublic.model_validate(user)

    def delete_account(self, *, user: User) -> GenericMessageResponse:
        # Posts, artworks, conversations and notifications are left in place.
        user.is_deleted = True
        user.deleted_at = datetime.now(timezone.utc)
        self.db.add(user)
        self.db.commit()
        return GenericMessageResponse(message="account deleted")

    def list_users(self, *, user: User, keyword: str | None, offset: int, limit: int) -> UserListResponse:
        keyword_value = keyword.strip() if keyword else None
        users = self.user_repo.list_users(keyword=keyword_value, exclude_user_id=user.id, offset=offset, limit=limit)
        return UserListResponse(users=[UserListItem.model_validate(item) for item in users])

    def build_stats(self, user: User) -> UserStats:
        return UserStats(
            followers=self.follow_repo.count_followers(user.id),
            following=self.follow_repo.count_following(user.id),
            artworks=self.artwork_repo.count_for_artist(user.id),
            collections=self.collection_repo.count_for_owner(user.id),
            liked=self.artwork_repo.count_likes_by_user(user.id),
        )

    def build_summary(self, user: User) -> UserSummary:
        return UserSummary(
            id=user.id,
            username=user.username,
            name=user.name,
            avatar_url=user.avatar_url,
            role=user.role,
            stats=self.build_stats(user),
            following_ids=sorted(self.follow_repo.following_ids(user.id), key=str),
            liked_artwork_ids=sorted(self.artwork_repo.liked_artwork_ids(user.id), key=str),
        )
