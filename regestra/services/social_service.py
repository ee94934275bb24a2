import logging
import uuid

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from regestra.models.user import User
from regestra.repositories.artwork_repo import ArtworkRepository
from regestra.repositories.follow_repo import FollowRepository
from regestra.repositories.post_repo import PostRepository
from regestra.repositories.user_repo import UserRepository
from regestra.schemas.post import SocialPostItem
from regestra.schemas.user import UserSummary
from regestra.services.artwork_service import ArtworkService
from regestra.services.notification_service import NotificationService
from regestra.services.post_service import PostService
from regestra.services.user_service import UserService

logger = logging.getLogger(__name__)


class SocialService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.user_repo = UserRepository(db)
        self.follow_repo = FollowRepository(db)
        self.artwork_repo = ArtworkRepository(db)
        self.post_repo = PostRepository(db)
        self.notification_service = NotificationService(db)

    def toggle_follow(self, *, user: User, target_user_id: uuid.UUID) -> UserSummary:
        target = self.user_repo.get_by_id(target_user_id)
        if not target:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="user not found")
        if target.id == user.id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="you cannot follow yourself")

        if self.follow_repo.exists(follower_id=user.id, target_id=target.id):
            self.follow_repo.remove(follower_id=user.id, target_id=target.id)
            logger.info("user unfollowed", extra={"user_id": str(user.id), "target_user_id": str(target.id)})
        else:
            self.follow_repo.add(follower_id=user.id, target_id=target.id)
            self.notification_service.notify(recipient_id=target.id, actor_id=user.id, type="follow")
            logger.info("user followed", extra={"user_id": str(user.id), "target_user_id": str(target.id)})

        self.db.commit()
        return UserService(self.db).build_summary(user)

    def toggle_artwork_like(self, *, user: User, artwork_id: uuid.UUID) -> UserSummary:
        artwork = self.artwork_repo.get_by_id(artwork_id)
        if not artwork:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="artwork not found")

        if self.artwork_repo.has_like(user_id=user.id, artwork_id=artwork.id):
            self.artwork_repo.remove_like(user_id=user.id, artwork_id=artwork.id)
        else:
            self.artwork_repo.add_like(user_id=user.id, artwork_id=artwork.id)
            self.notification_service.notify(
                recipient_id=artwork.artist_user_id,
                actor_id=user.id,
                type="like",
                content_preview=artwork.title,
            )
            ArtworkService(self.db).apply_interaction(user=user, artwork=artwork, kind="like")

        self.db.commit()
        return UserService(self.db).build_summary(user)

    def toggle_post_like(self, *, user: User, post_id: uuid.UUID) -> SocialPostItem:
        post = self.post_repo.get_by_id(post_id)
        if not post:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="post not found")

        if self.post_repo.has_like(post_id=post.id, user_id=user.id):
            self.post_repo.remove_like(post_id=post.id, user_id=user.id)
        else:
            self.post_repo.add_like(post_id=post.id, user_id=user.id)
            self.notification_service.notify(
                recipient_id=post.author_user_id,
                actor_id=user.id,
                type="like",
                content_preview=post.content or "your post",
            )

        self.db.commit()
        self.db.refresh(post)
        return PostService(self.db).build_items([post], viewer=user)[0]
