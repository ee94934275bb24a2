import uuid

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from regestra.core.config import settings
from regestra.models.social_post import SocialPost
from regestra.models.user import User
from regestra.repositories.post_repo import PostRepository
from regestra.repositories.user_repo import UserRepository
from regestra.schemas.common import GenericMessageResponse
from regestra.schemas.post import (
    CommentItem,
    CreateCommentRequest,
    CreatePostRequest,
    SocialPostItem,
    SocialPostListResponse,
)
from regestra.services.media_service import MediaService
from regestra.services.notification_service import NotificationService


class PostService:
    def __init__(self, db: Session, *, media_service: MediaService | None = None) -> None:
        self.db = db
        self.post_repo = PostRepository(db)
        self.user_repo = UserRepository(db)
        self.notification_service = NotificationService(db)
        self.media_service = media_service or MediaService()

    def create_post(self, *, user: User, payload: CreatePostRequest) -> SocialPostItem:
        content = payload.content.strip()
        image = (payload.image or "").strip()
        if not content and not image:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="a post needs text or an image")

        image_url = None
        if image:
            image_url = self.media_service.store_image(owner_id=user.id, data_url=image, folder="posts").url

        post = self.post_repo.create(author_user_id=user.id, content=content, image_url=image_url)
        self.db.commit()
        self.db.refresh(post)
        return self.build_items([post], viewer=user)[0]

    def list_posts(self, *, viewer: User, offset: int, limit: int) -> SocialPostListResponse:
        posts = self.post_repo.list_newest_first(offset=offset, limit=limit)
        return SocialPostListResponse(items=self.build_items(posts, viewer=viewer))

    def delete_post(self, *, user: User, post_id: uuid.UUID) -> GenericMessageResponse:
        post = self.post_repo.get_by_id(post_id)
        if not post:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="post not found")
        if post.author_user_id != user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="you can only delete your own posts")

        self.post_repo.delete(post)
        self.db.commit()
        return GenericMessageResponse(message="post deleted")

    def add_comment(self, *, user: User, post_id: uuid.UUID, payload: CreateCommentRequest) -> SocialPostItem:
        post = self.post_repo.get_by_id(post_id)
        if not post:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="post not found")
        text = payload.text.strip()
        if not text:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="comment text is required")

        self.post_repo.add_comment(post_id=post.id, user_id=user.id, text=text)
        self.notification_service.notify(
            recipient_id=post.author_user_id,
            actor_id=user.id,
            type="comment",
            content_preview=text,
        )
        self.db.commit()
        self.db.refresh(post)
        return self.build_items([post], viewer=user)[0]

    def build_items(self, posts: list[SocialPost], *, viewer: User) -> list[SocialPostItem]:
        if not posts:
            return []
        user_ids = {post.author_user_id for post in posts}
        for post in posts:
            user_ids.update(comment.user_id for comment in post.comments)
        users = self.user_repo.get_active_map(user_ids)

        items: list[SocialPostItem] = []
        for post in posts:
            author = users.get(post.author_user_id)
            like_user_ids = [like.user_id for like in post.likes]
            items.append(
                SocialPostItem(
                    id=post.id,
                    author_id=post.author_user_id,
                    author_name=author.name if author else settings.deleted_user_name,
                    author_avatar=author.avatar_url if author else settings.deleted_user_avatar,
                    content=post.content,
                    image_url=post.image_url,
                    created_at=post.created_at,
                    like_user_ids=like_user_ids,
                    like_count=len(like_user_ids),
                    liked=viewer.id in like_user_ids,
                    comments=[
                        self._build_comment(comment, users.get(comment.user_id))
                        for comment in post.comments
                    ],
                )
            )
        return items

    def _build_comment(self, comment, commenter: User | None) -> CommentItem:
        return CommentItem(
            id=comment.id,
            user_id=comment.user_id,
            user_name=commenter.name if commenter else settings.deleted_user_name,
            user_avatar=commenter.avatar_url if commenter else settings.deleted_user_avatar,
            text=comment.text,
            created_at=comment.created_at,
        )
