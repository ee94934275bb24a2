import uuid

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from regestra.models.social_post import PostComment, PostLike, SocialPost


class PostRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, *, author_user_id: uuid.UUID, content: str, image_url: str | None) -> SocialPost:
        post = SocialPost(author_user_id=author_user_id, content=content, image_url=image_url)
        self.db.add(post)
        self.db.flush()
        return post

    def get_by_id(self, post_id: uuid.UUID) -> SocialPost | None:
        return self.db.get(SocialPost, post_id)

    def list_newest_first(self, *, offset: int = 0, limit: int | None = None) -> list[SocialPost]:
        stmt = select(SocialPost).order_by(SocialPost.created_at.desc()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.scalars(stmt))

    def delete(self, post: SocialPost) -> None:
        self.db.delete(post)

    def has_like(self, *, post_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        stmt = select(PostLike.id).where(PostLike.post_id == post_id, PostLike.user_id == user_id)
        return self.db.scalar(stmt) is not None

    def add_like(self, *, post_id: uuid.UUID, user_id: uuid.UUID) -> None:
        self.db.add(PostLike(post_id=post_id, user_id=user_id))
        self.db.flush()

    def remove_like(self, *, post_id: uuid.UUID, user_id: uuid.UUID) -> None:
        self.db.execute(delete(PostLike).where(PostLike.post_id == post_id, PostLike.user_id == user_id))

    def add_comment(self, *, post_id: uuid.UUID, user_id: uuid.UUID, text: str) -> PostComment:
        comment = PostComment(post_id=post_id, user_id=user_id, text=text)
        self.db.add(comment)
        self.db.flush()
        return comment
