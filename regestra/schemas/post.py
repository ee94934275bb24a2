from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class CommentItem(BaseModel):
    id: UUID
    user_id: UUID
    user_name: str
    user_avatar: str
    text: str
    created_at: datetime


class SocialPostItem(BaseModel):
    id: UUID
    author_id: UUID
    author_name: str
    author_avatar: str
    content: str
    image_url: str | None
    created_at: datetime
    like_user_ids: list[UUID] = Field(default_factory=list)
    like_count: int
    liked: bool
    comments: list[CommentItem] = Field(default_factory=list)


class SocialPostListResponse(BaseModel):
    items: list[SocialPostItem]


class CreatePostRequest(BaseModel):
    content: str = Field(default="", max_length=10000)
    image: str | None = Field(default=None, description="base64 data url")


class CreateCommentRequest(BaseModel):
    text: str = Field(min_length=1, max_length=2000)
