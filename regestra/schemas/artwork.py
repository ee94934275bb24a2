from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field


class ArtworkItem(BaseModel):
    id: UUID
    artist_id: UUID
    artist_name: str
    image_url: str
    title: str
    description: str
    size: str
    tags: list[str] = Field(default_factory=list)
    like_count: int
    comment_count: int
    liked: bool
    created_at: datetime


class ArtworkListResponse(BaseModel):
    items: list[ArtworkItem]


class CreateArtworkRequest(BaseModel):
    image: str = Field(min_length=16, description="base64 data url")
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(default="", max_length=5000)
    size: str = Field(default="Digital", max_length=64)
    tags: list[str] = Field(default_factory=list, max_length=20)


class RecordInteractionRequest(BaseModel):
    kind: Literal["view", "linger", "save", "like"]


class EnhanceImageRequest(BaseModel):
    image: str = Field(min_length=16, description="base64 data url")
    instruction: str | None = Field(default=None, max_length=1000)


class EnhanceImageResponse(BaseModel):
    image: str
    enhanced: bool
