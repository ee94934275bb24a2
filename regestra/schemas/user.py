from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserStats(BaseModel):
    followers: int
    following: int
    artworks: int
    collections: int
    liked: int


class UserSummary(BaseModel):
    id: UUID
    username: str
    name: str
    avatar_url: str
    role: str
    stats: UserStats
    following_ids: list[UUID] = Field(default_factory=list)
    liked_artwork_ids: list[UUID] = Field(default_factory=list)


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    role: str
    name: str
    username: str
    avatar_url: str
    cover_image_url: str | None
    bio: str
    location: str | None
    website: str | None
    commission_status: str | None
    contact_email: str | None
    socials: dict[str, str] = Field(default_factory=dict, validation_alias="socials_json")
    created_at: datetime


class UserProfileResponse(BaseModel):
    profile: UserPublic
    stats: UserStats
    following: bool


class UserListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    name: str
    avatar_url: str
    role: str


class UserListResponse(BaseModel):
    users: list[UserListItem]


class CreateProfileRequest(BaseModel):
    role: Literal["artist", "artLover"]
    name: str = Field(min_length=1, max_length=128)
    username: str = Field(min_length=3, max_length=32, pattern=r"^[a-zA-Z0-9_.]{3,32}$")
    email: EmailStr | None = None
    avatar_url: str = ""
    bio: str = Field(default="", max_length=2000)


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(default=None, max_length=128)
    username: str | None = Field(default=None, max_length=32)
    avatar_url: str | None = None
    cover_image_url: str | None = None
    bio: str | None = Field(default=None, max_length=2000)
    location: str | None = Field(default=None, max_length=128)
    website: str | None = Field(default=None, max_length=255)
    commission_status: str | None = None
    contact_email: str | None = Field(default=None, max_length=255)
    socials: dict[str, str] | None = None
