from datetime import datetime
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field


class PlatformArtworkRef(BaseModel):
    kind: Literal["platform"] = "platform"
    artwork_id: UUID


class ExternalArtworkRef(BaseModel):
    kind: Literal["external"] = "external"
    image_url: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=255)
    artist_name: str = Field(default="Unknown Artist", max_length=128)
    description: str | None = Field(default=None, max_length=5000)
    size: str | None = Field(default=None, max_length=64)
    tags: list[str] = Field(default_factory=list, max_length=20)


ArtworkRef = Annotated[Union[PlatformArtworkRef, ExternalArtworkRef], Field(discriminator="kind")]


class AddToCollectionRequest(BaseModel):
    artwork: ArtworkRef
    collection_name: str | None = Field(default=None, max_length=128)


class CollectionArtworkItem(BaseModel):
    id: UUID
    kind: Literal["platform", "external"]
    artwork_id: UUID | None
    image_url: str
    title: str
    artist_name: str
    description: str | None
    size: str | None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime


class CollectionItem(BaseModel):
    id: UUID
    name: str
    artworks: list[CollectionArtworkItem]


class CollectionListResponse(BaseModel):
    collections: list[CollectionItem]
