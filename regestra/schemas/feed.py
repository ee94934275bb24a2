from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from regestra.schemas.artwork import ArtworkItem
from regestra.schemas.post import SocialPostItem


class PostFeedItem(BaseModel):
    type: Literal["post"] = "post"
    data: SocialPostItem


class RecommendationFeedItem(BaseModel):
    type: Literal["recommendation"] = "recommendation"
    data: ArtworkItem
    reason: str
    is_hidden: bool = False


FeedItem = Annotated[Union[PostFeedItem, RecommendationFeedItem], Field(discriminator="type")]


class FeedResponse(BaseModel):
    items: list[FeedItem]
