from __future__ import annotations

import uuid
from typing import Sequence, TypeVar

from sqlalchemy.orm import Session

from regestra.core.config import settings
from regestra.models.artwork import Artwork
from regestra.models.user import User
from regestra.repositories.artwork_repo import ArtworkRepository
from regestra.repositories.follow_repo import FollowRepository
from regestra.repositories.post_repo import PostRepository
from regestra.repositories.preference_repo import InteractionData, PreferenceRepository
from regestra.schemas.feed import FeedResponse, PostFeedItem, RecommendationFeedItem
from regestra.services.artwork_service import ArtworkService
from regestra.services.post_service import PostService

FOLLOWED_ARTIST_BONUS = 10
VIEWED_PENALTY = 5

P = TypeVar("P")
R = TypeVar("R")


def interleave_recommendations(posts: Sequence[P], recommendations: Sequence[R], interval: int) -> list[P | R]:
    """Place one recommendation after every `interval` posts.

    A recommendation is only placed between posts; any left over once the posts
    run out are appended in order, so none are dropped.
    """
    if interval < 1:
        raise ValueError("interval must be positive")

    merged: list[P | R] = []
    pending = list(recommendations)
    for index, post in enumerate(posts):
        merged.append(post)
        position = index + 1
        if pending and position % interval == 0 and position < len(posts):
            merged.append(pending.pop(0))
    merged.extend(pending)
    return merged


def affinity_score(artwork: Artwork, *, data: InteractionData, following_ids: set[uuid.UUID]) -> int:
    score = sum(data.tag_scores.get(tag, 0) for tag in artwork.tags_json or [])
    score += data.artist_scores.get(artwork.artist_user_id, 0)
    if artwork.artist_user_id in following_ids:
        score += FOLLOWED_ARTIST_BONUS
    if artwork.id in data.viewed_artwork_ids:
        score -= VIEWED_PENALTY
    return score


def rank_recommendations(
    artworks: list[Artwork],
    *,
    data: InteractionData,
    following_ids: set[uuid.UUID],
) -> list[Artwork]:
    candidates = [artwork for artwork in artworks if artwork.id not in data.dismissed_recommendation_ids]
    # sorted() is stable: equal scores keep newest-first catalog order.
    return sorted(
        candidates,
        key=lambda artwork: affinity_score(artwork, data=data, following_ids=following_ids),
        reverse=True,
    )


class FeedService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.post_repo = PostRepository(db)
        self.artwork_repo = ArtworkRepository(db)
        self.follow_repo = FollowRepository(db)
        self.preference_repo = PreferenceRepository(db)

    def assemble(self, *, user: User) -> FeedResponse:
        data = self.preference_repo.get(user.id)

        posts = [post for post in self.post_repo.list_newest_first() if post.id not in data.hidden_post_ids]
        post_items = [PostFeedItem(data=item) for item in PostService(self.db).build_items(posts, viewer=user)]

        ranked = rank_recommendations(
            self.artwork_repo.list_artworks(),
            data=data,
            following_ids=self.follow_repo.following_ids(user.id),
        )
        picked = ranked[: settings.feed_recommendation_limit]
        recommendation_items = [
            RecommendationFeedItem(
                data=item,
                reason=settings.feed_recommendation_reason,
                is_hidden=item.id in data.hidden_artwork_ids,
            )
            for item in ArtworkService(self.db).build_items(picked, viewer=user)
        ]

        return FeedResponse(
            items=interleave_recommendations(
                post_items,
                recommendation_items,
                settings.feed_recommendation_interval,
            )
        )
