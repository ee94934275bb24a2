import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from regestra.core.config import settings
from regestra.models.artwork import Artwork
from regestra.models.social_post import SocialPost
from regestra.repositories.preference_repo import InteractionData
from regestra.services.feed_service import FeedService, interleave_recommendations, rank_recommendations
from regestra.services.preference_service import PreferenceService
from regestra.services.social_service import SocialService

BASE_TIME = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


def _add_posts(db, author, count: int) -> list[SocialPost]:
    posts = [
        SocialPost(author_user_id=author.id, content=f"post {index}", created_at=BASE_TIME + timedelta(minutes=index))
        for index in range(count)
    ]
    db.add_all(posts)
    db.commit()
    # newest first
    return list(reversed(posts))


def _add_artworks(db, artist, count: int, *, tags: list[str] | None = None) -> list[Artwork]:
    artworks = [
        Artwork(
            artist_user_id=artist.id,
            image_url=f"https://cdn.example.com/art-{index}.png",
            title=f"art {index}",
            tags_json=list(tags or []),
            created_at=BASE_TIME + timedelta(minutes=index),
        )
        for index in range(count)
    ]
    db.add_all(artworks)
    db.commit()
    return list(reversed(artworks))


def test_interleave_places_one_recommendation_after_every_two_posts() -> None:
    merged = interleave_recommendations(["p0", "p1", "p2", "p3"], ["r0", "r1"], 2)

    assert merged == ["p0", "p1", "r0", "p2", "p3", "r1"]


@pytest.mark.parametrize(
    ("posts", "recommendations", "expected"),
    [
        ([], ["r0", "r1"], ["r0", "r1"]),
        (["p0"], ["r0"], ["p0", "r0"]),
        (["p0", "p1", "p2", "p3", "p4"], ["r0", "r1", "r2"], ["p0", "p1", "r0", "p2", "p3", "r1", "p4", "r2"]),
        (["p0", "p1", "p2"], [], ["p0", "p1", "p2"]),
    ],
)
def test_interleave_never_drops_recommendations(posts, recommendations, expected) -> None:
    assert interleave_recommendations(posts, recommendations, 2) == expected


def test_interleave_rejects_non_positive_interval() -> None:
    with pytest.raises(ValueError):
        interleave_recommendations(["p0"], ["r0"], 0)


def test_rank_recommendations_keeps_catalog_order_without_signals() -> None:
    artworks = [
        SimpleNamespace(id=uuid.uuid4(), artist_user_id=uuid.uuid4(), tags_json=["ink"]) for _ in range(3)
    ]

    ranked = rank_recommendations(artworks, data=InteractionData(), following_ids=set())

    assert ranked == artworks


def test_rank_recommendations_prefers_followed_and_tag_affinity_and_drops_dismissed() -> None:
    followed_artist = uuid.uuid4()
    plain = SimpleNamespace(id=uuid.uuid4(), artist_user_id=uuid.uuid4(), tags_json=[])
    tagged = SimpleNamespace(id=uuid.uuid4(), artist_user_id=uuid.uuid4(), tags_json=["ink"])
    followed = SimpleNamespace(id=uuid.uuid4(), artist_user_id=followed_artist, tags_json=[])
    dismissed = SimpleNamespace(id=uuid.uuid4(), artist_user_id=followed_artist, tags_json=["ink"])
    data = InteractionData(tag_scores={"ink": 3}, dismissed_recommendation_ids={dismissed.id})

    ranked = rank_recommendations(
        [plain, tagged, followed, dismissed],
        data=data,
        following_ids={followed_artist},
    )

    assert ranked == [followed, tagged, plain]


def test_rank_recommendations_penalizes_viewed_artworks() -> None:
    seen = SimpleNamespace(id=uuid.uuid4(), artist_user_id=uuid.uuid4(), tags_json=[])
    fresh = SimpleNamespace(id=uuid.uuid4(), artist_user_id=uuid.uuid4(), tags_json=[])

    ranked = rank_recommendations([seen, fresh], data=InteractionData(viewed_artwork_ids={seen.id}), following_ids=set())

    assert ranked == [fresh, seen]


def test_assemble_interleaves_posts_and_recommendations(db, make_user) -> None:
    viewer = make_user("Viewer")
    artist = make_user("Artist", role="artist")
    posts = _add_posts(db, artist, 4)
    artworks = _add_artworks(db, artist, 2)

    items = FeedService(db).assemble(user=viewer).items

    assert [item.type for item in items] == ["post", "post", "recommendation", "post", "post", "recommendation"]
    assert [item.data.id for item in items if item.type == "post"] == [post.id for post in posts]
    assert [item.data.id for item in items if item.type == "recommendation"] == [artwork.id for artwork in artworks]
    assert all(item.reason == settings.feed_recommendation_reason for item in items if item.type == "recommendation")


def test_assemble_excludes_hidden_posts_and_dismissed_recommendations(db, make_user) -> None:
    viewer = make_user("Viewer")
    artist = make_user("Artist", role="artist")
    posts = _add_posts(db, artist, 3)
    artworks = _add_artworks(db, artist, 3)
    preferences = PreferenceService(db)
    preferences.toggle_hide_post(user=viewer, post_id=posts[0].id)
    preferences.dismiss_recommendation(user=viewer, artwork_id=artworks[1].id)
    preferences.dismiss_recommendation(user=viewer, artwork_id=artworks[1].id)

    items = FeedService(db).assemble(user=viewer).items

    post_ids = [item.data.id for item in items if item.type == "post"]
    recommendation_ids = [item.data.id for item in items if item.type == "recommendation"]
    assert posts[0].id not in post_ids
    assert len(post_ids) == 2
    assert artworks[1].id not in recommendation_ids
    assert recommendation_ids == [artworks[0].id, artworks[2].id]


def test_assemble_flags_hidden_recommendations_instead_of_removing_them(db, make_user) -> None:
    viewer = make_user("Viewer")
    artist = make_user("Artist", role="artist")
    artworks = _add_artworks(db, artist, 2)
    PreferenceService(db).toggle_hide_artwork(user=viewer, artwork_id=artworks[0].id)

    items = FeedService(db).assemble(user=viewer).items

    flags = {item.data.id: item.is_hidden for item in items}
    assert flags == {artworks[0].id: True, artworks[1].id: False}


def test_assemble_caps_recommendations_and_skips_deleted_artworks(db, make_user, monkeypatch) -> None:
    monkeypatch.setattr(settings, "feed_recommendation_limit", 3)
    viewer = make_user("Viewer")
    artist = make_user("Artist", role="artist")
    artworks = _add_artworks(db, artist, 5)
    artworks[0].is_deleted = True
    db.commit()

    items = FeedService(db).assemble(user=viewer).items

    assert [item.data.id for item in items] == [artwork.id for artwork in artworks[1:4]]


def test_assemble_ranks_followed_artist_first(db, make_user) -> None:
    viewer = make_user("Viewer")
    stranger = make_user("Stranger", role="artist")
    favourite = make_user("Favourite", role="artist")
    newer = _add_artworks(db, stranger, 1)[0]
    older = Artwork(
        artist_user_id=favourite.id,
        image_url="https://cdn.example.com/old.png",
        title="old",
        tags_json=[],
        created_at=BASE_TIME - timedelta(days=1),
    )
    db.add(older)
    db.commit()
    SocialService(db).toggle_follow(user=viewer, target_user_id=favourite.id)

    items = FeedService(db).assemble(user=viewer).items

    assert [item.data.id for item in items] == [older.id, newer.id]
