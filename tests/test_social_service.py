import uuid

import pytest
from fastapi import HTTPException

from regestra.models.artwork import Artwork
from regestra.models.social_post import SocialPost
from regestra.repositories.preference_repo import PreferenceRepository
from regestra.services.notification_service import NotificationService
from regestra.services.social_service import SocialService
from regestra.services.user_service import UserService


def _artwork(db, artist, **values) -> Artwork:
    artwork = Artwork(
        artist_user_id=artist.id,
        image_url="https://cdn.example.com/art.png",
        title=values.get("title", "Night Study"),
        tags_json=values.get("tags", ["ink"]),
    )
    db.add(artwork)
    db.commit()
    return artwork


def test_follow_notifies_target_once_and_unfollow_is_silent(db, make_user) -> None:
    ada = make_user("Ada")
    bob = make_user("Bob")
    service = SocialService(db)
    notifications = NotificationService(db)

    summary = service.toggle_follow(user=ada, target_user_id=bob.id)

    assert summary.following_ids == [bob.id]
    assert summary.stats.following == 1
    items = notifications.list_for(user=bob).items
    assert [(item.type, item.actor_id) for item in items] == [("follow", ada.id)]

    summary = service.toggle_follow(user=ada, target_user_id=bob.id)

    assert summary.following_ids == []
    assert summary.stats.following == 0
    assert len(notifications.list_for(user=bob).items) == 1


def test_follower_count_is_derived_for_the_target(db, make_user) -> None:
    ada = make_user("Ada")
    bob = make_user("Bob")
    eve = make_user("Eve")
    service = SocialService(db)

    service.toggle_follow(user=ada, target_user_id=bob.id)
    service.toggle_follow(user=eve, target_user_id=bob.id)

    assert UserService(db).build_stats(bob).followers == 2
    service.toggle_follow(user=ada, target_user_id=bob.id)
    assert UserService(db).build_stats(bob).followers == 1


def test_follow_rejects_self_and_missing_target(db, make_user) -> None:
    ada = make_user("Ada")
    service = SocialService(db)

    with pytest.raises(HTTPException) as self_exc:
        service.toggle_follow(user=ada, target_user_id=ada.id)
    with pytest.raises(HTTPException) as missing_exc:
        service.toggle_follow(user=ada, target_user_id=uuid.uuid4())

    assert self_exc.value.status_code == 400
    assert missing_exc.value.status_code == 404


def test_toggle_artwork_like_updates_counter_and_notifies_artist(db, make_user) -> None:
    viewer = make_user("Viewer")
    artist = make_user("Artist", role="artist")
    artwork = _artwork(db, artist, title="Night Study", tags=["ink"])
    service = SocialService(db)

    summary = service.toggle_artwork_like(user=viewer, artwork_id=artwork.id)

    assert summary.liked_artwork_ids == [artwork.id]
    assert summary.stats.liked == 1
    db.refresh(artwork)
    assert artwork.like_count == 1
    notification = NotificationService(db).list_for(user=artist).items[0]
    assert notification.type == "like"
    assert notification.content_preview == "Night Study"
    data = PreferenceRepository(db).get(viewer.id)
    assert data.tag_scores == {"ink": 5}
    assert data.artist_scores == {artist.id: 5}

    summary = service.toggle_artwork_like(user=viewer, artwork_id=artwork.id)

    assert summary.liked_artwork_ids == []
    db.refresh(artwork)
    assert artwork.like_count == 0
    assert len(NotificationService(db).list_for(user=artist).items) == 1


def test_liking_own_artwork_creates_no_notification(db, make_user) -> None:
    artist = make_user("Artist", role="artist")
    artwork = _artwork(db, artist)

    SocialService(db).toggle_artwork_like(user=artist, artwork_id=artwork.id)

    assert NotificationService(db).list_for(user=artist).items == []


def test_toggle_post_like_is_a_set_toggle(db, make_user) -> None:
    author = make_user("Author")
    fan = make_user("Fan")
    post = SocialPost(author_user_id=author.id, content="")
    db.add(post)
    db.commit()
    service = SocialService(db)

    liked = service.toggle_post_like(user=fan, post_id=post.id)

    assert liked.liked is True
    assert liked.like_user_ids == [fan.id]
    notification = NotificationService(db).list_for(user=author).items[0]
    assert notification.content_preview == "your post"

    unliked = service.toggle_post_like(user=fan, post_id=post.id)

    assert unliked.liked is False
    assert unliked.like_count == 0


def test_toggle_post_like_missing_post(db, make_user) -> None:
    fan = make_user("Fan")

    with pytest.raises(HTTPException) as exc:
        SocialService(db).toggle_post_like(user=fan, post_id=uuid.uuid4())

    assert exc.value.status_code == 404
