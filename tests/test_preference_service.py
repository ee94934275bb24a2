import uuid
from datetime import datetime, timezone

import pytest

from regestra.repositories.preference_repo import InteractionData, PreferenceRepository
from regestra.services.preference_service import PreferenceService


def test_get_returns_empty_sets_for_user_without_writes(db, make_user) -> None:
    user = make_user("Ada")

    data = PreferenceRepository(db).get(user.id)

    assert data == InteractionData()
    response = PreferenceService(db).get_preferences(user=user)
    assert response.hidden_post_ids == []
    assert response.deleted_conversation_ids == []


def test_toggle_hide_post_twice_restores_visibility(db, make_user) -> None:
    user = make_user("Ada")
    service = PreferenceService(db)
    post_id = uuid.uuid4()

    assert service.toggle_hide_post(user=user, post_id=post_id) is True
    assert post_id in service.get_interaction_data(user=user).hidden_post_ids

    assert service.toggle_hide_post(user=user, post_id=post_id) is False
    assert service.get_interaction_data(user=user).hidden_post_ids == set()


def test_dismiss_recommendation_is_append_only_without_duplicates(db, make_user) -> None:
    user = make_user("Ada")
    service = PreferenceService(db)
    artwork_id = uuid.uuid4()

    service.dismiss_recommendation(user=user, artwork_id=artwork_id)
    service.dismiss_recommendation(user=user, artwork_id=artwork_id)

    assert service.get_preferences(user=user).dismissed_recommendation_ids == [artwork_id]


def test_delete_conversation_never_shrinks(db, make_user) -> None:
    user = make_user("Ada")
    service = PreferenceService(db)
    first, second = uuid.uuid4(), uuid.uuid4()

    service.delete_conversation(user=user, conversation_id=first)
    service.delete_conversation(user=user, conversation_id=second)
    service.delete_conversation(user=user, conversation_id=first)

    assert service.get_interaction_data(user=user).deleted_conversation_ids == {first, second}


def test_delete_conversation_stamps_clear_time(db, make_user) -> None:
    user = make_user("Ada")
    service = PreferenceService(db)
    conversation_id = uuid.uuid4()
    before = datetime.now(timezone.utc)

    service.delete_conversation(user=user, conversation_id=conversation_id)

    cleared_at = service.get_interaction_data(user=user).conversation_cleared_at[conversation_id]
    assert cleared_at.tzinfo is not None
    assert before <= cleared_at <= datetime.now(timezone.utc)


def test_preferences_are_partitioned_by_owner(db, make_user) -> None:
    ada = make_user("Ada")
    bob = make_user("Bob")
    service = PreferenceService(db)
    artwork_id = uuid.uuid4()

    service.toggle_hide_artwork(user=ada, artwork_id=artwork_id)

    assert artwork_id in service.get_interaction_data(user=ada).hidden_artwork_ids
    assert service.get_interaction_data(user=bob).hidden_artwork_ids == set()


def test_toggle_rejects_append_only_field(db, make_user) -> None:
    user = make_user("Ada")

    with pytest.raises(ValueError):
        PreferenceService(db)._toggle(user=user, field_name="deleted_conversation_ids", target_id=uuid.uuid4())


def test_repository_round_trips_affinity_scores(db, make_user) -> None:
    user = make_user("Ada")
    artist_id = uuid.uuid4()
    repo = PreferenceRepository(db)

    repo.set(user.id, InteractionData(tag_scores={"ink": 3}, artist_scores={artist_id: 5}))
    db.commit()

    data = repo.get(user.id)
    assert data.tag_scores == {"ink": 3}
    assert data.artist_scores == {artist_id: 5}
