import uuid
from datetime import datetime, timezone

import pytest
from fastapi import HTTPException

from regestra.core.config import settings
from regestra.repositories.conversation_repo import ConversationRepository
from regestra.services.conversation_service import ConversationService
from regestra.services.social_service import SocialService
from regestra.services.user_service import UserService


@pytest.fixture
def pair(make_user):
    return make_user("Ada"), make_user("Bob")


def _unread(service: ConversationService, user, conversation_id) -> dict:
    item = next(item for item in service.list_for(user=user).items if item.id == conversation_id)
    return item.unread_counts


def test_start_is_idempotent_in_both_directions(db, pair) -> None:
    ada, bob = pair
    service = ConversationService(db)

    first = service.start(user=ada, target_user_id=bob.id)
    second = service.start(user=ada, target_user_id=bob.id)
    reversed_order = service.start(user=bob, target_user_id=ada.id)

    assert first.created is True
    assert second.created is False
    assert first.conversation_id == second.conversation_id == reversed_order.conversation_id


def test_start_rejects_self_and_unknown_target(db, pair) -> None:
    ada, _ = pair
    service = ConversationService(db)

    with pytest.raises(HTTPException) as self_exc:
        service.start(user=ada, target_user_id=ada.id)
    with pytest.raises(HTTPException) as missing_exc:
        service.start(user=ada, target_user_id=uuid.uuid4())

    assert self_exc.value.status_code == 400
    assert missing_exc.value.status_code == 404


def test_send_increments_only_other_participants_and_updates_last_message(db, pair) -> None:
    ada, bob = pair
    service = ConversationService(db)
    conversation_id = service.start(user=ada, target_user_id=bob.id).conversation_id

    service.send(user=ada, conversation_id=conversation_id, text="hi")
    service.send(user=ada, conversation_id=conversation_id, text="  are you there?  ")

    counts = _unread(service, ada, conversation_id)
    assert counts[bob.id] == 2
    assert counts[ada.id] == 0
    item = service.list_for(user=bob).items[0]
    assert item.last_message == "are you there?"
    assert item.unread_count == 2


def test_send_validates_participant_and_text(db, pair, make_user) -> None:
    ada, bob = pair
    eve = make_user("Eve")
    service = ConversationService(db)
    conversation_id = service.start(user=ada, target_user_id=bob.id).conversation_id

    with pytest.raises(HTTPException) as outsider_exc:
        service.send(user=eve, conversation_id=conversation_id, text="hello")
    with pytest.raises(HTTPException) as empty_exc:
        service.send(user=ada, conversation_id=conversation_id, text="   ")
    with pytest.raises(HTTPException) as missing_exc:
        service.send(user=ada, conversation_id=uuid.uuid4(), text="hello")

    assert outsider_exc.value.status_code == 403
    assert empty_exc.value.status_code == 400
    assert missing_exc.value.status_code == 404


def test_mark_read_resets_only_the_reader(db, pair) -> None:
    ada, bob = pair
    service = ConversationService(db)
    conversation_id = service.start(user=ada, target_user_id=bob.id).conversation_id
    service.send(user=ada, conversation_id=conversation_id, text="one")
    service.send(user=bob, conversation_id=conversation_id, text="two")
    service.send(user=ada, conversation_id=conversation_id, text="three")

    service.mark_read(user=bob, conversation_id=conversation_id)

    counts = _unread(service, ada, conversation_id)
    assert counts[bob.id] == 0
    assert counts[ada.id] == 1


def test_get_messages_is_oldest_first_and_filters_per_viewer(db, pair) -> None:
    ada, bob = pair
    service = ConversationService(db)
    conversation_id = service.start(user=ada, target_user_id=bob.id).conversation_id
    first = service.send(user=ada, conversation_id=conversation_id, text="first")
    second = service.send(user=bob, conversation_id=conversation_id, text="second")

    state = service.toggle_hide_message(user=ada, message_id=first.id)

    assert state.active is True
    assert [item.id for item in service.get_messages(conversation_id=conversation_id, viewer=ada).items] == [second.id]
    assert [item.id for item in service.get_messages(conversation_id=conversation_id, viewer=bob).items] == [
        first.id,
        second.id,
    ]
    assert len(service.get_messages(conversation_id=conversation_id).items) == 2


def test_get_messages_for_missing_conversation_is_empty(db, pair) -> None:
    ada, _ = pair

    response = ConversationService(db).get_messages(conversation_id=uuid.uuid4(), viewer=ada)

    assert response.items == []


def test_toggle_hide_flags_conversation_for_one_viewer(db, pair) -> None:
    ada, bob = pair
    service = ConversationService(db)
    conversation_id = service.start(user=ada, target_user_id=bob.id).conversation_id

    assert service.toggle_hide(user=ada, conversation_id=conversation_id).active is True
    assert service.list_for(user=ada).items[0].is_hidden is True
    assert service.list_for(user=bob).items[0].is_hidden is False

    assert service.toggle_hide(user=ada, conversation_id=conversation_id).active is False
    assert service.list_for(user=ada).items[0].is_hidden is False


def test_delete_is_terminal_for_the_deleting_viewer_only(db, pair) -> None:
    ada, bob = pair
    service = ConversationService(db)
    conversation_id = service.start(user=ada, target_user_id=bob.id).conversation_id

    service.delete(user=ada, conversation_id=conversation_id)
    service.send(user=bob, conversation_id=conversation_id, text="still there?")
    restarted = service.start(user=ada, target_user_id=bob.id)

    assert restarted.conversation_id == conversation_id
    assert service.list_for(user=ada).items == []
    assert [item.id for item in service.list_for(user=bob).items] == [conversation_id]


def test_delete_clears_prior_history_for_the_deleting_viewer(db, pair) -> None:
    ada, bob = pair
    service = ConversationService(db)
    conversation_id = service.start(user=ada, target_user_id=bob.id).conversation_id
    service.send(user=bob, conversation_id=conversation_id, text="old secret")

    service.delete(user=ada, conversation_id=conversation_id)
    restarted = service.start(user=ada, target_user_id=bob.id)

    assert restarted.conversation_id == conversation_id
    assert restarted.created is False
    assert service.get_messages(conversation_id=conversation_id, viewer=ada).items == []

    service.send(user=bob, conversation_id=conversation_id, text="fresh start")

    ada_texts = [item.text for item in service.get_messages(conversation_id=conversation_id, viewer=ada).items]
    bob_texts = [item.text for item in service.get_messages(conversation_id=conversation_id, viewer=bob).items]
    assert ada_texts == ["fresh start"]
    assert bob_texts == ["old secret", "fresh start"]
    assert service.list_for(user=ada).items == []


def test_messages_sharing_a_timestamp_keep_a_stable_order(db, pair) -> None:
    ada, bob = pair
    service = ConversationService(db)
    conversation_id = service.start(user=ada, target_user_id=bob.id).conversation_id
    now = datetime.now(timezone.utc)
    repo = ConversationRepository(db)
    for text in ("one", "two", "three"):
        repo.add_message(conversation_id=conversation_id, sender_id=ada.id, text=text, now=now)
    db.commit()

    first = [item.id for item in service.get_messages(conversation_id=conversation_id).items]
    second = [item.id for item in service.get_messages(conversation_id=conversation_id).items]

    assert first == sorted(first)
    assert first == second
    assert repo.latest_message(conversation_id).id == first[-1]



def test_list_for_filters_tabs_by_connection(db, pair, make_user) -> None:
    ada, bob = pair
    eve = make_user("Eve")
    service = ConversationService(db)
    with_bob = service.start(user=ada, target_user_id=bob.id).conversation_id
    with_eve = service.start(user=ada, target_user_id=eve.id).conversation_id
    SocialService(db).toggle_follow(user=ada, target_user_id=bob.id)

    connections = service.list_for(user=ada, tab="connections")
    general = service.list_for(user=ada, tab="general")

    assert [item.id for item in connections.items] == [with_bob]
    assert connections.items[0].is_connection is True
    assert [item.id for item in general.items] == [with_eve]
    assert len(service.list_for(user=ada).items) == 2
    assert connections.poll_interval_seconds == settings.conversation_poll_interval_seconds


def test_list_for_uses_placeholder_for_deleted_participant(db, pair) -> None:
    ada, bob = pair
    service = ConversationService(db)
    service.start(user=ada, target_user_id=bob.id)
    UserService(db).delete_account(user=bob)

    other = service.list_for(user=ada).items[0].other_participant

    assert other.id == bob.id
    assert other.name == settings.deleted_user_name


def test_delete_message_is_sender_only_and_recomputes_last_message(db, pair) -> None:
    ada, bob = pair
    service = ConversationService(db)
    conversation_id = service.start(user=ada, target_user_id=bob.id).conversation_id
    first = service.send(user=ada, conversation_id=conversation_id, text="first")
    second = service.send(user=ada, conversation_id=conversation_id, text="second")

    with pytest.raises(HTTPException) as exc:
        service.delete_message(user=bob, conversation_id=conversation_id, message_id=second.id)
    assert exc.value.status_code == 403

    service.delete_message(user=ada, conversation_id=conversation_id, message_id=second.id)
    assert service.list_for(user=bob).items[0].last_message == "first"
    assert [item.id for item in service.get_messages(conversation_id=conversation_id, viewer=bob).items] == [first.id]

    service.delete_message(user=ada, conversation_id=conversation_id, message_id=first.id)
    assert service.list_for(user=bob).items[0].last_message == ""


def test_outsider_cannot_read_or_hide_messages(db, pair, make_user) -> None:
    ada, bob = pair
    eve = make_user("Eve")
    service = ConversationService(db)
    conversation_id = service.start(user=ada, target_user_id=bob.id).conversation_id
    message = service.send(user=ada, conversation_id=conversation_id, text="private")

    with pytest.raises(HTTPException) as read_exc:
        service.get_messages(conversation_id=conversation_id, viewer=eve)
    with pytest.raises(HTTPException) as hide_exc:
        service.toggle_hide_message(user=eve, message_id=message.id)

    assert read_exc.value.status_code == 403
    assert hide_exc.value.status_code == 403
