import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from regestra.models.user import User
from regestra.repositories.preference_repo import InteractionData, PreferenceRepository
from regestra.schemas.preference import PreferencesResponse

TOGGLE_FIELDS = {"hidden_post_ids", "hidden_artwork_ids", "hidden_conversation_ids", "hidden_message_ids"}
APPEND_ONLY_FIELDS = {"dismissed_recommendation_ids"}


class PreferenceService:
    """Owner-scoped mutations of a user's hide/dismiss/delete overlay.

    Every method acts on ``user``'s own payload only; no method accepts another
    owner id. Toggles flip membership, append-only fields never shrink.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.preference_repo = PreferenceRepository(db)

    def get_preferences(self, *, user: User) -> PreferencesResponse:
        data = self.preference_repo.get(user.id)
        return PreferencesResponse(
            hidden_post_ids=sorted(data.hidden_post_ids, key=str),
            hidden_artwork_ids=sorted(data.hidden_artwork_ids, key=str),
            dismissed_recommendation_ids=sorted(data.dismissed_recommendation_ids, key=str),
            hidden_conversation_ids=sorted(data.hidden_conversation_ids, key=str),
            deleted_conversation_ids=sorted(data.deleted_conversation_ids, key=str),
            hidden_message_ids=sorted(data.hidden_message_ids, key=str),
        )

    def get_interaction_data(self, *, user: User) -> InteractionData:
        return self.preference_repo.get(user.id)

    def toggle_hide_post(self, *, user: User, post_id: uuid.UUID) -> bool:
        return self._toggle(user=user, field_name="hidden_post_ids", target_id=post_id)

    def toggle_hide_artwork(self, *, user: User, artwork_id: uuid.UUID) -> bool:
        return self._toggle(user=user, field_name="hidden_artwork_ids", target_id=artwork_id)

    def dismiss_recommendation(self, *, user: User, artwork_id: uuid.UUID) -> None:
        self._append(user=user, field_name="dismissed_recommendation_ids", target_id=artwork_id)

    def toggle_hide_conversation(self, *, user: User, conversation_id: uuid.UUID) -> bool:
        return self._toggle(user=user, field_name="hidden_conversation_ids", target_id=conversation_id)

    def delete_conversation(self, *, user: User, conversation_id: uuid.UUID) -> None:
        """Drop the conversation from the user's list and clear its history up to now."""
        data = self.preference_repo.get(user.id)
        data.deleted_conversation_ids.add(conversation_id)
        data.conversation_cleared_at[conversation_id] = datetime.now(timezone.utc)
        self.preference_repo.set(user.id, data)
        self.db.commit()

    def toggle_hide_message(self, *, user: User, message_id: uuid.UUID) -> bool:
        return self._toggle(user=user, field_name="hidden_message_ids", target_id=message_id)

    def _toggle(self, *, user: User, field_name: str, target_id: uuid.UUID) -> bool:
        if field_name not in TOGGLE_FIELDS:
            raise ValueError(f"{field_name} is not a toggle field")

        data = self.preference_repo.get(user.id)
        members: set[uuid.UUID] = getattr(data, field_name)
        if target_id in members:
            members.discard(target_id)
            active = False
        else:
            members.add(target_id)
            active = True

        self.preference_repo.set(user.id, data)
        self.db.commit()
        return active

    def _append(self, *, user: User, field_name: str, target_id: uuid.UUID) -> None:
        if field_name not in APPEND_ONLY_FIELDS:
            raise ValueError(f"{field_name} is not an append-only field")

        data = self.preference_repo.get(user.id)
        members: set[uuid.UUID] = getattr(data, field_name)
        if target_id in members:
            return
        members.add(target_id)
        self.preference_repo.set(user.id, data)
        self.db.commit()
