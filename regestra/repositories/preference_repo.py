"""Per-user preference overlay storage.

One row per user holds every id set as a JSON list, plus the time each
deleted conversation was cleared for that user. Writes replace the whole
payload (last write wins); there is no per-field concurrency control.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from regestra.models.user_preference import UserPreference


@dataclass
class InteractionData:
    hidden_post_ids: set[uuid.UUID] = field(default_factory=set)
    hidden_artwork_ids: set[uuid.UUID] = field(default_factory=set)
    dismissed_recommendation_ids: set[uuid.UUID] = field(default_factory=set)
    hidden_conversation_ids: set[uuid.UUID] = field(default_factory=set)
    deleted_conversation_ids: set[uuid.UUID] = field(default_factory=set)
    hidden_message_ids: set[uuid.UUID] = field(default_factory=set)
    tag_scores: dict[str, int] = field(default_factory=dict)
    artist_scores: dict[uuid.UUID, int] = field(default_factory=dict)
    viewed_artwork_ids: set[uuid.UUID] = field(default_factory=set)
    conversation_cleared_at: dict[uuid.UUID, datetime] = field(default_factory=dict)


def _to_uuid_set(values: list[str] | None) -> set[uuid.UUID]:
    result: set[uuid.UUID] = set()
    for value in values or []:
        try:
            result.add(uuid.UUID(str(value)))
        except ValueError:
            continue
    return result


def _to_json_list(values: set[uuid.UUID]) -> list[str]:
    return sorted(str(value) for value in values)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_timestamp_map(values: dict[str, str] | None) -> dict[uuid.UUID, datetime]:
    result: dict[uuid.UUID, datetime] = {}
    for key, value in (values or {}).items():
        try:
            result[uuid.UUID(str(key))] = as_utc(datetime.fromisoformat(str(value)))
        except ValueError:
            continue
    return result


class PreferenceRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, user_id: uuid.UUID) -> InteractionData:
        row = self.db.get(UserPreference, user_id)
        if not row:
            return InteractionData()

        artist_scores: dict[uuid.UUID, int] = {}
        for key, score in (row.artist_scores_json or {}).items():
            try:
                artist_scores[uuid.UUID(str(key))] = int(score)
            except (TypeError, ValueError):
                continue

        return InteractionData(
            hidden_post_ids=_to_uuid_set(row.hidden_post_ids_json),
            hidden_artwork_ids=_to_uuid_set(row.hidden_artwork_ids_json),
            dismissed_recommendation_ids=_to_uuid_set(row.dismissed_recommendation_ids_json),
            hidden_conversation_ids=_to_uuid_set(row.hidden_conversation_ids_json),
            deleted_conversation_ids=_to_uuid_set(row.deleted_conversation_ids_json),
            hidden_message_ids=_to_uuid_set(row.hidden_message_ids_json),
            tag_scores={str(tag): int(score) for tag, score in (row.tag_scores_json or {}).items()},
            artist_scores=artist_scores,
            viewed_artwork_ids=_to_uuid_set(row.viewed_artwork_ids_json),
            conversation_cleared_at=_to_timestamp_map(row.conversation_cleared_at_json),
        )

    def set(self, user_id: uuid.UUID, data: InteractionData) -> UserPreference:
        row = self.db.get(UserPreference, user_id)
        if not row:
            row = UserPreference(user_id=user_id)

        row.hidden_post_ids_json = _to_json_list(data.hidden_post_ids)
        row.hidden_artwork_ids_json = _to_json_list(data.hidden_artwork_ids)
        row.dismissed_recommendation_ids_json = _to_json_list(data.dismissed_recommendation_ids)
        row.hidden_conversation_ids_json = _to_json_list(data.hidden_conversation_ids)
        row.deleted_conversation_ids_json = _to_json_list(data.deleted_conversation_ids)
        row.hidden_message_ids_json = _to_json_list(data.hidden_message_ids)
        row.tag_scores_json = dict(data.tag_scores)
        row.artist_scores_json = {str(key): score for key, score in data.artist_scores.items()}
        row.viewed_artwork_ids_json = _to_json_list(data.viewed_artwork_ids)
        row.conversation_cleared_at_json = {
            str(key): value.isoformat() for key, value in data.conversation_cleared_at.items()
        }
        self.db.add(row)
        self.db.flush()
        return row
