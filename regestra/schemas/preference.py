from uuid import UUID

from pydantic import BaseModel


class PreferencesResponse(BaseModel):
    hidden_post_ids: list[UUID]
    hidden_artwork_ids: list[UUID]
    dismissed_recommendation_ids: list[UUID]
    hidden_conversation_ids: list[UUID]
    deleted_conversation_ids: list[UUID]
    hidden_message_ids: list[UUID]
