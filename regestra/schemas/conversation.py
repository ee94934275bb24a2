from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from regestra.schemas.user import UserListItem


class ConversationItem(BaseModel):
    id: UUID
    participant_ids: list[UUID]
    other_participant: UserListItem
    last_message: str
    last_message_at: datetime
    unread_count: int
    unread_counts: dict[UUID, int] = Field(default_factory=dict)
    is_hidden: bool
    is_connection: bool


class ConversationListResponse(BaseModel):
    items: list[ConversationItem]
    poll_interval_seconds: int


class StartConversationRequest(BaseModel):
    target_user_id: UUID


class StartConversationResponse(BaseModel):
    conversation_id: UUID
    created: bool


class MessageItem(BaseModel):
    id: UUID
    conversation_id: UUID
    sender_id: UUID
    text: str
    created_at: datetime


class MessageListResponse(BaseModel):
    items: list[MessageItem]


class SendMessageRequest(BaseModel):
    text: str = Field(min_length=1, max_length=5000)


ConversationTab = Literal["all", "connections", "general"]
