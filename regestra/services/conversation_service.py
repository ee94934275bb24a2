import logging
import uuid
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from regestra.core.config import settings
from regestra.models.conversation import Conversation
from regestra.models.message import Message
from regestra.models.user import User
from regestra.repositories.conversation_repo import ConversationRepository
from regestra.repositories.follow_repo import FollowRepository
from regestra.repositories.preference_repo import PreferenceRepository, as_utc
from regestra.repositories.user_repo import UserRepository
from regestra.schemas.common import GenericMessageResponse, ToggleStateResponse
from regestra.schemas.conversation import (
    ConversationItem,
    ConversationListResponse,
    MessageItem,
    MessageListResponse,
    StartConversationResponse,
)
from regestra.schemas.user import UserListItem
from regestra.services.preference_service import PreferenceService

logger = logging.getLogger(__name__)

CONVERSATION_TABS = {"all", "connections", "general"}


class ConversationService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.conversation_repo = ConversationRepository(db)
        self.follow_repo = FollowRepository(db)
        self.preference_repo = PreferenceRepository(db)
        self.user_repo = UserRepository(db)
        self.preference_service = PreferenceService(db)

    def list_for(self, *, user: User, tab: str = "all") -> ConversationListResponse:
        if tab not in CONVERSATION_TABS:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="unsupported conversation tab")

        data = self.preference_repo.get(user.id)
        following_ids = self.follow_repo.following_ids(user.id)
        conversations = [
            conversation
            for conversation in self.conversation_repo.list_for_user(user.id)
            if conversation.id not in data.deleted_conversation_ids
        ]

        other_ids = {self._other_participant_id(conversation, user.id) for conversation in conversations}
        others = self.user_repo.get_active_map(other_ids)

        items: list[ConversationItem] = []
        for conversation in conversations:
            other_id = self._other_participant_id(conversation, user.id)
            is_connection = other_id in following_ids
            if tab == "connections" and not is_connection:
                continue
            if tab == "general" and is_connection:
                continue

            unread_counts = conversation.unread_counts
            items.append(
                ConversationItem(
                    id=conversation.id,
                    participant_ids=conversation.participant_ids,
                    other_participant=self._build_participant(other_id, others.get(other_id)),
                    last_message=conversation.last_message,
                    last_message_at=conversation.last_message_at,
                    unread_count=unread_counts.get(user.id, 0),
                    unread_counts=unread_counts,
                    is_hidden=conversation.id in data.hidden_conversation_ids,
                    is_connection=is_connection,
                )
            )
        return ConversationListResponse(items=items, poll_interval_seconds=settings.conversation_poll_interval_seconds)

    def start(self, *, user: User, target_user_id: uuid.UUID) -> StartConversationResponse:
        if target_user_id == user.id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="you cannot message yourself")
        target = self.user_repo.get_by_id(target_user_id)
        if not target:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="user not found")

        # Best effort: concurrent starts can both miss here and create two conversations for one pair.
        existing = self.conversation_repo.find_direct(user_a=user.id, user_b=target.id)
        if existing:
            return StartConversationResponse(conversation_id=existing.id, created=False)

        conversation = self.conversation_repo.create(
            participant_ids=[user.id, target.id],
            now=datetime.now(timezone.utc),
        )
        self.db.commit()
        logger.info(
            "conversation created",
            extra={"conversation_id": str(conversation.id), "user_id": str(user.id), "target_user_id": str(target.id)},
        )
        return StartConversationResponse(conversation_id=conversation.id, created=True)

    def send(self, *, user: User, conversation_id: uuid.UUID, text: str) -> MessageItem:
        conversation = self._get_for_participant(conversation_id=conversation_id, user=user)
        value = text.strip()
        if not value:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="message text is required")

        now = datetime.now(timezone.utc)
        message = self.conversation_repo.add_message(
            conversation_id=conversation.id,
            sender_id=user.id,
            text=value,
            now=now,
        )
        conversation.last_message = value
        conversation.last_message_at = now
        self.db.add(conversation)
        self.conversation_repo.increment_unread_for_others(conversation_id=conversation.id, sender_id=user.id)
        self.db.commit()
        self.db.refresh(message)
        return self._build_message(message)

    def get_messages(self, *, conversation_id: uuid.UUID, viewer: User | None = None) -> MessageListResponse:
        conversation = self.conversation_repo.get_by_id(conversation_id)
        if not conversation:
            return MessageListResponse(items=[])

        messages = self.conversation_repo.list_messages(conversation.id)
        if viewer is not None:
            if viewer.id not in conversation.participant_ids:
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="not a conversation participant")
            data = self.preference_repo.get(viewer.id)
            cleared_at = data.conversation_cleared_at.get(conversation.id)
            messages = [
                message
                for message in messages
                if message.id not in data.hidden_message_ids
                and (cleared_at is None or as_utc(message.created_at) > cleared_at)
            ]
        return MessageListResponse(items=[self._build_message(message) for message in messages])

    def mark_read(self, *, user: User, conversation_id: uuid.UUID) -> GenericMessageResponse:
        conversation = self._get_for_participant(conversation_id=conversation_id, user=user)
        self.conversation_repo.reset_unread(conversation_id=conversation.id, user_id=user.id)
        self.db.commit()
        return GenericMessageResponse(message="conversation marked as read")

    def toggle_hide(self, *, user: User, conversation_id: uuid.UUID) -> ToggleStateResponse:
        conversation = self._get_for_participant(conversation_id=conversation_id, user=user)
        active = self.preference_service.toggle_hide_conversation(user=user, conversation_id=conversation.id)
        return ToggleStateResponse(target_id=str(conversation.id), active=active)

    def delete(self, *, user: User, conversation_id: uuid.UUID) -> GenericMessageResponse:
        conversation = self._get_for_participant(conversation_id=conversation_id, user=user)
        self.preference_service.delete_conversation(user=user, conversation_id=conversation.id)
        return GenericMessageResponse(message="conversation deleted")

    def toggle_hide_message(self, *, user: User, message_id: uuid.UUID) -> ToggleStateResponse:
        message = self.conversation_repo.get_message(message_id)
        if not message:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="message not found")
        self._get_for_participant(conversation_id=message.conversation_id, user=user)
        active = self.preference_service.toggle_hide_message(user=user, message_id=message.id)
        return ToggleStateResponse(target_id=str(message.id), active=active)

    def delete_message(
        self,
        *,
        user: User,
        conversation_id: uuid.UUID,
        message_id: uuid.UUID,
    ) -> GenericMessageResponse:
        conversation = self._get_for_participant(conversation_id=conversation_id, user=user)
        message = self.conversation_repo.get_message(message_id)
        if not message or message.conversation_id != conversation.id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="message not found")
        if message.sender_user_id != user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="you can only delete your own messages")

        self.conversation_repo.delete_message(message.id)
        latest = self.conversation_repo.latest_message(conversation.id)
        if latest:
            conversation.last_message = latest.text
            conversation.last_message_at = latest.created_at
        else:
            conversation.last_message = ""
            conversation.last_message_at = conversation.created_at
        self.db.add(conversation)
        self.db.commit()
        return GenericMessageResponse(message="message deleted")

    def _get_for_participant(self, *, conversation_id: uuid.UUID, user: User) -> Conversation:
        conversation = self.conversation_repo.get_by_id(conversation_id)
        if not conversation:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="conversation not found")
        if user.id not in conversation.participant_ids:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="not a conversation participant")
        return conversation

    def _other_participant_id(self, conversation: Conversation, user_id: uuid.UUID) -> uuid.UUID:
        for participant_id in conversation.participant_ids:
            if participant_id != user_id:
                return participant_id
        return user_id

    def _build_participant(self, user_id: uuid.UUID, user: User | None) -> UserListItem:
        if not user:
            return UserListItem(
                id=user_id,
                username="",
                name=settings.deleted_user_name,
                avatar_url=settings.deleted_user_avatar,
                role="",
            )
        return UserListItem.model_validate(user)

    def _build_message(self, message: Message) -> MessageItem:
        return MessageItem(
            id=message.id,
            conversation_id=message.conversation_id,
            sender_id=message.sender_user_id,
            text=message.text,
            created_at=message.created_at,
        )
