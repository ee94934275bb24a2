import uuid
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from regestra.models.conversation import Conversation, ConversationMember
from regestra.models.message import Message


class ConversationRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_id(self, conversation_id: uuid.UUID) -> Conversation | None:
        return self.db.get(Conversation, conversation_id)

    def find_direct(self, *, user_a: uuid.UUID, user_b: uuid.UUID) -> Conversation | None:
        a_conversations = select(ConversationMember.conversation_id).where(ConversationMember.user_id == user_a)
        stmt = (
            select(Conversation)
            .join(ConversationMember, ConversationMember.conversation_id == Conversation.id)
            .where(Conversation.id.in_(a_conversations), ConversationMember.user_id == user_b)
            .order_by(Conversation.created_at.asc())
        )
        for conversation in self.db.scalars(stmt):
            if set(conversation.participant_ids) == {user_a, user_b}:
                return conversation
        return None

    def create(self, *, participant_ids: list[uuid.UUID], now: datetime) -> Conversation:
        conversation = Conversation(last_message="", last_message_at=now, created_at=now)
        conversation.members = [ConversationMember(user_id=user_id, unread_count=0) for user_id in participant_ids]
        self.db.add(conversation)
        self.db.flush()
        return conversation

    def list_for_user(self, user_id: uuid.UUID) -> list[Conversation]:
        stmt = (
            select(Conversation)
            .join(ConversationMember, ConversationMember.conversation_id == Conversation.id)
            .where(ConversationMember.user_id == user_id)
            .order_by(Conversation.last_message_at.desc())
        )
        return list(self.db.scalars(stmt))

    def increment_unread_for_others(self, *, conversation_id: uuid.UUID, sender_id: uuid.UUID) -> None:
        self.db.execute(
            update(ConversationMember)
            .where(
                ConversationMember.conversation_id == conversation_id,
                ConversationMember.user_id != sender_id,
            )
            .values(unread_count=ConversationMember.unread_count + 1)
            .execution_options(synchronize_session=False)
        )

    def reset_unread(self, *, conversation_id: uuid.UUID, user_id: uuid.UUID) -> None:
        self.db.execute(
            update(ConversationMember)
            .where(
                ConversationMember.conversation_id == conversation_id,
                ConversationMember.user_id == user_id,
            )
            .values(unread_count=0)
            .execution_options(synchronize_session=False)
        )

    def add_message(self, *, conversation_id: uuid.UUID, sender_id: uuid.UUID, text: str, now: datetime) -> Message:
        message = Message(conversation_id=conversation_id, sender_user_id=sender_id, text=text, created_at=now)
        self.db.add(message)
        self.db.flush()
        return message

    def list_messages(self, conversation_id: uuid.UUID) -> list[Message]:
        stmt = (
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
        return list(self.db.scalars(stmt))

    def get_message(self, message_id: uuid.UUID) -> Message | None:
        return self.db.get(Message, message_id)

    def latest_message(self, conversation_id: uuid.UUID) -> Message | None:
        stmt = (
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(1)
        )
        return self.db.scalar(stmt)

    def delete_message(self, message_id: uuid.UUID) -> None:
        self.db.execute(delete(Message).where(Message.id == message_id).execution_options(synchronize_session="fetch"))
