from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from regestra.api.deps import get_current_user
from regestra.db.session import get_db
from regestra.models.user import User
from regestra.schemas.common import GenericMessageResponse, ToggleStateResponse
from regestra.schemas.conversation import (
    ConversationListResponse,
    ConversationTab,
    MessageItem,
    MessageListResponse,
    SendMessageRequest,
    StartConversationRequest,
    StartConversationResponse,
)
from regestra.services.conversation_service import ConversationService

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.get("", response_model=ConversationListResponse)
def list_conversations(
    tab: ConversationTab = Query(default="all"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ConversationService(db).list_for(user=current_user, tab=tab)


@router.post("", response_model=StartConversationResponse)
def start_conversation(
    payload: StartConversationRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ConversationService(db).start(user=current_user, target_user_id=payload.target_user_id)


@router.post("/messages/{message_id}/hide", response_model=ToggleStateResponse)
def toggle_hide_message(
    message_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ConversationService(db).toggle_hide_message(user=current_user, message_id=message_id)


@router.get("/{conversation_id}/messages", response_model=MessageListResponse)
def get_messages(
    conversation_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ConversationService(db).get_messages(conversation_id=conversation_id, viewer=current_user)


@router.post("/{conversation_id}/messages", response_model=MessageItem)
def send_message(
    conversation_id: UUID,
    payload: SendMessageRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ConversationService(db).send(user=current_user, conversation_id=conversation_id, text=payload.text)


@router.delete("/{conversation_id}/messages/{message_id}", response_model=GenericMessageResponse)
def delete_message(
    conversation_id: UUID,
    message_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ConversationService(db).delete_message(
        user=current_user,
        conversation_id=conversation_id,
        message_id=message_id,
    )


@router.post("/{conversation_id}/read", response_model=GenericMessageResponse)
def mark_read(
    conversation_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ConversationService(db).mark_read(user=current_user, conversation_id=conversation_id)


@router.post("/{conversation_id}/hide", response_model=ToggleStateResponse)
def toggle_hide_conversation(
    conversation_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ConversationService(db).toggle_hide(user=current_user, conversation_id=conversation_id)


@router.delete("/{conversation_id}", response_model=GenericMessageResponse)
def delete_conversation(
    conversation_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ConversationService(db).delete(user=current_user, conversation_id=conversation_id)
