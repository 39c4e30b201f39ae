"""Messaging API routes."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import Conversation, User
from ..schemas import (
    ConversationEnvelope,
    ConversationResponse,
    MessageEnvelope,
    MessageResponse,
    MessageSendRequest,
    MessageThreadResponse,
)
from ..services import get_current_user, get_or_create_conversation, list_messages, send_message

router = APIRouter(prefix="/api/message", tags=["messages"])


def _to_conversation_response(conversation: Conversation) -> ConversationResponse:
    return ConversationResponse(
        id=conversation.id,
        participant_ids=list(conversation.participant_ids),
        created_at=conversation.created_at,
        updated_at=conversation.updated_at,
    )


@router.post("/send/{recipient_id}", response_model=MessageEnvelope, status_code=status.HTTP_201_CREATED)
async def send_message_endpoint(
    recipient_id: UUID,
    payload: MessageSendRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> MessageEnvelope:
    record = send_message(db, caller=current_user, recipient_id=recipient_id, body=payload.message)
    return MessageEnvelope(message=MessageResponse.model_validate(record))


# Declared before "/{identifier}" so "conversation" is not taken for an id.
@router.get("/conversation/{other_user_id}", response_model=ConversationEnvelope)
async def conversation_endpoint(
    other_user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> ConversationEnvelope:
    conversation = get_or_create_conversation(db, caller=current_user, other_user_id=other_user_id)
    return ConversationEnvelope(conversation=_to_conversation_response(conversation))


@router.get("/{identifier}", response_model=MessageThreadResponse)
async def thread_endpoint(
    identifier: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> MessageThreadResponse:
    conversation, messages = list_messages(db, caller=current_user, identifier=identifier)
    return MessageThreadResponse(
        conversation_id=conversation.id if conversation is not None else None,
        messages=[MessageResponse.model_validate(item) for item in messages],
    )


__all__ = ["router"]
