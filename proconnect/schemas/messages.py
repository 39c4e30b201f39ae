"""Schemas used by messaging endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .common import SuccessResponse


class MessageSendRequest(BaseModel):
    # Blank bodies are rejected by the service with an ``empty_body`` error.
    message: str = Field(..., max_length=2000)


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    conversation_id: UUID
    sender_id: UUID
    receiver_id: UUID
    body: str
    created_at: datetime


class ConversationResponse(BaseModel):
    id: UUID
    participant_ids: List[UUID]
    created_at: datetime
    updated_at: datetime


class MessageEnvelope(SuccessResponse):
    message: MessageResponse


class ConversationEnvelope(SuccessResponse):
    conversation: ConversationResponse


class MessageThreadResponse(SuccessResponse):
    conversation_id: UUID | None
    messages: List[MessageResponse]


__all__ = [
    "ConversationEnvelope",
    "ConversationResponse",
    "MessageEnvelope",
    "MessageResponse",
    "MessageSendRequest",
    "MessageThreadResponse",
]
