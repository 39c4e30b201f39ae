"""Schemas for the connection-request workflow."""
from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .common import SuccessResponse
from .profiles import ConnectionStatusLabel, UserSummary


class ConnectionRequestPayload(BaseModel):
    message: str | None = Field(default=None, max_length=500)


class ConnectionRespondPayload(BaseModel):
    status: Literal["accepted", "rejected"]


class ConnectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    requester_id: UUID
    recipient_id: UUID
    status: str
    message: str | None = None
    created_at: datetime
    updated_at: datetime
    responded_at: datetime | None = None


class ReceivedConnection(ConnectionResponse):
    requester: UserSummary


class SentConnection(ConnectionResponse):
    recipient: UserSummary


class AcceptedConnection(ConnectionResponse):
    user: UserSummary = Field(..., description="The other side of the connection")


class ConnectionEnvelope(SuccessResponse):
    connection: ConnectionResponse


class ReceivedConnectionsResponse(SuccessResponse):
    received_requests: list[ReceivedConnection]


class SentConnectionsResponse(SuccessResponse):
    sent_requests: list[SentConnection]


class ConnectionListResponse(SuccessResponse):
    connections: list[AcceptedConnection]


class ConnectionStatusResponse(SuccessResponse):
    user_id: UUID
    status: ConnectionStatusLabel


__all__ = [
    "AcceptedConnection",
    "ConnectionEnvelope",
    "ConnectionListResponse",
    "ConnectionRequestPayload",
    "ConnectionRespondPayload",
    "ConnectionResponse",
    "ConnectionStatusResponse",
    "ReceivedConnection",
    "ReceivedConnectionsResponse",
    "SentConnection",
    "SentConnectionsResponse",
]
