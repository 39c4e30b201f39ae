"""Connection request API routes."""
from __future__ import annotations

from typing import cast
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import Connection, User
from ..schemas import (
    AcceptedConnection,
    ConnectionEnvelope,
    ConnectionListResponse,
    ConnectionRequestPayload,
    ConnectionRespondPayload,
    ConnectionResponse,
    ConnectionStatusResponse,
    ReceivedConnection,
    ReceivedConnectionsResponse,
    SentConnection,
    SentConnectionsResponse,
    UserSummary,
)
from ..services import (
    connection_status_for,
    get_current_user,
    list_connections,
    list_received_requests,
    list_sent_requests,
    respond_to_request,
    send_connection_request,
)

router = APIRouter(prefix="/api/connection", tags=["connections"])


def _status_filter(value: str) -> str | None:
    normalized = value.strip().lower()
    return None if normalized == "all" else normalized


def _summary(user: User) -> UserSummary:
    return UserSummary.model_validate(user)


def _connection_fields(connection: Connection) -> dict:
    return ConnectionResponse.model_validate(connection).model_dump()


@router.post("/send/{recipient_id}", response_model=ConnectionEnvelope, status_code=status.HTTP_201_CREATED)
async def send_request_endpoint(
    recipient_id: UUID,
    payload: ConnectionRequestPayload | None = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> ConnectionEnvelope:
    message = payload.message if payload else None
    connection = send_connection_request(db, requester=current_user, recipient_id=recipient_id, message=message)
    return ConnectionEnvelope(connection=ConnectionResponse.model_validate(connection))


@router.get("/requests", response_model=ReceivedConnectionsResponse)
async def received_requests_endpoint(
    status_value: str = Query("pending", alias="status"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> ReceivedConnectionsResponse:
    received = list_received_requests(db, user=current_user, status_filter=_status_filter(status_value))
    return ReceivedConnectionsResponse(
        received_requests=[
            ReceivedConnection(**_connection_fields(item), requester=_summary(item.requester)) for item in received
        ]
    )


@router.get("/sent", response_model=SentConnectionsResponse)
async def sent_requests_endpoint(
    status_value: str = Query("pending", alias="status"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> SentConnectionsResponse:
    sent = list_sent_requests(db, user=current_user, status_filter=_status_filter(status_value))
    return SentConnectionsResponse(
        sent_requests=[SentConnection(**_connection_fields(item), recipient=_summary(item.recipient)) for item in sent]
    )


@router.put("/respond/{connection_id}", response_model=ConnectionEnvelope)
async def respond_endpoint(
    connection_id: UUID,
    payload: ConnectionRespondPayload,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> ConnectionEnvelope:
    connection = respond_to_request(db, connection_id=connection_id, responder=current_user, decision=payload.status)
    return ConnectionEnvelope(connection=ConnectionResponse.model_validate(connection))


@router.get("/list", response_model=ConnectionListResponse)
async def list_connections_endpoint(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> ConnectionListResponse:
    viewer_id = cast(UUID, current_user.id)
    connections = list_connections(db, user=current_user)
    return ConnectionListResponse(
        connections=[
            AcceptedConnection(**_connection_fields(item), user=_summary(item.other_party(viewer_id)))
            for item in connections
        ]
    )


@router.get("/status/{user_id}", response_model=ConnectionStatusResponse)
async def connection_status_endpoint(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> ConnectionStatusResponse:
    label = connection_status_for(db, viewer_id=cast(UUID, current_user.id), other_id=user_id)
    return ConnectionStatusResponse(user_id=user_id, status=label)


__all__ = ["router"]
