"""Business logic for connection requests and the connected-users gate."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import cast
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..models import CONNECTION_STATUSES, Connection, User, pair_key
from .errors import (
    AlreadyConnected,
    AlreadyResolved,
    Conflict,
    Forbidden,
    InvalidInput,
    InvalidTarget,
    NotConnected,
    NotFound,
    RequestAlreadyPending,
    StoreError,
)

logger = logging.getLogger(__name__)

DECISIONS = ("accepted", "rejected")


def _active_connection(db: Session, first: UUID, second: UUID) -> Connection | None:
    stmt = select(Connection).where(Connection.active_pair_key == pair_key(first, second))
    return db.scalars(stmt).first()


def _check_status_filter(status_filter: str | None) -> None:
    if status_filter is not None and status_filter not in CONNECTION_STATUSES:
        raise InvalidInput(f"Unknown connection status '{status_filter}'")


def _raise_for_active(active: Connection) -> None:
    if active.status == "accepted":
        raise AlreadyConnected()
    raise RequestAlreadyPending()


def is_connected(db: Session, user_id: UUID, other_id: UUID) -> bool:
    """Return True when an accepted connection exists for the unordered pair."""

    if user_id == other_id:
        return False
    active = _active_connection(db, user_id, other_id)
    return active is not None and active.status == "accepted"


def send_connection_request(
    db: Session,
    *,
    requester: User,
    recipient_id: UUID,
    message: str | None = None,
) -> Connection:
    requester_id = cast(UUID, requester.id)
    if recipient_id == requester_id:
        raise InvalidTarget("You cannot send a connection request to yourself")

    recipient = db.get(User, recipient_id)
    if recipient is None:
        raise NotFound("User not found")

    active = _active_connection(db, requester_id, recipient_id)
    if active is not None:
        _raise_for_active(active)

    note = (message or "").strip() or None
    connection = Connection(
        requester_id=requester_id,
        recipient_id=recipient_id,
        status="pending",
        message=note,
        active_pair_key=pair_key(requester_id, recipient_id),
    )
    try:
        db.add(connection)
        db.commit()
    except IntegrityError as exc:
        # Both users sent at once; the other insert owns the pair key.
        db.rollback()
        winner = _active_connection(db, requester_id, recipient_id)
        if winner is not None:
            _raise_for_active(winner)
        raise Conflict("Connection request could not be recorded") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to store connection request")
        raise StoreError("Failed to send connection request") from exc

    db.refresh(connection)
    logger.info("Connection request %s sent from %s to %s", connection.id, requester_id, recipient_id)
    return connection


def respond_to_request(db: Session, *, connection_id: UUID, responder: User, decision: str) -> Connection:
    if decision not in DECISIONS:
        raise InvalidInput("Status must be 'accepted' or 'rejected'")

    connection = db.get(Connection, connection_id)
    if connection is None:
        raise NotFound("Connection request not found")
    if cast(UUID, connection.recipient_id) != cast(UUID, responder.id):
        raise Forbidden("Only the recipient can respond to this request")
    if connection.status != "pending":
        raise AlreadyResolved()

    now = datetime.now(timezone.utc)
    connection.status = decision
    connection.responded_at = now
    connection.updated_at = now
    if decision == "rejected":
        connection.active_pair_key = None

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to update connection request %s", connection_id)
        raise StoreError("Failed to update connection request") from exc

    db.refresh(connection)
    logger.info("Connection request %s %s by %s", connection.id, decision, responder.id)
    return connection


def list_received_requests(db: Session, *, user: User, status_filter: str | None = "pending") -> list[Connection]:
    _check_status_filter(status_filter)
    stmt = (
        select(Connection)
        .where(Connection.recipient_id == user.id)
        .options(selectinload(Connection.requester))
        .order_by(Connection.created_at.desc())
    )
    if status_filter is not None:
        stmt = stmt.where(Connection.status == status_filter)
    return list(db.scalars(stmt))


def list_sent_requests(db: Session, *, user: User, status_filter: str | None = "pending") -> list[Connection]:
    _check_status_filter(status_filter)
    stmt = (
        select(Connection)
        .where(Connection.requester_id == user.id)
        .options(selectinload(Connection.recipient))
        .order_by(Connection.created_at.desc())
    )
    if status_filter is not None:
        stmt = stmt.where(Connection.status == status_filter)
    return list(db.scalars(stmt))


def list_connections(db: Session, *, user: User) -> list[Connection]:
    """Accepted connections involving ``user``, most recently accepted first."""

    user_id = cast(UUID, user.id)
    stmt = (
        select(Connection)
        .where(
            Connection.status == "accepted",
            or_(Connection.requester_id == user_id, Connection.recipient_id == user_id),
        )
        .options(selectinload(Connection.requester), selectinload(Connection.recipient))
        .order_by(Connection.updated_at.desc())
    )
    return list(db.scalars(stmt))


def connection_status_map(db: Session, *, viewer_id: UUID) -> dict[UUID, str]:
    """Map every user with a live connection to ``viewer_id`` onto a status label."""

    stmt = select(Connection).where(
        Connection.active_pair_key.is_not(None),
        or_(Connection.requester_id == viewer_id, Connection.recipient_id == viewer_id),
    )
    labels: dict[UUID, str] = {}
    for connection in db.scalars(stmt):
        requester_id = cast(UUID, connection.requester_id)
        recipient_id = cast(UUID, connection.recipient_id)
        other_id = recipient_id if requester_id == viewer_id else requester_id
        if connection.status == "accepted":
            labels[other_id] = "connected"
        elif requester_id == viewer_id:
            labels[other_id] = "outgoing"
        else:
            labels[other_id] = "incoming"
    return labels


def connection_status_for(db: Session, *, viewer_id: UUID, other_id: UUID) -> str:
    if viewer_id == other_id:
        return "self"
    active = _active_connection(db, viewer_id, other_id)
    if active is None:
        return "none"
    if active.status == "accepted":
        return "connected"
    return "outgoing" if cast(UUID, active.requester_id) == viewer_id else "incoming"


def require_connection(db: Session, *, user: User, other_id: UUID) -> User:
    """Return the other user when ``user`` may message them, raising otherwise."""

    other = db.get(User, other_id)
    if other is None:
        raise NotFound("User not found")
    user_id = cast(UUID, user.id)
    if other_id == user_id:
        raise InvalidTarget("You cannot message yourself")
    if not is_connected(db, user_id, other_id):
        logger.info("Messaging denied between %s and %s: not connected", user_id, other_id)
        raise NotConnected()
    return other


__all__ = [
    "is_connected",
    "send_connection_request",
    "respond_to_request",
    "list_received_requests",
    "list_sent_requests",
    "list_connections",
    "connection_status_map",
    "connection_status_for",
    "require_connection",
]
