"""Direct messaging: conversations and messages between connected users.

Creating a conversation and appending a message are both gated on an accepted
connection between the two users. Reading an existing thread only requires
that the caller is one of its two participants.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import cast
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Conversation, Message, User, ordered_pair
from .connection_service import require_connection
from .errors import EmptyBody, Forbidden, NotFound, StoreError, Unauthenticated

logger = logging.getLogger(__name__)


def _require_caller(caller: User | None) -> UUID:
    caller_id = cast(UUID | None, getattr(caller, "id", None))
    if caller_id is None:
        raise Unauthenticated()
    return caller_id


def find_conversation(db: Session, first: UUID, second: UUID) -> Conversation | None:
    participant_a, participant_b = ordered_pair(first, second)
    stmt = select(Conversation).where(
        Conversation.participant_a_id == participant_a,
        Conversation.participant_b_id == participant_b,
    )
    return db.scalars(stmt).first()


def _get_or_create(db: Session, first: UUID, second: UUID) -> Conversation:
    conversation = find_conversation(db, first, second)
    if conversation is not None:
        return conversation

    participant_a, participant_b = ordered_pair(first, second)
    conversation = Conversation(participant_a_id=participant_a, participant_b_id=participant_b)
    try:
        db.add(conversation)
        db.commit()
    except IntegrityError:
        # A concurrent request created the thread first; use theirs.
        db.rollback()
        existing = find_conversation(db, first, second)
        if existing is None:
            logger.exception("Conversation insert failed without a competing row")
            raise StoreError("Failed to open conversation")
        return existing
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create conversation")
        raise StoreError("Failed to open conversation") from exc

    db.refresh(conversation)
    logger.info("Created conversation %s", conversation.id)
    return conversation


def get_or_create_conversation(db: Session, *, caller: User | None, other_user_id: UUID) -> Conversation:
    """Return the pair's conversation, creating it on first use."""

    caller_id = _require_caller(caller)
    require_connection(db, user=cast(User, caller), other_id=other_user_id)
    return _get_or_create(db, caller_id, other_user_id)


def list_messages(db: Session, *, caller: User | None, identifier: UUID) -> tuple[Conversation | None, list[Message]]:
    """Return a thread's messages, oldest first.

    ``identifier`` is a conversation id, or the other participant's user id
    when no conversation carries that id. A known user without a thread yet
    yields an empty list.
    """

    caller_id = _require_caller(caller)

    conversation = db.get(Conversation, identifier)
    if conversation is not None:
        if not conversation.involves(caller_id):
            raise Forbidden("You are not a participant in this conversation")
    else:
        if db.get(User, identifier) is None:
            raise NotFound("Conversation not found")
        conversation = find_conversation(db, caller_id, identifier)
        if conversation is None:
            return None, []

    stmt = (
        select(Message)
        .where(Message.conversation_id == conversation.id)
        .order_by(Message.created_at.asc(), Message.sequence.asc())
    )
    return conversation, list(db.scalars(stmt))


def send_message(db: Session, *, caller: User | None, recipient_id: UUID, body: str | None) -> Message:
    """Append a message from ``caller`` to ``recipient_id``."""

    text = (body or "").strip()
    if not text:
        raise EmptyBody()
    caller_id = _require_caller(caller)
    require_connection(db, user=cast(User, caller), other_id=recipient_id)

    conversation = _get_or_create(db, caller_id, recipient_id)
    last_sequence = db.scalar(
        select(func.max(Message.sequence)).where(Message.conversation_id == conversation.id)
    )

    now = datetime.now(timezone.utc)
    message = Message(
        conversation_id=conversation.id,
        sequence=(last_sequence or 0) + 1,
        sender_id=caller_id,
        receiver_id=recipient_id,
        body=text,
        created_at=now,
    )
    conversation.updated_at = now

    try:
        db.add(message)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to persist message in conversation %s", conversation.id)
        raise StoreError("Failed to send message") from exc

    db.refresh(message)
    return message


__all__ = [
    "find_conversation",
    "get_or_create_conversation",
    "list_messages",
    "send_message",
]
