"""User directory queries: browse, search and recent chat partners."""
from __future__ import annotations

from typing import cast
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from ..models import Conversation, User


def search_users(db: Session, *, query: str | None, exclude_user: User) -> list[User]:
    """Case-insensitive substring match on username or full name, excluding the caller.

    A blank query lists every other user.
    """

    exclude_id = cast(UUID, exclude_user.id)
    stmt = select(User).where(User.id != exclude_id).order_by(User.username.asc())
    term = (query or "").strip()
    if term:
        stmt = stmt.where(
            or_(
                User.username.icontains(term, autoescape=True),
                User.full_name.icontains(term, autoescape=True),
            )
        )
    return list(db.scalars(stmt))


def list_all_users(db: Session, *, exclude_user: User) -> list[User]:
    return search_users(db, query="", exclude_user=exclude_user)


def list_chat_partners(db: Session, *, user: User) -> list[User]:
    """Distinct conversation partners, most recently active conversation first."""

    user_id = cast(UUID, user.id)
    stmt = (
        select(Conversation)
        .where(or_(Conversation.participant_a_id == user_id, Conversation.participant_b_id == user_id))
        .order_by(Conversation.updated_at.desc())
    )
    partner_ids: list[UUID] = []
    for conversation in db.scalars(stmt):
        other_id = conversation.other_participant_id(user_id)
        if other_id != user_id and other_id not in partner_ids:
            partner_ids.append(other_id)
    if not partner_ids:
        return []

    users = {cast(UUID, item.id): item for item in db.scalars(select(User).where(User.id.in_(partner_ids)))}
    return [users[partner_id] for partner_id in partner_ids if partner_id in users]


__all__ = ["search_users", "list_all_users", "list_chat_partners"]
