"""ORM model for a two-person conversation thread."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID

from proconnect.database import Base
from .base import TimestampMixin


def ordered_pair(a: uuid.UUID, b: uuid.UUID) -> tuple[uuid.UUID, uuid.UUID]:
    return (a, b) if str(a) < str(b) else (b, a)


class Conversation(TimestampMixin, Base):
    __tablename__ = "conversations"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    participant_a_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    participant_b_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (UniqueConstraint("participant_a_id", "participant_b_id", name="uq_conversation_pair"),)

    @property
    def participant_ids(self) -> tuple[uuid.UUID, uuid.UUID]:
        return (self.participant_a_id, self.participant_b_id)

    def involves(self, user_id: uuid.UUID) -> bool:
        return user_id in {self.participant_a_id, self.participant_b_id}

    def other_participant_id(self, user_id: uuid.UUID) -> uuid.UUID:
        return self.participant_b_id if self.participant_a_id == user_id else self.participant_a_id


__all__ = ["Conversation", "ordered_pair"]
