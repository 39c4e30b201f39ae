"""ORM model for connection requests between two users."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from proconnect.database import Base
from .base import TimestampMixin

CONNECTION_STATUSES = ("pending", "accepted", "rejected")


def pair_key(first: uuid.UUID, second: uuid.UUID) -> str:
    """Canonical key for the unordered pair ``{first, second}``."""

    low, high = sorted((str(first), str(second)))
    return f"{low}:{high}"


class Connection(TimestampMixin, Base):
    """A directed request from ``requester`` to ``recipient``.

    ``active_pair_key`` holds :func:`pair_key` while the request is pending or
    accepted and is cleared on rejection; its unique constraint keeps a single
    live connection per pair even when both users send at the same moment.
    """

    __tablename__ = "connections"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    requester_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipient_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(Enum(*CONNECTION_STATUSES, name="connection_status"), nullable=False, default="pending")
    message = Column(String(500), nullable=True)
    active_pair_key = Column(String(80), nullable=True)
    responded_at = Column(DateTime(timezone=True), nullable=True)

    requester = relationship("User", foreign_keys=[requester_id], back_populates="sent_connections")
    recipient = relationship("User", foreign_keys=[recipient_id], back_populates="received_connections")

    __table_args__ = (UniqueConstraint("active_pair_key", name="uq_connections_active_pair"),)

    def other_party(self, user_id: uuid.UUID):
        return self.recipient if self.requester_id == user_id else self.requester


__all__ = ["Connection", "CONNECTION_STATUSES", "pair_key"]
