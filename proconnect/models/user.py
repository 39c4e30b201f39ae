"""SQLAlchemy ORM model for application users."""
from __future__ import annotations

import uuid

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from proconnect.database import Base
from .base import TimestampMixin, utcnow


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(32), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(150), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    gender = Column(String(32), nullable=True)
    bio = Column(String(500), nullable=True)
    location = Column(String(255), nullable=True)
    phone_number = Column(String(20), nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=True)
    avatar_url = Column(String(1024), nullable=True)
    last_active_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    sent_connections = relationship(
        "Connection",
        foreign_keys="Connection.requester_id",
        back_populates="requester",
        cascade="all, delete-orphan",
    )
    received_connections = relationship(
        "Connection",
        foreign_keys="Connection.recipient_id",
        back_populates="recipient",
        cascade="all, delete-orphan",
    )


__all__ = ["User"]
