"""Convenience exports for ORM models."""
from .connection import CONNECTION_STATUSES, Connection, pair_key
from .conversation import Conversation, ordered_pair
from .message import Message
from .user import User

__all__ = [
    "CONNECTION_STATUSES",
    "Connection",
    "Conversation",
    "Message",
    "User",
    "ordered_pair",
    "pair_key",
]
