"""Convenience exports for schema layer."""
from .auth import AuthResponse, CurrentUserResponse, LoginRequest, RegisterRequest
from .common import ErrorResponse, StatusMessageResponse, SuccessResponse
from .connections import (
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
)
from .messages import (
    ConversationEnvelope,
    ConversationResponse,
    MessageEnvelope,
    MessageResponse,
    MessageSendRequest,
    MessageThreadResponse,
)
from .profiles import (
    EducationRecord,
    ProfileEnvelope,
    ProfileResponse,
    ProfileUpdateRequest,
    UserListResponse,
    UserSummary,
)

__all__ = [
    "AuthResponse",
    "CurrentUserResponse",
    "LoginRequest",
    "RegisterRequest",
    "ErrorResponse",
    "StatusMessageResponse",
    "SuccessResponse",
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
    "ConversationEnvelope",
    "ConversationResponse",
    "MessageEnvelope",
    "MessageResponse",
    "MessageSendRequest",
    "MessageThreadResponse",
    "EducationRecord",
    "ProfileEnvelope",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "UserListResponse",
    "UserSummary",
]
