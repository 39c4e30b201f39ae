"""Convenience exports for service layer."""
from .auth_service import (
    authenticate_user,
    clear_session_cookie,
    create_access_token,
    decode_access_token,
    get_current_user,
    hash_password,
    register_user,
    set_session_cookie,
    verify_password,
)
from .connection_service import (
    connection_status_for,
    connection_status_map,
    is_connected,
    list_connections,
    list_received_requests,
    list_sent_requests,
    require_connection,
    respond_to_request,
    send_connection_request,
)
from .directory_service import list_all_users, list_chat_partners, search_users
from .errors import (
    AlreadyConnected,
    AlreadyResolved,
    ConfigurationError,
    Conflict,
    EmptyBody,
    Forbidden,
    InvalidInput,
    InvalidTarget,
    NotConnected,
    NotFound,
    RequestAlreadyPending,
    ServiceError,
    StoreError,
    Unauthenticated,
)
from .message_service import find_conversation, get_or_create_conversation, list_messages, send_message
from .profile_service import get_public_profile, update_profile

__all__ = [
    "authenticate_user",
    "clear_session_cookie",
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "hash_password",
    "register_user",
    "set_session_cookie",
    "verify_password",
    "connection_status_for",
    "connection_status_map",
    "is_connected",
    "list_connections",
    "list_received_requests",
    "list_sent_requests",
    "require_connection",
    "respond_to_request",
    "send_connection_request",
    "list_all_users",
    "list_chat_partners",
    "search_users",
    "AlreadyConnected",
    "AlreadyResolved",
    "ConfigurationError",
    "Conflict",
    "EmptyBody",
    "Forbidden",
    "InvalidInput",
    "InvalidTarget",
    "NotConnected",
    "NotFound",
    "RequestAlreadyPending",
    "ServiceError",
    "StoreError",
    "Unauthenticated",
    "find_conversation",
    "get_or_create_conversation",
    "list_messages",
    "send_message",
    "get_public_profile",
    "update_profile",
]
