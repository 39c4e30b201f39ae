"""Domain errors raised by the service layer.

Each error is an :class:`~fastapi.HTTPException` carrying a stable ``code`` so
that routers can let it propagate untouched and the application-level handler
renders the ``{"success": false, "message", "code"}`` envelope.
"""
from __future__ import annotations

from fastapi import HTTPException, status


class ServiceError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "server_error"
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(status_code=self.status_code, detail=detail or self.default_detail)


class Unauthenticated(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_detail = "Unauthorized: User not authenticated"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail)
        self.headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_detail = "You are not allowed to access this resource"


class NotConnected(Forbidden):
    code = "not_connected"
    default_detail = "You can only message users you are connected with"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_detail = "Resource not found"


class InvalidInput(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_input"
    default_detail = "Invalid input"


class InvalidTarget(InvalidInput):
    code = "invalid_target"
    default_detail = "You cannot target yourself"


class EmptyBody(InvalidInput):
    code = "empty_body"
    default_detail = "Message content is required"


class Conflict(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_detail = "Conflicting request"


class AlreadyConnected(Conflict):
    code = "already_connected"
    default_detail = "You are already connected with this user"


class RequestAlreadyPending(Conflict):
    code = "request_already_pending"
    default_detail = "A connection request is already pending between you and this user"


class AlreadyResolved(Conflict):
    code = "already_resolved"
    default_detail = "This connection request has already been answered"


class StoreError(ServiceError):
    """A persistence failure; the detail never includes driver output."""


class ConfigurationError(ServiceError):
    """A required server setting is missing or unusable."""

    default_detail = "Server is not configured to issue sessions"


__all__ = [
    "ServiceError",
    "Unauthenticated",
    "Forbidden",
    "NotConnected",
    "NotFound",
    "InvalidInput",
    "InvalidTarget",
    "EmptyBody",
    "Conflict",
    "AlreadyConnected",
    "RequestAlreadyPending",
    "AlreadyResolved",
    "StoreError",
    "ConfigurationError",
]
