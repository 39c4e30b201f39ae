"""Authentication, session tokens and the current-user dependency."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from uuid import UUID, uuid4

from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_session
from ..models import User
from ..schemas import RegisterRequest
from ..security.secrets import MissingSecretError, signing_key
from .errors import ConfigurationError, Conflict, StoreError, Unauthenticated

logger = logging.getLogger(__name__)

_security = HTTPBearer(auto_error=False)
_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def _get_jwt_secret() -> str:
    try:
        return signing_key(get_settings().jwt_secret_key)
    except MissingSecretError as exc:
        logger.error("Refusing to sign session tokens: %s", exc)
        raise ConfigurationError() from exc


def hash_password(password: str) -> str:
    """Hash a plain-text password using bcrypt."""

    return _pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify that ``password`` matches ``hashed_password``."""

    try:
        return _pwd_context.verify(password, hashed_password)
    except ValueError:
        # Unknown or malformed hash
        logger.warning("Stored password hash could not be verified")
        return False


def create_access_token(subject: UUID, *, expires_minutes: Optional[int] = None) -> str:
    """Create a signed JWT holding the provided ``subject``."""

    settings = get_settings()
    expire_delta = timedelta(minutes=expires_minutes or settings.jwt_expires_minutes)
    now = datetime.now(timezone.utc)
    payload = {"sub": str(subject), "exp": now + expire_delta, "iat": now}
    return jwt.encode(payload, _get_jwt_secret(), algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> UUID:
    """Decode and validate a JWT, returning the embedded subject UUID."""

    settings = get_settings()
    try:
        payload = jwt.decode(token, _get_jwt_secret(), algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise Unauthenticated("Unauthorized: Invalid or expired token") from exc

    subject = payload.get("sub")
    if not subject:
        raise Unauthenticated("Unauthorized: Invalid token payload")
    try:
        return UUID(subject)
    except ValueError as exc:
        raise Unauthenticated("Unauthorized: Invalid token payload") from exc


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token as an HTTP-only cookie."""

    settings = get_settings()
    secure = settings.is_production
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.jwt_expires_minutes * 60,
        httponly=True,
        # Cross-site cookies need SameSite=None, which browsers only accept over HTTPS.
        samesite="none" if secure else "lax",
        secure=secure,
    )


def clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    secure = settings.is_production
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="none" if secure else "lax",
        secure=secure,
    )


def register_user(db: Session, payload: RegisterRequest) -> Tuple[User, str]:
    """Persist a new user and return the user with an access token."""

    username = payload.username
    email = str(payload.email).lower()

    existing_username = db.scalar(select(User).where(func.lower(User.username) == username.lower()))
    if existing_username:
        raise Conflict("Username already in use")

    existing_email = db.scalar(select(User).where(func.lower(User.email) == email))
    if existing_email:
        raise Conflict("Email already registered")

    education = payload.education.model_dump() if payload.education and not payload.education.is_empty() else None

    # Signed before the insert; a signing failure writes nothing.
    user_id = uuid4()
    token = create_access_token(user_id)

    user = User(
        id=user_id,
        username=username,
        email=email,
        full_name=payload.full_name,
        hashed_password=hash_password(payload.password),
        gender=(payload.gender or "").strip() or None,
        bio=(payload.bio or "").strip() or None,
        location=(payload.location or "").strip() or None,
        phone_number=payload.phone_number,
        skills=payload.skills,
        education=education,
    )

    try:
        db.add(user)
        db.commit()
    except IntegrityError as exc:
        # Lost a race against an identical registration.
        db.rollback()
        raise Conflict("Username or email already registered") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to register user")
        raise StoreError("Unable to register user") from exc

    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user, token


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Authenticate a user against stored credentials."""

    user = db.scalar(select(User).where(func.lower(User.email) == email.strip().lower()))
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def _extract_token(request: Request, credentials: HTTPAuthorizationCredentials | None) -> str | None:
    cookie_token = request.cookies.get(get_settings().session_cookie_name)
    if cookie_token:
        return cookie_token
    if credentials and credentials.scheme.lower() == "bearer":
        return credentials.credentials
    return None


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
    db: Session = Depends(get_session),
) -> User:
    """Resolve the authenticated user from the session cookie or bearer token."""

    token = _extract_token(request, credentials)
    if not token:
        raise Unauthenticated()

    user_id = decode_access_token(token)

    user = db.get(User, user_id)
    if not user:
        raise Unauthenticated("Unauthorized: User no longer exists")

    try:
        user.last_active_at = datetime.now(timezone.utc)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Failed to update last_active_at for user %s", user.id)

    return user


__all__ = [
    "register_user",
    "authenticate_user",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
    "set_session_cookie",
    "clear_session_cookie",
    "get_current_user",
]
