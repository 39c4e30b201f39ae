"""Authentication routes: register, login, logout and the current session."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import User
from ..schemas import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    StatusMessageResponse,
)
from ..services import (
    Unauthenticated,
    authenticate_user,
    clear_session_cookie,
    create_access_token,
    get_current_user,
    register_user,
    set_session_cookie,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_endpoint(
    payload: RegisterRequest,
    response: Response,
    db: Session = Depends(get_session),
) -> AuthResponse:
    user, token = register_user(db, payload)
    set_session_cookie(response, token)
    return AuthResponse(token=token, user=ProfileResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login_endpoint(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_session),
) -> AuthResponse:
    user = authenticate_user(db, str(payload.email), payload.password)
    if not user:
        raise Unauthenticated("Invalid email or password")
    token = create_access_token(user.id)
    set_session_cookie(response, token)
    return AuthResponse(token=token, user=ProfileResponse.model_validate(user))


@router.post("/logout", response_model=StatusMessageResponse)
async def logout_endpoint(response: Response) -> StatusMessageResponse:
    clear_session_cookie(response)
    return StatusMessageResponse(message="Logged out successfully")


@router.get("/me", response_model=CurrentUserResponse)
async def me_endpoint(current_user: User = Depends(get_current_user)) -> CurrentUserResponse:
    return CurrentUserResponse(user=ProfileResponse.model_validate(current_user))


__all__ = ["router"]
