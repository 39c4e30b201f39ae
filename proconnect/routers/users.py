"""User directory and profile routes."""
from __future__ import annotations

from typing import cast
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import User
from ..schemas import ProfileEnvelope, ProfileResponse, ProfileUpdateRequest, UserListResponse, UserSummary
from ..services import (
    connection_status_map,
    get_current_user,
    get_public_profile,
    list_all_users,
    list_chat_partners,
    search_users,
    update_profile,
)

router = APIRouter(prefix="/api", tags=["users"])


def _directory(db: Session, viewer: User, users: list[User]) -> list[UserSummary]:
    labels = connection_status_map(db, viewer_id=cast(UUID, viewer.id))
    return [
        UserSummary(
            id=user.id,
            username=user.username,
            full_name=user.full_name,
            email=user.email,
            avatar_url=user.avatar_url,
            connection_status=labels.get(cast(UUID, user.id), "none"),
        )
        for user in users
    ]


@router.get("/users/all", response_model=UserListResponse)
async def all_users_endpoint(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> UserListResponse:
    return UserListResponse(users=_directory(db, current_user, list_all_users(db, exclude_user=current_user)))


@router.get("/user/search", response_model=UserListResponse)
async def search_endpoint(
    search: str = Query("", max_length=150),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> UserListResponse:
    users = search_users(db, query=search, exclude_user=current_user)
    return UserListResponse(users=_directory(db, current_user, users))


@router.get("/users/currentchatters", response_model=UserListResponse)
async def current_chatters_endpoint(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> UserListResponse:
    partners = list_chat_partners(db, user=current_user)
    # Chat partners are shown without contact details.
    return UserListResponse(
        users=[
            UserSummary(id=user.id, username=user.username, full_name=user.full_name, avatar_url=user.avatar_url)
            for user in partners
        ]
    )


@router.get("/users/profile", response_model=ProfileEnvelope)
async def my_profile_endpoint(current_user: User = Depends(get_current_user)) -> ProfileEnvelope:
    return ProfileEnvelope(profile=ProfileResponse.model_validate(current_user))


@router.put("/users/profile", response_model=ProfileEnvelope)
async def update_my_profile_endpoint(
    payload: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> ProfileEnvelope:
    updated = update_profile(db, user=current_user, payload=payload)
    return ProfileEnvelope(profile=ProfileResponse.model_validate(updated))


@router.get("/users/profile/{user_id}", response_model=ProfileEnvelope)
async def user_profile_endpoint(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> ProfileEnvelope:
    user = get_public_profile(db, user_id)
    return ProfileEnvelope(profile=ProfileResponse.model_validate(user))


__all__ = ["router"]
