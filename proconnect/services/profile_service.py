from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import User
from ..schemas import ProfileUpdateRequest
from .errors import NotFound, StoreError

_NULLABLE_TEXT_FIELDS = ("gender", "bio", "location", "avatar_url")


def get_public_profile(db: Session, user_id: UUID) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def update_profile(db: Session, *, user: User, payload: ProfileUpdateRequest) -> User:
    """Apply the fields the client actually sent to ``user``'s profile."""

    update_data = payload.model_dump(exclude_unset=True)

    # A full name is required on the record; ignore attempts to blank it.
    if "full_name" in update_data:
        full_name = (update_data["full_name"] or "").strip()
        if full_name:
            update_data["full_name"] = full_name
        else:
            update_data.pop("full_name")

    for field in _NULLABLE_TEXT_FIELDS:
        if field in update_data:
            value = update_data[field]
            if isinstance(value, str):
                value = value.strip()
            update_data[field] = value or None

    if "skills" in update_data and update_data["skills"] is None:
        update_data["skills"] = []

    if "education" in update_data:
        education = payload.education
        update_data["education"] = None if education is None or education.is_empty() else education.model_dump()

    for field, value in update_data.items():
        setattr(user, field, value)

    try:
        db.add(user)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError("Failed to update profile") from exc

    db.refresh(user)
    return user
