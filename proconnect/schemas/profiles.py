"""Schemas for profile endpoints and the user directory."""
from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import SuccessResponse

PHONE_PATTERN = re.compile(r"^\+?[0-9]{10,15}$")
YEAR_PATTERN = re.compile(r"^\d{4}$")

ConnectionStatusLabel = Literal["self", "connected", "incoming", "outgoing", "none"]


def normalize_skills(value: Any) -> list[str]:
    """Accept a list or a comma separated string and return trimmed, de-duplicated skills."""

    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    skills: list[str] = []
    for raw in value:
        skill = str(raw).strip()
        if skill and skill not in skills:
            skills.append(skill)
    return skills


def normalize_phone(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip().replace(" ", "").replace("-", "")
    if not cleaned:
        return None
    if not PHONE_PATTERN.match(cleaned):
        raise ValueError("Phone number must contain 10 to 15 digits")
    return cleaned


class EducationRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    institute: str | None = Field(default=None, max_length=200)
    degree: str | None = Field(default=None, max_length=120)
    field: str | None = Field(default=None, max_length=120)
    year: str | None = None

    @field_validator("institute", "degree", "field", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @field_validator("year", mode="before")
    @classmethod
    def _check_year(cls, v: Any) -> str | None:
        if v in (None, ""):
            return None
        year = str(v).strip()
        if not YEAR_PATTERN.match(year):
            raise ValueError("Education year must be four digits")
        return year

    def is_empty(self) -> bool:
        return not any((self.institute, self.degree, self.field, self.year))


class UserSummary(BaseModel):
    """Directory projection of a user; never includes credentials."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    full_name: str
    email: str | None = None
    avatar_url: str | None = None
    connection_status: ConnectionStatusLabel | None = None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    full_name: str
    gender: str | None = None
    bio: str | None = None
    location: str | None = None
    phone_number: str | None = None
    skills: list[str] = Field(default_factory=list)
    education: EducationRecord | None = None
    avatar_url: str | None = None
    created_at: datetime
    last_active_at: datetime

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, v: Any) -> list[str]:
        return normalize_skills(v)


class ProfileUpdateRequest(BaseModel):
    full_name: str | None = Field(default=None, max_length=150)
    gender: str | None = Field(default=None, max_length=32)
    bio: str | None = Field(default=None, max_length=500)
    location: str | None = Field(default=None, max_length=255)
    phone_number: str | None = None
    skills: list[str] | None = None
    education: EducationRecord | None = None
    avatar_url: str | None = Field(default=None, max_length=1024)

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, v: Any) -> list[str] | None:
        if v is None:
            return None
        return normalize_skills(v)

    @field_validator("phone_number")
    @classmethod
    def _phone(cls, v: str | None) -> str | None:
        return normalize_phone(v)


class ProfileEnvelope(SuccessResponse):
    profile: ProfileResponse


class UserListResponse(SuccessResponse):
    users: list[UserSummary]


__all__ = [
    "ConnectionStatusLabel",
    "EducationRecord",
    "ProfileEnvelope",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "UserListResponse",
    "UserSummary",
    "normalize_phone",
    "normalize_skills",
]
