"""Pydantic schemas for authentication endpoints."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from .common import SuccessResponse
from .profiles import EducationRecord, ProfileResponse, normalize_phone, normalize_skills


class RegisterRequest(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=150)
    username: str = Field(..., min_length=3, max_length=32, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    confirm_password: str | None = None
    gender: str | None = Field(default=None, max_length=32)
    bio: str | None = Field(default=None, max_length=500)
    location: str | None = Field(default=None, max_length=255)
    phone_number: str | None = None
    skills: list[str] = Field(default_factory=list)
    education: EducationRecord | None = None

    @field_validator("full_name", "username")
    @classmethod
    def _strip(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Field must not be blank")
        return cleaned

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, v: Any) -> list[str]:
        return normalize_skills(v)

    @field_validator("phone_number")
    @classmethod
    def _phone(cls, v: str | None) -> str | None:
        return normalize_phone(v)

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterRequest":
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthResponse(SuccessResponse):
    token: str
    token_type: str = "bearer"
    user: ProfileResponse


class CurrentUserResponse(SuccessResponse):
    user: ProfileResponse


__all__ = ["RegisterRequest", "LoginRequest", "AuthResponse", "CurrentUserResponse"]
