"""Response envelope shared by every endpoint."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    success: bool = True


class StatusMessageResponse(SuccessResponse):
    message: str


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    message: str
    code: str


__all__ = ["SuccessResponse", "StatusMessageResponse", "ErrorResponse"]
