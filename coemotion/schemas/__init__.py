"""Pydantic schemas for API requests and responses."""

from coemotion.schemas.auth import AuthResponse, UserLogin, UserRegister
from coemotion.schemas.meeting import (
    MeetingCreate,
    MeetingRecord,
    MeetingResponse,
    MeetingUpdate,
)
from coemotion.schemas.user import UserResponse, UserUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "UserUpdate",
    "MeetingCreate",
    "MeetingUpdate",
    "MeetingRecord",
    "MeetingResponse",
]
