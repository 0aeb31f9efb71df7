"""Meeting schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from coemotion.schemas.user import UserResponse

DATE_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$"
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class MeetingFields(BaseModel):
    """Fields a client controls on a meeting.

    Dates and times must be zero-padded so that string order is chronological.
    """

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=5000)
    date: str = Field(..., pattern=DATE_PATTERN, description="YYYY-MM-DD")
    time: str = Field(..., pattern=TIME_PATTERN, description="HH:MM, 24-hour")
    duration: int = Field(0, ge=0, description="Minutes")
    all_members: bool = False
    participants: list[str] = Field(default_factory=list)


class MeetingCreate(MeetingFields):
    """Create a meeting.

    ``created_by`` and ``created_at`` are always stamped by the server.
    """

    id: str | None = Field(None, min_length=1, max_length=64)


class MeetingUpdate(MeetingFields):
    """Replace every client-controlled field of a meeting."""


class MeetingRecord(BaseModel):
    """Meeting as stored, with user identifiers."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    date: str
    time: str
    duration: int
    created_by: str
    created_at: datetime
    all_members: bool
    participants: list[str]


class MeetingResponse(BaseModel):
    """Meeting with creator and participants expanded into user profiles."""

    id: str
    title: str
    description: str
    date: str
    time: str
    duration: int
    created_by: UserResponse
    created_at: datetime
    all_members: bool
    participants: list[UserResponse]
