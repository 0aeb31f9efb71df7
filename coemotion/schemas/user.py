"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from coemotion.models.enums import Role


class UserResponse(BaseModel):
    """User profile without the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: str
    bio: str | None = None
    profile_image: str | None = None

    @field_validator("role", mode="before")
    @classmethod
    def default_role(cls, value: str | None) -> str:
        return Role.display(value)


class UserUpdate(BaseModel):
    """Update a user; empty fields are left unchanged."""

    name: str | None = Field(None, max_length=255)
    email: EmailStr | None = Field(None, max_length=255)
    role: str | None = Field(None, max_length=100)
    bio: str | None = Field(None, max_length=2000)
    profile_image: str | None = Field(None, max_length=1024)
    current_password: str | None = Field(None, max_length=128)
    new_password: str | None = Field(None, min_length=8, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_unset(cls, value: str | None) -> str | None:
        return value or None

    @field_validator("new_password", mode="before")
    @classmethod
    def blank_password_is_unset(cls, value: str | None) -> str | None:
        return value or None


class TeamMemberResponse(BaseModel):
    """Directory entry shown on the team page."""

    id: str
    name: str
    email: str
    role: str
    status: str
    last_active: datetime


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class ProfileImageResponse(BaseModel):
    """Result of a profile image upload."""

    message: str
    image_url: str
