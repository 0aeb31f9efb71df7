"""SQLAlchemy models."""

from coemotion.models.meeting import Meeting
from coemotion.models.user import User

__all__ = [
    "User",
    "Meeting",
]
