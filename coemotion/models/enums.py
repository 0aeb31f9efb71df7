"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Well-known user roles.

    Roles are stored as free text; only these values carry meaning.
    """

    ADMIN = "Admin"
    TEAM_MEMBER = "Team Member"

    @classmethod
    def display(cls, role: str | None) -> str:
        """Role as shown to clients, defaulting empty roles to a team member."""
        return role or cls.TEAM_MEMBER.value
