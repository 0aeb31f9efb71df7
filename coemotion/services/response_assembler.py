"""Meeting response assembly.

Stored meetings reference users by identifier. Responses embed the full
creator and participant profiles instead, tolerating users that no longer
resolve: a missing creator becomes a placeholder and missing participants are
dropped.
"""

import logging
import posixpath
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coemotion.errors import AppError
from coemotion.models.meeting import Meeting
from coemotion.models.user import User
from coemotion.schemas.meeting import MeetingResponse
from coemotion.schemas.user import UserResponse
from coemotion.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)

T = TypeVar("T")

UPLOADS_PREFIX = "/uploads/"
UNKNOWN_USER_NAME = "Unknown User"


def is_absolute_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def normalize_profile_image(value: str | None) -> str | None:
    """Rewrite a stored image reference to its public ``/uploads/<name>`` path.

    Absolute URLs, empty values and references without a file name are
    returned unchanged.
    """
    if not value or is_absolute_url(value):
        return value
    name = value[len(UPLOADS_PREFIX) :] if value.startswith(UPLOADS_PREFIX) else value
    name = posixpath.basename(name)
    if not name:
        return value
    return UPLOADS_PREFIX + name


def embed_user(user: User) -> UserResponse:
    """Profile as embedded in a meeting response."""
    embedded = UserResponse.model_validate(user)
    embedded.profile_image = normalize_profile_image(embedded.profile_image)
    return embedded


def unknown_user() -> UserResponse:
    return UserResponse(id="", name=UNKNOWN_USER_NAME, email="", role="")


@dataclass
class Resolution(Generic[T]):
    """Outcome of resolving several keys independently."""

    found: list[T] = field(default_factory=list)
    failed: list[tuple[str, Exception]] = field(default_factory=list)


def resolve_many(keys: Iterable[str], resolver: Callable[[str], T]) -> Resolution[T]:
    """Resolve every key, keeping successes in order and collecting failures."""
    resolution: Resolution[T] = Resolution()
    for key in keys:
        try:
            resolution.found.append(resolver(key))
        except (AppError, SQLAlchemyError) as e:
            resolution.failed.append((key, e))
    return resolution


class MeetingAssembler:
    """Builds :class:`MeetingResponse` objects from stored meetings."""

    def __init__(self, db: Session, directory: UserDirectory | None = None):
        self.db = db
        self.directory = directory or UserDirectory(db)
        self._all_users: list[UserResponse] | None = None

    def _directory_snapshot(self) -> list[UserResponse]:
        """Full user directory, loaded once per assembler."""
        if self._all_users is None:
            try:
                users = self.directory.list_all()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Error fetching all users: {e}")
                return []
            self._all_users = [embed_user(user) for user in users]
        return self._all_users

    def _resolve_user(self, user_id: str) -> UserResponse:
        return embed_user(self.directory.find_by_identifier(user_id))

    def _creator(self, meeting: Meeting) -> UserResponse:
        resolution = resolve_many([meeting.created_by], self._resolve_user)
        if resolution.found:
            return resolution.found[0]

        _, error = resolution.failed[0]
        logger.warning(f"Creator {meeting.created_by} of meeting {meeting.id} not found: {error}")
        if isinstance(error, SQLAlchemyError):
            self.db.rollback()
        return unknown_user()

    def _participants(self, meeting: Meeting) -> list[UserResponse]:
        if meeting.all_members:
            return list(self._directory_snapshot())

        resolution = resolve_many(meeting.participants or [], self._resolve_user)
        for participant_id, error in resolution.failed:
            logger.warning(f"Skipping participant {participant_id} of meeting {meeting.id}: {error}")
            if isinstance(error, SQLAlchemyError):
                self.db.rollback()
        return resolution.found

    def assemble(self, meeting: Meeting) -> MeetingResponse:
        return MeetingResponse(
            id=meeting.id,
            title=meeting.title,
            description=meeting.description or "",
            date=meeting.date,
            time=meeting.time,
            duration=meeting.duration or 0,
            created_by=self._creator(meeting),
            created_at=meeting.created_at,
            all_members=bool(meeting.all_members),
            participants=self._participants(meeting),
        )

    def assemble_many(self, meetings: Iterable[Meeting]) -> list[MeetingResponse]:
        return [self.assemble(meeting) for meeting in meetings]
