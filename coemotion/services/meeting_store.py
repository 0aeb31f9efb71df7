"""Meeting storage operations."""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from coemotion.errors import ConflictError, NotFoundError
from coemotion.identifiers import Identifier, dual_lookup, new_identifier
from coemotion.models.meeting import Meeting
from coemotion.models.mixins import utcnow
from coemotion.schemas.meeting import MeetingCreate, MeetingUpdate
from coemotion.services.auth import Caller
from coemotion.services.temporal import upcoming_clause, upcoming_order

logger = logging.getLogger(__name__)


class MeetingStore:
    """Service for meeting records."""

    def __init__(self, db: Session):
        self.db = db

    def _get(self, key: str) -> Meeting | None:
        return self.db.query(Meeting).filter(Meeting.id == key).first()

    def find_by_identifier(self, meeting_id: Identifier | str) -> Meeting:
        meeting = dual_lookup(meeting_id, self._get)
        if meeting is None:
            raise NotFoundError("Meeting not found")
        return meeting

    def create(self, data: MeetingCreate, creator: Caller) -> Meeting:
        """Store a new meeting created by ``creator``."""
        if data.id and self._get(data.id) is not None:
            raise ConflictError("A meeting with this id already exists")

        meeting = Meeting(
            id=data.id or new_identifier(),
            title=data.title,
            description=data.description,
            date=data.date,
            time=data.time,
            duration=data.duration,
            created_by=creator.id,
            created_at=utcnow(),
            all_members=data.all_members,
            participants=list(data.participants),
        )
        self.db.add(meeting)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("A meeting with this id already exists") from None
        self.db.refresh(meeting)

        logger.info(f"Meeting created: {meeting.id} by {creator.id}")
        return meeting

    def list_all(self) -> list[Meeting]:
        return self.db.query(Meeting).order_by(Meeting.created_at, Meeting.id).all()

    def list_for_date(self, day: str) -> list[Meeting]:
        """Meetings whose date is exactly ``day`` (``YYYY-MM-DD``)."""
        return (
            self.db.query(Meeting)
            .filter(Meeting.date == day)
            .order_by(Meeting.time, Meeting.created_at)
            .all()
        )

    def list_upcoming(self, reference: datetime) -> list[Meeting]:
        """Meetings at or after ``reference``, earliest first."""
        return (
            self.db.query(Meeting)
            .filter(upcoming_clause(reference))
            .order_by(*upcoming_order())
            .all()
        )

    def update(self, meeting_id: str, data: MeetingUpdate) -> Meeting:
        """Replace every client-controlled field of the meeting."""
        meeting = self.find_by_identifier(meeting_id)

        meeting.title = data.title
        meeting.description = data.description
        meeting.date = data.date
        meeting.time = data.time
        meeting.duration = data.duration
        meeting.all_members = data.all_members
        meeting.participants = list(data.participants)

        self.db.commit()
        self.db.refresh(meeting)

        logger.info(f"Meeting updated: {meeting.id}")
        return meeting

    def delete(self, meeting_id: str) -> None:
        meeting = self.find_by_identifier(meeting_id)
        self.db.delete(meeting)
        self.db.commit()

        logger.info(f"Meeting deleted: {meeting_id}")
