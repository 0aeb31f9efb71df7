"""Meeting model."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text

from coemotion.database import Base
from coemotion.identifiers import new_identifier
from coemotion.models.mixins import utcnow


class Meeting(Base):
    """Scheduled meeting.

    ``created_by`` and ``participants`` hold user identifiers without a
    foreign key: deleting a user leaves its meetings untouched.
    """

    __tablename__ = "meetings"

    id = Column(String(64), primary_key=True, default=new_identifier)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    time = Column(String(5), nullable=False)  # HH:MM, 24-hour
    duration = Column(Integer, nullable=False, default=0)  # minutes
    created_by = Column(String(64), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    all_members = Column(Boolean, nullable=False, default=False)
    # Ordered user identifiers: ["65f0c1...", "legacy-user", ...]
    participants = Column(JSON, nullable=False, default=list)
