"""Upcoming-meeting rule.

A meeting is upcoming relative to a reference instant when it falls on a
later day, or on the same day at or after the reference clock time. Dates are
stored as ``YYYY-MM-DD`` and times as zero-padded ``HH:MM``, so plain string
comparison orders them chronologically.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from coemotion.models.meeting import Meeting


def split_reference(reference: datetime) -> tuple[str, str]:
    """Split an instant into its calendar day and ``HH:MM`` clock time."""
    return reference.strftime("%Y-%m-%d"), reference.strftime("%H:%M")


def is_upcoming(date: str, time: str, reference: datetime) -> bool:
    day, clock = split_reference(reference)
    return date > day or (date == day and time >= clock)


def upcoming_clause(reference: datetime) -> ColumnElement[bool]:
    """SQL filter equivalent to :func:`is_upcoming`."""
    day, clock = split_reference(reference)
    return or_(
        and_(Meeting.date == day, Meeting.time >= clock),
        Meeting.date > day,
    )


def upcoming_order() -> tuple:
    # created_at keeps meetings in the same slot in insertion order
    return Meeting.date.asc(), Meeting.time.asc(), Meeting.created_at.asc()


def local_now(timezone: str) -> datetime:
    """Current instant in the configured scheduling timezone."""
    return datetime.now(ZoneInfo(timezone))
