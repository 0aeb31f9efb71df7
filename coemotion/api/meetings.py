"""Meeting API endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status

from coemotion.api.dependencies import (
    get_current_caller,
    get_meeting_assembler,
    get_meeting_store,
    get_reference_time,
)
from coemotion.schemas.meeting import (
    MeetingCreate,
    MeetingRecord,
    MeetingResponse,
    MeetingUpdate,
)
from coemotion.schemas.user import MessageResponse
from coemotion.services.auth import Caller
from coemotion.services.meeting_store import MeetingStore
from coemotion.services.response_assembler import MeetingAssembler
from coemotion.services.temporal import split_reference

router = APIRouter(
    prefix="/api/meetings", tags=["meetings"], dependencies=[Depends(get_current_caller)]
)


@router.post("", response_model=MeetingRecord, status_code=status.HTTP_201_CREATED)
def create_meeting(
    meeting_data: MeetingCreate,
    caller: Annotated[Caller, Depends(get_current_caller)],
    store: Annotated[MeetingStore, Depends(get_meeting_store)],
):
    """Create a meeting owned by the caller."""
    return store.create(meeting_data, caller)


@router.get("", response_model=list[MeetingResponse])
def list_meetings(
    store: Annotated[MeetingStore, Depends(get_meeting_store)],
    assembler: Annotated[MeetingAssembler, Depends(get_meeting_assembler)],
):
    """Get all meetings with creator and participant profiles."""
    return assembler.assemble_many(store.list_all())


@router.get("/today", response_model=list[MeetingResponse])
def list_today_meetings(
    store: Annotated[MeetingStore, Depends(get_meeting_store)],
    assembler: Annotated[MeetingAssembler, Depends(get_meeting_assembler)],
    now: Annotated[datetime, Depends(get_reference_time)],
):
    """Get meetings scheduled for the current day."""
    today, _ = split_reference(now)
    return assembler.assemble_many(store.list_for_date(today))


@router.get("/upcoming", response_model=list[MeetingResponse])
def list_upcoming_meetings(
    store: Annotated[MeetingStore, Depends(get_meeting_store)],
    assembler: Annotated[MeetingAssembler, Depends(get_meeting_assembler)],
    now: Annotated[datetime, Depends(get_reference_time)],
):
    """Get meetings from now on, earliest first."""
    return assembler.assemble_many(store.list_upcoming(now))


@router.get("/{meeting_id}", response_model=MeetingResponse)
def get_meeting(
    meeting_id: str,
    store: Annotated[MeetingStore, Depends(get_meeting_store)],
    assembler: Annotated[MeetingAssembler, Depends(get_meeting_assembler)],
):
    """Get a meeting with creator and participant profiles."""
    return assembler.assemble(store.find_by_identifier(meeting_id))


@router.put("/{meeting_id}", response_model=MeetingResponse)
def update_meeting(
    meeting_id: str,
    meeting_data: MeetingUpdate,
    store: Annotated[MeetingStore, Depends(get_meeting_store)],
    assembler: Annotated[MeetingAssembler, Depends(get_meeting_assembler)],
):
    """Replace a meeting's details and participants."""
    return assembler.assemble(store.update(meeting_id, meeting_data))


@router.delete("/{meeting_id}", response_model=MessageResponse)
def delete_meeting(
    meeting_id: str,
    store: Annotated[MeetingStore, Depends(get_meeting_store)],
):
    """Delete a meeting."""
    store.delete(meeting_id)
    return MessageResponse(message="Meeting deleted successfully")
