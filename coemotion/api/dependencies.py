"""FastAPI dependencies for authentication, services and the clock."""

from datetime import datetime
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from coemotion.config import get_settings
from coemotion.database import get_db
from coemotion.errors import UnauthorizedError
from coemotion.services.auth import Caller, caller_from_token
from coemotion.services.meeting_store import MeetingStore
from coemotion.services.response_assembler import MeetingAssembler
from coemotion.services.temporal import local_now
from coemotion.services.uploads import UploadStorage
from coemotion.services.user_directory import UserDirectory

security = HTTPBearer(auto_error=False)


def get_current_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Caller:
    """Get the authenticated caller from the bearer token claims."""
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")

    caller = caller_from_token(credentials.credentials)
    if caller is None:
        raise UnauthorizedError("Invalid authentication credentials")
    return caller


def get_user_directory(
    db: Annotated[Session, Depends(get_db)],
) -> UserDirectory:
    return UserDirectory(db)


def get_meeting_store(
    db: Annotated[Session, Depends(get_db)],
) -> MeetingStore:
    return MeetingStore(db)


def get_meeting_assembler(
    db: Annotated[Session, Depends(get_db)],
) -> MeetingAssembler:
    """Get a meeting assembler sharing the request's session."""
    return MeetingAssembler(db)


def get_upload_storage() -> UploadStorage:
    return UploadStorage(get_settings().upload_dir)


def get_reference_time() -> datetime:
    """Current instant in the scheduling timezone."""
    return local_now(get_settings().timezone)
