"""User API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from coemotion.api.dependencies import (
    get_current_caller,
    get_upload_storage,
    get_user_directory,
)
from coemotion.models.enums import Role
from coemotion.models.mixins import utcnow
from coemotion.schemas.user import (
    MessageResponse,
    ProfileImageResponse,
    TeamMemberResponse,
    UserResponse,
    UserUpdate,
)
from coemotion.services.auth import Caller
from coemotion.services.uploads import UploadStorage
from coemotion.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)

public_router = APIRouter(prefix="/users", tags=["users"])
router = APIRouter(prefix="/api", tags=["users"], dependencies=[Depends(get_current_caller)])


@public_router.get("", response_model=list[UserResponse])
@router.get("/users", response_model=list[UserResponse])
def list_users(
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
):
    """List all users without their password hashes."""
    return directory.list_all()


@public_router.get("/{user_id}", response_model=UserResponse)
@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
):
    """Get a user by typed or legacy string identifier."""
    return directory.find_by_identifier(user_id)


@router.put("/users/{user_id}", response_model=MessageResponse)
def update_user(
    user_id: str,
    user_data: UserUpdate,
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
):
    """Update the non-empty profile fields, and the password when verified."""
    directory.update(user_id, user_data)
    return MessageResponse(message="User updated successfully")


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    caller: Annotated[Caller, Depends(get_current_caller)],
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
):
    """Delete a user. Requires the Admin role."""
    directory.delete(caller, user_id)
    return MessageResponse(message="User deleted successfully")


@router.get("/team-members", response_model=list[TeamMemberResponse])
def list_team_members(
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
):
    """List users as team members."""
    # Presence is not tracked; status and last_active are display placeholders
    now = utcnow()
    return [
        TeamMemberResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            role=Role.display(user.role),
            status="Online",
            last_active=now,
        )
        for user in directory.list_all()
    ]


@router.post("/upload-profile-image", response_model=ProfileImageResponse)
def upload_profile_image(
    caller: Annotated[Caller, Depends(get_current_caller)],
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
    storage: Annotated[UploadStorage, Depends(get_upload_storage)],
    image: UploadFile = File(...),
):
    """Store a profile image for the caller and point their profile at it."""
    logger.info(f"Processing upload for user: {caller.id}")
    path, image_url = storage.save(image)

    try:
        directory.set_profile_image(caller.id, image_url)
    except Exception:
        storage.discard(path)
        raise

    return ProfileImageResponse(message="Image uploaded successfully", image_url=image_url)
