"""Authentication API endpoints.

Served both at the root (``/login``) and under ``/auth`` for older clients.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from coemotion.api.dependencies import get_user_directory
from coemotion.schemas.auth import AuthResponse, UserLogin, UserRegister
from coemotion.schemas.user import UserResponse
from coemotion.services.auth import create_access_token
from coemotion.services.user_directory import UserDirectory

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
):
    """Register a new user."""
    user = directory.create(user_data)

    access_token = create_access_token(user.id, user.email, user.name)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    directory: Annotated[UserDirectory, Depends(get_user_directory)],
):
    """Login with email and password."""
    user = directory.authenticate(credentials.email, credentials.password)

    access_token = create_access_token(user.id, user.email, user.name)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )
