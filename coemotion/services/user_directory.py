"""User directory: profile storage, authentication and administration."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from coemotion.errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from coemotion.identifiers import Identifier, dual_lookup
from coemotion.models.enums import Role
from coemotion.models.user import User
from coemotion.schemas.auth import UserRegister
from coemotion.schemas.user import UserUpdate
from coemotion.services.auth import Caller, get_password_hash, verify_password

logger = logging.getLogger(__name__)

MERGEABLE_FIELDS = ("name", "email", "role", "bio", "profile_image")


class UserDirectory:
    """Service for user profile operations."""

    def __init__(self, db: Session):
        self.db = db

    def _get(self, key: str) -> User | None:
        return self.db.query(User).filter(User.id == key).first()

    def lookup(self, user_id: Identifier | str) -> User | None:
        """Find a user by typed identifier first, then by raw string."""
        return dual_lookup(user_id, self._get)

    def find_by_identifier(self, user_id: Identifier | str) -> User:
        user = self.lookup(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def list_all(self) -> list[User]:
        """All users in insertion order."""
        return self.db.query(User).order_by(User.created_at, User.id).all()

    def create(self, data: UserRegister) -> User:
        """Register a user.

        The email check is a plain read; the unique constraint on ``email``
        turns a concurrent duplicate insert into the same Conflict.
        """
        if self.get_by_email(data.email) is not None:
            raise ConflictError("Email already registered")

        user = User(
            name=data.name,
            email=data.email,
            password_hash=get_password_hash(data.password),
            role=data.role or "",
            bio=data.bio,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email already registered") from None
        self.db.refresh(user)

        logger.info(f"Registered user {user.id} ({user.email})")
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise UnauthorizedError("Incorrect email or password")
        return user

    def update(self, user_id: str, data: UserUpdate) -> User:
        """Merge the non-empty fields of ``data`` into the user.

        A new password is only accepted together with the correct current one.
        """
        user = self.find_by_identifier(user_id)

        changes = {}
        for field in MERGEABLE_FIELDS:
            value = getattr(data, field)
            if value:
                changes[field] = value

        if data.new_password and data.current_password:
            if not verify_password(data.current_password, user.password_hash):
                raise BadRequestError("Current password is incorrect")
            changes["password_hash"] = get_password_hash(data.new_password)

        if not changes:
            raise BadRequestError("No fields to update")

        for field, value in changes.items():
            setattr(user, field, value)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email already registered") from None
        self.db.refresh(user)

        logger.info(f"Updated user {user.id}: {sorted(changes)}")
        return user

    def set_profile_image(self, user_id: str, image_url: str) -> User:
        user = self.find_by_identifier(user_id)
        user.profile_image = image_url
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, caller: Caller, user_id: str) -> None:
        """Delete a user on behalf of an Admin caller.

        Meetings that reference the user are left as they are.
        """
        # Role check and delete are separate statements; a role change in
        # between is not detected.
        acting_user = self.lookup(caller.id)
        if acting_user is None or acting_user.role != Role.ADMIN.value:
            logger.warning(f"User {caller.id} tried to delete {user_id} without admin role")
            raise ForbiddenError("Admin role required to delete users")

        # Compare resolved rows so any spelling of the caller's own id matches
        user = self.find_by_identifier(user_id)
        if user.id == acting_user.id:
            raise BadRequestError("Cannot delete your own account")

        self.db.delete(user)
        self.db.commit()

        logger.info(f"User {caller.id} deleted user {user_id}")
