"""User model."""

from sqlalchemy import Column, String, Text

from coemotion.database import Base
from coemotion.identifiers import new_identifier
from coemotion.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User profile used for authentication and meeting membership."""

    __tablename__ = "users"

    # Typed ObjectId hex for new rows; legacy rows may hold any string
    id = Column(String(64), primary_key=True, default=new_identifier)
    name = Column(String(255), nullable=False, default="")
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(100), nullable=False, default="")
    bio = Column(Text, nullable=True)
    profile_image = Column(String(1024), nullable=True)
