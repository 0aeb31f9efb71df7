"""Pytest configuration and fixtures."""

import os
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from coemotion.api.dependencies import get_reference_time, get_upload_storage
from coemotion.database import Base, get_db
from coemotion.main import app
from coemotion.models.enums import Role
from coemotion.models.user import User
from coemotion.services.auth import create_access_token, get_password_hash
from coemotion.services.uploads import UploadStorage

# Fixed "now" for today/upcoming endpoints
REFERENCE_TIME = datetime(2024, 3, 10, 14, 0)


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/coemotion", "/coemotion_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def upload_storage(tmp_path):
    return UploadStorage(tmp_path / "uploads")


@pytest.fixture(scope="function")
def client(db, upload_storage):
    """Create a test client with database, clock and upload overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_reference_time] = lambda: REFERENCE_TIME
    app.dependency_overrides[get_upload_storage] = lambda: upload_storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Insert a user directly, optionally under a legacy string id."""

    def _make_user(
        name: str,
        email: str | None = None,
        user_id: str | None = None,
        role: str = "",
        profile_image: str | None = None,
    ) -> User:
        user = User(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            password_hash=get_password_hash("password123"),
            role=role,
            profile_image=profile_image,
        )
        if user_id is not None:
            user.id = user_id
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


def _headers_for(user: User) -> AuthHeaders:
    token = create_access_token(user.id, user.email, user.name)
    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user.id, email=user.email)


@pytest.fixture
def headers_for():
    """Build auth headers for an existing user."""
    return _headers_for


@pytest.fixture
def auth_headers(client):
    """Register a user and return auth headers with user info."""
    response = client.post(
        "/register",
        json={"email": "test@example.com", "password": "testpass123", "name": "Test User"},
    )
    assert response.status_code == 201
    data = response.json()
    token = data["access_token"]

    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def admin_headers(client, make_user):
    """Auth headers for a user holding the Admin role."""
    admin = make_user("Admin User", email="admin@example.com", role=Role.ADMIN.value)
    return _headers_for(admin)
