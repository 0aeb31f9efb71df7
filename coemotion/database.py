"""Database configuration and session management."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from coemotion.config import get_settings

settings = get_settings()

# Driver messages raised when a statement exceeds its time budget
TIMEOUT_MARKERS = (
    "statement timeout",
    "canceling statement",
    "timeout expired",
    "database is locked",
)


def build_connect_args(database_url: str, timeout_seconds: float) -> dict[str, Any]:
    """Connection arguments that bound every statement by ``timeout_seconds``."""
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": timeout_seconds}
    if database_url.startswith("postgresql"):
        return {
            "connect_timeout": max(1, int(timeout_seconds)),
            "options": f"-c statement_timeout={int(timeout_seconds * 1000)}",
        }
    return {}


def is_timeout_error(exc: DBAPIError) -> bool:
    """Check whether a driver error was caused by the storage timeout."""
    message = str(exc.orig).lower()
    return any(marker in message for marker in TIMEOUT_MARKERS)


def _engine_options(database_url: str) -> dict[str, Any]:
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": settings.db_timeout_seconds,
    }


engine = create_engine(
    settings.database_url,
    connect_args=build_connect_args(settings.database_url, settings.db_timeout_seconds),
    **_engine_options(settings.database_url),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
