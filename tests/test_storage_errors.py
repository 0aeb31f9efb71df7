"""Tests for storage timeout detection and error responses."""

import pytest
from sqlalchemy.exc import OperationalError

from coemotion.api.dependencies import get_user_directory
from coemotion.database import build_connect_args, is_timeout_error
from coemotion.main import app


def driver_error(message: str) -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception(message))


@pytest.mark.parametrize(
    "message",
    [
        "canceling statement due to statement timeout",
        "database is locked",
        "timeout expired",
    ],
)
def test_timeout_messages_are_detected(message):
    assert is_timeout_error(driver_error(message))


def test_other_driver_errors_are_not_timeouts():
    assert not is_timeout_error(driver_error('relation "users" does not exist'))


def test_connect_args_bound_statements():
    assert build_connect_args("sqlite:///./test.db", 2.5) == {
        "check_same_thread": False,
        "timeout": 2.5,
    }
    postgres = build_connect_args("postgresql://u:p@db/coemotion", 10.0)
    assert postgres["options"] == "-c statement_timeout=10000"
    assert postgres["connect_timeout"] == 10


class TestStorageErrorResponses:
    def failing_directory(self, message):
        def _failing_directory():
            raise driver_error(message)

        return _failing_directory

    def test_timeout_returns_504(self, client):
        app.dependency_overrides[get_user_directory] = self.failing_directory(
            "canceling statement due to statement timeout"
        )

        response = client.get("/users")

        assert response.status_code == 504
        assert response.json() == {"error": "Database operation timed out"}

    def test_other_storage_error_returns_500(self, client):
        app.dependency_overrides[get_user_directory] = self.failing_directory(
            "server closed the connection unexpectedly"
        )

        response = client.get("/users")

        assert response.status_code == 500
        assert response.json() == {"error": "Database error"}
