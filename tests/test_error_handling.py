"""Test error handling functionality.

Verifies that custom exceptions are properly raised and handled,
returning the uniform `{"success": false, "error": ...}` body.
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from core.error_handlers import register_exception_handlers
from core.exceptions import (
    AIServiceError,
    AuthenticationError,
    ConfigurationError,
    InvalidJobTransitionError,
    NotFoundError,
    ValidationError,
)
from database.database import ReadSessionLocal, WriteSessionLocal
from api.jobs import check_plan_generation_status
from api.progress import get_user_analytics


def _app_raising(exc):
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise exc

    return TestClient(app, raise_server_exceptions=False)


def test_job_not_found_raises_404(user):
    """Test that requesting a non-existent job raises NotFoundError."""
    db = ReadSessionLocal()
    try:
        with pytest.raises(NotFoundError) as exc_info:
            check_plan_generation_status(job_id=99999, user=user, db=db)
        assert "PlanGenerationJob" in str(exc_info.value.message)
        assert exc_info.value.status_code == 404
    finally:
        db.close()


def test_analytics_for_new_user_is_empty(user):
    db = WriteSessionLocal()
    try:
        res = get_user_analytics(user=user, db=db)
        assert res.success is True
        assert res.analytics.total_meals_logged == 0
    finally:
        db.close()


def test_app_exception_renders_uniform_body():
    client = _app_raising(NotFoundError("Plan", 7))
    res = client.get("/boom")
    assert res.status_code == 404
    assert res.json() == {
        "success": False,
        "error": "Plan with id '7' not found",
        "details": {"resource": "Plan", "id": 7},
    }


def test_database_errors_do_not_leak_text():
    client = _app_raising(OperationalError("SELECT secret", {}, Exception("locked")))
    res = client.get("/boom")
    assert res.status_code == 500
    assert res.json()["error"] == "A database error occurred"
    assert "secret" not in res.text


def test_unexpected_errors_are_generic():
    client = _app_raising(RuntimeError("stack details"))
    res = client.get("/boom")
    assert res.status_code == 500
    assert res.json() == {
        "success": False,
        "error": "An internal server error occurred",
        "details": {"type": "internal_error"},
    }


def test_exception_classes_have_proper_attributes():
    """Test that custom exception classes have expected attributes."""
    # Test NotFoundError
    exc = NotFoundError("Workout", 123)
    assert exc.status_code == 404
    assert "Workout" in exc.message
    assert "123" in exc.message

    # Test ValidationError
    exc = ValidationError("Invalid input", field="age")
    assert exc.status_code == 400
    assert exc.message == "Invalid input"
    assert exc.details == {"field": "age"}

    exc = AuthenticationError()
    assert exc.status_code == 401

    exc = AIServiceError("AI provider error: boom", operation="generate_object")
    assert exc.status_code == 502
    assert exc.details == {"operation": "generate_object"}

    exc = InvalidJobTransitionError(5, "COMPLETED", "PENDING")
    assert exc.status_code == 409
    assert "COMPLETED" in exc.message

    exc = ConfigurationError("OPENAI_API_KEY is not set", config_key="OPENAI_API_KEY")
    assert exc.status_code == 500


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
