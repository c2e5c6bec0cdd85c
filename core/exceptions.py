"""Custom exception classes for the application.

Defines the error taxonomy raised by services and routers. Every exception
carries an HTTP status and a details dictionary, and is rendered by the
handlers in `core.error_handlers` as `{"success": false, "error": ...}`.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource does not exist or is not owned by the caller."""

    def __init__(self, resource: str, identifier: Any):
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class ValidationError(AppException):
    """Raised when input validation fails outside of request-body parsing."""

    def __init__(self, message: str, field: Optional[str] = None, errors: Optional[Dict[str, str]] = None):
        """Initialize validation error.

        Args:
            message: Validation error message.
            field: Optional field name that failed validation.
            errors: Optional mapping of field name to message.
        """
        details: Dict[str, Any] = {}
        if field:
            details["field"] = field
        if errors:
            details["errors"] = errors
        super().__init__(message, status_code=400, details=details)


class AuthenticationError(AppException):
    """Raised when the request carries no valid user session."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401)


class DatabaseError(AppException):
    """Raised when database operations fail."""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)


class AIServiceError(AppException):
    """Raised when the language-model provider fails or returns a malformed reply."""

    def __init__(self, message: str, operation: Optional[str] = None):
        """Initialize AI service error.

        Args:
            message: Provider or parsing error message.
            operation: Optional operation that failed (e.g. 'generate_object').
        """
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=502, details=details)


class InvalidJobTransitionError(AppException):
    """Raised when a plan generation job is moved to a non-successor state."""

    def __init__(self, job_id: Any, current: str, requested: str):
        super().__init__(
            f"Job '{job_id}' cannot move from {current} to {requested}",
            status_code=409,
            details={"job_id": job_id, "current": current, "requested": requested},
        )


class ConfigurationError(AppException):
    """Raised when application configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, status_code=500, details=details)
