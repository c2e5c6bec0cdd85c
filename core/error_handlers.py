"""Error handlers for the FastAPI application.

Every failure leaves the API in the shape clients of the coach expect:
`{"success": false, "error": "<message>"}` plus optional details. Database
and unexpected errors are logged with their traceback but reach the client
only as a generic message.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import AppException
from core.logger import get_logger

logger = get_logger("core.error_handlers")

DATABASE_ERROR_MESSAGE = "A database error occurred"
INTERNAL_ERROR_MESSAGE = "An internal server error occurred"


def create_error_response(message: str, status_code: int = 500, details: dict = None) -> JSONResponse:
    """Build the failure body; `details` is omitted when empty."""
    body = {"success": False, "error": message}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def _where(request: Request) -> str:
    return f"{request.method} {request.url.path}"


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render application exceptions with their own status code.

    Client mistakes (4xx) are logged as warnings, provider and server
    failures (5xx) as errors.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log("%s failed with %s: %s", _where(request), type(exc).__name__, exc.message)
    return create_error_response(exc.message, exc.status_code, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render body/query validation failures.

    The message lists `field: reason` pairs, so a rejected consent checkbox
    reads "Validation failed: medical_consent: Value error, You must ...".
    """
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning("%s rejected: %d invalid field(s)", _where(request), len(errors))
    message = "Validation failed: " + "; ".join(f"{e['field']}: {e['message']}" for e in errors)
    return create_error_response(
        message,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        {"validation_errors": errors},
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s: %s", _where(request), exc, exc_info=exc)
    return create_error_response(
        DATABASE_ERROR_MESSAGE,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {"type": "database_error"},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception on %s: %s", _where(request), exc, exc_info=exc)
    return create_error_response(
        INTERNAL_ERROR_MESSAGE,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {"type": "internal_error"},
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
    logger.debug("Exception handlers registered")
