"""
Error taxonomy and standardized error responses for the journal service.

Domain code raises the exceptions defined here; the API layer turns them into
JSON bodies of the form ``{"error": <message>, "code": <code>,
"correlation_id": <id>}`` through a single exception handler.

Usage:
    from journal_service.shared.errors import NotFoundError, validation_error

    raise NotFoundError("Entry not found", resource_id=entry_id)

    # In a handler:
    return validation_error("Missing userId", correlation_id=get_correlation_id(request))
"""

import logging
from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from journal_service.core.logging_utils import sanitize_for_logging

logger = logging.getLogger("Journal.API.Errors")


class ErrorCode(str, Enum):
    """Error codes surfaced to API clients."""

    # Client errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"


# =============================================================================
# DOMAIN EXCEPTIONS
# =============================================================================

class JournalServiceError(Exception):
    """Base class for errors that map onto an HTTP response."""

    code = ErrorCode.INTERNAL_ERROR
    status_code = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(JournalServiceError):
    """A required field is missing or malformed."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 400


class NotFoundError(JournalServiceError):
    """The referenced entry does not exist."""

    code = ErrorCode.NOT_FOUND
    status_code = 404

    def __init__(self, message: str = "Entry not found", resource_id: Optional[str] = None):
        super().__init__(message, {"resource_id": resource_id} if resource_id else None)
        self.resource_id = resource_id


class UnauthorizedError(JournalServiceError):
    """The entry exists but belongs to a different user."""

    code = ErrorCode.UNAUTHORIZED
    status_code = 403

    def __init__(self, message: str = "Entry does not belong to user", resource_id: Optional[str] = None):
        super().__init__(message, {"resource_id": resource_id} if resource_id else None)
        self.resource_id = resource_id


class BackendUnavailableError(JournalServiceError):
    """The database, remote API or inference service did not complete the call."""

    code = ErrorCode.BACKEND_UNAVAILABLE
    status_code = 500

    def __init__(self, message: str = "Backend unavailable", operation: Optional[str] = None):
        super().__init__(message, {"operation": operation} if operation else None)
        self.operation = operation


# =============================================================================
# RESPONSE HELPERS
# =============================================================================

class ErrorBody(BaseModel):
    """Wire shape of an error response."""
    error: str
    code: str
    correlation_id: Optional[str] = None


def get_correlation_id(request: Optional[Request] = None) -> Optional[str]:
    """
    Extract correlation ID from request state.

    Args:
        request: FastAPI request object (optional)

    Returns:
        Correlation ID string or None if not available
    """
    if request is None:
        return None
    return getattr(request.state, "correlation_id", None)


def error_response(
    code: ErrorCode,
    message: str,
    status_code: int,
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """
    Create a standardized JSON error response.

    Args:
        code: Error code from ErrorCode enum
        message: Human-readable, client-safe error message
        status_code: HTTP status code
        correlation_id: Request correlation ID for tracing

    Returns:
        JSONResponse with the standard error body
    """
    body = ErrorBody(error=message, code=code.value, correlation_id=correlation_id)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


def validation_error(message: str, correlation_id: Optional[str] = None) -> JSONResponse:
    """Create a 400 validation error response."""
    return error_response(
        code=ErrorCode.VALIDATION_ERROR,
        message=message,
        status_code=400,
        correlation_id=correlation_id,
    )


def unauthorized_error(message: str = "Unauthorized", correlation_id: Optional[str] = None) -> JSONResponse:
    """Create a 401 unauthorized error response."""
    return error_response(
        code=ErrorCode.UNAUTHORIZED,
        message=message,
        status_code=401,
        correlation_id=correlation_id,
    )


def internal_error(message: str = "Internal server error", correlation_id: Optional[str] = None) -> JSONResponse:
    """
    Create a 500 internal error response.

    Note: Be careful not to expose backend error text to clients.
    """
    return error_response(
        code=ErrorCode.INTERNAL_ERROR,
        message=message,
        status_code=500,
        correlation_id=correlation_id,
    )


def backend_error(message: str, correlation_id: Optional[str] = None) -> JSONResponse:
    """Create a 500 response for database, remote API or LLM failures."""
    return error_response(
        code=ErrorCode.BACKEND_UNAVAILABLE,
        message=message,
        status_code=500,
        correlation_id=correlation_id,
    )


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

def register_exception_handlers(app: FastAPI) -> None:
    """
    Install handlers translating errors into standard JSON responses.

    - JournalServiceError subclasses map to their own status and message.
    - Request parsing failures (bad JSON, wrong field types) become 400s.
    - Anything else is logged with its traceback and returned as a bare 500.
    """

    @app.exception_handler(JournalServiceError)
    async def handle_journal_error(request: Request, exc: JournalServiceError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed: %s",
                request.method,
                request.url.path,
                exc.message,
                extra={"details": sanitize_for_logging(exc.details)},
            )
        if exc.code == ErrorCode.BACKEND_UNAVAILABLE:
            return backend_error(exc.message, correlation_id=get_correlation_id(request))
        return error_response(
            code=exc.code,
            message=exc.message,
            status_code=exc.status_code,
            correlation_id=get_correlation_id(request),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = [".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()]
        logger.info("Rejected malformed request to %s: %s", request.url.path, fields)
        return validation_error("Invalid request body", correlation_id=get_correlation_id(request))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return internal_error(correlation_id=get_correlation_id(request))

