"""
Correlation ID middleware and utilities for request tracing.

The correlation ID is:
- Read from X-Correlation-ID, X-Request-ID or X-Trace-ID if present
- Generated as a short UUID if not present
- Stored in request.state.correlation_id for handler access
- Echoed in the X-Correlation-ID response header
- Available to log records via get_correlation_id()

Background work scheduled by a request (sentiment enrichment) runs after the
response is sent, outside the middleware's context, so it re-establishes the
ID with CorrelationContext.
"""

import contextvars
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


_correlation_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id",
    default=None,
)

CORRELATION_HEADERS = [
    "X-Correlation-ID",
    "X-Request-ID",
    "X-Trace-ID",
]

RESPONSE_HEADER = "X-Correlation-ID"


def get_correlation_id() -> Optional[str]:
    """Return the correlation ID of the current context, if any."""
    return _correlation_id_ctx.get()


def generate_correlation_id() -> str:
    """Generate a new 8-character correlation ID."""
    return str(uuid.uuid4())[:8]


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Attach a correlation ID to every request and response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = None
        for header in CORRELATION_HEADERS:
            correlation_id = request.headers.get(header)
            if correlation_id:
                break

        if not correlation_id:
            correlation_id = generate_correlation_id()

        request.state.correlation_id = correlation_id
        token = _correlation_id_ctx.set(correlation_id)

        try:
            response = await call_next(request)
            response.headers[RESPONSE_HEADER] = correlation_id
            return response
        finally:
            _correlation_id_ctx.reset(token)


def propagate_correlation_headers(
    headers: Optional[dict] = None,
    correlation_id: Optional[str] = None,
) -> dict:
    """
    Build headers for an outgoing request carrying the current correlation ID.

    Args:
        headers: Existing headers to copy (not modified)
        correlation_id: Explicit ID; defaults to the current context's ID

    Returns:
        New headers dict with X-Correlation-ID added when an ID is known
    """
    headers = dict(headers) if headers else {}

    cid = correlation_id or get_correlation_id()
    if cid:
        headers[RESPONSE_HEADER] = cid

    return headers


class CorrelationContext:
    """
    Context manager for setting the correlation ID outside a request.

    Example:
        with CorrelationContext(request_correlation_id):
            enrich_entry_sentiment(...)
    """

    def __init__(self, correlation_id: Optional[str] = None):
        self.correlation_id = correlation_id or generate_correlation_id()
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> str:
        self._token = _correlation_id_ctx.set(self.correlation_id)
        return self.correlation_id

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _correlation_id_ctx.reset(self._token)
