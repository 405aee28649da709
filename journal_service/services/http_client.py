"""
Shared HTTP Client Manager with Connection Pooling.

Provides one pooled ``httpx.Client`` for outbound calls (the REST entries
backend). Route handlers run in FastAPI's worker threads, so the client is
the synchronous flavour; ``httpx.Client`` is safe to share across threads.

Usage:
    from journal_service.services.http_client import http_client_manager

    client = http_client_manager.get_client()
    response = client.get("https://entries.example.com/api/entries", params={...})

Lifecycle:
    # In main.py lifespan
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        http_client_manager.startup()
        yield
        http_client_manager.shutdown()
"""

import logging
import threading
from typing import Optional

import httpx

logger = logging.getLogger("Journal.HTTP.Client")


class HTTPClientManager:
    """
    Manages a shared ``httpx.Client`` with connection pooling.

    Configuration:
    - max_connections: Maximum total connections (default: 50)
    - max_keepalive_connections: Max idle connections to keep (default: 10)
    - default_timeout: Default request timeout in seconds (default: 10.0)
    """

    def __init__(
        self,
        max_connections: int = 50,
        max_keepalive_connections: int = 10,
        default_timeout: float = 10.0,
    ):
        self._max_connections = max_connections
        self._max_keepalive_connections = max_keepalive_connections
        self._default_timeout = default_timeout
        self._client: Optional[httpx.Client] = None
        self._lock = threading.Lock()

    @property
    def limits(self) -> httpx.Limits:
        """Get the connection limits configuration."""
        return httpx.Limits(
            max_connections=self._max_connections,
            max_keepalive_connections=self._max_keepalive_connections,
        )

    def configure(self, default_timeout: float) -> None:
        """Set the timeout used by the next client created."""
        self._default_timeout = default_timeout

    def startup(self) -> None:
        """Create the shared client. Safe to call more than once."""
        with self._lock:
            if self._client is not None:
                logger.warning("HTTP client manager already initialized")
                return
            self._client = httpx.Client(
                limits=self.limits,
                timeout=httpx.Timeout(self._default_timeout),
                follow_redirects=True,
            )
        logger.info(
            f"HTTP client manager initialized "
            f"(max_connections={self._max_connections}, "
            f"max_keepalive={self._max_keepalive_connections}, "
            f"timeout={self._default_timeout}s)"
        )

    def shutdown(self) -> None:
        """Close the shared client and release all connections."""
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None
                logger.info("HTTP client manager shut down")

    def get_client(self) -> httpx.Client:
        """Return the shared client, creating it lazily outside the app lifespan."""
        if self._client is None:
            self.startup()
        return self._client


http_client_manager = HTTPClientManager()
