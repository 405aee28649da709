"""
REST Entries Repository - remote Firestore Admin wrapper over HTTP.

Talks to a service exposing ``/api/entries`` (POST, GET, DELETE) and
``/api/entries/sentiment`` (PUT). The remote service owns the Firestore
connection and enforces ownership; its GET returns raw documents whose
timestamps are serialized as ``{_seconds, _nanoseconds}``.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from journal_service.features.database.repositories.base import EntryRepository
from journal_service.features.entries.models import FirestoreClientRecord, RawEntryRecord
from journal_service.shared.correlation import propagate_correlation_headers
from journal_service.shared.errors import BackendUnavailableError, UnauthorizedError

logger = logging.getLogger("Journal.Database.REST")

ENTRIES_PATH = "/api/entries"
SENTIMENT_PATH = "/api/entries/sentiment"


class RestEntryRepository(EntryRepository):
    """Repository delegating to a remote entries API."""

    backend_name = "rest"

    def __init__(self, base_url: str, client: httpx.Client, timeout: Optional[float] = None, **kwargs):
        super().__init__(**kwargs)
        self.base_url = base_url.rstrip("/")
        self.client = client
        self.timeout = timeout

    def _request(self, method: str, path: str, operation: str, **kwargs) -> httpx.Response:
        if self.timeout is not None:
            kwargs.setdefault("timeout", self.timeout)
        try:
            return self.client.request(
                method,
                f"{self.base_url}{path}",
                headers=propagate_correlation_headers(),
                **kwargs,
            )
        except httpx.HTTPError as e:
            logger.error("Entries API %s %s failed: %s", method, path, e)
            raise BackendUnavailableError("Entries API unavailable", operation=operation) from e

    def _raise_for_status(self, response: httpx.Response, operation: str, entry_id: Optional[str] = None) -> None:
        if response.is_success:
            return
        if entry_id is not None and response.status_code == 404:
            raise self._not_found(entry_id)
        if entry_id is not None and response.status_code == 403:
            raise UnauthorizedError(resource_id=entry_id)
        logger.error(
            "Entries API returned %s for %s",
            response.status_code,
            operation,
        )
        raise BackendUnavailableError("Entries API request failed", operation=operation)

    def create_entry(self, user_id: str, text: str) -> Optional[str]:
        response = self._request(
            "POST", ENTRIES_PATH, "insert",
            json={"userId": user_id, "entryText": text},
        )
        self._raise_for_status(response, "insert")

        try:
            body = response.json()
        except ValueError:
            body = {}
        entry_id = body.get("entryId") if isinstance(body, dict) else None
        logger.info("Remote entry created: %s", entry_id or "<id not reported>")
        return entry_id

    def fetch_records(self, user_id: str) -> List[RawEntryRecord]:
        response = self._request("GET", ENTRIES_PATH, "select", params={"userId": user_id})
        self._raise_for_status(response, "select")

        try:
            payload: Any = response.json()
        except ValueError as e:
            logger.error("Entries API returned invalid JSON: %s", e)
            raise BackendUnavailableError("Entries API returned invalid data", operation="select") from e

        if isinstance(payload, dict):
            payload = payload.get("entries", [])
        if not isinstance(payload, list):
            logger.error("Entries API returned %s instead of a list", type(payload).__name__)
            raise BackendUnavailableError("Entries API returned invalid data", operation="select")

        return [FirestoreClientRecord.from_json(item) for item in payload if isinstance(item, dict)]

    def delete_entry(self, entry_id: str, user_id: str) -> None:
        response = self._request(
            "DELETE", ENTRIES_PATH, "delete",
            params={"id": entry_id, "userId": user_id},
        )
        self._raise_for_status(response, "delete", entry_id=entry_id)
        logger.info("Remote entry deleted: %s", entry_id)

    def update_sentiment(self, entry_id: str, user_id: str, summary: str) -> None:
        payload: Dict[str, str] = {
            "userId": user_id,
            "entryId": entry_id,
            "sentimentSummary": summary,
        }
        response = self._request("PUT", SENTIMENT_PATH, "update", json=payload)
        self._raise_for_status(response, "update", entry_id=entry_id)
        logger.info("Remote sentiment stored for entry %s", entry_id)
