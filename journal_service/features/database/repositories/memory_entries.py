"""
In-memory entry repository.

Keeps Supabase-shaped rows in process memory. Used for local development and
by the test-suite; contents are lost on restart.
"""

import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from journal_service.features.database.repositories.base import (
    EntryRepository,
    ensure_owner,
    make_title,
)
from journal_service.features.entries.models import RawEntryRecord, SupabaseRow

logger = logging.getLogger("Journal.Database.Memory")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryEntryRepository(EntryRepository):
    """Thread-safe dict-backed repository."""

    backend_name = "memory"

    def __init__(self, clock: Callable[[], datetime] = _utcnow, **kwargs):
        super().__init__(**kwargs)
        self._clock = clock
        self._rows: Dict[str, Dict] = {}
        self._lock = threading.Lock()
        self._last_created: Optional[datetime] = None

    def _next_created_at(self) -> datetime:
        # Creation times are strictly increasing so newest-first is exact
        now = self._clock()
        if self._last_created is not None and now <= self._last_created:
            now = self._last_created + timedelta(microseconds=1)
        self._last_created = now
        return now

    def create_entry(self, user_id: str, text: str) -> Optional[str]:
        with self._lock:
            entry_id = str(uuid.uuid4())
            created_at = self._next_created_at().isoformat()
            self._rows[entry_id] = {
                "id": entry_id,
                "user_id": user_id,
                "title": make_title(text),
                "content": text,
                "sentiment_summary": None,
                "created_at": created_at,
                "updated_at": created_at,
            }
        logger.info("Entry created: %s", entry_id)
        return entry_id

    def insert_row(self, row: Dict) -> None:
        """Store a prepared row as-is (seeding and fixtures)."""
        with self._lock:
            self._rows[str(row["id"])] = dict(row)

    def fetch_records(self, user_id: str) -> List[RawEntryRecord]:
        with self._lock:
            rows = [dict(row) for row in self._rows.values() if row.get("user_id") == user_id]
        return [SupabaseRow.from_row(row) for row in rows]

    def _owned_row(self, entry_id: str, user_id: str) -> Dict:
        row = self._rows.get(entry_id)
        if row is None:
            raise self._not_found(entry_id)
        ensure_owner(entry_id, row.get("user_id"), user_id)
        return row

    def delete_entry(self, entry_id: str, user_id: str) -> None:
        with self._lock:
            self._owned_row(entry_id, user_id)
            del self._rows[entry_id]
        logger.info("Entry deleted: %s", entry_id)

    def update_sentiment(self, entry_id: str, user_id: str, summary: str) -> None:
        with self._lock:
            row = self._owned_row(entry_id, user_id)
            row["sentiment_summary"] = summary
            row["updated_at"] = self._clock().isoformat()
        logger.info("Sentiment stored for entry %s", entry_id)
