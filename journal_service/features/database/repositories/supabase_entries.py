"""
Supabase Entries Repository - journal_entries table operations.

Rows look like ``{id, user_id, title, content, sentiment_summary,
created_at, updated_at}``. Ownership is checked with a read of the row before
any delete or update, and the write itself is also scoped to ``user_id``.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from postgrest.exceptions import APIError

from journal_service.features.database.repositories.base import (
    EntryRepository,
    ensure_owner,
    make_title,
)
from journal_service.features.entries.models import RawEntryRecord, SupabaseRow
from journal_service.shared.errors import BackendUnavailableError

logger = logging.getLogger("Journal.Database.Supabase")

# Postgres "invalid_text_representation", raised for ids that are not UUIDs
_INVALID_ID_CODE = "22P02"


class SupabaseEntryRepository(EntryRepository):
    """Repository over a Supabase table."""

    backend_name = "supabase"

    def __init__(self, client, table: str = "journal_entries", **kwargs):
        """Initialize with Supabase client."""
        super().__init__(**kwargs)
        self.client = client
        self.table = table

    def create_entry(self, user_id: str, text: str) -> Optional[str]:
        payload = {
            "user_id": user_id,
            "content": text,
            "title": make_title(text),
        }
        try:
            result = self.client.table(self.table).insert(payload).execute()
        except Exception as e:
            logger.error(f"Error creating journal entry: {e}")
            raise BackendUnavailableError("Failed to add journal entry", operation="insert") from e

        if not result.data:
            logger.error("Insert returned no row")
            raise BackendUnavailableError("Failed to add journal entry", operation="insert")

        entry_id = str(result.data[0]["id"])
        logger.info(f"Journal entry created: {entry_id}")
        return entry_id

    def fetch_records(self, user_id: str) -> List[RawEntryRecord]:
        try:
            result = self.client.table(self.table).select("*").eq(
                "user_id", user_id
            ).order("created_at", desc=True).execute()
        except Exception as e:
            logger.error(f"Error fetching journal entries: {e}")
            raise BackendUnavailableError("Failed to fetch journal entries", operation="select") from e

        return [SupabaseRow.from_row(row) for row in (result.data or [])]

    def _owned_row(self, entry_id: str, user_id: str) -> Dict:
        try:
            result = self.client.table(self.table).select("id, user_id").eq(
                "id", entry_id
            ).limit(1).execute()
        except APIError as e:
            if getattr(e, "code", None) == _INVALID_ID_CODE:
                raise self._not_found(entry_id) from e
            logger.error(f"Error loading journal entry {entry_id}: {e}")
            raise BackendUnavailableError("Failed to load journal entry", operation="select") from e
        except Exception as e:
            logger.error(f"Error loading journal entry {entry_id}: {e}")
            raise BackendUnavailableError("Failed to load journal entry", operation="select") from e

        if not result.data:
            raise self._not_found(entry_id)

        row = result.data[0]
        ensure_owner(entry_id, row.get("user_id"), user_id)
        return row

    def delete_entry(self, entry_id: str, user_id: str) -> None:
        self._owned_row(entry_id, user_id)
        try:
            self.client.table(self.table).delete().eq("id", entry_id).eq("user_id", user_id).execute()
        except Exception as e:
            logger.error(f"Error deleting journal entry {entry_id}: {e}")
            raise BackendUnavailableError("Failed to delete journal entry", operation="delete") from e
        logger.info(f"Journal entry deleted: {entry_id}")

    def update_sentiment(self, entry_id: str, user_id: str, summary: str) -> None:
        self._owned_row(entry_id, user_id)
        updates = {
            "sentiment_summary": summary,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            self.client.table(self.table).update(updates).eq("id", entry_id).eq("user_id", user_id).execute()
        except Exception as e:
            logger.error(f"Error updating journal entry {entry_id}: {e}")
            raise BackendUnavailableError("Failed to update journal entry", operation="update") from e
        logger.info(f"Updated sentiment for journal entry {entry_id}")
