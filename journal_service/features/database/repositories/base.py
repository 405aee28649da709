"""
Entry repository interface.

Every backend adapter implements the same four operations and returns or
consumes canonical entries only. Raw backend records stay inside the adapter
and go through the normalizer on the way out.
"""

import logging
from abc import ABC, abstractmethod
from datetime import timezone, tzinfo
from typing import List, Optional

from journal_service.features.entries.models import JournalEntry, RawEntryRecord
from journal_service.features.entries.normalizer import DEFAULT_TIMESTAMP_FORMAT, normalize_all
from journal_service.shared.errors import NotFoundError, UnauthorizedError

logger = logging.getLogger("Journal.Database")

TITLE_LENGTH = 50


def make_title(text: str) -> str:
    """First 50 characters of the text, with an ellipsis when truncated."""
    return text[:TITLE_LENGTH] + ("..." if len(text) > TITLE_LENGTH else "")


def ensure_owner(entry_id: str, owner_id: Optional[str], user_id: str) -> None:
    """
    Raise unless ``user_id`` owns the entry.

    Raises:
        UnauthorizedError: when the stored owner differs from ``user_id``
    """
    if owner_id != user_id:
        logger.warning("Ownership check failed for entry %s", entry_id)
        raise UnauthorizedError(resource_id=entry_id)


class EntryRepository(ABC):
    """Create, read, update and delete journal entries on one backend."""

    backend_name = "base"

    def __init__(
        self,
        display_tz: tzinfo = timezone.utc,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ):
        self.display_tz = display_tz
        self.timestamp_format = timestamp_format

    @abstractmethod
    def create_entry(self, user_id: str, text: str) -> Optional[str]:
        """
        Persist a new entry.

        Callers pass non-blank text; the repository does not re-validate it.

        Returns:
            The backend-assigned entry id, when the backend reports one

        Raises:
            BackendUnavailableError: the write did not complete
        """

    @abstractmethod
    def fetch_records(self, user_id: str) -> List[RawEntryRecord]:
        """
        Load every raw record owned by ``user_id``.

        Raises:
            BackendUnavailableError: the query did not complete
        """

    @abstractmethod
    def delete_entry(self, entry_id: str, user_id: str) -> None:
        """
        Delete an entry owned by ``user_id``.

        Raises:
            NotFoundError: no entry with that id
            UnauthorizedError: the entry belongs to another user
            BackendUnavailableError: the call did not complete
        """

    @abstractmethod
    def update_sentiment(self, entry_id: str, user_id: str, summary: str) -> None:
        """
        Store a sentiment summary on an entry owned by ``user_id``.

        Raises the same errors as ``delete_entry``.
        """

    def get_entries(self, user_id: str) -> List[JournalEntry]:
        """All of the user's entries, newest first. Never partial."""
        records = self.fetch_records(user_id)
        entries = normalize_all(records, self.display_tz, self.timestamp_format)
        logger.info(
            "Loaded %d entries",
            len(entries),
            extra={"backend": self.backend_name},
        )
        return entries

    def _not_found(self, entry_id: str) -> NotFoundError:
        logger.info("Entry %s not found", entry_id, extra={"backend": self.backend_name})
        return NotFoundError(resource_id=entry_id)
