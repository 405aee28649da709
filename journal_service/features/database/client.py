"""
Entry repository factory.

The backend is chosen here, from ``JOURNAL_BACKEND``, and nowhere else: call
sites only ever see the ``EntryRepository`` interface.
"""

import logging
from functools import lru_cache

from journal_service.core.config import VALID_BACKENDS, Config, settings
from journal_service.features.database.repositories.base import EntryRepository
from journal_service.features.database.repositories.memory_entries import InMemoryEntryRepository
from journal_service.features.entries.normalizer import display_timezone

logger = logging.getLogger("Journal.Database")


def build_entry_repository(config: Config = settings) -> EntryRepository:
    """Build the repository for the configured backend."""
    backend = config.JOURNAL_BACKEND
    common = {
        "display_tz": display_timezone(config.DISPLAY_TIMEZONE),
        "timestamp_format": config.TIMESTAMP_FORMAT,
    }

    if backend == "memory":
        repository: EntryRepository = InMemoryEntryRepository(**common)

    elif backend == "supabase":
        from journal_service.core.database import get_supabase_client
        from journal_service.features.database.repositories.supabase_entries import SupabaseEntryRepository

        repository = SupabaseEntryRepository(
            get_supabase_client(config),
            table=config.SUPABASE_ENTRIES_TABLE,
            **common,
        )

    elif backend == "firestore":
        from journal_service.core.database import get_firestore_client
        from journal_service.features.database.repositories.firestore_entries import FirestoreEntryRepository

        repository = FirestoreEntryRepository(
            get_firestore_client(config),
            collection=config.FIRESTORE_COLLECTION,
            timeout=config.BACKEND_TIMEOUT_SECONDS,
            **common,
        )

    elif backend == "rest":
        from journal_service.features.database.repositories.rest_entries import RestEntryRepository
        from journal_service.services.http_client import http_client_manager

        if not config.ENTRIES_API_URL:
            raise RuntimeError("ENTRIES_API_URL must be set for the rest backend")
        http_client_manager.configure(config.BACKEND_TIMEOUT_SECONDS)
        repository = RestEntryRepository(
            config.ENTRIES_API_URL,
            http_client_manager.get_client(),
            timeout=config.BACKEND_TIMEOUT_SECONDS,
            **common,
        )

    else:
        raise ValueError(f"Unknown JOURNAL_BACKEND {backend!r}; expected one of {', '.join(VALID_BACKENDS)}")

    logger.info("Entry repository initialized with backend: %s", backend)
    return repository


@lru_cache(maxsize=1)
def get_entry_repository() -> EntryRepository:
    """Get the singleton repository for the process-wide settings."""
    return build_entry_repository(settings)
