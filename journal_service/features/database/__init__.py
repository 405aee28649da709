"""
Database Feature Module - journal entry persistence.

One repository interface with an adapter per backend (in-memory, Supabase,
Firestore Admin, remote REST wrapper), selected by configuration.

Usage:
    from journal_service.features.database import get_entry_repository

    repository = get_entry_repository()
    entries = repository.get_entries(user_id)
"""

from journal_service.features.database.client import build_entry_repository, get_entry_repository
from journal_service.features.database.repositories.base import EntryRepository

__all__ = [
    "EntryRepository",
    "build_entry_repository",
    "get_entry_repository",
]
