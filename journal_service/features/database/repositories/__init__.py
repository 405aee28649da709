"""Entry repositories - one adapter per backend.

Backend adapters are imported from their modules directly so that only the
selected backend's SDK is loaded.
"""

from journal_service.features.database.repositories.base import EntryRepository
from journal_service.features.database.repositories.memory_entries import InMemoryEntryRepository

__all__ = [
    "EntryRepository",
    "InMemoryEntryRepository",
]
