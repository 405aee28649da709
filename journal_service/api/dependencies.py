from functools import lru_cache

from journal_service.core.config import Config, settings
from journal_service.features.database import EntryRepository, get_entry_repository
from journal_service.services.llm import ClaudeJournalAnalyzer


@lru_cache(maxsize=1)
def get_analyzer() -> ClaudeJournalAnalyzer:
    """Provide a singleton Claude analyzer for request handlers."""
    return ClaudeJournalAnalyzer()


def get_repository() -> EntryRepository:
    """Provide the configured entry repository for request handlers."""
    return get_entry_repository()


def get_settings() -> Config:
    """Provide the process-wide settings; overridden in tests."""
    return settings
