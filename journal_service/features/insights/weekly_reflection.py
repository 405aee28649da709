"""Weekly reflection over a user's most recent entries."""

import logging

from journal_service.features.database.repositories.base import EntryRepository
from journal_service.features.insights.models import WeeklyReflection
from journal_service.shared.errors import ValidationError

logger = logging.getLogger("Journal.Insights.WeeklyReflection")

NO_ENTRIES_MESSAGE = "No journal entries found. Write some entries first!"
ENTRY_SEPARATOR = "\n\n"


def build_weekly_reflection(
    repository: EntryRepository,
    analyzer,
    user_id: str,
    window: int = 7,
) -> WeeklyReflection:
    """
    Reflect on the ``window`` newest entries of a user.

    Raises:
        ValidationError: the user has no entries
        BackendUnavailableError: loading entries or the LLM call failed
    """
    entries = repository.get_entries(user_id)
    recent = entries[:max(window, 1)]

    logger.info("Found %d total entries, using last %d for reflection", len(entries), len(recent))

    if not recent:
        raise ValidationError(NO_ENTRIES_MESSAGE)

    journal_entries = ENTRY_SEPARATOR.join(entry.text for entry in recent)
    return analyzer.analyze_weekly_reflection(journal_entries)
