"""
Search & filter over canonical entries.

An entry is kept when it matches the search term (case-insensitive substring
of its text or sentiment summary; an empty term matches everything) AND its
classified mood equals the requested category (``"all"`` matches everything).
The input order is preserved.
"""

from typing import Iterable, List, Optional, Union

from journal_service.features.entries.classifier import classify_sentiment
from journal_service.features.entries.models import JournalEntry, SentimentCategory

ALL_SENTIMENTS = "all"

SentimentFilter = Union[SentimentCategory, str]


def parse_sentiment_filter(value: Optional[str]) -> Optional[SentimentCategory]:
    """
    Parse a sentiment filter value.

    Returns None for the wildcard (empty or ``"all"``).

    Raises:
        ValueError: for anything that is not a known category
    """
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in ("", ALL_SENTIMENTS):
        return None
    return SentimentCategory(normalized)


def matches_search(entry: JournalEntry, search_term: Optional[str]) -> bool:
    if not search_term:
        return True
    needle = search_term.lower()
    if needle in entry.text.lower():
        return True
    return entry.sentiment_summary is not None and needle in entry.sentiment_summary.lower()


def matches_sentiment(entry: JournalEntry, category: Optional[SentimentFilter]) -> bool:
    if category is None or category == ALL_SENTIMENTS:
        return True
    return classify_sentiment(entry.sentiment_summary) == SentimentCategory(category)


def filter_entries(
    entries: Iterable[JournalEntry],
    search_term: Optional[str] = "",
    sentiment_category: Optional[SentimentFilter] = ALL_SENTIMENTS,
) -> List[JournalEntry]:
    """Return the entries passing both the search and the mood predicate."""
    return [
        entry
        for entry in entries
        if matches_search(entry, search_term) and matches_sentiment(entry, sentiment_category)
    ]
