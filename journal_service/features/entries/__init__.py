"""
Entries feature module.

- Canonical ``JournalEntry`` model and the raw backend record variants
- Normalization of raw records (timestamps, field names)
- Sentiment classification and search/filter over canonical entries
"""

from journal_service.features.entries.classifier import classify_sentiment
from journal_service.features.entries.filtering import (
    ALL_SENTIMENTS,
    filter_entries,
    parse_sentiment_filter,
)
from journal_service.features.entries.models import (
    INVALID_DATE,
    FirestoreAdminRecord,
    FirestoreClientRecord,
    JournalEntry,
    RawEntryRecord,
    SentimentCategory,
    SupabaseRow,
)
from journal_service.features.entries.normalizer import (
    display_timezone,
    normalize,
    normalize_all,
    sort_newest_first,
)

__all__ = [
    "ALL_SENTIMENTS",
    "INVALID_DATE",
    "FirestoreAdminRecord",
    "FirestoreClientRecord",
    "JournalEntry",
    "RawEntryRecord",
    "SentimentCategory",
    "SupabaseRow",
    "classify_sentiment",
    "display_timezone",
    "filter_entries",
    "normalize",
    "normalize_all",
    "parse_sentiment_filter",
    "sort_newest_first",
]
