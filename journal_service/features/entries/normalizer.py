"""
Entry Normalizer - raw backend records to canonical ``JournalEntry``.

Timestamp resolution is tried in order, first success wins:

1. A datetime, or an object that converts itself to one
   (``to_datetime()`` / ``ToDatetime()``).
2. A seconds component (``seconds`` or ``_seconds``, as key or attribute),
   read as ``seconds * 1000`` milliseconds since the epoch.
3. Generic parsing: ISO-8601 / RFC 2822 strings, epoch milliseconds numbers.
4. The sentinel ``"Invalid Date"``.

``normalize`` never raises for any of the record variants: one corrupt record
degrades to the sentinel instead of failing the whole batch.
"""

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from email.utils import parsedate_to_datetime
from numbers import Real
from typing import Any, Iterable, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from journal_service.features.entries.models import (
    INVALID_DATE,
    FirestoreAdminRecord,
    FirestoreClientRecord,
    JournalEntry,
    RawEntryRecord,
    SupabaseRow,
)

logger = logging.getLogger("Journal.Entries.Normalizer")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
DEFAULT_TIMESTAMP_FORMAT = "%m/%d/%Y, %I:%M:%S %p"

_CONVERSION_METHODS = ("to_datetime", "ToDatetime")
_SECONDS_KEYS = ("seconds", "_seconds")
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)
# fromisoformat before 3.11 accepts only 3 or 6 fractional digits
_ISO_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")


def display_timezone(name: Optional[str]) -> tzinfo:
    """Resolve a zone name, falling back to UTC for unknown names."""
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown display timezone %r, using UTC", name)
        return timezone.utc


# =============================================================================
# TIMESTAMP RESOLUTION
# =============================================================================

def _from_epoch_millis(millis: Any) -> Optional[datetime]:
    if isinstance(millis, bool) or not isinstance(millis, Real):
        return None
    try:
        return EPOCH + timedelta(milliseconds=float(millis))
    except (OverflowError, ValueError):
        return None


def _from_conversion(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value

    for method_name in _CONVERSION_METHODS:
        method = getattr(value, method_name, None)
        if not callable(method):
            continue
        try:
            converted = method()
        except Exception as exc:  # pylint: disable=broad-except
            logger.debug("Timestamp conversion via %s failed: %s", method_name, exc)
            return None
        return converted if isinstance(converted, datetime) else None

    return None


def _from_seconds(value: Any) -> Optional[datetime]:
    for key in _SECONDS_KEYS:
        if isinstance(value, dict):
            if key not in value:
                continue
            seconds = value[key]
        elif hasattr(value, key) and not isinstance(value, (str, bytes, Real)):
            seconds = getattr(value, key)
        else:
            continue

        if isinstance(seconds, bool) or not isinstance(seconds, Real):
            return None
        return _from_epoch_millis(seconds * 1000)

    return None


def _six_digit_fraction(text: str) -> str:
    return _ISO_FRACTION.sub(lambda m: f"{m.group(1)}.{(m.group(2) + '000000')[:6]}", text, count=1)


def _from_generic(value: Any) -> Optional[datetime]:
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(_six_digit_fraction(text.replace("Z", "+00:00")))
        except ValueError:
            pass
        try:
            return parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            return None

    return _from_epoch_millis(value)


def resolve_instant(value: Any, tz: tzinfo = timezone.utc) -> Optional[datetime]:
    """
    Resolve any supported raw timestamp encoding to an aware datetime.

    Naive datetimes are taken to be in ``tz``. Returns None when nothing
    parses.
    """
    if value is None:
        return None

    for resolver in (_from_conversion, _from_seconds, _from_generic):
        instant = resolver(value)
        if instant is not None:
            if instant.tzinfo is None:
                instant = instant.replace(tzinfo=tz)
            return instant

    return None


def format_timestamp(
    value: Any,
    tz: tzinfo = timezone.utc,
    fmt: str = DEFAULT_TIMESTAMP_FORMAT,
) -> str:
    """Format a raw timestamp for display, or return ``"Invalid Date"``."""
    instant = resolve_instant(value, tz)
    if instant is None:
        return INVALID_DATE
    try:
        return instant.astimezone(tz).strftime(fmt)
    except (OverflowError, ValueError):
        return INVALID_DATE


# =============================================================================
# RECORD NORMALIZATION
# =============================================================================

def _raw_timestamp(record: RawEntryRecord) -> Any:
    if isinstance(record, SupabaseRow):
        return record.created_at
    if isinstance(record, (FirestoreAdminRecord, FirestoreClientRecord)):
        return record.timestamp
    raise TypeError(f"Unsupported entry record type: {type(record).__name__}")


def _raw_text(record: RawEntryRecord) -> str:
    if isinstance(record, SupabaseRow):
        text = record.content
    elif isinstance(record, (FirestoreAdminRecord, FirestoreClientRecord)):
        text = record.entry_text
    else:
        raise TypeError(f"Unsupported entry record type: {type(record).__name__}")

    if isinstance(text, str):
        return text
    if isinstance(text, Real) and not isinstance(text, bool):
        return str(text)
    logger.debug("Entry %s has non-text content of type %s", record.id, type(text).__name__)
    return ""


def normalize(
    record: RawEntryRecord,
    tz: tzinfo = timezone.utc,
    fmt: str = DEFAULT_TIMESTAMP_FORMAT,
) -> JournalEntry:
    """Convert one raw backend record into the canonical entry."""
    timestamp = format_timestamp(_raw_timestamp(record), tz, fmt)
    if timestamp == INVALID_DATE:
        logger.debug("Entry %s has an unparseable timestamp", record.id)

    summary = record.sentiment_summary
    return JournalEntry(
        id=record.id,
        text=_raw_text(record),
        timestamp=timestamp,
        sentiment_summary=summary if isinstance(summary, str) else None,
    )


def sort_newest_first(records: Iterable[RawEntryRecord], tz: tzinfo = timezone.utc) -> List[RawEntryRecord]:
    """
    Order records by creation time, newest first.

    Records without a resolvable timestamp go last; ties keep their input order.
    """
    def sort_key(record: RawEntryRecord):
        instant = resolve_instant(_raw_timestamp(record), tz)
        return (instant is not None, instant or _OLDEST)

    return sorted(records, key=sort_key, reverse=True)


def normalize_all(
    records: Iterable[RawEntryRecord],
    tz: tzinfo = timezone.utc,
    fmt: str = DEFAULT_TIMESTAMP_FORMAT,
) -> List[JournalEntry]:
    """Sort newest first, then normalize every record."""
    return [normalize(record, tz, fmt) for record in sort_newest_first(records, tz)]
