"""
Journal entry models.

``JournalEntry`` is the canonical, client-facing shape. The three raw record
classes are what each backend actually hands back; they never leave the
repository layer except through ``normalize``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

INVALID_DATE = "Invalid Date"


class SentimentCategory(str, Enum):
    """Coarse mood bucket derived from a sentiment summary."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class JournalEntry(BaseModel):
    """Canonical journal entry as returned to clients."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    text: str
    timestamp: str
    sentiment_summary: Optional[str] = Field(default=None, alias="sentimentSummary")

    def to_wire(self) -> Dict[str, Any]:
        """Serialize with wire names, leaving out an absent summary."""
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# RAW BACKEND RECORDS
# =============================================================================

@dataclass(frozen=True)
class FirestoreAdminRecord:
    """
    Document read through the Firebase Admin SDK.

    ``timestamp`` is whatever the SDK returns for a server timestamp, normally
    a ``DatetimeWithNanoseconds``; pending writes can surface as ``None``.
    """
    id: str
    user_id: Optional[str]
    entry_text: str
    timestamp: Any
    sentiment_summary: Optional[str] = None

    @classmethod
    def from_document(cls, doc_id: str, data: Optional[Dict[str, Any]]) -> "FirestoreAdminRecord":
        data = data or {}
        return cls(
            id=doc_id,
            user_id=data.get("userId"),
            entry_text=data.get("entryText") or "",
            timestamp=data.get("timestamp"),
            sentiment_summary=data.get("sentimentSummary"),
        )


@dataclass(frozen=True)
class FirestoreClientRecord:
    """
    Firestore document serialized to JSON by a REST wrapper.

    Timestamps arrive as ``{"_seconds": ..., "_nanoseconds": ...}`` (admin
    JSON), ``{"seconds": ..., "nanoseconds": ...}`` (client JSON), an ISO
    string or an epoch number in milliseconds.
    """
    id: str
    user_id: Optional[str]
    entry_text: str
    timestamp: Any
    sentiment_summary: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "FirestoreClientRecord":
        return cls(
            id=str(payload.get("id", "")),
            user_id=payload.get("userId"),
            entry_text=payload.get("entryText") or payload.get("text") or "",
            timestamp=payload.get("timestamp"),
            sentiment_summary=payload.get("sentimentSummary"),
        )


@dataclass(frozen=True)
class SupabaseRow:
    """Row of the ``journal_entries`` table."""
    id: str
    user_id: Optional[str]
    content: str
    created_at: Any
    updated_at: Any = None
    title: Optional[str] = None
    sentiment_summary: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "SupabaseRow":
        return cls(
            id=str(row.get("id", "")),
            user_id=row.get("user_id"),
            content=row.get("content") or "",
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
            title=row.get("title"),
            sentiment_summary=row.get("sentiment_summary"),
        )


RawEntryRecord = Union[FirestoreAdminRecord, FirestoreClientRecord, SupabaseRow]
