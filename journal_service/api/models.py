"""
Request and response models for the HTTP API.

Request fields are optional on purpose: handlers check presence themselves so
that a missing field yields a 400 with a field-specific message instead of a
generic schema error.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from journal_service.features.entries.models import JournalEntry
from journal_service.features.insights.models import SentimentAnalysis, WeeklyReflection


def is_blank(value: Optional[str]) -> bool:
    """True for a missing, empty or whitespace-only field."""
    return not value or not value.strip()


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# =========================================================================
# ENTRY MODELS
# =========================================================================

class CreateEntryRequest(_CamelModel):
    user_id: Optional[str] = Field(default=None, alias="userId")
    entry_text: Optional[str] = Field(default=None, alias="entryText")


class CreateEntryResponse(_CamelModel):
    message: str
    entry_id: Optional[str] = Field(default=None, alias="entryId")


class UpdateSentimentRequest(_CamelModel):
    user_id: Optional[str] = Field(default=None, alias="userId")
    entry_id: Optional[str] = Field(default=None, alias="entryId")
    sentiment_summary: Optional[str] = Field(default=None, alias="sentimentSummary")


class MessageResponse(BaseModel):
    message: str


# =========================================================================
# INSIGHT MODELS
# =========================================================================

class SentimentRequest(_CamelModel):
    # Typed loosely so a non-string value gets the same 400 as a missing one
    entry_text: Any = Field(default=None, alias="entryText")


class SentimentResponse(BaseModel):
    sentiment: SentimentAnalysis


class WeeklyReflectionRequest(_CamelModel):
    user_id: Optional[str] = Field(default=None, alias="userId")


class WeeklyReflectionResponse(BaseModel):
    reflection: WeeklyReflection


# =========================================================================
# AGENT (PULSE) MODELS
# =========================================================================

class PulseCreateRequest(_CamelModel):
    user_id: Optional[str] = Field(default=None, alias="userId")
    entry_text: Optional[str] = Field(default=None, alias="entryText")
    agent_id: Optional[str] = Field(default=None, alias="agentId")


class PulseCreateResponse(_CamelModel):
    message: str
    entry_id: Optional[str] = Field(default=None, alias="entryId")
    sentiment: Optional[SentimentAnalysis] = None


class PulseEntriesResponse(BaseModel):
    entries: List[JournalEntry]
    total: int


class PulseUpdateRequest(_CamelModel):
    user_id: Optional[str] = Field(default=None, alias="userId")
    entry_id: Optional[str] = Field(default=None, alias="entryId")
    sentiment_summary: Optional[str] = Field(default=None, alias="sentimentSummary")
    agent_id: Optional[str] = Field(default=None, alias="agentId")


class PulseUpdateResponse(_CamelModel):
    message: str
    entry_id: str = Field(alias="entryId")
