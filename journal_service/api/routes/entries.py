"""
Journal Entries API Routes

Create, list (with optional search and mood filter), delete and annotate the
entries of one user. Handlers are plain functions: FastAPI runs them in its
worker pool, so blocking backend SDK calls never stall the event loop.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request

from journal_service.api.dependencies import get_analyzer, get_repository, get_settings
from journal_service.api.models import (
    CreateEntryRequest,
    CreateEntryResponse,
    MessageResponse,
    UpdateSentimentRequest,
    is_blank,
)
from journal_service.core.config import Config
from journal_service.features.database import EntryRepository
from journal_service.features.entries import JournalEntry, filter_entries, parse_sentiment_filter
from journal_service.features.insights.sentiment import enrich_entry_sentiment
from journal_service.services.llm import ClaudeJournalAnalyzer
from journal_service.shared.errors import (
    BackendUnavailableError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    get_correlation_id,
)

router = APIRouter(tags=["Entries"])
logger = logging.getLogger("Journal.API.Entries")

ENTRY_NOT_FOUND = "Entry not found"


@router.post("/entries", status_code=201, response_model=CreateEntryResponse)
def create_entry(
    payload: CreateEntryRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    repository: EntryRepository = Depends(get_repository),
    analyzer: ClaudeJournalAnalyzer = Depends(get_analyzer),
    config: Config = Depends(get_settings),
) -> CreateEntryResponse:
    """
    Save a new entry for a user.

    The sentiment summary is filled in by a background task after the
    response; the entry is saved whether or not that succeeds.
    """
    if is_blank(payload.user_id) or is_blank(payload.entry_text):
        raise ValidationError("Missing userId or entryText")

    try:
        entry_id = repository.create_entry(payload.user_id, payload.entry_text)
    except BackendUnavailableError as exc:
        raise BackendUnavailableError("Failed to add journal entry", operation=exc.operation) from exc

    if entry_id and config.AUTO_SENTIMENT:
        background_tasks.add_task(
            enrich_entry_sentiment,
            repository,
            analyzer,
            entry_id,
            payload.user_id,
            payload.entry_text,
            get_correlation_id(request),
        )

    return CreateEntryResponse(message="Journal entry added successfully", entry_id=entry_id)


@router.get("/entries", response_model=List[JournalEntry], response_model_exclude_none=True)
def list_entries(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    search: Optional[str] = Query(default=None, alias="q"),
    sentiment: Optional[str] = Query(default=None),
    repository: EntryRepository = Depends(get_repository),
) -> List[JournalEntry]:
    """List a user's entries newest first, optionally searched and filtered by mood."""
    if is_blank(user_id):
        raise ValidationError("Missing userId query parameter")

    try:
        category = parse_sentiment_filter(sentiment)
    except ValueError as exc:
        raise ValidationError("sentiment must be one of: all, positive, neutral, negative") from exc

    try:
        entries = repository.get_entries(user_id)
    except BackendUnavailableError as exc:
        raise BackendUnavailableError("Failed to fetch journal entries", operation=exc.operation) from exc

    if search or category is not None:
        filtered = filter_entries(entries, search, category)
        logger.info("Filter kept %d of %d entries", len(filtered), len(entries))
        return filtered
    return entries


@router.delete("/entries", response_model=MessageResponse)
def delete_entry(
    entry_id: Optional[str] = Query(default=None, alias="id"),
    user_id: Optional[str] = Query(default=None, alias="userId"),
    repository: EntryRepository = Depends(get_repository),
) -> MessageResponse:
    """
    Delete one of the user's entries.

    Missing entries and entries owned by someone else get the same 404, so a
    caller cannot tell whether another user's entry exists.
    """
    if is_blank(user_id) or is_blank(entry_id):
        raise ValidationError("Missing userId or entryId")

    try:
        repository.delete_entry(entry_id, user_id)
    except (NotFoundError, UnauthorizedError) as exc:
        raise NotFoundError(ENTRY_NOT_FOUND) from exc
    except BackendUnavailableError as exc:
        raise BackendUnavailableError("Error deleting entry", operation=exc.operation) from exc

    return MessageResponse(message="Entry deleted successfully")


@router.put("/entries/sentiment", response_model=MessageResponse)
def update_entry_sentiment(
    payload: UpdateSentimentRequest,
    repository: EntryRepository = Depends(get_repository),
) -> MessageResponse:
    """Store a sentiment summary on one of the user's entries."""
    if is_blank(payload.user_id) or is_blank(payload.entry_id) or is_blank(payload.sentiment_summary):
        raise ValidationError("Missing userId, entryId, or sentimentSummary")

    try:
        repository.update_sentiment(payload.entry_id, payload.user_id, payload.sentiment_summary)
    except (NotFoundError, UnauthorizedError) as exc:
        raise NotFoundError(ENTRY_NOT_FOUND) from exc
    except BackendUnavailableError as exc:
        raise BackendUnavailableError("Failed to update sentiment", operation=exc.operation) from exc

    return MessageResponse(message="Sentiment updated successfully")
