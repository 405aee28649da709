"""
Pulse Agent API Routes

Entry access for trusted automation agents. Every call names its agent in
``agentId``; only the configured ``PULSE_AGENT_ID`` is accepted. Field
validation runs first, then the agent check, then the backend call.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from journal_service.api.dependencies import get_analyzer, get_repository, get_settings
from journal_service.api.models import (
    PulseCreateRequest,
    PulseCreateResponse,
    PulseEntriesResponse,
    PulseUpdateRequest,
    PulseUpdateResponse,
    is_blank,
)
from journal_service.core.config import Config
from journal_service.core.logging_utils import sanitize_for_logging
from journal_service.features.database import EntryRepository
from journal_service.features.insights.sentiment import try_analyze_sentiment
from journal_service.services.llm import ClaudeJournalAnalyzer
from journal_service.shared.errors import (
    BackendUnavailableError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    get_correlation_id,
    unauthorized_error,
)

router = APIRouter(prefix="/pulse", tags=["Pulse Agent"])
logger = logging.getLogger("Journal.API.Pulse")


def _agent_rejected(request: Request, agent_id: Optional[str], config: Config) -> Optional[JSONResponse]:
    if agent_id != config.PULSE_AGENT_ID:
        logger.warning("Rejected request from unknown agent %s", sanitize_for_logging(agent_id, max_len=40))
        return unauthorized_error("Unauthorized agent", correlation_id=get_correlation_id(request))
    return None


@router.post("", status_code=201, response_model=PulseCreateResponse)
def create_entry_for_agent(
    payload: PulseCreateRequest,
    request: Request,
    repository: EntryRepository = Depends(get_repository),
    analyzer: ClaudeJournalAnalyzer = Depends(get_analyzer),
    config: Config = Depends(get_settings),
):
    """Create an entry and return its sentiment in the same response."""
    if is_blank(payload.user_id) or is_blank(payload.entry_text):
        raise ValidationError("Missing userId or entryText")

    rejected = _agent_rejected(request, payload.agent_id, config)
    if rejected is not None:
        return rejected

    try:
        entry_id = repository.create_entry(payload.user_id, payload.entry_text)
    except BackendUnavailableError as exc:
        raise BackendUnavailableError("Failed to process request", operation=exc.operation) from exc

    sentiment = try_analyze_sentiment(analyzer, payload.entry_text)
    if sentiment is not None and entry_id:
        try:
            repository.update_sentiment(entry_id, payload.user_id, sentiment.summary)
        except BackendUnavailableError as exc:
            logger.warning("Could not store sentiment for entry %s: %s", entry_id, exc.message)

    return PulseCreateResponse(
        message="Journal entry added successfully",
        entry_id=entry_id,
        sentiment=sentiment,
    )


@router.get("", response_model=PulseEntriesResponse, response_model_exclude_none=True)
def list_entries_for_agent(
    request: Request,
    user_id: Optional[str] = Query(default=None, alias="userId"),
    agent_id: Optional[str] = Query(default=None, alias="agentId"),
    limit: Optional[str] = Query(default=None),
    repository: EntryRepository = Depends(get_repository),
    config: Config = Depends(get_settings),
):
    """List a user's entries, newest first, optionally truncated to ``limit``."""
    if is_blank(user_id):
        raise ValidationError("Missing userId query parameter")

    max_entries: Optional[int] = None
    if limit is not None:
        try:
            max_entries = int(limit)
        except ValueError as exc:
            raise ValidationError("limit must be a non-negative integer") from exc
        if max_entries < 0:
            raise ValidationError("limit must be a non-negative integer")

    rejected = _agent_rejected(request, agent_id, config)
    if rejected is not None:
        return rejected

    try:
        entries = repository.get_entries(user_id)
    except BackendUnavailableError as exc:
        raise BackendUnavailableError("Failed to fetch entries", operation=exc.operation) from exc

    limited = entries if max_entries is None else entries[:max_entries]
    return PulseEntriesResponse(entries=limited, total=len(entries))


@router.put("", response_model=PulseUpdateResponse)
def update_entry_for_agent(
    payload: PulseUpdateRequest,
    request: Request,
    repository: EntryRepository = Depends(get_repository),
    config: Config = Depends(get_settings),
):
    """Attach an agent-produced sentiment summary to an entry."""
    if is_blank(payload.user_id) or is_blank(payload.entry_id) or is_blank(payload.sentiment_summary):
        raise ValidationError("Missing userId, entryId or sentimentSummary")

    rejected = _agent_rejected(request, payload.agent_id, config)
    if rejected is not None:
        return rejected

    try:
        repository.update_sentiment(payload.entry_id, payload.user_id, payload.sentiment_summary)
    except (NotFoundError, UnauthorizedError) as exc:
        raise NotFoundError("Entry not found") from exc
    except BackendUnavailableError as exc:
        raise BackendUnavailableError("Failed to update entry", operation=exc.operation) from exc

    return PulseUpdateResponse(message="Entry updated successfully", entry_id=payload.entry_id)
