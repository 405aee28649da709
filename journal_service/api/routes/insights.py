"""
Insight API Routes

- ``POST /sentiment``: sentiment of a piece of journal text
- ``POST /weekly-reflection``: digest and writing prompt over the newest entries
"""

import logging

from fastapi import APIRouter, Depends

from journal_service.api.dependencies import get_analyzer, get_repository, get_settings
from journal_service.api.models import (
    SentimentRequest,
    SentimentResponse,
    WeeklyReflectionRequest,
    WeeklyReflectionResponse,
    is_blank,
)
from journal_service.core.config import Config
from journal_service.features.database import EntryRepository
from journal_service.features.insights.weekly_reflection import build_weekly_reflection
from journal_service.services.llm import ClaudeJournalAnalyzer
from journal_service.shared.errors import BackendUnavailableError, ValidationError

router = APIRouter(tags=["Insights"])
logger = logging.getLogger("Journal.API.Insights")


@router.post("/sentiment", response_model=SentimentResponse)
def analyze_sentiment(
    payload: SentimentRequest,
    analyzer: ClaudeJournalAnalyzer = Depends(get_analyzer),
) -> SentimentResponse:
    """Analyze the sentiment of one journal entry's text."""
    if not isinstance(payload.entry_text, str) or not payload.entry_text.strip():
        raise ValidationError("Invalid or missing entryText")

    try:
        result = analyzer.analyze_sentiment(payload.entry_text)
    except BackendUnavailableError as exc:
        raise BackendUnavailableError("Error analyzing sentiment", operation=exc.operation) from exc

    return SentimentResponse(sentiment=result)


@router.post("/weekly-reflection", response_model=WeeklyReflectionResponse)
def generate_weekly_reflection(
    payload: WeeklyReflectionRequest,
    repository: EntryRepository = Depends(get_repository),
    analyzer: ClaudeJournalAnalyzer = Depends(get_analyzer),
    config: Config = Depends(get_settings),
) -> WeeklyReflectionResponse:
    """Summarize the user's most recent entries and suggest a writing prompt."""
    if is_blank(payload.user_id):
        raise ValidationError("Missing userId")

    try:
        reflection = build_weekly_reflection(
            repository,
            analyzer,
            payload.user_id,
            window=config.WEEKLY_REFLECTION_WINDOW,
        )
    except BackendUnavailableError as exc:
        raise BackendUnavailableError("Error generating weekly reflection", operation=exc.operation) from exc

    return WeeklyReflectionResponse(reflection=reflection)
