"""
Sentiment enrichment of saved entries.

Entries are written first and enriched afterwards: the LLM call happens in a
follow-up step, and its failure leaves the entry saved with no summary.
"""

import logging
from typing import Optional

from journal_service.features.database.repositories.base import EntryRepository
from journal_service.features.insights.models import SentimentAnalysis
from journal_service.shared.correlation import CorrelationContext
from journal_service.shared.errors import JournalServiceError

logger = logging.getLogger("Journal.Insights.Sentiment")


def try_analyze_sentiment(analyzer, entry_text: str) -> Optional[SentimentAnalysis]:
    """Run sentiment analysis, returning None instead of raising on failure."""
    try:
        return analyzer.analyze_sentiment(entry_text)
    except JournalServiceError as exc:
        logger.warning("Sentiment analysis failed: %s", exc.message)
    except Exception:  # pylint: disable=broad-except
        logger.exception("Sentiment analysis failed unexpectedly")
    return None


def enrich_entry_sentiment(
    repository: EntryRepository,
    analyzer,
    entry_id: str,
    user_id: str,
    entry_text: str,
    correlation_id: Optional[str] = None,
) -> Optional[SentimentAnalysis]:
    """
    Analyze a saved entry and store the resulting summary on it.

    Runs as a background task after the create response has been sent, so
    every failure is logged here and never propagated.
    """
    with CorrelationContext(correlation_id):
        analysis = try_analyze_sentiment(analyzer, entry_text)
        if analysis is None:
            logger.info("Entry %s saved without a sentiment summary", entry_id)
            return None

        try:
            repository.update_sentiment(entry_id, user_id, analysis.summary)
        except JournalServiceError as exc:
            logger.warning("Could not store sentiment for entry %s: %s", entry_id, exc.message)
            return None

        logger.info(
            "Entry %s enriched",
            entry_id,
            extra={"sentiment": analysis.sentiment, "score": analysis.score},
        )
        return analysis
