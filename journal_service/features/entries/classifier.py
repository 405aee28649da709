"""Keyword heuristic mapping a free-text sentiment summary to a mood bucket."""

from typing import Optional

from journal_service.features.entries.models import SentimentCategory

POSITIVE_KEYWORDS = ("positive", "happy", "joy")
NEGATIVE_KEYWORDS = ("negative", "sad", "angry")


def classify_sentiment(summary: Optional[str]) -> SentimentCategory:
    """
    Classify a sentiment summary as positive, negative or neutral.

    Positive keywords win over negative ones; anything else, including an
    absent summary, is neutral.
    """
    if not summary:
        return SentimentCategory.NEUTRAL

    lowered = summary.lower()
    if any(keyword in lowered for keyword in POSITIVE_KEYWORDS):
        return SentimentCategory.POSITIVE
    if any(keyword in lowered for keyword in NEGATIVE_KEYWORDS):
        return SentimentCategory.NEGATIVE
    return SentimentCategory.NEUTRAL
