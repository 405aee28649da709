from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from journal_service.api.dependencies import get_analyzer, get_repository, get_settings
from journal_service.core.config import Config
from journal_service.features.database.repositories.memory_entries import InMemoryEntryRepository
from journal_service.features.insights.models import SentimentAnalysis, WeeklyReflection
from journal_service.shared.errors import BackendUnavailableError
from main import create_app


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: API tests through the FastAPI app")


class FakeAnalyzer:
    """Stands in for ClaudeJournalAnalyzer; records what it was asked."""

    def __init__(self):
        self.sentiment = SentimentAnalysis(
            sentiment="positive",
            score=0.8,
            summary="You seem happy and energized.",
        )
        self.reflection = WeeklyReflection(
            summary="A calm, steady week.",
            prompt="What made you feel most at ease?",
        )
        self.fail = False
        self.sentiment_calls: List[str] = []
        self.reflection_calls: List[str] = []

    def analyze_sentiment(self, entry_text: str) -> SentimentAnalysis:
        self.sentiment_calls.append(entry_text)
        if self.fail:
            raise BackendUnavailableError("Inference service failed", operation="sentiment")
        return self.sentiment

    def analyze_weekly_reflection(self, journal_entries: str) -> WeeklyReflection:
        self.reflection_calls.append(journal_entries)
        if self.fail:
            raise BackendUnavailableError("Inference service failed", operation="weekly-reflection")
        return self.reflection


class SteppingClock:
    """Deterministic clock advancing one minute per call."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 1, 1, 9, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


@pytest.fixture
def test_settings():
    config = Config()
    config.JOURNAL_BACKEND = "memory"
    config.AUTO_SENTIMENT = True
    config.WEEKLY_REFLECTION_WINDOW = 7
    config.PULSE_AGENT_ID = "pulse-agent"
    config.DISPLAY_TIMEZONE = "UTC"
    return config


@pytest.fixture
def repository():
    return InMemoryEntryRepository(clock=SteppingClock())


@pytest.fixture
def analyzer():
    return FakeAnalyzer()


@pytest.fixture
def app(repository, analyzer, test_settings):
    application = create_app()
    application.dependency_overrides[get_repository] = lambda: repository
    application.dependency_overrides[get_analyzer] = lambda: analyzer
    application.dependency_overrides[get_settings] = lambda: test_settings
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)
