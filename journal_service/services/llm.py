"""LLM-powered sentiment analysis and weekly reflections for journal entries."""

from __future__ import annotations

import json
import logging
import re
import threading
import time
from typing import Any, Dict, List, Optional, Type, TypeVar

from anthropic import Anthropic
from pydantic import BaseModel, ValidationError as PydanticValidationError

from journal_service.core.config import Config, settings
from journal_service.core.logging_utils import describe_text, log_llm_usage
from journal_service.features.insights.models import SentimentAnalysis, WeeklyReflection
from journal_service.shared.errors import BackendUnavailableError

logger = logging.getLogger("Journal.Intelligence.LLM")

ResultT = TypeVar("ResultT", bound=BaseModel)

VALID_SENTIMENTS = {"positive", "neutral", "negative"}


SENTIMENT_PROMPT = """You are an AI journaling assistant. Analyze the emotional tone of the journal entry below.

**JOURNAL ENTRY:**
{entry_text}

---

Return ONLY valid JSON (no markdown, no code blocks) with this exact structure:

{{
  "sentiment": "positive|neutral|negative",
  "score": 0.0,
  "summary": "One or two sentences describing the writer's emotional tone"
}}

Rules:
- "score" ranges from -1.0 (very negative) to 1.0 (very positive).
- The summary should name the dominant feeling in plain words (e.g. happy, anxious, sad, calm, angry, joyful).
- Write about the writer in the second person ("You seem...").
"""


WEEKLY_REFLECTION_PROMPT = """You are an AI journaling assistant. Analyze the following journal entries and provide a summary of the overall sentiment and themes, and then generate a writing prompt based on the mood reflected in the entries.

**JOURNAL ENTRIES (newest first):**
{journal_entries}

---

Return ONLY valid JSON (no markdown, no code blocks) with this exact structure:

{{
  "summary": "3-5 sentences on the overall sentiment and recurring themes",
  "prompt": "One open-ended writing prompt that fits the mood of these entries"
}}
"""


class ClaudeJournalAnalyzer:
    """Run journal prompts against Claude with model fallback."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Any = None,
        config: Config = settings,
    ) -> None:
        self._api_key = api_key or config.ANTHROPIC_API_KEY
        self._timeout = config.LLM_TIMEOUT_SECONDS
        self._client = client
        self._client_lock = threading.Lock()

        primary_model = model or config.CLAUDE_MODEL_PRIMARY
        fallback_models: List[str] = []
        for candidate in config.CLAUDE_MODEL_OPTIONS:
            if candidate and candidate not in fallback_models and candidate != primary_model:
                fallback_models.append(candidate)

        self.model_primary = primary_model
        self.model_candidates = [primary_model] + fallback_models

        logger.info(
            "Claude journal analyzer initialized with models: %s",
            ", ".join(self.model_candidates),
        )

    @property
    def client(self):
        with self._client_lock:
            if self._client is None:
                if not self._api_key:
                    logger.error("ANTHROPIC_API_KEY is not configured")
                    raise BackendUnavailableError("Inference service not configured", operation="llm")
                self._client = Anthropic(api_key=self._api_key, timeout=self._timeout)
            return self._client

    # =========================================================================
    # PUBLIC OPERATIONS
    # =========================================================================

    def analyze_sentiment(self, entry_text: str) -> SentimentAnalysis:
        """Return sentiment, score and summary for one entry."""
        logger.info("Analyzing sentiment for entry %s", describe_text(entry_text))
        prompt = SENTIMENT_PROMPT.format(entry_text=entry_text)
        result = self._run_structured_prompt(prompt, SentimentAnalysis, endpoint="sentiment", max_tokens=500)

        sentiment = result.sentiment.strip().lower()
        if sentiment not in VALID_SENTIMENTS:
            sentiment = "neutral"
        score = max(-1.0, min(1.0, result.score))
        return SentimentAnalysis(sentiment=sentiment, score=score, summary=result.summary.strip())

    def analyze_weekly_reflection(self, journal_entries: str) -> WeeklyReflection:
        """Summarize concatenated entries and propose a writing prompt."""
        logger.info("Generating weekly reflection over %s", describe_text(journal_entries))
        prompt = WEEKLY_REFLECTION_PROMPT.format(journal_entries=journal_entries)
        return self._run_structured_prompt(prompt, WeeklyReflection, endpoint="weekly-reflection", max_tokens=1000)

    # =========================================================================
    # MODEL INVOCATION
    # =========================================================================

    def _run_structured_prompt(
        self,
        prompt: str,
        result_type: Type[ResultT],
        endpoint: str,
        max_tokens: int,
    ) -> ResultT:
        """Try each model in turn until one returns JSON matching ``result_type``."""
        client = self.client
        last_error: Optional[Exception] = None

        for model_name in self.model_candidates:
            result_text = ""
            try:
                result_text = self._invoke_model(client, prompt, model_name, endpoint, max_tokens)
                data: Dict[str, Any] = json.loads(result_text)
                result = result_type.model_validate(data)
                logger.info("%s complete with model %s", endpoint, model_name)
                return result

            except json.JSONDecodeError as exc:
                logger.error(
                    "Model %s returned unparsable JSON: %s | length=%d",
                    model_name,
                    exc,
                    len(result_text),
                )
                last_error = exc
            except PydanticValidationError as exc:
                logger.error("Model %s returned JSON with the wrong shape: %s", model_name, exc)
                last_error = exc
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning("Model %s failed: %s", model_name, exc)
                last_error = exc

        logger.error("All Claude models failed for %s: %s", endpoint, last_error)
        raise BackendUnavailableError("Inference service failed", operation=endpoint) from last_error

    def _invoke_model(self, client, prompt: str, model_name: str, endpoint: str, max_tokens: int) -> str:
        """Send the prompt to Claude and return raw text output."""

        started = time.monotonic()
        response = client.messages.create(
            model=model_name,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        duration_ms = int((time.monotonic() - started) * 1000)

        usage = getattr(response, "usage", None)
        if usage is not None:
            log_llm_usage(
                model=model_name,
                input_tokens=getattr(usage, "input_tokens", 0) or 0,
                output_tokens=getattr(usage, "output_tokens", 0) or 0,
                duration_ms=duration_ms,
                endpoint=endpoint,
            )

        if not response.content:
            raise ValueError(f"Model {model_name} returned empty content")

        block = response.content[0]
        result_text = block.text if hasattr(block, "text") else str(block)
        result_text = result_text.strip()

        if result_text.startswith("```"):
            result_text = re.sub(r"^```(?:json)?\n?", "", result_text)
            result_text = re.sub(r"\n?```$", "", result_text)

        return result_text
