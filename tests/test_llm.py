import json
import logging
from types import SimpleNamespace

import pytest

from journal_service.core.config import Config
from journal_service.services.llm import ClaudeJournalAnalyzer
from journal_service.shared.errors import BackendUnavailableError

pytestmark = pytest.mark.unit


def message(text, input_tokens=120, output_tokens=40):
    return SimpleNamespace(
        content=[SimpleNamespace(text=text)],
        usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
    )


class FakeMessages:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_analyzer(*responses, api_key="test-key"):
    config = Config()
    config.ANTHROPIC_API_KEY = api_key
    config.CLAUDE_MODEL_PRIMARY = "model-primary"
    config.CLAUDE_MODEL_OPTIONS = ["model-primary", "model-fallback"]
    fake_client = SimpleNamespace(messages=FakeMessages(responses)) if responses else None
    return ClaudeJournalAnalyzer(api_key=api_key, client=fake_client, config=config), fake_client


def test_analyze_sentiment_parses_json():
    analyzer, client = make_analyzer(
        message(json.dumps({"sentiment": "Positive", "score": 0.7, "summary": " You seem happy. "}))
    )

    result = analyzer.analyze_sentiment("Great day at the beach")

    assert result.sentiment == "positive"
    assert result.score == 0.7
    assert result.summary == "You seem happy."
    call = client.messages.calls[0]
    assert call["model"] == "model-primary"
    assert "Great day at the beach" in call["messages"][0]["content"]


def test_sentiment_label_and_score_are_normalized():
    analyzer, _ = make_analyzer(
        message(json.dumps({"sentiment": "ecstatic", "score": 4.2, "summary": "Very up."}))
    )

    result = analyzer.analyze_sentiment("text")

    assert result.sentiment == "neutral"
    assert result.score == 1.0


def test_code_fences_are_stripped():
    fenced = "```json\n" + json.dumps({"summary": "A good week.", "prompt": "What helped?"}) + "\n```"
    analyzer, _ = make_analyzer(message(fenced))

    reflection = analyzer.analyze_weekly_reflection("entry one\n\nentry two")

    assert reflection.summary == "A good week."
    assert reflection.prompt == "What helped?"


def test_falls_back_to_next_model():
    analyzer, client = make_analyzer(
        RuntimeError("overloaded"),
        message(json.dumps({"sentiment": "negative", "score": -0.5, "summary": "You seem sad."})),
    )

    result = analyzer.analyze_sentiment("rainy")

    assert result.sentiment == "negative"
    assert [call["model"] for call in client.messages.calls] == ["model-primary", "model-fallback"]


def test_bad_json_from_every_model_is_backend_unavailable():
    analyzer, _ = make_analyzer(message("not json"), message(json.dumps({"unexpected": True})))

    with pytest.raises(BackendUnavailableError) as excinfo:
        analyzer.analyze_sentiment("text")

    assert excinfo.value.message == "Inference service failed"


def test_missing_api_key_is_backend_unavailable():
    analyzer, _ = make_analyzer(api_key=None)

    with pytest.raises(BackendUnavailableError) as excinfo:
        analyzer.analyze_sentiment("text")

    assert excinfo.value.message == "Inference service not configured"


def test_usage_is_logged(caplog):
    analyzer, _ = make_analyzer(
        message(json.dumps({"sentiment": "neutral", "score": 0, "summary": "Even."}), input_tokens=11, output_tokens=7)
    )

    with caplog.at_level(logging.INFO, logger="Journal.LLMUsage"):
        analyzer.analyze_sentiment("text")

    usage_lines = [record.getMessage() for record in caplog.records if record.name == "Journal.LLMUsage"]
    assert len(usage_lines) == 1
    payload = json.loads(usage_lines[0].split("LLM_USAGE ", 1)[1])
    assert payload["model"] == "model-primary"
    assert payload["input_tokens"] == 11
    assert payload["output_tokens"] == 7
    assert payload["endpoint"] == "sentiment"
