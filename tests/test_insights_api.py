import pytest

pytestmark = pytest.mark.integration


# ==================== /api/sentiment ====================

def test_sentiment_returns_analysis(client, analyzer):
    response = client.post("/api/sentiment", json={"entryText": "Had a lovely dinner"})

    assert response.status_code == 200
    assert response.json() == {
        "sentiment": {
            "sentiment": "positive",
            "score": 0.8,
            "summary": "You seem happy and energized.",
        }
    }
    assert analyzer.sentiment_calls == ["Had a lovely dinner"]


@pytest.mark.parametrize("body", [{"entryText": ""}, {"entryText": "   "}, {"entryText": 42}, {}])
def test_sentiment_rejects_missing_or_non_string_text(client, analyzer, body):
    response = client.post("/api/sentiment", json=body)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid or missing entryText"
    assert analyzer.sentiment_calls == []


def test_sentiment_inference_failure_is_500(client, analyzer):
    analyzer.fail = True

    response = client.post("/api/sentiment", json={"entryText": "anything"})

    assert response.status_code == 500
    assert response.json()["error"] == "Error analyzing sentiment"


# ==================== /api/weekly-reflection ====================

def test_weekly_reflection_uses_newest_seven_entries(client, repository, analyzer):
    for index in range(9):
        repository.create_entry("u1", f"entry {index}")

    response = client.post("/api/weekly-reflection", json={"userId": "u1"})

    assert response.status_code == 200
    assert response.json() == {
        "reflection": {
            "summary": "A calm, steady week.",
            "prompt": "What made you feel most at ease?",
        }
    }
    expected = "\n\n".join(f"entry {index}" for index in range(8, 1, -1))
    assert analyzer.reflection_calls == [expected]


def test_weekly_reflection_window_is_configurable(client, repository, analyzer, test_settings):
    test_settings.WEEKLY_REFLECTION_WINDOW = 2
    for text in ("a", "b", "c"):
        repository.create_entry("u1", text)

    client.post("/api/weekly-reflection", json={"userId": "u1"})

    assert analyzer.reflection_calls == ["c\n\nb"]


def test_weekly_reflection_requires_user_id(client):
    response = client.post("/api/weekly-reflection", json={})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing userId"


def test_weekly_reflection_without_entries(client, analyzer):
    response = client.post("/api/weekly-reflection", json={"userId": "new-user"})

    assert response.status_code == 400
    assert response.json()["error"] == "No journal entries found. Write some entries first!"
    assert analyzer.reflection_calls == []


def test_weekly_reflection_failure_is_500(client, repository, analyzer):
    repository.create_entry("u1", "something")
    analyzer.fail = True

    response = client.post("/api/weekly-reflection", json={"userId": "u1"})

    assert response.status_code == 500
    assert response.json()["error"] == "Error generating weekly reflection"


def test_weekly_reflection_rejects_whitespace_user_id(client):
    response = client.post("/api/weekly-reflection", json={"userId": "   "})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing userId"
