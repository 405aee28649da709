import pytest

from journal_service.features.database.repositories.memory_entries import InMemoryEntryRepository
from journal_service.shared.errors import BackendUnavailableError

pytestmark = pytest.mark.integration


class UnavailableRepository(InMemoryEntryRepository):
    backend_name = "broken"

    def create_entry(self, user_id, text):
        raise BackendUnavailableError("Failed to add journal entry", operation="insert")

    def fetch_records(self, user_id):
        raise BackendUnavailableError("Failed to fetch journal entries", operation="select")

    def delete_entry(self, entry_id, user_id):
        raise BackendUnavailableError("Failed to delete journal entry", operation="delete")


def create(client, user_id="u1", text="Hello"):
    return client.post("/api/entries", json={"userId": user_id, "entryText": text})


def test_created_entry_is_listed(client):
    response = create(client)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Journal entry added successfully"
    assert body["entryId"]

    listed = client.get("/api/entries", params={"userId": "u1"})
    assert listed.status_code == 200
    assert [entry["text"] for entry in listed.json()] == ["Hello"]
    assert listed.json()[0]["id"] == body["entryId"]


def test_missing_entry_text_is_rejected_and_nothing_saved(client, repository):
    response = client.post("/api/entries", json={"userId": "u1"})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing userId or entryText"
    assert repository.get_entries("u1") == []


def test_blank_entry_text_is_rejected(client):
    response = create(client, text="   ")

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_malformed_body_is_rejected(client):
    response = client.post(
        "/api/entries",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"


def test_sentiment_summary_is_attached_after_create(client, analyzer):
    create(client, text="Sunny walk")

    entries = client.get("/api/entries", params={"userId": "u1"}).json()

    assert analyzer.sentiment_calls == ["Sunny walk"]
    assert entries[0]["sentimentSummary"] == "You seem happy and energized."


def test_entry_is_saved_when_sentiment_fails(client, analyzer):
    analyzer.fail = True

    response = create(client, text="Cloudy")

    assert response.status_code == 201
    entries = client.get("/api/entries", params={"userId": "u1"}).json()
    assert entries[0]["text"] == "Cloudy"
    assert "sentimentSummary" not in entries[0]


def test_auto_sentiment_can_be_disabled(client, analyzer, test_settings):
    test_settings.AUTO_SENTIMENT = False

    create(client)

    assert analyzer.sentiment_calls == []


def test_list_requires_user_id(client):
    response = client.get("/api/entries")

    assert response.status_code == 400
    assert response.json()["error"] == "Missing userId query parameter"


def test_list_is_newest_first_and_user_scoped(client):
    for text in ("one", "two", "three"):
        create(client, text=text)
    create(client, user_id="u2", text="other")

    entries = client.get("/api/entries", params={"userId": "u1"}).json()

    assert [entry["text"] for entry in entries] == ["three", "two", "one"]


def test_list_search_and_sentiment_filter(client, repository):
    happy = repository.create_entry("u1", "Beach day")
    repository.update_sentiment(happy, "u1", "You seem happy")
    sad = repository.create_entry("u1", "Beach cleanup was depressing")
    repository.update_sentiment(sad, "u1", "You seem sad")
    repository.create_entry("u1", "Groceries")

    searched = client.get("/api/entries", params={"userId": "u1", "q": "BEACH"}).json()
    assert [entry["id"] for entry in searched] == [sad, happy]

    negative = client.get("/api/entries", params={"userId": "u1", "q": "beach", "sentiment": "negative"}).json()
    assert [entry["id"] for entry in negative] == [sad]

    everything = client.get("/api/entries", params={"userId": "u1", "sentiment": "all"}).json()
    assert len(everything) == 3


def test_unknown_sentiment_filter_is_rejected(client):
    response = client.get("/api/entries", params={"userId": "u1", "sentiment": "ecstatic"})

    assert response.status_code == 400


def test_delete_own_entry(client):
    entry_id = create(client).json()["entryId"]

    response = client.delete("/api/entries", params={"id": entry_id, "userId": "u1"})

    assert response.status_code == 200
    assert response.json() == {"message": "Entry deleted successfully"}
    assert client.get("/api/entries", params={"userId": "u1"}).json() == []


def test_delete_with_mismatched_user_keeps_entry(client):
    entry_id = create(client).json()["entryId"]

    response = client.delete("/api/entries", params={"id": entry_id, "userId": "intruder"})

    assert response.status_code == 404
    assert response.json()["error"] == "Entry not found"
    remaining = client.get("/api/entries", params={"userId": "u1"}).json()
    assert [entry["id"] for entry in remaining] == [entry_id]


def test_delete_unknown_entry_looks_the_same_as_foreign_entry(client):
    response = client.delete("/api/entries", params={"id": "missing", "userId": "u1"})

    assert response.status_code == 404
    assert response.json()["error"] == "Entry not found"


def test_delete_requires_both_params(client):
    assert client.delete("/api/entries", params={"id": "x"}).status_code == 400
    assert client.delete("/api/entries", params={"userId": "u1"}).status_code == 400


def test_update_sentiment_endpoint(client):
    entry_id = create(client).json()["entryId"]

    response = client.put(
        "/api/entries/sentiment",
        json={"userId": "u1", "entryId": entry_id, "sentimentSummary": "You seem calm"},
    )

    assert response.status_code == 200
    entries = client.get("/api/entries", params={"userId": "u1"}).json()
    assert entries[0]["sentimentSummary"] == "You seem calm"


def test_update_sentiment_on_foreign_entry_is_not_found(client):
    entry_id = create(client).json()["entryId"]

    response = client.put(
        "/api/entries/sentiment",
        json={"userId": "u2", "entryId": entry_id, "sentimentSummary": "You seem calm"},
    )

    assert response.status_code == 404


def test_backend_failures_are_500(app, client):
    from journal_service.api.dependencies import get_repository

    app.dependency_overrides[get_repository] = lambda: UnavailableRepository()

    created = create(client)
    listed = client.get("/api/entries", params={"userId": "u1"})
    deleted = client.delete("/api/entries", params={"id": "x", "userId": "u1"})

    assert created.status_code == 500
    assert created.json()["error"] == "Failed to add journal entry"
    assert listed.status_code == 500
    assert listed.json()["error"] == "Failed to fetch journal entries"
    assert deleted.status_code == 500
    assert deleted.json()["error"] == "Error deleting entry"
    assert listed.json()["code"] == "BACKEND_UNAVAILABLE"


def test_correlation_id_is_echoed(client):
    response = client.get("/api/entries", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Correlation-ID"] == "req-42"
    assert response.json()["correlation_id"] == "req-42"


def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "healthy", "backend": "memory"}
    assert client.get("/").json() == {"message": "Journal Service Running"}
