import pytest

pytestmark = pytest.mark.integration

AGENT = "pulse-agent"


def test_agent_create_returns_inline_sentiment(client, repository):
    response = client.post("/api/pulse", json={"userId": "u1", "entryText": "Great run", "agentId": AGENT})

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Journal entry added successfully"
    assert body["sentiment"]["sentiment"] == "positive"
    stored = repository.get_entries("u1")
    assert stored[0].id == body["entryId"]
    assert stored[0].sentiment_summary == "You seem happy and energized."


def test_agent_create_survives_inference_failure(client, analyzer, repository):
    analyzer.fail = True

    response = client.post("/api/pulse", json={"userId": "u1", "entryText": "Meh", "agentId": AGENT})

    assert response.status_code == 201
    assert response.json()["sentiment"] is None
    assert repository.get_entries("u1")[0].text == "Meh"


def test_unknown_agent_is_rejected_before_any_write(client, repository):
    response = client.post("/api/pulse", json={"userId": "u1", "entryText": "x", "agentId": "rogue"})

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized agent"
    assert repository.get_entries("u1") == []


def test_missing_fields_are_checked_before_agent(client):
    response = client.post("/api/pulse", json={"userId": "u1", "agentId": "rogue"})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing userId or entryText"


def test_agent_list_with_limit_reports_total(client, repository):
    for text in ("a", "b", "c"):
        repository.create_entry("u1", text)

    response = client.get("/api/pulse", params={"userId": "u1", "agentId": AGENT, "limit": 2})

    assert response.status_code == 200
    body = response.json()
    assert [entry["text"] for entry in body["entries"]] == ["c", "b"]
    assert body["total"] == 3


def test_agent_list_without_limit(client, repository):
    repository.create_entry("u1", "only")

    body = client.get("/api/pulse", params={"userId": "u1", "agentId": AGENT}).json()

    assert body["total"] == 1
    assert len(body["entries"]) == 1


@pytest.mark.parametrize("limit", ["-1", "ten"])
def test_agent_list_rejects_bad_limit(client, limit):
    response = client.get("/api/pulse", params={"userId": "u1", "agentId": AGENT, "limit": limit})

    assert response.status_code == 400


def test_agent_list_requires_known_agent(client):
    response = client.get("/api/pulse", params={"userId": "u1", "agentId": "rogue"})

    assert response.status_code == 401


def test_agent_update(client, repository):
    entry_id = repository.create_entry("u1", "text")

    response = client.put(
        "/api/pulse",
        json={"userId": "u1", "entryId": entry_id, "sentimentSummary": "You seem angry", "agentId": AGENT},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Entry updated successfully", "entryId": entry_id}
    assert repository.get_entries("u1")[0].sentiment_summary == "You seem angry"


def test_agent_update_foreign_entry_is_not_found(client, repository):
    entry_id = repository.create_entry("u1", "text")

    response = client.put(
        "/api/pulse",
        json={"userId": "u2", "entryId": entry_id, "sentimentSummary": "x", "agentId": AGENT},
    )

    assert response.status_code == 404
    assert repository.get_entries("u1")[0].sentiment_summary is None


def test_agent_update_requires_fields_and_agent(client):
    missing = client.put("/api/pulse", json={"userId": "u1", "agentId": AGENT})
    rogue = client.put(
        "/api/pulse",
        json={"userId": "u1", "entryId": "e", "sentimentSummary": "x", "agentId": "rogue"},
    )

    assert missing.status_code == 400
    assert rogue.status_code == 401


def test_whitespace_user_id_is_rejected_on_every_method(client, repository):
    created = client.post("/api/pulse", json={"userId": "   ", "entryText": "x", "agentId": AGENT})
    listed = client.get("/api/pulse", params={"userId": "  ", "agentId": AGENT})
    updated = client.put(
        "/api/pulse",
        json={"userId": " ", "entryId": "e", "sentimentSummary": "x", "agentId": AGENT},
    )

    assert created.status_code == 400
    assert created.json()["error"] == "Missing userId or entryText"
    assert listed.status_code == 400
    assert updated.status_code == 400
    assert repository.get_entries("   ") == []
