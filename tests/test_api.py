import pytest
from fastapi.testclient import TestClient

from app.main import create_app


@pytest.fixture
def client(json_stores):
    with TestClient(create_app(stores=json_stores)) as c:
        yield c


def test_health_check(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_create_and_get_job(client: TestClient):
    response = client.post("/jobs/", json={"jobId": "j1", "sourceFilename": "cours.pdf"})
    assert response.status_code == 201
    body = response.json()
    assert body["jobId"] == "j1"
    assert body["status"] == "queued"
    assert body["sourceFilename"] == "cours.pdf"

    response = client.get("/jobs/j1")
    assert response.status_code == 200
    assert response.json() == body


def test_create_job_generates_id(client: TestClient):
    response = client.post("/jobs/", json={})
    assert response.status_code == 201
    assert response.json()["jobId"]


def test_duplicate_job_is_conflict(client: TestClient):
    client.post("/jobs/", json={"jobId": "j1"})
    response = client.post("/jobs/", json={"jobId": "j1"})
    assert response.status_code == 409


def test_unknown_job_is_404(client: TestClient):
    assert client.get("/jobs/missing").status_code == 404
    assert client.patch("/jobs/missing", json={"status": "failed"}).status_code == 404


def test_patch_job(client: TestClient):
    created = client.post("/jobs/", json={"jobId": "j1"}).json()

    response = client.patch("/jobs/j1", json={"status": "completed", "deckId": "d1"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "completed"
    assert body["deckId"] == "d1"
    assert body["progress"] == created["progress"]
    assert body["updatedAt"] > created["createdAt"]


def test_list_jobs_newest_first(client: TestClient):
    client.post("/jobs/", json={"jobId": "A"})
    client.post("/jobs/", json={"jobId": "B"})

    assert [j["jobId"] for j in client.get("/jobs/").json()] == ["B", "A"]


def test_save_get_and_export_deck(client: TestClient, sample_deck):
    response = client.post("/decks/", json=sample_deck)
    assert response.status_code == 201
    assert response.json() == sample_deck

    assert client.get("/decks/d1").json() == sample_deck
    assert [d["id"] for d in client.get("/decks/").json()] == ["d1"]

    response = client.get("/decks/d1/export", params={"format": "tsv"})
    assert response.status_code == 200
    assert response.text == "Q\tA"

    quiz = client.get("/decks/d1/export", params={"format": "quiz"}).text
    assert quiz.startswith("Q1. Which valve?")


def test_duplicate_deck_is_conflict(client: TestClient, sample_deck):
    client.post("/decks/", json=sample_deck)
    assert client.post("/decks/", json=sample_deck).status_code == 409


def test_invalid_deck_is_rejected(client: TestClient):
    response = client.post("/decks/", json={"id": "d1", "cards": [{"question": "Q"}]})
    assert response.status_code == 422


def test_unknown_deck_is_404(client: TestClient):
    assert client.get("/decks/missing").status_code == 404
    assert client.get("/decks/missing/export").status_code == 404


def test_unknown_export_format_is_rejected(client: TestClient, sample_deck):
    client.post("/decks/", json=sample_deck)
    assert client.get("/decks/d1/export", params={"format": "pdf"}).status_code == 422


def test_graphql_reads_jobs_and_decks(client: TestClient, sample_deck):
    client.post("/jobs/", json={"jobId": "j1"})
    client.patch("/jobs/j1", json={"status": "completed", "deckId": "d1"})
    client.post("/decks/", json=sample_deck)

    query = """
    {
      job(jobId: "j1") { jobId status deckId }
      jobs { jobId }
      deck(id: "d1") { id cards { question answer } mcqs { correctLabel choices { label } } }
      missing: job(jobId: "nope") { jobId }
    }
    """
    response = client.post("/graphql", json={"query": query})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["job"] == {"jobId": "j1", "status": "completed", "deckId": "d1"}
    assert data["jobs"] == [{"jobId": "j1"}]
    assert data["deck"]["cards"] == [{"question": "Q", "answer": "A"}]
    assert data["deck"]["mcqs"][0]["correctLabel"] == "A"
    assert data["missing"] is None


def test_patch_with_non_string_opaque_fields(client: TestClient):
    client.post("/jobs/", json={"jobId": "j1"})

    response = client.patch("/jobs/j1", json={"stage": 3, "deckId": 42, "progress": "half"})

    assert response.status_code == 200
    body = response.json()
    assert body["stage"] == 3
    assert body["deckId"] == 42
    assert body["progress"] == "half"
    assert client.get("/jobs/j1").json() == body


def test_create_with_non_numeric_created_at(client: TestClient):
    response = client.post("/jobs/", json={"jobId": "j2", "createdAt": "2024-01-01T00:00:00Z"})

    assert response.status_code == 201
    assert response.json()["createdAt"] == "2024-01-01T00:00:00Z"

    updated = client.patch("/jobs/j2", json={"status": "processing"}).json()
    assert updated["createdAt"] == "2024-01-01T00:00:00Z"
    assert isinstance(updated["updatedAt"], int)

    data = client.post("/graphql", json={"query": '{ job(jobId: "j2") { createdAt status } }'}).json()["data"]
    assert data["job"] == {"createdAt": None, "status": "processing"}


def test_create_with_body_keys_named_like_arguments(client: TestClient):
    response = client.post("/jobs/", json={"jobId": "j3", "stores": "x", "fields": [1]})

    assert response.status_code == 201
    body = response.json()
    assert body["jobId"] == "j3"
    assert body["stores"] == "x"
    assert body["fields"] == [1]
