from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.main import create_app

URL = "/webhooks/handle-new-user"


def test_health_reports_store(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy", "store": "memory"}


def test_non_insert_event_is_rejected(client, profile_repo, insert_event):
    insert_event["event"] = "UPDATE"
    r = client.post(URL, json=insert_event)
    assert r.status_code == 400
    assert r.text == "Only INSERT events are handled"
    assert profile_repo._mem == {}


def test_insert_event_creates_profile(client, profile_repo, insert_event):
    r = client.post(URL, json=insert_event)
    assert r.status_code == 200, r.text
    assert r.text == "User profile created"
    assert profile_repo._mem["u1"].to_row() == {
        "id": "u1",
        "email": "a@b.com",
        "phone": "123",
        "display_name": "Ann",
        "user_type": "farmer",
    }


def test_store_failure_returns_500(failing_repo, insert_event):
    client = TestClient(create_app(failing_repo))
    r = client.post(URL, json=insert_event)
    assert r.status_code == 500
    assert r.text == "Error: duplicate key"
    assert failing_repo.insert.call_count == 1


def test_replayed_insert_hits_store_uniqueness(client, insert_event):
    assert client.post(URL, json=insert_event).status_code == 200
    r = client.post(URL, json=insert_event)
    assert r.status_code == 500
    assert r.text.startswith("Error: duplicate key")


def test_missing_user_is_rejected(client, profile_repo):
    r = client.post(URL, json={"event": "INSERT", "session": {}})
    assert r.status_code == 400
    assert r.text == "Event payload is missing session.user"
    assert profile_repo._mem == {}


def test_body_must_be_json_object(client):
    r = client.post(URL, content=b"not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 422


@pytest.mark.parametrize(
    "body",
    [
        {"event": "UPDATE", "session": "x"},
        {"event": 1, "session": {}},
        {"event": None},
        {},
        {"event": "UPDATE", "session": {"user": {"id": "u1", "raw_user_meta_data": {"phone": 9800000000}}}},
        {"event": "DELETE", "session": {"user": [1, 2, 3]}},
    ],
)
def test_any_non_insert_body_gets_400_without_write(client, profile_repo, body):
    r = client.post(URL, json=body)
    assert r.status_code == 400
    assert r.text == "Only INSERT events are handled"
    assert profile_repo._mem == {}


def test_insert_with_numeric_phone_is_written(client, profile_repo, insert_event):
    insert_event["session"]["user"]["raw_user_meta_data"]["phone"] = 9800000000
    r = client.post(URL, json=insert_event)
    assert r.status_code == 200, r.text
    assert profile_repo._mem["u1"].phone == "9800000000"


def test_insert_with_malformed_session_gets_400(client, profile_repo):
    r = client.post(URL, json={"event": "INSERT", "session": "x"})
    assert r.status_code == 400
    assert profile_repo._mem == {}


def test_body_that_is_not_an_object_gets_422(client):
    r = client.post(URL, json=["INSERT"])
    assert r.status_code == 422


def test_shutdown_closes_postgres_pool():
    pg = Mock()
    repo = ProfileRepository(None, pg_client=pg)
    with TestClient(create_app(repo)) as c:
        assert c.get("/health").json()["store"] == "postgres"
        pg.close.assert_not_called()
    pg.close.assert_called_once()


def test_health_is_degraded_on_memory_store_in_production(client, monkeypatch):
    monkeypatch.setenv("ENV", "production")
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "degraded", "store": "memory"}


def test_store_failure_is_logged_and_response_unchanged(failing_repo, insert_event, caplog):
    client = TestClient(create_app(failing_repo))
    with caplog.at_level("ERROR", logger="src.infrastructure.api.routes.webhook_routes"):
        r = client.post(URL, json=insert_event)
    assert r.text == "Error: duplicate key"
    assert any("duplicate key" in rec.getMessage() for rec in caplog.records)
