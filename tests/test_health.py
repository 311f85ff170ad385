from fastapi.testclient import TestClient

from david.main import app

client = TestClient(app)


def test_ping():
    r = client.get("/health/ping")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_store_counts():
    sid = client.post("/api/sessions", json={}).json()["id"]
    client.post("/api/chat", json={"message": "gejala", "sid": sid})
    data = client.get("/health/store").json()
    assert data["ok"] is True
    assert data["backend"] == "sqlite"
    assert data["sessions"] == 1
    assert data["messages"] == 2


def test_topics_in_match_order():
    names = [t["name"] for t in client.get("/health/topics").json()["topics"]]
    assert names[:2] == ["symptoms", "temperature"]
    assert len(names) == 7


def test_routes_registered():
    paths = {r["path"] for r in client.get("/health/routes").json()["routes"]}
    assert {"/api/chat", "/api/sessions", "/api/sessions/{sid}", "/api/temperature/check"} <= paths


def test_request_id_header_passthrough():
    r = client.get("/health/ping", headers={"X-Req-Id": "abc", "X-Sid": "s1"})
    assert r.status_code == 200
