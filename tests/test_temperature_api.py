import base64
import io

from fastapi.testclient import TestClient
from PIL import Image

from david.main import app
from david.services import responder, temperature

client = TestClient(app)


def _fix_temperature(monkeypatch, value):
    monkeypatch.setattr(temperature, "simulate_temperature", lambda rng=None: value)


def test_check_without_session(monkeypatch):
    _fix_temperature(monkeypatch, 38.9)
    r = client.post("/api/temperature/check", json={})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["value"] == 38.9
    assert data["status"] == "fever"
    assert data["guidance"] == temperature.GUIDANCE[temperature.TemperatureStatus.FEVER]
    assert data["text"].startswith("Temperature Check Result:\nTemperature: 38.9°C\nStatus: FEVER")
    assert data["frame"] is None


def test_check_without_body(monkeypatch):
    _fix_temperature(monkeypatch, 36.8)
    r = client.post("/api/temperature/check")
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "normal"


def test_check_posts_result_into_session(monkeypatch):
    _fix_temperature(monkeypatch, 36.8)
    sid = client.post("/api/sessions", json={}).json()["id"]
    data = client.post("/api/temperature/check", json={"sid": sid}).json()

    msgs = client.get(f"/api/sessions/{sid}").json()["messages"]
    assert [m["role"] for m in msgs] == ["user", "assistant"]
    assert msgs[0]["content"] == data["text"]
    assert msgs[1]["content"] == responder.classify(data["text"])


def test_check_with_frame(monkeypatch):
    _fix_temperature(monkeypatch, 36.5)
    buf = io.BytesIO()
    Image.new("RGB", (16, 9)).save(buf, format="JPEG")
    image = "data:image/jpeg;base64," + base64.b64encode(buf.getvalue()).decode("ascii")

    r = client.post("/api/temperature/check", json={"image": image})
    assert r.status_code == 200, r.text
    frame = r.json()["frame"]
    assert (frame["width"], frame["height"]) == (16, 9)
    assert frame["format"] == "JPEG"


def test_check_rejects_bad_frame():
    r = client.post("/api/temperature/check", json={"image": "definitely-not-an-image"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid image data"}


def test_check_unknown_session():
    r = client.post("/api/temperature/check", json={"sid": "missing"})
    assert r.status_code == 404
    assert r.json() == {"error": "Session not found"}
