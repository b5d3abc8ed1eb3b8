"""Health endpoints."""
from fastapi.testclient import TestClient

from hermetrix.services import ai_client


def test_health_returns_ok(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    j = r.json()
    assert j.get("status") == "ok"
    assert j.get("openaiConfigured") is True
    assert j.get("database") == "ok"
    assert r.headers.get("X-Request-ID")


def test_health_reports_missing_key(client: TestClient, ai_unconfigured):
    r = client.get("/health")
    assert r.json()["openaiConfigured"] is False


def test_health_ai_not_configured(client: TestClient, ai_unconfigured):
    r = client.get("/health/ai")
    assert r.status_code == 200
    assert r.json()["status"] == "not_configured"


def test_health_ai_ping(client: TestClient, monkeypatch):
    monkeypatch.setattr(ai_client, "ping_openai", lambda: (False, 12.5, "boom"))
    monkeypatch.setattr("hermetrix.api.health._ai_health_cache", {"ts": 0.0, "data": None})
    r = client.get("/health/ai")
    j = r.json()
    assert j["status"] == "fail"
    assert j["latencyMs"] == 12.5
    assert j["error"] == "boom"
