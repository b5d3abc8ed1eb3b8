"""Error bodies and the unhandled-exception log."""
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from hermetrix.core.database import engine
from hermetrix.main import app
from hermetrix.models import ErrorLog


def test_unhandled_error_is_logged(session_headers, monkeypatch):
    def boom(db, session_id):
        raise RuntimeError("trend query exploded")

    monkeypatch.setattr("hermetrix.api.dashboard.parameter_trends", boom)
    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.get("/parameters/trends", headers=session_headers)
    assert r.status_code == 500
    assert r.json()["error"] == "Internal server error."
    assert "exploded" not in r.text

    with Session(engine) as db:
        rows = db.exec(select(ErrorLog).where(ErrorLog.session_id == session_headers["X-Session-ID"])).all()
    assert len(rows) == 1
    assert rows[0].endpoint == "/parameters/trends"
    assert rows[0].method == "GET"
    assert "RuntimeError" in rows[0].stack_trace


def test_http_error_body(client: TestClient, session_headers):
    r = client.get("/reports/424242", headers=session_headers)
    j = r.json()
    assert j["statusCode"] == 404
    assert j["requestId"] == r.headers["X-Request-ID"]


def test_malformed_json_is_400(client: TestClient, session_headers):
    r = client.post(
        "/chat/send",
        content=b"{not json",
        headers={**session_headers, "Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Malformed JSON body."


def test_default_session(client: TestClient):
    r = client.get("/reports")
    assert r.status_code == 200
