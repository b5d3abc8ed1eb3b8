"""Period cycles, water intake and steps."""
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient


def test_period_cycles(client: TestClient, session_headers):
    r = client.post(
        "/period-cycles",
        json={"startDate": "2024-03-01T00:00:00", "endDate": "2024-03-05T00:00:00", "flowIntensity": "medium"},
        headers=session_headers,
    )
    assert r.status_code == 200
    client.post("/period-cycles", json={"startDate": "2024-04-02T00:00:00"}, headers=session_headers)
    cycles = client.get("/period-cycles", headers=session_headers).json()
    assert [c["startDate"][:10] for c in cycles] == ["2024-04-02", "2024-03-01"]
    assert cycles[1]["flowIntensity"] == "medium"


def test_period_cycle_end_before_start(client: TestClient, session_headers):
    r = client.post(
        "/period-cycles",
        json={"startDate": "2024-03-05T00:00:00", "endDate": "2024-03-01T00:00:00"},
        headers=session_headers,
    )
    assert r.status_code == 400
    assert r.json()["error"] == "End date cannot be before start date"


def test_water_today_total(client: TestClient, session_headers):
    client.post("/water-intake", json={"amountMl": 250}, headers=session_headers)
    client.post("/water-intake", json={"amountMl": 500, "time": "09:30"}, headers=session_headers)
    yesterday = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()
    client.post("/water-intake", json={"amountMl": 1000, "date": yesterday}, headers=session_headers)

    assert client.get("/water-intake/today-total", headers=session_headers).json() == {"total": 750}
    assert len(client.get("/water-intake", headers=session_headers).json()) == 3


def test_water_amount_must_be_positive(client: TestClient, session_headers):
    r = client.post("/water-intake", json={"amountMl": 0}, headers=session_headers)
    assert r.status_code == 400


def test_steps_today_total(client: TestClient, session_headers):
    r = client.post(
        "/steps-tracker",
        json={"steps": 4200, "distance": 3.1, "caloriesBurned": 180.5, "duration": 40},
        headers=session_headers,
    )
    assert r.status_code == 200
    assert r.json()["caloriesBurned"] == 180.5
    client.post("/steps-tracker", json={"steps": 800}, headers=session_headers)
    assert client.get("/steps-tracker/today-total", headers=session_headers).json() == {"total": 5000}


def test_totals_are_per_session(client: TestClient, session_headers):
    client.post("/steps-tracker", json={"steps": 100}, headers=session_headers)
    other = {"X-Session-ID": session_headers["X-Session-ID"] + "-other"}
    assert client.get("/steps-tracker/today-total", headers=other).json() == {"total": 0}


def test_period_cycle_mixed_timezones(client: TestClient, session_headers):
    r = client.post(
        "/period-cycles",
        json={"startDate": "2026-01-01T00:00:00", "endDate": "2026-01-05T00:00:00Z"},
        headers=session_headers,
    )
    assert r.status_code == 200
    assert r.json()["endDate"].startswith("2026-01-05T00:00:00")

    r = client.post(
        "/period-cycles",
        json={"startDate": "2026-01-05T00:00:00+03:00", "endDate": "2026-01-04T20:00:00"},
        headers=session_headers,
    )
    # 2026-01-05T00:00+03:00 is 2026-01-04T21:00Z, so the end is an hour earlier
    assert r.status_code == 400
    assert r.json()["error"] == "End date cannot be before start date"
