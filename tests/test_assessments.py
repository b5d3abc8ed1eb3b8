"""Assessment orchestrator: report gating, AI calls, atomic write."""
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from hermetrix.core.database import engine
from hermetrix.models import Assessment, DailyTask, Insight, MedicalReport, ReportStatus, RiskScore
from hermetrix.schemas.ai import InsightSuggestion, RiskResult, TaskSuggestion
from hermetrix.services import ai_client

ANSWERS = {"irregular_periods": "Very irregular (unpredictable)", "acne": 6, "stress": 7}


@pytest.fixture
def ai_ok(monkeypatch):
    calls = []

    def score_risk(extracted, answers):
        calls.append("risk")
        return RiskResult.model_validate({"score": 72, "riskLevel": "high", "interpretation": "Elevated markers."})

    def generate_tasks(extracted, risk):
        calls.append("tasks")
        return [
            TaskSuggestion.model_validate({"taskType": "water", "description": "Drink water", "target": "2 liters"}),
            TaskSuggestion.model_validate({"taskType": "exercise", "description": "Walk", "target": "30 minutes"}),
        ]

    def generate_insights(extracted, answers):
        calls.append("insights")
        return [InsightSuggestion(category="Thyroid", title="TSH is elevated", content="Talk to your doctor.", severity="Important")]

    monkeypatch.setattr(ai_client, "score_risk", score_risk)
    monkeypatch.setattr(ai_client, "generate_tasks", generate_tasks)
    monkeypatch.setattr(ai_client, "generate_insights", generate_insights)
    return calls


def _insert_report(session_id: str, status: ReportStatus) -> int:
    with Session(engine) as db:
        report = MedicalReport(
            session_id=session_id,
            file_name="labs.pdf",
            file_url="/uploads/missing.pdf",
            file_type="application/pdf",
            analysis_complete=int(status),
        )
        db.add(report)
        db.commit()
        db.refresh(report)
        return report.id


def _count(model, session_id: str) -> int:
    with Session(engine) as db:
        return len(db.exec(select(model).where(model.session_id == session_id)).all())


def test_questions(client: TestClient):
    r = client.get("/assessments/questions")
    assert r.status_code == 200
    ids = [q["id"] for q in r.json()]
    assert ids[0] == "irregular_periods"
    assert "stress" in ids
    assert len(ids) == 12


def test_no_report(client: TestClient, session_headers, ai_ok):
    r = client.post("/assessments", json={"answers": ANSWERS}, headers=session_headers)
    assert r.status_code == 400
    assert r.json()["status"] == "no_report"
    assert ai_ok == []


def test_report_still_processing(client: TestClient, session_headers, ai_ok):
    rid = _insert_report(session_headers["X-Session-ID"], ReportStatus.PENDING)
    r = client.post("/assessments", json={"answers": ANSWERS}, headers=session_headers)
    assert r.status_code == 202
    j = r.json()
    assert j["status"] == "processing"
    assert j["reportId"] == rid
    assert "still in progress" in j["message"]
    assert ai_ok == []
    assert _count(Assessment, session_headers["X-Session-ID"]) == 0


def test_report_failed(client: TestClient, session_headers, ai_ok):
    rid = _insert_report(session_headers["X-Session-ID"], ReportStatus.FAILED)
    r = client.post("/assessments", json={"answers": ANSWERS}, headers=session_headers)
    assert r.status_code == 409
    assert r.json()["status"] == "failed"
    assert r.json()["reportId"] == rid
    assert ai_ok == []
    sid = session_headers["X-Session-ID"]
    for model in (Assessment, RiskScore, DailyTask, Insight):
        assert _count(model, sid) == 0


def test_empty_answers_rejected(client: TestClient, session_headers):
    r = client.post("/assessments", json={"answers": {}}, headers=session_headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Valid answers object is required"


def test_missing_answers_rejected(client: TestClient, session_headers):
    r = client.post("/assessments", json={}, headers=session_headers)
    assert r.status_code == 400


def test_requires_ai_key(client: TestClient, session_headers, ai_unconfigured):
    r = client.post("/assessments", json={"answers": ANSWERS}, headers=session_headers)
    assert r.status_code == 503


def test_assessment_success(client: TestClient, session_headers, uploaded_report, ai_ok):
    r = client.post("/assessments", json={"answers": ANSWERS}, headers=session_headers)
    assert r.status_code == 200, r.text
    j = r.json()
    assert ai_ok == ["risk", "tasks", "insights"]
    assert j["status"] == "complete"
    assert j["reportId"] == uploaded_report["id"]
    assert j["answers"] == ANSWERS
    assert j["riskScore"]["score"] == 72
    assert j["riskScore"]["riskLevel"] == "High"
    assert j["riskScore"]["assessmentId"] == j["id"]
    assert [t["taskType"] for t in j["tasks"]] == ["water", "exercise"]
    assert all(t["completed"] == 0 for t in j["tasks"])
    assert j["insights"][0]["title"] == "TSH is elevated"

    assert client.get("/risk-score", headers=session_headers).json()["score"] == 72
    assert len(client.get("/tasks", headers=session_headers).json()) == 2
    assert len(client.get("/insights", headers=session_headers).json()) == 1
    assert client.get("/assessments/latest", headers=session_headers).json()["id"] == j["id"]


def test_ai_failure_writes_nothing(client: TestClient, session_headers, uploaded_report, ai_ok, monkeypatch):
    def broken_insights(extracted, answers):
        raise ai_client.AIServiceError("AI service error: APIConnectionError")

    monkeypatch.setattr(ai_client, "generate_insights", broken_insights)
    r = client.post("/assessments", json={"answers": ANSWERS}, headers=session_headers)
    assert r.status_code == 500
    assert r.json()["error"] == "Failed to process assessment with AI. Please try again later."

    sid = session_headers["X-Session-ID"]
    for model in (Assessment, RiskScore, DailyTask, Insight):
        assert _count(model, sid) == 0
    assert client.get("/risk-score", headers=session_headers).json() is None


def test_latest_assessment_empty(client: TestClient, session_headers):
    r = client.get("/assessments/latest", headers=session_headers)
    assert r.status_code == 200
    assert r.json() is None


def test_resubmit_after_processing_finishes(client: TestClient, session_headers, ai_ok):
    sid = session_headers["X-Session-ID"]
    rid = _insert_report(sid, ReportStatus.PENDING)
    r = client.post("/assessments", json={"answers": ANSWERS}, headers=session_headers)
    assert r.status_code == 202

    with Session(engine) as db:
        report = db.get(MedicalReport, rid)
        report.extracted_data = {"parameters": [{"name": "TSH", "value": "5.8"}]}
        report.mark(ReportStatus.COMPLETE)
        db.add(report)
        db.commit()

    r = client.post("/assessments", json={"answers": ANSWERS}, headers=session_headers)
    assert r.status_code == 200, r.text
    assert r.json()["reportId"] == rid
    assert r.json()["answers"] == ANSWERS
    assert _count(Assessment, sid) == 1
    assert ai_ok == ["risk", "tasks", "insights"]
