"""
Assessment orchestrator: gates on the latest report's status, then
risk score → daily tasks → insights. The three model calls run first and every row
(assessment, risk score, tasks, insights) is written in one transaction, so a failed
call leaves nothing half-persisted.
"""
import logging
from typing import NamedTuple

from sqlmodel import Session, select

from hermetrix.models import Assessment, DailyTask, Insight, ReportStatus, RiskScore
from hermetrix.services import ai_client
from hermetrix.services.report_pipeline import latest_report

logger = logging.getLogger(__name__)


class AssessmentError(Exception):
    pass


class NoReportError(AssessmentError):
    def __init__(self):
        super().__init__("No medical report found. Please upload a report first.")


class ReportStillProcessing(AssessmentError):
    def __init__(self, report_id: int):
        self.report_id = report_id
        super().__init__("Report analysis is still in progress. Please wait.")


class ReportAnalysisFailed(AssessmentError):
    def __init__(self, report_id: int):
        self.report_id = report_id
        super().__init__("Report analysis failed. Please try uploading again.")


class AssessmentAIError(AssessmentError):
    def __init__(self):
        super().__init__("Failed to process assessment with AI. Please try again later.")


class AssessmentOutcome(NamedTuple):
    assessment: Assessment
    risk_score: RiskScore
    tasks: list[DailyTask]
    insights: list[Insight]


def submit_assessment(db: Session, session_id: str, answers: dict) -> AssessmentOutcome:
    report = latest_report(db, session_id)
    if report is None:
        raise NoReportError()
    if report.status is ReportStatus.PENDING:
        raise ReportStillProcessing(report.id)
    if report.status is ReportStatus.FAILED:
        raise ReportAnalysisFailed(report.id)

    extracted = report.extracted_data
    try:
        risk = ai_client.score_risk(extracted, answers)
        task_suggestions = ai_client.generate_tasks(extracted, risk)
        insight_suggestions = ai_client.generate_insights(extracted, answers)
    except Exception as e:
        logger.exception("AI processing error: report_id=%s", report.id)
        raise AssessmentAIError() from e

    try:
        assessment = Assessment(session_id=session_id, report_id=report.id, answers=answers)
        db.add(assessment)
        db.flush()
        risk_row = RiskScore(
            session_id=session_id,
            report_id=report.id,
            assessment_id=assessment.id,
            score=risk.score,
            risk_level=risk.risk_level,
            interpretation=risk.interpretation,
        )
        task_rows = [
            DailyTask(
                session_id=session_id,
                report_id=report.id,
                task_type=t.task_type,
                description=t.description,
                target=t.target,
                completed=0,
            )
            for t in task_suggestions
        ]
        insight_rows = [
            Insight(
                session_id=session_id,
                report_id=report.id,
                category=i.category,
                title=i.title,
                content=i.content,
                severity=i.severity,
            )
            for i in insight_suggestions
        ]
        db.add(risk_row)
        db.add_all(task_rows)
        db.add_all(insight_rows)
        db.commit()
    except Exception:
        db.rollback()
        raise

    for row in (assessment, risk_row, *task_rows, *insight_rows):
        db.refresh(row)
    logger.info(
        "Assessment saved: assessment_id=%s report_id=%s score=%s tasks=%s insights=%s",
        assessment.id,
        report.id,
        risk_row.score,
        len(task_rows),
        len(insight_rows),
    )
    return AssessmentOutcome(assessment, risk_row, task_rows, insight_rows)


def latest_assessment(db: Session, session_id: str) -> Assessment | None:
    stmt = (
        select(Assessment)
        .where(Assessment.session_id == session_id)
        .order_by(Assessment.completed_at.desc(), Assessment.id.desc())
        .limit(1)
    )
    return db.exec(stmt).first()
