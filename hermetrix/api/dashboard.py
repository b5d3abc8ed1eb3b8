"""Dashboard reads: risk score, tasks, insights, parameters and their trends."""
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from hermetrix.api.deps import get_session_id
from hermetrix.core.database import get_db
from hermetrix.models import DailyTask, Insight, MedicalParameter, RiskScore
from hermetrix.schemas import DailyTaskRead, InsightRead, ParameterRead, ParameterTrend, RiskScoreRead, TaskUpdate
from hermetrix.services.report_pipeline import latest_report
from hermetrix.services.trends import parameter_trends

router = APIRouter(tags=["dashboard"])


@router.get("/risk-score", response_model=RiskScoreRead | None)
def get_risk_score(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    stmt = (
        select(RiskScore)
        .where(RiskScore.session_id == session_id)
        .order_by(RiskScore.calculated_at.desc(), RiskScore.id.desc())
        .limit(1)
    )
    return db.exec(stmt).first()


@router.get("/tasks", response_model=list[DailyTaskRead])
def list_tasks(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    stmt = (
        select(DailyTask)
        .where(DailyTask.session_id == session_id)
        .order_by(DailyTask.created_at.desc(), DailyTask.id.desc())
    )
    return list(db.exec(stmt).all())


@router.patch("/tasks/{task_id}", response_model=DailyTaskRead)
def update_task(
    task_id: int,
    body: TaskUpdate,
    session_id: str = Depends(get_session_id),
    db: Session = Depends(get_db),
):
    task = db.get(DailyTask, task_id)
    if not task or task.session_id != session_id:
        raise HTTPException(status_code=404, detail="Task not found")
    task.completed = 1 if body.completed else 0
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


@router.get("/insights", response_model=list[InsightRead])
def list_insights(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    stmt = (
        select(Insight)
        .where(Insight.session_id == session_id)
        .order_by(Insight.created_at.desc(), Insight.id.desc())
    )
    return list(db.exec(stmt).all())


@router.get("/parameters/latest", response_model=list[ParameterRead])
def latest_parameters(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    report = latest_report(db, session_id)
    if report is None:
        return []
    stmt = select(MedicalParameter).where(MedicalParameter.report_id == report.id).order_by(MedicalParameter.id)
    return list(db.exec(stmt).all())


@router.get("/parameters/all", response_model=list[ParameterRead])
def all_parameters(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    stmt = (
        select(MedicalParameter)
        .where(MedicalParameter.session_id == session_id)
        .order_by(MedicalParameter.extracted_at, MedicalParameter.id)
    )
    return list(db.exec(stmt).all())


@router.get("/parameters/trends", response_model=list[ParameterTrend])
def trends(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    return parameter_trends(db, session_id)


@router.get("/parameters/{report_id}", response_model=list[ParameterRead])
def report_parameters(report_id: int, session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    stmt = (
        select(MedicalParameter)
        .where(MedicalParameter.report_id == report_id, MedicalParameter.session_id == session_id)
        .order_by(MedicalParameter.id)
    )
    return list(db.exec(stmt).all())
