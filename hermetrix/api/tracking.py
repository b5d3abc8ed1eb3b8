"""Period cycles, water intake and steps logging."""
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlmodel import Session, func, select

from hermetrix.api.deps import get_session_id
from hermetrix.core.database import get_db
from hermetrix.core.timeutil import as_utc, utc_day_bounds, utc_now
from hermetrix.models import PeriodCycle, StepsTracker, WaterIntake
from hermetrix.schemas import (
    DailyTotal,
    PeriodCycleCreate,
    PeriodCycleRead,
    StepsCreate,
    StepsRead,
    WaterIntakeCreate,
    WaterIntakeRead,
)

router = APIRouter(tags=["tracking"])


def _utc(dt: datetime | None) -> datetime:
    """Missing timestamps mean now."""
    return utc_now() if dt is None else as_utc(dt)


@router.post("/period-cycles", response_model=PeriodCycleRead)
def create_period_cycle(
    body: PeriodCycleCreate,
    session_id: str = Depends(get_session_id),
    db: Session = Depends(get_db),
):
    cycle = PeriodCycle(
        session_id=session_id,
        start_date=_utc(body.start_date),
        end_date=_utc(body.end_date) if body.end_date else None,
        flow_intensity=body.flow_intensity,
        symptoms=body.symptoms,
        notes=body.notes,
    )
    db.add(cycle)
    db.commit()
    db.refresh(cycle)
    return cycle


@router.get("/period-cycles", response_model=list[PeriodCycleRead])
def list_period_cycles(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    stmt = (
        select(PeriodCycle)
        .where(PeriodCycle.session_id == session_id)
        .order_by(PeriodCycle.start_date.desc(), PeriodCycle.id.desc())
    )
    return list(db.exec(stmt).all())


@router.post("/water-intake", response_model=WaterIntakeRead)
def log_water(body: WaterIntakeCreate, session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    intake = WaterIntake(
        session_id=session_id,
        date=_utc(body.date),
        amount_ml=body.amount_ml,
        time=body.time,
        notes=body.notes,
    )
    db.add(intake)
    db.commit()
    db.refresh(intake)
    return intake


@router.get("/water-intake", response_model=list[WaterIntakeRead])
def list_water(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    stmt = (
        select(WaterIntake)
        .where(WaterIntake.session_id == session_id)
        .order_by(WaterIntake.date.desc(), WaterIntake.id.desc())
    )
    return list(db.exec(stmt).all())


@router.get("/water-intake/today-total", response_model=DailyTotal)
def water_today_total(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    start, end = utc_day_bounds()
    total = db.exec(
        select(func.coalesce(func.sum(WaterIntake.amount_ml), 0)).where(
            WaterIntake.session_id == session_id,
            WaterIntake.date >= start,
            WaterIntake.date < end,
        )
    ).one()
    return DailyTotal(total=int(total or 0))


@router.post("/steps-tracker", response_model=StepsRead)
def log_steps(body: StepsCreate, session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    entry = StepsTracker(
        session_id=session_id,
        date=_utc(body.date),
        steps=body.steps,
        distance=body.distance,
        calories_burned=body.calories_burned,
        duration=body.duration,
        notes=body.notes,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


@router.get("/steps-tracker", response_model=list[StepsRead])
def list_steps(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    stmt = (
        select(StepsTracker)
        .where(StepsTracker.session_id == session_id)
        .order_by(StepsTracker.date.desc(), StepsTracker.id.desc())
    )
    return list(db.exec(stmt).all())


@router.get("/steps-tracker/today-total", response_model=DailyTotal)
def steps_today_total(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    start, end = utc_day_bounds()
    total = db.exec(
        select(func.coalesce(func.sum(StepsTracker.steps), 0)).where(
            StepsTracker.session_id == session_id,
            StepsTracker.date >= start,
            StepsTracker.date < end,
        )
    ).one()
    return DailyTotal(total=int(total or 0))
