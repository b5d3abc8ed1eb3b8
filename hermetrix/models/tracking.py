"""Daily metric logs: period cycles, water intake, steps."""
from datetime import datetime

from sqlmodel import Field, SQLModel

from hermetrix.core.timeutil import utc_now


class PeriodCycle(SQLModel, table=True):
    __tablename__ = "period_cycles"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(default="default", index=True)
    start_date: datetime
    end_date: datetime | None = None
    flow_intensity: str | None = None
    symptoms: str | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=utc_now)


class WaterIntake(SQLModel, table=True):
    __tablename__ = "water_intake"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(default="default", index=True)
    date: datetime = Field(index=True)
    amount_ml: int
    time: str | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=utc_now)


class StepsTracker(SQLModel, table=True):
    __tablename__ = "steps_tracker"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(default="default", index=True)
    date: datetime = Field(index=True)
    steps: int
    distance: float | None = None  # km
    calories_burned: float | None = None
    duration: int | None = None  # minutes
    notes: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
