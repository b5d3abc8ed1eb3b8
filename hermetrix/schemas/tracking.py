from datetime import datetime

from pydantic import field_validator, model_validator

from hermetrix.core.timeutil import as_utc

from .base import CamelModel


class PeriodCycleCreate(CamelModel):
    start_date: datetime
    end_date: datetime | None = None
    flow_intensity: str | None = None
    symptoms: str | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def end_not_before_start(self):
        # Mixed naive/aware input is compared in UTC
        if self.end_date is not None and as_utc(self.end_date) < as_utc(self.start_date):
            raise ValueError("End date cannot be before start date")
        return self


class PeriodCycleRead(PeriodCycleCreate):
    id: int
    created_at: datetime


class WaterIntakeCreate(CamelModel):
    date: datetime | None = None  # defaults to now
    amount_ml: int
    time: str | None = None
    notes: str | None = None

    @field_validator("amount_ml")
    @classmethod
    def positive_amount(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Amount is required")
        return v


class WaterIntakeRead(CamelModel):
    id: int
    date: datetime
    amount_ml: int
    time: str | None = None
    notes: str | None = None
    created_at: datetime


class StepsCreate(CamelModel):
    date: datetime | None = None
    steps: int
    distance: float | None = None
    calories_burned: float | None = None
    duration: int | None = None
    notes: str | None = None

    @field_validator("steps")
    @classmethod
    def positive_steps(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Steps is required")
        return v


class StepsRead(CamelModel):
    id: int
    date: datetime
    steps: int
    distance: float | None = None
    calories_burned: float | None = None
    duration: int | None = None
    notes: str | None = None
    created_at: datetime


class DailyTotal(CamelModel):
    total: int
