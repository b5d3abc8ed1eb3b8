from datetime import datetime

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from hermetrix.core.timeutil import utc_now


class Assessment(SQLModel, table=True):
    __tablename__ = "assessments"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(default="default", index=True)
    report_id: int | None = Field(default=None, foreign_key="medical_reports.id", index=True)
    # question id -> choice text or scale value
    answers: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    completed_at: datetime = Field(default_factory=utc_now)


class RiskScore(SQLModel, table=True):
    __tablename__ = "risk_scores"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(default="default", index=True)
    report_id: int | None = Field(default=None, foreign_key="medical_reports.id", index=True)
    assessment_id: int | None = Field(default=None, foreign_key="assessments.id", index=True)
    score: int
    risk_level: str  # Low | Moderate | High
    interpretation: str
    calculated_at: datetime = Field(default_factory=utc_now, index=True)
