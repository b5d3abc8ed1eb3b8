from datetime import datetime

from pydantic import field_validator

from .base import CamelModel


class AssessmentCreate(CamelModel):
    answers: dict[str, str | int | float]

    @field_validator("answers")
    @classmethod
    def answers_not_empty(cls, v: dict) -> dict:
        if not v:
            raise ValueError("Valid answers object is required")
        return v


class AssessmentRead(CamelModel):
    id: int
    report_id: int | None = None
    answers: dict
    completed_at: datetime


class RiskScoreRead(CamelModel):
    id: int
    report_id: int | None = None
    assessment_id: int | None = None
    score: int
    risk_level: str
    interpretation: str
    calculated_at: datetime


class DailyTaskRead(CamelModel):
    id: int
    report_id: int | None = None
    task_type: str
    description: str
    target: str | None = None
    completed: int
    created_at: datetime


class TaskUpdate(CamelModel):
    completed: bool


class InsightRead(CamelModel):
    id: int
    report_id: int | None = None
    category: str
    title: str
    content: str
    severity: str | None = None
    created_at: datetime


class AssessmentResult(AssessmentRead):
    status: str = "complete"
    risk_score: RiskScoreRead
    tasks: list[DailyTaskRead]
    insights: list[InsightRead]


class QuestionRead(CamelModel):
    id: str
    question: str
    type: str  # choice | scale
    options: list[str] | None = None
    min: int | None = None
    max: int | None = None
    label: str | None = None
