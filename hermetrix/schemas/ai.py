"""Typed results parsed out of the model's JSON replies."""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

RiskLevel = Literal["Low", "Moderate", "High"]


def level_for_score(score: int) -> str:
    if score < 34:
        return "Low"
    if score < 67:
        return "Moderate"
    return "High"


class _Lenient(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ExtractedParameter(_Lenient):
    name: str = "Unknown"
    value: str = "0"
    unit: str | None = None
    reference_range: str | None = Field(default=None, alias="referenceRange")
    status: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def default_name(cls, v):
        v = "" if v is None else str(v).strip()
        return v or "Unknown"

    @field_validator("value", mode="before")
    @classmethod
    def default_value(cls, v):
        v = "" if v is None else str(v).strip()
        return v or "0"

    @field_validator("unit", "reference_range", "status", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class ExtractionResult(_Lenient):
    parameters: list[ExtractedParameter] = []
    report_type: str | None = Field(default=None, alias="reportType")
    test_date: str | None = Field(default=None, alias="testDate")
    summary: str | None = None

    @field_validator("parameters", mode="before")
    @classmethod
    def list_or_empty(cls, v):
        return v if isinstance(v, list) else []


class RiskResult(_Lenient):
    score: int
    risk_level: RiskLevel = Field(alias="riskLevel")
    interpretation: str

    @model_validator(mode="before")
    @classmethod
    def normalise(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        raw_score = data.get("score")
        try:
            score = int(round(float(raw_score)))
        except (TypeError, ValueError):
            return data  # let field validation report it
        score = max(0, min(100, score))
        data["score"] = score
        raw_level = str(data.get("riskLevel", data.get("risk_level")) or "").strip().lower()
        levels = {"low": "Low", "moderate": "Moderate", "medium": "Moderate", "high": "High"}
        data["riskLevel"] = levels.get(raw_level) or level_for_score(score)
        data.pop("risk_level", None)
        return data


class TaskSuggestion(_Lenient):
    task_type: str = Field(default="general", alias="taskType")
    description: str
    target: str | None = None

    @field_validator("task_type", mode="before")
    @classmethod
    def default_type(cls, v):
        return (str(v).strip().lower() if v else "") or "general"

    @field_validator("target", mode="before")
    @classmethod
    def target_text(cls, v):
        if v is None:
            return None
        return str(v).strip() or None


class InsightSuggestion(_Lenient):
    category: str = "General"
    title: str
    content: str
    severity: str | None = None
