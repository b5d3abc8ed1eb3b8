from datetime import datetime
from typing import Literal

from .base import CamelModel


class ReportRead(CamelModel):
    id: int
    file_name: str
    file_url: str
    file_type: str
    uploaded_at: datetime
    extracted_data: dict | None = None
    analysis_complete: int


class ReportStatusRead(CamelModel):
    report_id: int
    status: Literal["processing", "complete", "failed"]
    analysis_complete: int
    file_name: str


class ExtractionJobRead(CamelModel):
    id: int
    report_id: int
    status: str
    attempts: int
    duration_ms: int | None = None
    error_message: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class ParameterRead(CamelModel):
    id: int
    report_id: int
    parameter_name: str
    value: str
    unit: str | None = None
    reference_range: str | None = None
    status: str | None = None
    extracted_at: datetime


class TrendPoint(CamelModel):
    report_id: int
    value: float | None = None  # None when the stored value is not numeric
    raw_value: str
    status: str | None = None
    extracted_at: datetime


class ParameterTrend(CamelModel):
    parameter_name: str
    unit: str | None = None
    points: list[TrendPoint]
