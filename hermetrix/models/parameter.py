from datetime import datetime

from sqlmodel import Field, SQLModel

from hermetrix.core.timeutil import utc_now


class MedicalParameter(SQLModel, table=True):
    __tablename__ = "medical_parameters"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(default="default", index=True)
    report_id: int = Field(foreign_key="medical_reports.id", index=True)
    parameter_name: str
    value: str  # kept as text; may hold a numeric string
    unit: str | None = None
    reference_range: str | None = None
    status: str | None = None  # Normal | High | Low
    extracted_at: datetime = Field(default_factory=utc_now)
