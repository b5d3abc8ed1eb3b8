"""Background extraction queue: pending → processing → done | failed."""
from datetime import datetime

from sqlmodel import Field, SQLModel

from hermetrix.core.timeutil import utc_now


class ExtractionJob(SQLModel, table=True):
    __tablename__ = "extraction_jobs"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(default="default", index=True)
    report_id: int = Field(foreign_key="medical_reports.id", index=True)
    status: str = Field(default="pending", index=True)  # pending | processing | done | failed
    attempts: int = 0
    duration_ms: int | None = None
    error_message: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime | None = Field(default_factory=utc_now)
