"""Uploaded medical report and its processing status: pending (0) → complete (1) | failed (-1)."""
from datetime import datetime
from enum import IntEnum

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from hermetrix.core.timeutil import utc_now


class ReportStatus(IntEnum):
    FAILED = -1
    PENDING = 0
    COMPLETE = 1


class InvalidStatusTransition(Exception):
    """Raised when a report that already reached a terminal status is moved again."""


class MedicalReport(SQLModel, table=True):
    __tablename__ = "medical_reports"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(default="default", index=True)
    file_name: str
    file_url: str  # /uploads/<stored name>
    file_type: str  # MIME type
    uploaded_at: datetime = Field(default_factory=utc_now, index=True)
    extracted_data: dict | None = Field(default=None, sa_column=Column(JSON, nullable=True))
    analysis_complete: int = Field(default=int(ReportStatus.PENDING))

    @property
    def status(self) -> ReportStatus:
        return ReportStatus(self.analysis_complete)

    def mark(self, new_status: ReportStatus) -> None:
        """Only PENDING may move, and only to COMPLETE or FAILED."""
        if self.status is not ReportStatus.PENDING or new_status is ReportStatus.PENDING:
            raise InvalidStatusTransition(
                f"report {self.id}: {self.status.name} -> {new_status.name} is not allowed"
            )
        self.analysis_complete = int(new_status)
