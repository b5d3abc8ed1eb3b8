from datetime import datetime

from sqlmodel import Field, SQLModel

from hermetrix.core.timeutil import utc_now


class Insight(SQLModel, table=True):
    __tablename__ = "insights"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(default="default", index=True)
    report_id: int | None = Field(default=None, foreign_key="medical_reports.id", index=True)
    category: str
    title: str
    content: str
    severity: str | None = None  # Info | Warning | Important
    created_at: datetime = Field(default_factory=utc_now)
