from datetime import datetime

from sqlmodel import Field, SQLModel

from hermetrix.core.timeutil import utc_now


class DailyTask(SQLModel, table=True):
    __tablename__ = "daily_tasks"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(default="default", index=True)
    report_id: int | None = Field(default=None, foreign_key="medical_reports.id", index=True)
    task_type: str  # water | exercise | medication | protein | sleep | stress | ...
    description: str
    target: str | None = None
    completed: int = 0  # 0 | 1
    created_at: datetime = Field(default_factory=utc_now)
