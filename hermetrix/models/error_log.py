"""Server-side record of unhandled exceptions (the client only sees a generic message)."""
from datetime import datetime

from sqlmodel import Field, SQLModel

from hermetrix.core.timeutil import utc_now


class ErrorLog(SQLModel, table=True):
    __tablename__ = "error_logs"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str | None = Field(default=None, index=True)
    endpoint: str | None = None
    method: str | None = None
    error_message: str | None = None
    stack_trace: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
