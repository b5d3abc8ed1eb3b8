"""Emergency contacts and SOS alerts."""
from datetime import datetime

from sqlmodel import Field, SQLModel

from hermetrix.core.timeutil import utc_now


class EmergencyContact(SQLModel, table=True):
    __tablename__ = "emergency_contacts"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(default="default", index=True)
    name: str
    phone: str
    relationship: str | None = None
    is_primary: int = 0
    created_at: datetime = Field(default_factory=utc_now)


class SosAlert(SQLModel, table=True):
    __tablename__ = "sos_alerts"
    id: int | None = Field(default=None, primary_key=True)
    session_id: str = Field(default="default", index=True)
    location: str | None = None
    severity: str = "high"
    status: str = "pending"  # pending | resolved
    created_at: datetime = Field(default_factory=utc_now)
    resolved_at: datetime | None = None
