from datetime import datetime

from pydantic import field_validator

from .base import CamelModel


class EmergencyContactCreate(CamelModel):
    name: str
    phone: str
    relationship: str | None = None
    is_primary: bool = False

    @field_validator("name", "phone")
    @classmethod
    def required_text(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Name and phone are required")
        return v


class EmergencyContactRead(CamelModel):
    id: int
    name: str
    phone: str
    relationship: str | None = None
    is_primary: int
    created_at: datetime


class SosTrigger(CamelModel):
    location: str | None = None
    severity: str | None = None


class SosAlertRead(CamelModel):
    id: int
    location: str | None = None
    severity: str
    status: str
    created_at: datetime
    resolved_at: datetime | None = None


class SosTriggerResponse(CamelModel):
    alert: SosAlertRead
    contacts_notified: int


class HospitalRead(CamelModel):
    id: str
    name: str
    distance: float  # km
    address: str
    phone: str
    emergency: bool
    rating: float
