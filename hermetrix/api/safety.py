"""Emergency contacts, SOS alerts and the nearby-hospitals directory."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from hermetrix.api.deps import get_session_id
from hermetrix.core.database import get_db
from hermetrix.core.timeutil import utc_now
from hermetrix.models import EmergencyContact, SosAlert
from hermetrix.schemas import (
    EmergencyContactCreate,
    EmergencyContactRead,
    HospitalRead,
    SosAlertRead,
    SosTrigger,
    SosTriggerResponse,
)
from hermetrix.services.hospitals import search_hospitals

log = logging.getLogger(__name__)

router = APIRouter(tags=["safety"])


def _contacts(db: Session, session_id: str) -> list[EmergencyContact]:
    stmt = (
        select(EmergencyContact)
        .where(EmergencyContact.session_id == session_id)
        .order_by(EmergencyContact.is_primary.desc(), EmergencyContact.id)
    )
    return list(db.exec(stmt).all())


@router.get("/emergency-contacts", response_model=list[EmergencyContactRead])
def list_contacts(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    return _contacts(db, session_id)


@router.post("/emergency-contacts", response_model=EmergencyContactRead)
def create_contact(
    body: EmergencyContactCreate,
    session_id: str = Depends(get_session_id),
    db: Session = Depends(get_db),
):
    contact = EmergencyContact(
        session_id=session_id,
        name=body.name,
        phone=body.phone,
        relationship=(body.relationship or "").strip() or None,
        is_primary=1 if body.is_primary else 0,
    )
    db.add(contact)
    db.commit()
    db.refresh(contact)
    return contact


@router.delete("/emergency-contacts/{contact_id}")
def delete_contact(contact_id: int, session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    contact = db.get(EmergencyContact, contact_id)
    if not contact or contact.session_id != session_id:
        raise HTTPException(status_code=404, detail="Emergency contact not found")
    db.delete(contact)
    db.commit()
    return {"success": True}


@router.get("/sos-alerts", response_model=list[SosAlertRead])
def list_alerts(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    stmt = (
        select(SosAlert)
        .where(SosAlert.session_id == session_id)
        .order_by(SosAlert.created_at.desc(), SosAlert.id.desc())
    )
    return list(db.exec(stmt).all())


@router.post("/sos-trigger", response_model=SosTriggerResponse)
def trigger_sos(
    body: SosTrigger | None = None,
    session_id: str = Depends(get_session_id),
    db: Session = Depends(get_db),
):
    body = body or SosTrigger()
    alert = SosAlert(
        session_id=session_id,
        location=(body.location or "").strip() or "Unknown location",
        severity=(body.severity or "").strip() or "high",
        status="pending",
    )
    db.add(alert)
    db.commit()
    db.refresh(alert)
    contacts = _contacts(db, session_id)
    # Delivery (SMS/call) is not wired up; the count is what the client shows
    log.warning("SOS alert %s triggered. Notifying %s emergency contacts", alert.id, len(contacts))
    return SosTriggerResponse(alert=SosAlertRead.model_validate(alert), contacts_notified=len(contacts))


@router.patch("/sos-alerts/{alert_id}/resolve", response_model=SosAlertRead)
def resolve_alert(alert_id: int, session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    alert = db.get(SosAlert, alert_id)
    if not alert or alert.session_id != session_id:
        raise HTTPException(status_code=404, detail="SOS alert not found")
    if alert.status != "resolved":
        alert.status = "resolved"
        alert.resolved_at = utc_now()
        db.add(alert)
        db.commit()
        db.refresh(alert)
    return alert


@router.get("/hospitals", response_model=list[HospitalRead])
def list_hospitals(
    q: str | None = None,
    emergency_only: bool = Query(False, alias="emergencyOnly"),
):
    return search_hospitals(q, emergency_only)
