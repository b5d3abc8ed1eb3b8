"""Parameter history across reports for the trend viewer."""
import re

from sqlmodel import Session, select

from hermetrix.models import MedicalParameter

_NUMBER_RE = re.compile(
    r"(?P<grouped>[-+]?\d{1,3}(?:,\d{3})+(?!\d)(?:\.\d+)?)"  # 250,000 or 1,234.5
    r"|(?P<plain>[-+]?\d+(?:[.,]\d+)?)"  # 5.2 or 1,8
)


def numeric_value(raw: str | None) -> float | None:
    """
    First number in the stored text ("5.2", "<0.5", "250,000 /uL", "1,8 mIU/L"); None when there is none.
    A comma followed by groups of exactly three digits is a thousands separator, otherwise a decimal mark.
    """
    match = _NUMBER_RE.search(raw or "")
    if not match:
        return None
    if match.group("grouped"):
        return float(match.group("grouped").replace(",", ""))
    return float(match.group("plain").replace(",", "."))


def parameter_trends(db: Session, session_id: str) -> list[dict]:
    stmt = (
        select(MedicalParameter)
        .where(MedicalParameter.session_id == session_id)
        .order_by(MedicalParameter.extracted_at, MedicalParameter.id)
    )
    series: dict[str, dict] = {}
    for p in db.exec(stmt).all():
        key = p.parameter_name.strip().lower()
        entry = series.setdefault(key, {"parameter_name": p.parameter_name.strip(), "unit": None, "points": []})
        if p.unit:
            entry["unit"] = p.unit
        entry["points"].append(
            {
                "report_id": p.report_id,
                "value": numeric_value(p.value),
                "raw_value": p.value,
                "status": p.status,
                "extracted_at": p.extracted_at,
            }
        )
    return sorted(series.values(), key=lambda s: s["parameter_name"].lower())
