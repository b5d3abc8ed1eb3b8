"""UTC helpers behind every stored timestamp."""
from datetime import datetime, timedelta, timezone

from hermetrix.core.timeutil import as_utc, utc_day_bounds, utc_now
from hermetrix.models import ChatMessage, ExtractionJob, MedicalReport


def test_utc_now_is_aware():
    assert utc_now().tzinfo is not None
    assert utc_now().utcoffset() == timedelta(0)


def test_as_utc():
    assert as_utc(datetime(2026, 1, 1, 12)) == datetime(2026, 1, 1, 12, tzinfo=timezone.utc)
    plus3 = timezone(timedelta(hours=3))
    assert as_utc(datetime(2026, 1, 1, 2, tzinfo=plus3)) == datetime(2025, 12, 31, 23, tzinfo=timezone.utc)


def test_day_bounds():
    start, end = utc_day_bounds(datetime(2026, 3, 9, 23, 59, tzinfo=timezone.utc))
    assert start == datetime(2026, 3, 9, tzinfo=timezone.utc)
    assert end - start == timedelta(days=1)


def test_model_defaults_are_aware():
    report = MedicalReport(file_name="a.pdf", file_url="/uploads/a.pdf", file_type="application/pdf")
    assert report.uploaded_at.tzinfo is not None
    assert ExtractionJob(report_id=1).created_at.tzinfo is not None
    assert ChatMessage(role="user", content="hi").created_at.tzinfo is not None
