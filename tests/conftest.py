"""Pytest fixtures: test client, in-memory SQLite, fake model calls."""
import os
import tempfile
import uuid

import pytest
from fastapi.testclient import TestClient

# Must be set before hermetrix.main is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("OPENAI_API_KEY", "sk-test-dummy")
os.environ.setdefault("OPENAI_API_KEYS", "")
# Every test shares one limiter; keep it out of the way
os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "1000")
os.environ.setdefault("UPLOAD_RATE_LIMIT_PER_MINUTE", "1000")
os.environ.setdefault("RESUME_JOBS_ON_STARTUP", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="hermetrix-uploads-"))

from hermetrix.core.config import settings
from hermetrix.main import app
from hermetrix.schemas.ai import ExtractionResult
from hermetrix.services import ai_client

EXTRACTION_PAYLOAD = {
    "parameters": [
        {"name": "TSH", "value": "5.8", "unit": "mIU/L", "referenceRange": "0.4-4.0", "status": "High"},
        {"name": "LH", "value": "12.1", "unit": "mIU/mL", "referenceRange": "2-10", "status": "High"},
        {"name": "Vitamin D", "value": "18", "unit": "ng/mL", "referenceRange": "30-100", "status": "Low"},
    ],
    "reportType": "Hormone Panel",
    "testDate": "2024-03-01",
    "summary": "Elevated TSH and LH; low vitamin D.",
}

PDF_BYTES = b"%PDF-1.4\n% fake lab report\n"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def fake_extract(content: bytes, mime_type: str):
    return EXTRACTION_PAYLOAD, ExtractionResult.model_validate(EXTRACTION_PAYLOAD)


@pytest.fixture(scope="function")
def client():
    """TestClient; the lifespan creates the tables in the in-memory DB."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session_headers():
    """Fresh X-Session-ID per test so rows from other tests never leak into "latest" queries."""
    return {"X-Session-ID": f"test-{uuid.uuid4().hex[:12]}"}


@pytest.fixture
def extraction_ok(monkeypatch):
    monkeypatch.setattr(ai_client, "extract_parameters", fake_extract)


@pytest.fixture
def ai_unconfigured(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "")
    monkeypatch.setattr(settings, "openai_api_keys", "")


@pytest.fixture
def uploaded_report(client, session_headers, extraction_ok):
    """A report that went through extraction successfully (background task runs inside the request)."""
    r = client.post(
        "/reports/upload",
        files={"file": ("labs.pdf", PDF_BYTES, "application/pdf")},
        headers=session_headers,
    )
    assert r.status_code == 200, r.text
    return r.json()
