"""
Report processing pipeline.

upload → PENDING report + pending ExtractionJob (one commit) → background run_extraction_job
→ parameters + COMPLETE, or FAILED. Jobs are persisted, so a restart resumes whatever was
left pending/processing instead of stranding the report.
"""
import logging
import secrets
import time
from pathlib import Path

from sqlalchemy import update
from sqlmodel import Session, select

from hermetrix.core.config import settings, upload_max_bytes
from hermetrix.core.database import engine
from hermetrix.core.timeutil import utc_now
from hermetrix.models import ExtractionJob, MedicalParameter, MedicalReport, ReportStatus
from hermetrix.services import ai_client

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {
    "application/pdf": ".pdf",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
}
UPLOAD_URL_PREFIX = "/uploads/"

STATUS_LABELS = {
    ReportStatus.PENDING: "processing",
    ReportStatus.COMPLETE: "complete",
    ReportStatus.FAILED: "failed",
}


class UploadRejected(ValueError):
    pass


def validate_upload(filename: str | None, content_type: str | None, size: int) -> None:
    if not filename:
        raise UploadRejected("No file uploaded")
    if (content_type or "").lower() not in ALLOWED_MIME_TYPES:
        raise UploadRejected("Invalid file type. Only PDF, JPG, and PNG are allowed.")
    if size == 0:
        raise UploadRejected("File is empty.")
    if size > upload_max_bytes():
        raise UploadRejected(f"File is too large. Maximum size is {settings.upload_max_mb} MB.")


def upload_dir() -> Path:
    path = Path(settings.upload_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def store_upload(content: bytes, filename: str, content_type: str) -> str:
    """Writes the bytes under a randomised name and returns the public URL path."""
    ext = Path(filename).suffix.lower()
    if ext not in (".pdf", ".jpg", ".jpeg", ".png"):
        ext = ALLOWED_MIME_TYPES[content_type.lower()]
    stored_name = f"file-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"
    (upload_dir() / stored_name).write_bytes(content)
    return UPLOAD_URL_PREFIX + stored_name


def stored_path(file_url: str) -> Path:
    return upload_dir() / Path(file_url).name


def create_report(
    db: Session,
    session_id: str,
    file_name: str,
    file_url: str,
    file_type: str,
) -> tuple[MedicalReport, ExtractionJob]:
    report = MedicalReport(
        session_id=session_id,
        file_name=file_name,
        file_url=file_url,
        file_type=file_type.lower(),
        analysis_complete=int(ReportStatus.PENDING),
    )
    db.add(report)
    db.flush()
    job = ExtractionJob(session_id=session_id, report_id=report.id)
    db.add(job)
    db.commit()
    db.refresh(report)
    db.refresh(job)
    return report, job


def status_label(report: MedicalReport) -> str:
    return STATUS_LABELS[report.status]


def latest_report(db: Session, session_id: str) -> MedicalReport | None:
    stmt = (
        select(MedicalReport)
        .where(MedicalReport.session_id == session_id)
        .order_by(MedicalReport.uploaded_at.desc(), MedicalReport.id.desc())
        .limit(1)
    )
    return db.exec(stmt).first()


def _claim_job(db: Session, job_id: int) -> bool:
    """pending → processing as one conditional UPDATE; False when another runner got there first."""
    stmt = (
        update(ExtractionJob)
        .where(ExtractionJob.id == job_id, ExtractionJob.status == "pending")
        .values(status="processing", attempts=ExtractionJob.attempts + 1, updated_at=utc_now())
    )
    claimed = db.connection().execute(stmt).rowcount == 1
    db.commit()
    return claimed


def run_extraction_job(job_id: int) -> None:
    """Background task. Never raises: every failure ends as a FAILED report and a failed job."""
    t0 = time.perf_counter()
    with Session(engine) as db:
        job = db.get(ExtractionJob, job_id)
        if job is None:
            logger.warning("Extraction job %s not found", job_id)
            return
        if job.status != "pending":
            return
        report = db.get(MedicalReport, job.report_id)
        if report is None or report.status is not ReportStatus.PENDING:
            # Terminal already (or gone); the pipeline never moves a report back to PENDING
            job.status = "done"
            job.updated_at = utc_now()
            db.add(job)
            db.commit()
            return
        report_id = report.id
        if not _claim_job(db, job_id):
            logger.info("Extraction job %s already claimed by another runner", job_id)
            return
        db.refresh(job)
        db.refresh(report)

        try:
            content = stored_path(report.file_url).read_bytes()
            payload, result = ai_client.extract_parameters(content, report.file_type)
            report.extracted_data = payload
            for p in result.parameters:
                db.add(
                    MedicalParameter(
                        session_id=report.session_id,
                        report_id=report_id,
                        parameter_name=p.name,
                        value=p.value,
                        unit=p.unit,
                        reference_range=p.reference_range,
                        status=p.status,
                    )
                )
            report.mark(ReportStatus.COMPLETE)
            job.status = "done"
            job.error_message = None
            job.duration_ms = int((time.perf_counter() - t0) * 1000)
            job.updated_at = utc_now()
            db.add(report)
            db.add(job)
            db.commit()
            logger.info(
                "Extraction complete: report_id=%s parameters=%s duration_ms=%s",
                report_id,
                len(result.parameters),
                job.duration_ms,
            )
        except Exception as e:
            db.rollback()
            logger.exception("Background extraction failed: report_id=%s job_id=%s", report_id, job_id)
            report = db.get(MedicalReport, report_id)
            job = db.get(ExtractionJob, job_id)
            report.mark(ReportStatus.FAILED)
            job.status = "failed"
            job.error_message = (str(e) or type(e).__name__)[:500]
            job.duration_ms = int((time.perf_counter() - t0) * 1000)
            job.updated_at = utc_now()
            db.add(report)
            db.add(job)
            db.commit()


def requeue_interrupted_jobs() -> int:
    """
    Jobs still 'processing' when the process starts were cut off by a restart; put them back to
    'pending'. Must run before requests are served, so no live runner is holding one of them.
    """
    with Session(engine) as db:
        stmt = (
            update(ExtractionJob)
            .where(ExtractionJob.status == "processing")
            .values(status="pending", updated_at=utc_now())
        )
        count = db.connection().execute(stmt).rowcount
        db.commit()
    if count:
        logger.info("Re-queued %s interrupted extraction job(s)", count)
    return count


def resume_unfinished_jobs() -> int:
    """Runs every pending job. Returns how many were picked up."""
    with Session(engine) as db:
        stmt = select(ExtractionJob.id).where(ExtractionJob.status == "pending").order_by(ExtractionJob.id)
        job_ids = list(db.exec(stmt).all())
    if job_ids:
        logger.info("Resuming %s unfinished extraction job(s)", len(job_ids))
    for job_id in job_ids:
        run_extraction_job(job_id)
    return len(job_ids)
