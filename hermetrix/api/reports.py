import logging

from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, Request, UploadFile
from sqlmodel import Session, select

from hermetrix.api.deps import get_session_id, require_ai_configured
from hermetrix.core.database import get_db
from hermetrix.core.rate_limit import UPLOAD_RATE_LIMIT_STR, limiter
from hermetrix.models import ExtractionJob, MedicalReport
from hermetrix.schemas import ExtractionJobRead, ReportRead, ReportStatusRead
from hermetrix.services.report_pipeline import (
    UploadRejected,
    create_report,
    run_extraction_job,
    status_label,
    store_upload,
    stored_path,
    validate_upload,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


def _get_report_or_404(db: Session, session_id: str, report_id: int) -> MedicalReport:
    report = db.get(MedicalReport, report_id)
    if not report or report.session_id != session_id:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


@router.post("/upload", response_model=ReportRead)
@limiter.limit(UPLOAD_RATE_LIMIT_STR)
async def upload_report(
    request: Request,
    background_tasks: BackgroundTasks,
    file: UploadFile | None = File(None),
    _ai=Depends(require_ai_configured),
    session_id: str = Depends(get_session_id),
    db: Session = Depends(get_db),
):
    """multipart/form-data, field 'file'. Returns the PENDING report; extraction runs after the response."""
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")
    log.info("reports/upload: filename=%s content_type=%s", file.filename, file.content_type)
    try:
        content = await file.read()
    except Exception as e:
        log.exception("reports/upload file read error: %s", e)
        raise HTTPException(status_code=400, detail="Could not read file.")
    try:
        validate_upload(file.filename, file.content_type, len(content))
    except UploadRejected as e:
        raise HTTPException(status_code=400, detail=str(e))

    file_url = store_upload(content, file.filename, file.content_type)
    try:
        report, job = create_report(db, session_id, file.filename, file_url, file.content_type)
    except Exception:
        # No row points at the file; do not leave it behind
        stored_path(file_url).unlink(missing_ok=True)
        raise
    background_tasks.add_task(run_extraction_job, job.id)
    log.info("Report %s stored at %s, extraction job %s queued", report.id, file_url, job.id)
    return report


@router.get("", response_model=list[ReportRead])
def list_reports(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    stmt = (
        select(MedicalReport)
        .where(MedicalReport.session_id == session_id)
        .order_by(MedicalReport.uploaded_at.desc(), MedicalReport.id.desc())
    )
    return list(db.exec(stmt).all())


@router.get("/{report_id}", response_model=ReportRead)
def get_report(report_id: int, session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    return _get_report_or_404(db, session_id, report_id)


@router.get("/{report_id}/status", response_model=ReportStatusRead)
def report_status(report_id: int, session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    """Pure read of the tri-state flag; safe to poll."""
    report = _get_report_or_404(db, session_id, report_id)
    return ReportStatusRead(
        report_id=report.id,
        status=status_label(report),
        analysis_complete=report.analysis_complete,
        file_name=report.file_name,
    )


@router.get("/{report_id}/jobs", response_model=list[ExtractionJobRead])
def report_jobs(report_id: int, session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    _get_report_or_404(db, session_id, report_id)
    stmt = select(ExtractionJob).where(ExtractionJob.report_id == report_id).order_by(ExtractionJob.id.desc())
    return list(db.exec(stmt).all())
