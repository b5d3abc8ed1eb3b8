import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlmodel import Session

from hermetrix.api.deps import get_session_id, require_ai_configured
from hermetrix.api.errors import error_response
from hermetrix.core.database import get_db
from hermetrix.core.rate_limit import RATE_LIMIT_STR, limiter
from hermetrix.schemas import (
    AssessmentCreate,
    AssessmentRead,
    AssessmentResult,
    DailyTaskRead,
    InsightRead,
    QuestionRead,
    RiskScoreRead,
)
from hermetrix.services.assessment import (
    AssessmentAIError,
    NoReportError,
    ReportAnalysisFailed,
    ReportStillProcessing,
    latest_assessment,
    submit_assessment,
)
from hermetrix.services.questionnaire import QUESTIONS

log = logging.getLogger(__name__)

router = APIRouter(prefix="/assessments", tags=["assessments"])


@router.get("/questions", response_model=list[QuestionRead])
def list_questions():
    return QUESTIONS


@router.get("/latest", response_model=AssessmentRead | None)
def get_latest_assessment(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    return latest_assessment(db, session_id)


@router.post("", response_model=AssessmentResult)
@limiter.limit(RATE_LIMIT_STR)
def create_assessment(
    request: Request,
    body: AssessmentCreate,
    _ai=Depends(require_ai_configured),
    session_id: str = Depends(get_session_id),
    db: Session = Depends(get_db),
):
    """
    200: assessment with risk score, tasks and insights.
    202: latest report still processing (poll /reports/{reportId}/status, then resubmit).
    400: no report uploaded. 409: latest report failed analysis. 500: AI failure.
    """
    try:
        outcome = submit_assessment(db, session_id, body.answers)
    except NoReportError as e:
        return error_response(request, 400, str(e), status="no_report")
    except ReportStillProcessing as e:
        return error_response(request, 202, str(e), message=str(e), status="processing", reportId=e.report_id)
    except ReportAnalysisFailed as e:
        return error_response(request, 409, str(e), status="failed", reportId=e.report_id)
    except AssessmentAIError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return AssessmentResult(
        **AssessmentRead.model_validate(outcome.assessment).model_dump(),
        risk_score=RiskScoreRead.model_validate(outcome.risk_score),
        tasks=[DailyTaskRead.model_validate(t) for t in outcome.tasks],
        insights=[InsightRead.model_validate(i) for i in outcome.insights],
    )
