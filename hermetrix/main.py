import logging
import time
import traceback
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from threading import Thread

from dotenv import load_dotenv

# .env is loaded from the project root wherever uvicorn is started from
_PROJ_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJ_ROOT / ".env")

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from sqlmodel import Session

from hermetrix.api.assessments import router as assessments_router
from hermetrix.api.chat import router as chat_router
from hermetrix.api.dashboard import router as dashboard_router
from hermetrix.api.deps import get_session_id
from hermetrix.api.errors import error_response
from hermetrix.api.health import router as health_router
from hermetrix.api.reports import router as reports_router
from hermetrix.api.safety import router as safety_router
from hermetrix.api.tracking import router as tracking_router
from hermetrix.core.config import is_openai_configured, settings
from hermetrix.core.database import engine, init_db
from hermetrix.core.rate_limit import limiter
from hermetrix.logging import setup_logging
from hermetrix.models import ErrorLog
from hermetrix.services.report_pipeline import (
    UPLOAD_URL_PREFIX,
    requeue_interrupted_jobs,
    resume_unfinished_jobs,
    upload_dir,
)

setup_logging(level=settings.log_level)
log = logging.getLogger("hermetrix")


def _cors_origins_list() -> list[str]:
    if not settings.cors_origins or settings.cors_origins.strip() == "*":
        return ["*"]
    return [o.strip() for o in settings.cors_origins.split(",") if o.strip()]


def _resume_jobs() -> None:
    try:
        resume_unfinished_jobs()
    except Exception:
        log.exception("Resuming extraction jobs failed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    upload_dir()
    log.info("OPENAI_API_KEY loaded: %s", "yes" if is_openai_configured() else "NO (add OPENAI_API_KEY=sk-... to .env)")
    if settings.resume_jobs_on_startup:
        # Synchronous: nothing may be claimed by a request before stale jobs are re-queued
        requeue_interrupted_jobs()
        Thread(target=_resume_jobs, name="resume-extraction-jobs", daemon=True).start()
    yield


app = FastAPI(
    title="HERmetrix API",
    description="Women's health tracking: report extraction, risk assessment, daily tasks and insights",
    lifespan=lifespan,
)
app.state.limiter = limiter


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    log.warning("Rate limit exceeded: path=%s client=%s", request.url.path, request.client.host if request.client else None)
    return error_response(request, 429, "Too many requests. Please wait a minute.")


def _validation_error_message(exc: RequestValidationError) -> str:
    errs = exc.errors()
    if not errs:
        return "Invalid request."
    first = errs[0]
    loc = list(first.get("loc") or [])
    field = str(loc[-1]) if loc else None
    if first.get("type") == "missing":
        if field == "body":
            return "Request body is required."
        return f"{field} is required" if field else "Missing field."
    if first.get("type") == "json_invalid":
        return "Malformed JSON body."
    msg = first.get("msg") or "Invalid request."
    # Messages raised from our own validators arrive as "Value error, <message>"
    return msg.removeprefix("Value error, ")


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.warning(
        "Request validation error (400): path=%s method=%s detail=%s",
        request.url.path,
        request.method,
        exc.errors(),
    )
    return error_response(request, 400, _validation_error_message(exc))


app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)


@app.exception_handler(HTTPException)
def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return error_response(request, exc.status_code, exc.detail if isinstance(exc.detail, str) else str(exc.detail))


@app.exception_handler(Exception)
def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled exception: path=%s %s", request.url.path, exc)
    try:
        with Session(engine) as db:
            db.add(
                ErrorLog(
                    session_id=get_session_id(request.headers.get("x-session-id")),
                    endpoint=request.url.path,
                    method=request.method,
                    error_message=str(exc)[:2000],
                    stack_trace="".join(traceback.format_exception(exc))[:10000],
                )
            )
            db.commit()
    except Exception as e:
        log.warning("ErrorLog write failed: %s", e)
    return error_response(request, 500, "Internal server error.")


@app.middleware("http")
async def request_id_and_latency(request: Request, call_next):
    request.state.request_id = str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    latency_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = request.state.request_id
    log.info(
        "request_id=%s method=%s path=%s status=%s latency_ms=%.2f",
        request.state.request_id,
        request.method,
        request.url.path,
        response.status_code,
        latency_ms,
    )
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(health_router)
app.include_router(reports_router)
app.include_router(assessments_router)
app.include_router(dashboard_router)
app.include_router(safety_router)
app.include_router(chat_router)
app.include_router(tracking_router)

app.mount(UPLOAD_URL_PREFIX.rstrip("/"), StaticFiles(directory=str(upload_dir())), name="uploads")
