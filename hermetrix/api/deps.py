from fastapi import Header, HTTPException, status

from hermetrix.core.config import is_openai_configured, settings

MAX_SESSION_ID_LENGTH = 64


def get_session_id(x_session_id: str | None = Header(None, alias="X-Session-ID")) -> str:
    """Every row and every "latest" query is scoped to this value (X-Session-ID)."""
    value = (x_session_id or "").strip()[:MAX_SESSION_ID_LENGTH]
    return value or settings.default_session_id


def require_ai_configured() -> None:
    """Uploads and assessments are refused up front rather than failing mid-pipeline."""
    if not is_openai_configured():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI service not configured. Please add OPENAI_API_KEY.",
        )
