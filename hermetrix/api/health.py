import time

from fastapi import APIRouter

from hermetrix.core.config import is_openai_configured
from hermetrix.core.database import ping_db
from hermetrix.services import ai_client

router = APIRouter(tags=["ops"])

# /health/ai spends a real (one token) completion, so the result is cached for a minute
_ai_health_cache: dict = {"ts": 0.0, "data": None}
_AI_CACHE_TTL = 60.0


@router.get("/health")
def health():
    db_ok = ping_db()
    return {
        "status": "ok" if db_ok else "degraded",
        "openaiConfigured": is_openai_configured(),
        "database": "ok" if db_ok else "unavailable",
    }


@router.get("/health/ai")
def health_ai():
    if not is_openai_configured():
        return {"status": "not_configured", "provider": "openai"}
    now = time.time()
    if _ai_health_cache["data"] is not None and (now - _ai_health_cache["ts"]) < _AI_CACHE_TTL:
        return _ai_health_cache["data"]
    ok, latency_ms, err = ai_client.ping_openai()
    data = {"status": "ok" if ok else "fail", "provider": "openai", "latencyMs": latency_ms}
    if not ok:
        data["error"] = err or "Unknown error"
    _ai_health_cache["ts"] = now
    _ai_health_cache["data"] = data
    return data
