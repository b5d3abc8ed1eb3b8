"""
Per-IP rate limiting (SlowAPI); honours X-Forwarded-For behind a proxy.
Uploads get their own, tighter budget: each one costs a vision/extraction call.
"""
from fastapi import Request

from slowapi import Limiter

from .config import settings


def _get_client_ip(request: Request) -> str:
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "127.0.0.1"


limiter = Limiter(key_func=_get_client_ip, enabled=settings.rate_limit_enabled)

RATE_LIMIT_STR = f"{settings.rate_limit_per_minute}/minute"
UPLOAD_RATE_LIMIT_STR = f"{settings.upload_rate_limit_per_minute}/minute"
