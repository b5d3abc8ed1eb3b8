from fastapi import Request
from fastapi.responses import JSONResponse


def error_response(request: Request, status_code: int, detail: str, **extra) -> JSONResponse:
    """Uniform error body: {"error", "statusCode", "requestId", ...extra}."""
    body = {"error": detail, "statusCode": status_code}
    rid = getattr(request.state, "request_id", None)
    if rid:
        body["requestId"] = rid
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)
