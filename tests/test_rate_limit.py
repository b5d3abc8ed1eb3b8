"""Rate limit key: client IP, X-Forwarded-For aware."""
from types import SimpleNamespace

from hermetrix.core.rate_limit import RATE_LIMIT_STR, UPLOAD_RATE_LIMIT_STR, _get_client_ip


def _request(headers=None, host="10.0.0.5"):
    return SimpleNamespace(headers=headers or {}, client=SimpleNamespace(host=host) if host else None)


def test_client_ip_from_forwarded_header():
    req = _request({"x-forwarded-for": "203.0.113.7, 10.0.0.1"})
    assert _get_client_ip(req) == "203.0.113.7"


def test_client_ip_from_connection():
    assert _get_client_ip(_request()) == "10.0.0.5"


def test_client_ip_fallback():
    assert _get_client_ip(_request(host=None)) == "127.0.0.1"


def test_limit_string_uses_setting():
    assert RATE_LIMIT_STR == "1000/minute"
    assert UPLOAD_RATE_LIMIT_STR == "1000/minute"
