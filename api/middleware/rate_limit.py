"""Rate limiting middleware using slowapi.

Default limits:
- Global: 300 req/min per IP
- Read endpoints: 120 req/min (snapshots, chart data)
- Edit endpoints: 600 req/min (one request per keystroke while typing)
- Write endpoints: 20 req/min (session create/delete, reset, sample load)
"""

from __future__ import annotations

import logging

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from ..config import RATE_LIMIT_ENABLED, TRUST_PROXY

logger = logging.getLogger("api.rate_limit")
security_logger = logging.getLogger("security")


def get_client_ip(request: Request) -> str:
    """Client IP used as the rate-limit key.

    X-Forwarded-For is only honoured when TRUST_PROXY is set, so clients
    talking to the API directly cannot pick their own key.
    """
    if TRUST_PROXY:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


limiter = Limiter(
    key_func=get_client_ip,
    default_limits=["300/minute"],
    storage_uri="memory://",
    enabled=RATE_LIMIT_ENABLED,
)


# Usage: @rate_limit_read on snapshot endpoints
rate_limit_read = limiter.limit("120/minute")
rate_limit_edit = limiter.limit("600/minute")
rate_limit_write = limiter.limit("20/minute")


def setup_rate_limiting(app):
    """Configure rate limiting on the FastAPI app.

    Call this in main.py after creating the app.
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _custom_rate_limit_handler)
    app.add_middleware(SlowAPIMiddleware)
    logger.info(f"Rate limiting {'enabled' if limiter.enabled else 'disabled'}")


async def _custom_rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Log the event and return 429 with a Retry-After header."""
    security_logger.warning({
        "event": "rate_limit_exceeded",
        "ip": get_client_ip(request),
        "path": request.url.path,
        "method": request.method,
        "limit": str(exc.detail),
    })

    return JSONResponse(
        status_code=429,
        content={
            "error": "Too many requests",
            "code": "RATE_LIMIT_EXCEEDED",
            "detail": str(exc.detail)
        },
        headers={"Retry-After": "60"}
    )
