"""
Rate Limiting for the FEAF Dashboard API
========================================
slowapi limiter keyed by authenticated user, falling back to client IP.

- Everything: RATE_LIMIT_PER_MINUTE (default 60/min)
- /auth/login: 5/min (brute force protection)
- /auth/register: 3/min

Storage defaults to in-process memory; point RATE_LIMIT_STORAGE_URI at
redis:// to share counters between workers. RATE_LIMIT_ENABLED=false turns
the limiter into a no-op (tests).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging_config import logger


def get_user_identifier(request: Request) -> str:
    """
    Rate limit key: authenticated user id (set on request.state by the auth
    dependency) or the client IP for anonymous calls.
    """
    user_id = getattr(request.state, 'user_id', None)
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_user_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """429 with a Retry-After header"""
    retry_after = "60"

    logger.warning(
        f"[RateLimit] Exceeded for {get_user_identifier(request)}: {exc.detail}",
        extra={"event_type": "rate_limit", "http_path": request.url.path}
    )

    return JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. Please slow down.",
            "error": {
                "code": "RATE_LIMIT_EXCEEDED",
                "message": str(exc.detail),
                "details": {},
            },
        },
        headers={
            "Retry-After": retry_after,
            "X-RateLimit-Limit": str(settings.RATE_LIMIT_PER_MINUTE),
        }
    )


def auth_rate_limit():
    """Rate limit for login (5/min)"""
    return limiter.limit("5/minute", key_func=get_remote_address)


def strict_rate_limit():
    """Very strict rate limit for account creation (3/min)"""
    return limiter.limit("3/minute", key_func=get_remote_address)
