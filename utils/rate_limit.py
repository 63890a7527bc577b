"""
Rate Limiting

slowapi limiter keyed by client address, stored in Redis when REDIS_URL is
set and in process memory otherwise. Limits come from settings so a
deployment can loosen them for a classroom behind one NAT address.

Usage:
    from utils.rate_limit import RATE_LIMITS, limiter

    @router.post("/process")
    @limiter.limit(RATE_LIMITS["submit"])
    async def process(request: Request, ...):
        ...
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from config.settings import settings
from utils.logging import get_logger

logger = get_logger(__name__)


def get_client_ip(request: Request) -> str:
    """Client address, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


RATE_LIMITS = {
    "submit": settings.RATE_LIMIT_SUBMIT,
    "records": settings.RATE_LIMIT_RECORDS,
    "default": settings.RATE_LIMIT_DEFAULT,
}

limiter = Limiter(
    key_func=get_client_ip,
    default_limits=[RATE_LIMITS["default"]],
    storage_uri=settings.REDIS_URL or "memory://",
)
logger.info(f"Rate limiter storage: {'redis' if settings.REDIS_URL else 'memory'}")


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 in the same body shape as application errors."""
    retry_after = exc.limit.limit.get_expiry()
    logger.warning(f"Rate limit {exc.detail} exceeded by {get_client_ip(request)} on {request.url.path}")

    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": "Too many requests, try again later",
            "type": "RateLimitExceeded",
            "details": {"limit": exc.detail, "retryAfter": retry_after},
        },
        headers={"Retry-After": str(retry_after)},
    )
