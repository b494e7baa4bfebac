"""
Rate Limiting Service

Implements rate limiting using slowapi so a single client cannot flood
the catalog with requests or form submissions.

Rate Limit Tiers:
=================
- Default (every route): RATE_LIMIT_DEFAULT, 100 requests/minute
- Write operations (create, update, delete): RATE_LIMIT_WRITE, 30 requests/minute

Counters are kept in process memory; the application runs as a single
process.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import Response

from bookshelf.config import get_settings
from bookshelf.templating import templates

logger = logging.getLogger(__name__)
settings = get_settings()


def get_client_ip(request: Request) -> str:
    """
    Get client IP address for rate limiting.

    Handles common proxy headers to get the real client IP.
    Falls back to direct connection IP if no proxy headers.

    Args:
        request: FastAPI request object

    Returns:
        Client IP address string
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # X-Forwarded-For can contain multiple IPs; first is the client
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return get_remote_address(request)


def create_limiter() -> Limiter:
    """
    Create and configure the rate limiter.

    Returns:
        Configured Limiter instance
    """
    limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[settings.rate_limit_default],
        storage_uri="memory://",
        strategy="fixed-window",
        enabled=settings.rate_limit_enabled,
    )

    logger.info(
        f"Rate limiter initialized - enabled: {settings.rate_limit_enabled}, "
        f"default: {settings.rate_limit_default}, write: {settings.rate_limit_write}"
    )

    return limiter


limiter = create_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """
    Render the error page for clients that exceeded their limit.

    Responds with 429 Too Many Requests and a Retry-After header.

    Args:
        request: The request that exceeded the limit
        exc: The RateLimitExceeded exception

    Returns:
        Rendered error page
    """
    limit_detail = str(exc.detail)

    response = templates.TemplateResponse(
        request,
        "error.html",
        {
            "title": "Too Many Requests",
            "status_code": 429,
            "message": "Too many requests. Please slow down and try again in a minute.",
        },
        status_code=429,
    )
    response.headers["Retry-After"] = str(60)
    response.headers["X-RateLimit-Limit"] = limit_detail

    logger.warning(
        f"Rate limit exceeded for {get_client_ip(request)}: {limit_detail}"
    )

    return response
