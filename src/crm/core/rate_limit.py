"""Rate limiting for public endpoints (slowapi).

Uses Redis for distributed limits when REDIS_URL is configured and falls
back to in-memory storage (per-process) otherwise.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.crm.core.config import get_settings
from src.crm.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Key limits by client IP only.

    Never include user-controlled headers (X-Tenant-ID): rotating them
    would create fresh buckets and bypass the limit.
    """
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create the limiter with the appropriate storage backend.

    Disabled in the testing environment.
    """
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    if settings.redis_url:
        logger.info("Rate limiter using Redis backend")
        return Limiter(key_func=get_rate_limit_key, storage_uri=settings.redis_url)

    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


# Settings are read at import time; changing limits requires a restart.
limiter = create_limiter()


def public_rate_limit() -> str:
    """Limit string applied to unauthenticated token endpoints."""
    return get_settings().public_rate_limit
