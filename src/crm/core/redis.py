"""Optional Redis client with connection pooling and graceful fallback.

If Redis is not configured or unreachable, get_redis() returns None and
callers fall back to the database.
"""

from redis.asyncio import ConnectionPool, Redis

from src.crm.core.config import get_settings
from src.crm.core.logging import get_logger

logger = get_logger(__name__)

_pool: ConnectionPool | None = None
_redis: Redis | None = None
_connection_attempted: bool = False


async def get_redis() -> Redis | None:
    """Get the shared Redis client, or None when unavailable.

    The connection is made lazily on first call. A failed attempt is not
    retried until close_redis() or reset_redis_state() is called.
    """
    global _pool, _redis, _connection_attempted

    if _redis is not None:
        return _redis

    if _connection_attempted:
        return None

    _connection_attempted = True
    settings = get_settings()

    if not settings.redis_url:
        logger.info("Redis not configured (REDIS_URL not set)")
        return None

    try:
        _pool = ConnectionPool.from_url(
            settings.redis_url,
            max_connections=settings.redis_pool_size,
            decode_responses=True,
        )
        _redis = Redis(connection_pool=_pool)
        await _redis.ping()  # type: ignore[misc]
        logger.info("Redis connected")
        return _redis

    except Exception as e:
        logger.warning("Redis connection failed, continuing without cache", error=str(e))
        if _redis:
            await _redis.aclose()
            _redis = None
        if _pool:
            await _pool.disconnect()
            _pool = None
        return None


async def close_redis() -> None:
    """Close the Redis connection pool. Called on application shutdown."""
    global _pool, _redis, _connection_attempted

    if _redis:
        await _redis.aclose()
        logger.info("Redis connection closed")
    if _pool:
        await _pool.disconnect()

    _redis = None
    _pool = None
    _connection_attempted = False


def reset_redis_state() -> None:
    """Forget the current client so the next get_redis() reconnects (tests)."""
    global _pool, _redis, _connection_attempted
    _redis = None
    _pool = None
    _connection_attempted = False


async def ping_redis() -> str:
    """Probe Redis for the health endpoint.

    Returns:
        "not_configured" without a usable client, "healthy" on a successful
        PING, otherwise "unhealthy: <error>".
    """
    redis = await get_redis()
    if redis is None:
        return "not_configured"
    try:
        await redis.ping()  # type: ignore[misc]
    except Exception as e:
        logger.warning("Redis ping failed", error=str(e))
        return f"unhealthy: {e!s}"
    return "healthy"
