"""Unread notification counters with Redis backend and graceful fallback.

When Redis is unavailable every function reports a miss, and callers
count unread rows in the database instead.
"""

from uuid import UUID

from src.crm.core.config import get_settings
from src.crm.core.redis import get_redis

PREFIX_UNREAD_COUNT = "notifications:unread"


def _unread_key(tenant_id: UUID, user_id: UUID) -> str:
    return f"{PREFIX_UNREAD_COUNT}:{tenant_id}:{user_id}"


async def get_cached_unread_count(tenant_id: UUID, user_id: UUID) -> int | None:
    """Return the cached unread count.

    Returns:
        The count, or None on a cache miss or when Redis is unavailable.
    """
    redis = await get_redis()
    if not redis:
        return None
    value = await redis.get(_unread_key(tenant_id, user_id))
    return int(value) if value is not None else None


async def set_cached_unread_count(tenant_id: UUID, user_id: UUID, count: int) -> bool:
    """Store the unread count with the configured TTL.

    Returns:
        True if stored, False if Redis is unavailable.
    """
    redis = await get_redis()
    if not redis:
        return False
    ttl = get_settings().notification_count_ttl_seconds
    await redis.setex(_unread_key(tenant_id, user_id), ttl, str(count))
    return True


async def invalidate_unread_count(tenant_id: UUID, *user_ids: UUID) -> int:
    """Drop cached counts after notifications were created or read.

    Returns:
        Number of keys removed (0 if Redis is unavailable).
    """
    redis = await get_redis()
    if not redis or not user_ids:
        return 0
    removed: int = await redis.delete(*(_unread_key(tenant_id, uid) for uid in user_ids))
    return removed
