"""Tests for unread notification counters (src/crm/core/cache.py)."""

from uuid import uuid4

from redis.asyncio import Redis

from src.crm.core.cache import (
    PREFIX_UNREAD_COUNT,
    get_cached_unread_count,
    invalidate_unread_count,
    set_cached_unread_count,
)


class TestUnreadCountCache:
    async def test_set_then_get(self, mock_redis: Redis) -> None:
        tenant_id, user_id = uuid4(), uuid4()

        assert await set_cached_unread_count(tenant_id, user_id, 7) is True
        assert await get_cached_unread_count(tenant_id, user_id) == 7

    async def test_miss_returns_none(self, mock_redis: Redis) -> None:
        assert await get_cached_unread_count(uuid4(), uuid4()) is None

    async def test_key_is_scoped_by_tenant_and_user(self, mock_redis: Redis) -> None:
        tenant_id, user_id = uuid4(), uuid4()
        await set_cached_unread_count(tenant_id, user_id, 2)

        key = f"{PREFIX_UNREAD_COUNT}:{tenant_id}:{user_id}"
        assert await mock_redis.get(key) == "2"
        assert await get_cached_unread_count(uuid4(), user_id) is None

    async def test_ttl_is_set(self, mock_redis: Redis) -> None:
        tenant_id, user_id = uuid4(), uuid4()
        await set_cached_unread_count(tenant_id, user_id, 1)

        ttl = await mock_redis.ttl(f"{PREFIX_UNREAD_COUNT}:{tenant_id}:{user_id}")
        assert 0 < ttl <= 30

    async def test_invalidate(self, mock_redis: Redis) -> None:
        tenant_id, user_a, user_b = uuid4(), uuid4(), uuid4()
        await set_cached_unread_count(tenant_id, user_a, 1)
        await set_cached_unread_count(tenant_id, user_b, 2)

        assert await invalidate_unread_count(tenant_id, user_a, user_b) == 2
        assert await get_cached_unread_count(tenant_id, user_a) is None


class TestUnreadCountCacheWithoutRedis:
    async def test_everything_is_a_miss(self, mock_redis_unavailable: None) -> None:
        tenant_id, user_id = uuid4(), uuid4()

        assert await set_cached_unread_count(tenant_id, user_id, 3) is False
        assert await get_cached_unread_count(tenant_id, user_id) is None
        assert await invalidate_unread_count(tenant_id, user_id) == 0
