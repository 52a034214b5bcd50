"""Tests for notifications, unread counters and preferences."""

from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.models.public import Profile, Tenant
from src.crm.models.tenant import Notification
from tests.factories import utc_now
from tests.helpers import auth_headers

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


def make_notification(tenant: Tenant, user: Profile, title: str, **kwargs) -> Notification:
    return Notification(
        tenant_id=tenant.id,
        user_id=user.id,
        title=title,
        message=f"{title} message",
        notification_type=kwargs.pop("notification_type", "general"),
        **kwargs,
    )


class TestNotifications:
    async def test_list_is_per_recipient(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        admin: Profile,
        member: Profile,
        tenant: Tenant,
    ):
        db_session.add_all(
            [
                make_notification(tenant, member, "For Bob"),
                make_notification(tenant, admin, "For Alice"),
            ]
        )
        await db_session.commit()

        response = await client.get("/api/v1/notifications", headers=auth_headers(member, tenant))

        assert response.status_code == 200
        assert [n["title"] for n in response.json()["items"]] == ["For Bob"]
        assert response.json()["items"][0]["is_read"] is False

    async def test_recent_returns_latest_five(
        self, client: AsyncClient, db_session: AsyncSession, member: Profile, tenant: Tenant
    ):
        start = utc_now() - timedelta(hours=1)
        for index in range(7):
            db_session.add(
                make_notification(
                    tenant, member, f"N{index}", created_at=start + timedelta(minutes=index)
                )
            )
        await db_session.commit()

        response = await client.get(
            "/api/v1/notifications/recent", headers=auth_headers(member, tenant)
        )

        assert [n["title"] for n in response.json()] == ["N6", "N5", "N4", "N3", "N2"]

    async def test_mark_read(
        self, client: AsyncClient, db_session: AsyncSession, member: Profile, tenant: Tenant
    ):
        notification = make_notification(tenant, member, "Read me")
        db_session.add(notification)
        await db_session.commit()
        headers = auth_headers(member, tenant)

        first = await client.post(f"/api/v1/notifications/{notification.id}/read", headers=headers)
        assert first.status_code == 200
        assert first.json()["is_read"] is True
        read_at = first.json()["read_at"]

        again = await client.post(f"/api/v1/notifications/{notification.id}/read", headers=headers)
        assert again.json()["read_at"] == read_at

        unread = await client.get("/api/v1/notifications/unread-count", headers=headers)
        assert unread.json()["unread_count"] == 0

    async def test_cannot_read_someone_elses(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        admin: Profile,
        member: Profile,
        tenant: Tenant,
    ):
        notification = make_notification(tenant, admin, "Private")
        db_session.add(notification)
        await db_session.commit()

        response = await client.post(
            f"/api/v1/notifications/{notification.id}/read", headers=auth_headers(member, tenant)
        )

        assert response.status_code == 404

    async def test_unknown_notification(self, client: AsyncClient, member: Profile, tenant: Tenant):
        response = await client.post(
            f"/api/v1/notifications/{uuid4()}/read", headers=auth_headers(member, tenant)
        )

        assert response.status_code == 404

    async def test_read_all(
        self, client: AsyncClient, db_session: AsyncSession, member: Profile, tenant: Tenant
    ):
        db_session.add_all(
            [
                make_notification(tenant, member, "One"),
                make_notification(tenant, member, "Two"),
                make_notification(tenant, member, "Old", read_at=utc_now()),
            ]
        )
        await db_session.commit()
        headers = auth_headers(member, tenant)

        response = await client.post("/api/v1/notifications/read-all", headers=headers)

        assert response.json() == {"updated": 2}
        unread = await client.get("/api/v1/notifications/unread-count", headers=headers)
        assert unread.json()["unread_count"] == 0


class TestUnreadCountCache:
    async def test_new_notification_invalidates_cached_count(
        self,
        client: AsyncClient,
        mock_redis: Redis,
        admin: Profile,
        member: Profile,
        tenant: Tenant,
    ):
        member_headers = auth_headers(member, tenant)

        empty = await client.get("/api/v1/notifications/unread-count", headers=member_headers)
        assert empty.json()["unread_count"] == 0
        assert await mock_redis.get(f"notifications:unread:{tenant.id}:{member.id}") == "0"

        await client.post(
            "/api/v1/todos",
            json={"title": "Follow up", "assigned_to": str(member.id)},
            headers=auth_headers(admin, tenant),
        )

        after = await client.get("/api/v1/notifications/unread-count", headers=member_headers)
        assert after.json()["unread_count"] == 1


class TestPreferences:
    async def test_disabled_type_is_not_created(
        self, client: AsyncClient, admin: Profile, member: Profile, tenant: Tenant
    ):
        member_headers = auth_headers(member, tenant)

        saved = await client.put(
            "/api/v1/notifications/preferences",
            json={"notification_type": "todo_assigned", "enabled": False},
            headers=member_headers,
        )
        assert saved.status_code == 200
        assert saved.json()["enabled"] is False

        await client.post(
            "/api/v1/todos",
            json={"title": "Quiet task", "assigned_to": str(member.id)},
            headers=auth_headers(admin, tenant),
        )

        listed = await client.get("/api/v1/notifications", headers=member_headers)
        assert listed.json()["items"] == []

    async def test_list_and_reenable(self, client: AsyncClient, member: Profile, tenant: Tenant):
        headers = auth_headers(member, tenant)
        for enabled in (False, True):
            await client.put(
                "/api/v1/notifications/preferences",
                json={"notification_type": "deal_won", "enabled": enabled},
                headers=headers,
            )

        response = await client.get("/api/v1/notifications/preferences", headers=headers)

        assert [(p["notification_type"], p["enabled"]) for p in response.json()] == [
            ("deal_won", True)
        ]
