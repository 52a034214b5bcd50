"""Tests for tenant creation, membership listing and the profile endpoints."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.core.security import hash_token
from src.crm.models.public import Profile, Tenant
from tests.factories import ProfileFactory, utc_now
from tests.helpers import auth_headers

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


@pytest.fixture
def recovery_mailer(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    mailer = MagicMock(return_value=True)
    monkeypatch.setattr("src.crm.services.profile_service.send_recovery_verification_email", mailer)
    return mailer


class TestTenants:
    async def test_create_tenant_makes_creator_owner(self, client: AsyncClient, admin: Profile):
        response = await client.post(
            "/api/v1/tenants",
            json={"name": "Globex", "slug": "globex"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 201
        created = response.json()
        assert created["slug"] == "globex"
        assert created["is_active"] is True

        current = await client.get(
            "/api/v1/tenants/current",
            headers={**auth_headers(admin), "X-Tenant-ID": created["id"]},
        )
        assert current.status_code == 200
        assert current.json()["role"] == "owner"

    async def test_duplicate_slug(self, client: AsyncClient, admin: Profile, tenant: Tenant):
        response = await client.post(
            "/api/v1/tenants",
            json={"name": "Copy", "slug": tenant.slug},
            headers=auth_headers(admin),
        )

        assert response.status_code == 409

    async def test_invalid_slug(self, client: AsyncClient, admin: Profile):
        response = await client.post(
            "/api/v1/tenants",
            json={"name": "Bad", "slug": "Bad_Slug"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 422

    async def test_list_my_tenants(
        self, client: AsyncClient, admin: Profile, tenant: Tenant, other_tenant: Tenant
    ):
        response = await client.get("/api/v1/tenants", headers=auth_headers(admin))

        assert response.status_code == 200
        tenants = response.json()
        assert [t["id"] for t in tenants] == [str(tenant.id)]
        assert tenants[0]["role"] == "admin"


class TestProfile:
    async def test_get_profile(self, client: AsyncClient, admin: Profile):
        response = await client.get("/api/v1/profile", headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json()["email"] == admin.email
        assert response.json()["first_name"] == "Alice"

    async def test_update_profile_strips_blanks(self, client: AsyncClient, admin: Profile):
        response = await client.patch(
            "/api/v1/profile",
            json={"first_name": " Alicia ", "last_name": "   "},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        assert response.json()["first_name"] == "Alicia"
        assert response.json()["last_name"] is None


class TestRecoveryEmail:
    async def test_request_and_verify(
        self, client: AsyncClient, admin: Profile, recovery_mailer: MagicMock
    ):
        response = await client.post(
            "/api/v1/profile/recovery-email",
            json={"recovery_email": "Backup@Example.com"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        assert response.json()["expires_at"]
        recovery_mailer.assert_called_once()
        assert recovery_mailer.call_args.kwargs["to"] == "backup@example.com"
        token = recovery_mailer.call_args.kwargs["token"]

        profile = await client.get("/api/v1/profile", headers=auth_headers(admin))
        assert profile.json()["recovery_email"] == "backup@example.com"
        assert profile.json()["is_recovery_email_verified"] is False

        verified = await client.post("/api/v1/profile/recovery-email/verify", json={"token": token})
        assert verified.status_code == 200
        assert verified.json()["recovery_email"] == "backup@example.com"

        profile = await client.get("/api/v1/profile", headers=auth_headers(admin))
        assert profile.json()["is_recovery_email_verified"] is True

        # Tokens are single-use
        again = await client.post("/api/v1/profile/recovery-email/verify", json={"token": token})
        assert again.status_code == 404

    async def test_rejects_non_address(
        self, client: AsyncClient, admin: Profile, recovery_mailer: MagicMock
    ):
        response = await client.post(
            "/api/v1/profile/recovery-email",
            json={"recovery_email": "not-an-address"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400
        recovery_mailer.assert_not_called()

    async def test_address_used_by_another_account(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        admin: Profile,
        recovery_mailer: MagicMock,
    ):
        db_session.add(ProfileFactory.build(recovery_email="taken@example.com"))
        await db_session.commit()

        response = await client.post(
            "/api/v1/profile/recovery-email",
            json={"recovery_email": "taken@example.com"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 409

    async def test_expired_token(
        self, client: AsyncClient, db_session: AsyncSession, recovery_mailer: MagicMock
    ):
        profile = ProfileFactory.build(
            recovery_email="late@example.com",
            recovery_email_token_hash=hash_token("late-token"),
            recovery_email_token_expires_at=utc_now() - timedelta(minutes=1),
        )
        db_session.add(profile)
        await db_session.commit()

        response = await client.post(
            "/api/v1/profile/recovery-email/verify", json={"token": "late-token"}
        )

        assert response.status_code == 400
        assert "expired" in response.json()["detail"]

    async def test_unknown_token(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/profile/recovery-email/verify", json={"token": "nope"}
        )

        assert response.status_code == 404
