"""Tests for authentication, tenant header gating and tenant isolation."""

from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.crm.models.enums import MembershipRole
from src.crm.models.public import Profile, Tenant, UserEmail
from tests.factories import ProfileFactory, TenantFactory, UserTenantMembershipFactory
from tests.helpers import auth_headers, create_user_with_membership, make_access_token

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestAuthentication:
    async def test_missing_token(self, client: AsyncClient, tenant: Tenant):
        response = await client.get("/api/v1/contacts", headers={"X-Tenant-ID": str(tenant.id)})

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing or invalid authorization header"

    async def test_invalid_token(self, client: AsyncClient, tenant: Tenant):
        response = await client.get(
            "/api/v1/contacts",
            headers={"Authorization": "Bearer garbage", "X-Tenant-ID": str(tenant.id)},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    async def test_token_without_email(self, client: AsyncClient, engine):
        token = make_access_token(uuid4(), "")
        response = await client.get(
            "/api/v1/tenants", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token payload"

    async def test_non_uuid_subject(self, client: AsyncClient, engine):
        token = make_access_token("not-a-uuid", "a@example.com")
        response = await client.get(
            "/api/v1/tenants", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid user_id in token"

    async def test_profile_created_on_first_sight(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        user_id = uuid4()
        token = make_access_token(user_id, "New.User@Example.com")

        response = await client.get(
            "/api/v1/tenants", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert response.json() == []
        profile = await db_session.get(Profile, user_id)
        assert profile is not None
        assert profile.email == "new.user@example.com"
        primary = (
            await db_session.execute(select(UserEmail).where(UserEmail.user_id == user_id))
        ).scalar_one()
        assert primary.is_primary is True

    async def test_inactive_profile_rejected(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        profile = ProfileFactory.build(is_active=False)
        db_session.add(profile)
        await db_session.commit()

        response = await client.get("/api/v1/tenants", headers=auth_headers(profile))

        assert response.status_code == 401
        assert response.json()["detail"] == "User not found or inactive"


class TestTenantHeader:
    async def test_header_required(self, client: AsyncClient, admin: Profile):
        response = await client.get("/api/v1/contacts", headers=auth_headers(admin))

        assert response.status_code == 400
        assert response.json()["detail"] == "X-Tenant-ID header is required"

    async def test_header_must_be_uuid(self, client: AsyncClient, admin: Profile):
        headers = {**auth_headers(admin), "X-Tenant-ID": "acme"}
        response = await client.get("/api/v1/contacts", headers=headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "X-Tenant-ID header must be a valid UUID"

    async def test_unknown_tenant(self, client: AsyncClient, admin: Profile):
        headers = {**auth_headers(admin), "X-Tenant-ID": str(uuid4())}
        response = await client.get("/api/v1/contacts", headers=headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Tenant not found"

    async def test_deleted_tenant(self, client: AsyncClient, db_session: AsyncSession):
        tenant = TenantFactory.deleted()
        db_session.add(tenant)
        await db_session.commit()
        profile, _ = await create_user_with_membership(db_session, tenant)

        response = await client.get("/api/v1/contacts", headers=auth_headers(profile, tenant))

        assert response.status_code == 410
        assert response.json()["detail"] == "Tenant has been deleted"

    async def test_inactive_tenant(self, client: AsyncClient, db_session: AsyncSession):
        tenant = TenantFactory.inactive()
        db_session.add(tenant)
        await db_session.commit()
        profile, _ = await create_user_with_membership(db_session, tenant)

        response = await client.get("/api/v1/contacts", headers=auth_headers(profile, tenant))

        assert response.status_code == 403
        assert response.json()["detail"] == "Tenant is inactive"

    async def test_non_member(self, client: AsyncClient, admin: Profile, other_tenant: Tenant):
        response = await client.get(
            "/api/v1/contacts", headers=auth_headers(admin, other_tenant)
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "User does not have access to this tenant"

    async def test_inactive_membership(
        self, client: AsyncClient, db_session: AsyncSession, tenant: Tenant
    ):
        profile, membership = await create_user_with_membership(db_session, tenant)
        membership.is_active = False
        db_session.add(membership)
        await db_session.commit()

        response = await client.get("/api/v1/contacts", headers=auth_headers(profile, tenant))

        assert response.status_code == 403


class TestTenantIsolation:
    async def test_rows_are_invisible_across_tenants(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        tenant: Tenant,
        other_tenant: Tenant,
    ):
        profile, _ = await create_user_with_membership(db_session, tenant)
        # Same user is also a member of the other tenant
        db_session.add(
            UserTenantMembershipFactory.build(user_id=profile.id, tenant_id=other_tenant.id)
        )
        await db_session.commit()

        created = await client.post(
            "/api/v1/companies",
            json={"name": "Initech"},
            headers=auth_headers(profile, tenant),
        )
        assert created.status_code == 201
        company_id = created.json()["id"]

        listed = await client.get("/api/v1/companies", headers=auth_headers(profile, other_tenant))
        assert listed.status_code == 200
        assert listed.json()["items"] == []

        fetched = await client.get(
            f"/api/v1/companies/{company_id}", headers=auth_headers(profile, other_tenant)
        )
        assert fetched.status_code == 404


class TestErrorRequestId:
    async def test_errors_carry_request_id(self, client: AsyncClient, admin: Profile):
        request_id = uuid4().hex
        response = await client.get(
            "/api/v1/contacts",
            headers={**auth_headers(admin), "X-Request-ID": request_id},
        )

        assert response.status_code == 400
        assert response.json()["request_id"] == request_id
        assert response.headers["X-Request-ID"] == request_id

    async def test_security_headers(self, client: AsyncClient, engine):
        response = await client.get("/api/v1/tenants")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "Content-Security-Policy" in response.headers


async def test_owner_counts_as_admin(client: AsyncClient, db_session: AsyncSession, tenant: Tenant):
    owner, _ = await create_user_with_membership(db_session, tenant, MembershipRole.OWNER)

    response = await client.put(
        "/api/v1/rewards/configurations",
        json={"action_name": "create_contact", "points_value": 5},
        headers=auth_headers(owner, tenant),
    )

    assert response.status_code == 200
