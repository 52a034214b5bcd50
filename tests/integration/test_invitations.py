"""Tests for the invitation lifecycle."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.core.security import hash_token
from src.crm.models.enums import MembershipRole
from src.crm.models.public import Profile, Tenant, UserEmail
from tests.factories import ProfileFactory, TenantInvitationFactory
from tests.helpers import auth_headers, create_user_with_membership, make_access_token

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


@pytest.fixture
def invite_mailer(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    mailer = MagicMock(return_value=True)
    monkeypatch.setattr("src.crm.services.invitation_service.send_invitation_email", mailer)
    return mailer


async def invite(client: AsyncClient, admin: Profile, tenant: Tenant, email: str, **extra) -> dict:
    response = await client.post(
        "/api/v1/invitations",
        json={"email": email, **extra},
        headers=auth_headers(admin, tenant),
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateInvitation:
    async def test_admin_invites(
        self, client: AsyncClient, admin: Profile, tenant: Tenant, invite_mailer: MagicMock
    ):
        invitation = await invite(client, admin, tenant, "New.Hire@Example.com")

        assert invitation["email"] == "new.hire@example.com"
        assert invitation["status"] == "pending"
        assert invitation["role"] == "member"
        assert invitation["invited_by"] == str(admin.id)
        kwargs = invite_mailer.call_args.kwargs
        assert kwargs["to"] == "new.hire@example.com"
        assert kwargs["tenant_name"] == tenant.name
        assert kwargs["inviter_name"] == "Alice Admin"

    async def test_member_cannot_invite(
        self, client: AsyncClient, member: Profile, tenant: Tenant, invite_mailer: MagicMock
    ):
        response = await client.post(
            "/api/v1/invitations",
            json={"email": "x@example.com"},
            headers=auth_headers(member, tenant),
        )

        assert response.status_code == 403
        invite_mailer.assert_not_called()

    async def test_existing_member_conflicts(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        admin: Profile,
        member: Profile,
        tenant: Tenant,
        invite_mailer: MagicMock,
    ):
        db_session.add(UserEmail(user_id=member.id, email=member.email, verified=True, is_primary=True))
        await db_session.commit()

        response = await client.post(
            "/api/v1/invitations",
            json={"email": member.email},
            headers=auth_headers(admin, tenant),
        )

        assert response.status_code == 409

    async def test_reinvite_cancels_previous(
        self, client: AsyncClient, admin: Profile, tenant: Tenant, invite_mailer: MagicMock
    ):
        first = await invite(client, admin, tenant, "twice@example.com")
        second = await invite(client, admin, tenant, "twice@example.com", role="admin")

        pending = await client.get("/api/v1/invitations", headers=auth_headers(admin, tenant))

        assert pending.status_code == 200
        ids = [item["id"] for item in pending.json()["items"]]
        assert ids == [second["id"]]
        assert first["id"] not in ids

    async def test_cancel(
        self, client: AsyncClient, admin: Profile, tenant: Tenant, invite_mailer: MagicMock
    ):
        invitation = await invite(client, admin, tenant, "cancel@example.com")

        cancelled = await client.delete(
            f"/api/v1/invitations/{invitation['id']}", headers=auth_headers(admin, tenant)
        )
        assert cancelled.status_code == 200
        assert cancelled.json()["status"] == "cancelled"

        again = await client.delete(
            f"/api/v1/invitations/{invitation['id']}", headers=auth_headers(admin, tenant)
        )
        assert again.status_code == 400

    async def test_cancel_unknown(self, client: AsyncClient, admin: Profile, tenant: Tenant):
        response = await client.delete(
            f"/api/v1/invitations/{uuid4()}", headers=auth_headers(admin, tenant)
        )

        assert response.status_code == 404


class TestAcceptInvitation:
    async def test_info_is_public(
        self, client: AsyncClient, admin: Profile, tenant: Tenant, invite_mailer: MagicMock
    ):
        await invite(client, admin, tenant, "info@example.com")
        token = invite_mailer.call_args.kwargs["token"]

        response = await client.get("/api/v1/invitations/info", params={"token": token})

        assert response.status_code == 200
        assert response.json()["tenant_name"] == tenant.name
        assert response.json()["email"] == "info@example.com"

    async def test_info_unknown_token(self, client: AsyncClient):
        response = await client.get("/api/v1/invitations/info", params={"token": "missing"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Invalid or expired invitation"

    async def test_accept_joins_tenant_and_notifies_inviter(
        self, client: AsyncClient, admin: Profile, tenant: Tenant, invite_mailer: MagicMock
    ):
        await invite(client, admin, tenant, "joiner@example.com")
        token = invite_mailer.call_args.kwargs["token"]
        joiner_id = uuid4()
        joiner_headers = {
            "Authorization": f"Bearer {make_access_token(joiner_id, 'joiner@example.com')}"
        }

        response = await client.post(
            "/api/v1/invitations/accept",
            json={"token": token, "first_name": "Jo", "last_name": "Iner"},
            headers=joiner_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["tenant_id"] == str(tenant.id)
        assert body["role"] == "member"
        assert body["already_member"] is False
        assert body["secondary_email_added"] is False

        current = await client.get(
            "/api/v1/tenants/current", headers={**joiner_headers, "X-Tenant-ID": str(tenant.id)}
        )
        assert current.status_code == 200
        assert current.json()["role"] == "member"

        profile = await client.get("/api/v1/profile", headers=joiner_headers)
        assert profile.json()["first_name"] == "Jo"

        notifications = await client.get(
            "/api/v1/notifications", headers=auth_headers(admin, tenant)
        )
        titles = [n["title"] for n in notifications.json()["items"]]
        assert "Invitation accepted" in titles

        # The token is used up
        reused = await client.post(
            "/api/v1/invitations/accept", json={"token": token}, headers=joiner_headers
        )
        assert reused.status_code == 404

    async def test_accept_with_other_address_links_secondary_email(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        tenant: Tenant,
        admin: Profile,
    ):
        user = ProfileFactory.build()
        db_session.add(user)
        db_session.add(
            TenantInvitationFactory.with_token(
                "work-token", tenant_id=tenant.id, invited_by=admin.id, email="work@example.com"
            )
        )
        await db_session.commit()

        response = await client.post(
            "/api/v1/invitations/link", json={"token": "work-token"}, headers=auth_headers(user)
        )

        assert response.status_code == 200
        assert response.json()["secondary_email_added"] is True

    async def test_invited_address_owned_by_someone_else(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        tenant: Tenant,
        admin: Profile,
    ):
        owner = ProfileFactory.build()
        intruder = ProfileFactory.build()
        db_session.add_all([owner, intruder])
        await db_session.flush()
        db_session.add(UserEmail(user_id=owner.id, email="owned@example.com", verified=True))
        db_session.add(
            TenantInvitationFactory.with_token(
                "owned-token", tenant_id=tenant.id, invited_by=admin.id, email="owned@example.com"
            )
        )
        await db_session.commit()

        response = await client.post(
            "/api/v1/invitations/accept",
            json={"token": "owned-token"},
            headers=auth_headers(intruder),
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "This email is already linked to another account"

    async def test_existing_member_links(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        tenant: Tenant,
        admin: Profile,
        member: Profile,
    ):
        db_session.add(
            TenantInvitationFactory.with_token(
                "member-token", tenant_id=tenant.id, invited_by=admin.id, email=member.email
            )
        )
        await db_session.commit()

        response = await client.post(
            "/api/v1/invitations/link", json={"token": "member-token"}, headers=auth_headers(member)
        )

        assert response.status_code == 200
        assert response.json()["already_member"] is True

    async def test_expired_invitation(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        tenant: Tenant,
        admin: Profile,
    ):
        user = ProfileFactory.build()
        db_session.add(user)
        db_session.add(
            TenantInvitationFactory.expired(
                tenant_id=tenant.id,
                invited_by=admin.id,
                email=user.email,
                token_hash=hash_token("old-token"),
            )
        )
        await db_session.commit()

        response = await client.post(
            "/api/v1/invitations/accept", json={"token": "old-token"}, headers=auth_headers(user)
        )

        assert response.status_code == 404

    @pytest.mark.parametrize("endpoint", ["accept", "link"])
    async def test_inactive_membership_is_reactivated(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        tenant: Tenant,
        admin: Profile,
        endpoint: str,
    ):
        former, membership = await create_user_with_membership(
            db_session, tenant, MembershipRole.MEMBER
        )
        membership.is_active = False
        db_session.add(membership)
        db_session.add(
            TenantInvitationFactory.with_token(
                "comeback-token",
                tenant_id=tenant.id,
                invited_by=admin.id,
                email=former.email,
                role=MembershipRole.ADMIN.value,
            )
        )
        await db_session.commit()
        headers = auth_headers(former)

        before = await client.get(
            "/api/v1/tenants/current", headers=auth_headers(former, tenant)
        )
        assert before.status_code == 403

        response = await client.post(
            f"/api/v1/invitations/{endpoint}", json={"token": "comeback-token"}, headers=headers
        )

        assert response.status_code == 200
        assert response.json()["already_member"] is False
        assert response.json()["role"] == "admin"

        await db_session.refresh(membership)
        assert membership.is_active is True
        assert membership.role == "admin"
        current = await client.get("/api/v1/tenants/current", headers=auth_headers(former, tenant))
        assert current.status_code == 200
        assert current.json()["role"] == "admin"
