"""Tests for the background activities and cron registration."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from temporalio.exceptions import WorkflowAlreadyStartedError
from temporalio.testing import ActivityEnvironment

from src.crm.core.config import get_settings
from src.crm.core.security import hash_token
from src.crm.models.enums import InvitationStatus
from src.crm.models.public import Profile, Tenant, TenantInvitation
from src.crm.models.tenant import Report, ScheduledReport
from src.crm.temporal.activities import (
    cleanup_expired_invitations,
    cleanup_recovery_email_tokens,
    run_due_reports,
)
from src.crm.temporal.worker import (
    CLEANUP_CRON_ID,
    SCHEDULED_REPORTS_CRON_ID,
    start_cron_workflows,
)
from tests.factories import ProfileFactory, TenantInvitationFactory, utc_now

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestCleanupActivities:
    async def test_cleanup_expired_invitations(
        self, db_session: AsyncSession, tenant: Tenant, admin: Profile
    ):
        long_ago = utc_now() - timedelta(days=40)
        stale_expired = TenantInvitationFactory.build(
            tenant_id=tenant.id, invited_by=admin.id, expires_at=long_ago
        )
        stale_accepted = TenantInvitationFactory.build(
            tenant_id=tenant.id,
            invited_by=admin.id,
            status=InvitationStatus.ACCEPTED.value,
            created_at=long_ago,
        )
        recent_cancelled = TenantInvitationFactory.build(
            tenant_id=tenant.id, invited_by=admin.id, status=InvitationStatus.CANCELLED.value
        )
        pending = TenantInvitationFactory.build(tenant_id=tenant.id, invited_by=admin.id)
        db_session.add_all([stale_expired, stale_accepted, recent_cancelled, pending])
        await db_session.commit()

        deleted = await ActivityEnvironment().run(cleanup_expired_invitations, 30)

        assert deleted == 2
        db_session.expunge_all()
        assert await db_session.get(TenantInvitation, stale_expired.id) is None
        assert await db_session.get(TenantInvitation, recent_cancelled.id) is not None
        assert await db_session.get(TenantInvitation, pending.id) is not None

        # Idempotent
        assert await ActivityEnvironment().run(cleanup_expired_invitations, 30) == 0

    async def test_cleanup_recovery_tokens(self, db_session: AsyncSession):
        expired = ProfileFactory.build(
            recovery_email="old@example.com",
            recovery_email_token_hash=hash_token("old"),
            recovery_email_token_expires_at=utc_now() - timedelta(hours=1),
        )
        live = ProfileFactory.build(
            recovery_email="new@example.com",
            recovery_email_token_hash=hash_token("new"),
            recovery_email_token_expires_at=utc_now() + timedelta(hours=1),
        )
        db_session.add_all([expired, live])
        await db_session.commit()

        cleared = await ActivityEnvironment().run(cleanup_recovery_email_tokens)

        assert cleared == 1
        await db_session.refresh(expired)
        await db_session.refresh(live)
        assert expired.recovery_email_token_hash is None
        assert expired.recovery_email == "old@example.com"
        assert live.recovery_email_token_hash == hash_token("new")


class TestReportActivity:
    async def test_run_due_reports(
        self,
        db_session: AsyncSession,
        tenant: Tenant,
        admin: Profile,
        monkeypatch: pytest.MonkeyPatch,
    ):
        mailer = MagicMock(return_value=True)
        monkeypatch.setattr(
            "src.crm.services.scheduled_report_service.send_scheduled_report_email", mailer
        )
        report = Report(tenant_id=tenant.id, created_by=admin.id, name="Deals", data_source="deals")
        db_session.add(report)
        await db_session.flush()
        db_session.add(
            ScheduledReport(
                tenant_id=tenant.id,
                report_id=report.id,
                user_id=admin.id,
                name="Daily",
                email_recipients=["a@example.com", "b@example.com"],
            )
        )
        await db_session.commit()

        output = await ActivityEnvironment().run(run_due_reports, 100)

        assert output.total == 1
        assert output.succeeded == 1
        assert output.failed == 0
        assert output.emails_sent == 2
        assert mailer.call_count == 2


class TestCronRegistration:
    async def test_nothing_scheduled_by_default(self):
        client = MagicMock()
        client.start_workflow = AsyncMock()

        await start_cron_workflows(client)

        client.start_workflow.assert_not_awaited()

    async def test_starts_both_crons_and_tolerates_running_ones(
        self, monkeypatch: pytest.MonkeyPatch
    ):
        settings = get_settings()
        monkeypatch.setattr(settings, "scheduled_reports_schedule", "*/15 * * * *")
        monkeypatch.setattr(settings, "cleanup_schedule", "0 3 * * *")
        client = MagicMock()
        client.start_workflow = AsyncMock(
            side_effect=[None, WorkflowAlreadyStartedError(CLEANUP_CRON_ID, "CleanupWorkflow")]
        )

        await start_cron_workflows(client)

        ids = [call.kwargs["id"] for call in client.start_workflow.await_args_list]
        assert ids == [SCHEDULED_REPORTS_CRON_ID, CLEANUP_CRON_ID]
        assert all(call.kwargs["cron_schedule"] for call in client.start_workflow.await_args_list)
