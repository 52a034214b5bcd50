"""Email client using Resend API."""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

import resend

from src.crm.core.config import get_settings
from src.crm.core.logging import get_logger

logger = get_logger(__name__)

# Thread pool for email sending with timeout support
_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

# Shared email styles
_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_WIDE_BODY_STYLE = _BODY_STYLE.replace("max-width: 600px", "max-width: 960px")
_BUTTON_STYLE = (
    "background-color: #2563eb; color: white; padding: 12px 24px; "
    "text-decoration: none; border-radius: 6px; display: inline-block; font-weight: 500;"
)
_LINK_STYLE = "color: #2563eb; word-break: break-all;"
_MUTED_STYLE = "color: #666; font-size: 14px;"

_HTML_HEAD = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>"""


def _deliver(to: str, subject: str, html_body: str, email_type: str) -> bool:
    """Send one email through Resend with a hard timeout.

    Returns:
        True if sent (or skipped in dev mode without an API key), False on error.
    """
    settings = get_settings()

    if not settings.resend_api_key:
        # Dev mode: log instead of sending
        logger.warning("RESEND_API_KEY not set - email not sent", to=to, email_type=email_type)
        return True

    resend.api_key = settings.resend_api_key

    def _send() -> None:
        resend.Emails.send(
            {
                "from": settings.email_from,
                "to": [to],
                "subject": subject,
                "html": html_body,
            }
        )

    try:
        future = _email_executor.submit(_send)
        future.result(timeout=settings.email_send_timeout_seconds)
        logger.info("Email sent", to=to, email_type=email_type)
        return True
    except FuturesTimeoutError:
        logger.error(
            "Email send timed out",
            to=to,
            email_type=email_type,
            timeout=settings.email_send_timeout_seconds,
        )
        return False
    except Exception as e:
        logger.error("Failed to send email", to=to, email_type=email_type, error=str(e))
        return False


def send_invitation_email(
    to: str, token: str, tenant_name: str, inviter_name: str, role: str
) -> bool:
    """Send a tenant invitation.

    Args:
        to: Invited email address
        token: Plaintext invitation token, only ever sent in this link
        tenant_name: Tenant the recipient is invited to
        inviter_name: Display name of the inviting admin
        role: Membership role granted on acceptance
    """
    settings = get_settings()
    accept_url = f"{settings.app_url}/accept-invitation?token={token}"
    return _deliver(
        to,
        f"You've been invited to join {tenant_name}",
        _get_invitation_email_html(
            tenant_name, inviter_name, role, accept_url, settings.invite_expire_days
        ),
        "invitation",
    )


def send_recovery_verification_email(to: str, token: str, user_name: str) -> bool:
    """Send the verification link for a newly set recovery email."""
    settings = get_settings()
    verify_url = f"{settings.app_url}/verify-recovery-email?token={token}"
    return _deliver(
        to,
        "Verify your recovery email address",
        _get_recovery_email_html(user_name, verify_url, settings.recovery_email_expire_hours),
        "recovery_verification",
    )


def send_scheduled_report_email(to: str, report_name: str, table_html: str) -> bool:
    """Send one scheduled report run to a recipient.

    Args:
        to: Recipient address
        report_name: Name of the scheduled report, used in the subject
        table_html: Pre-rendered (escaped) HTML table and row-count note
    """
    return _deliver(
        to,
        f"Scheduled Report: {report_name}",
        _get_report_email_html(report_name, table_html),
        "scheduled_report",
    )


def _get_invitation_email_html(
    tenant_name: str, inviter_name: str, role: str, accept_url: str, expire_days: int
) -> str:
    """Generate HTML content for the invitation email."""
    safe_tenant_name = html.escape(tenant_name)
    safe_inviter_name = html.escape(inviter_name)
    safe_role = html.escape(role)
    return f"""{_HTML_HEAD}
<body style="{_BODY_STYLE}">
    <h1 style="color: #2563eb; margin-bottom: 24px;">You're invited!</h1>
    <p>{safe_inviter_name} has invited you to join <strong>{safe_tenant_name}</strong>
    as {safe_role}.</p>
    <p style="margin: 32px 0;">
        <a href="{accept_url}" style="{_BUTTON_STYLE}">Accept Invitation</a>
    </p>
    <p style="{_MUTED_STYLE}">
        Or copy and paste this link into your browser:<br>
        <a href="{accept_url}" style="{_LINK_STYLE}">{accept_url}</a>
    </p>
    <p style="{_MUTED_STYLE} margin-top: 32px;">
        This invitation will expire in {expire_days} days. If you already have an account
        with another address, sign in first and the invitation will be linked to it.
    </p>
</body>
</html>"""


def _get_recovery_email_html(user_name: str, verify_url: str, expire_hours: int) -> str:
    """Generate HTML content for the recovery email verification."""
    safe_user_name = html.escape(user_name)
    return f"""{_HTML_HEAD}
<body style="{_BODY_STYLE}">
    <h1 style="color: #2563eb; margin-bottom: 24px;">Verify your recovery email</h1>
    <p>Hi {safe_user_name},</p>
    <p>This address was set as the recovery email for your account.
    Please confirm it by clicking below:</p>
    <p style="margin: 32px 0;">
        <a href="{verify_url}" style="{_BUTTON_STYLE}">Verify Recovery Email</a>
    </p>
    <p style="{_MUTED_STYLE}">
        Or copy and paste this link into your browser:<br>
        <a href="{verify_url}" style="{_LINK_STYLE}">{verify_url}</a>
    </p>
    <p style="{_MUTED_STYLE} margin-top: 32px;">
        This link will expire in {expire_hours} hours. If you didn't request this,
        you can safely ignore this email.
    </p>
</body>
</html>"""


def _get_report_email_html(report_name: str, table_html: str) -> str:
    """Wrap a rendered report table in the email layout."""
    safe_report_name = html.escape(report_name)
    return f"""{_HTML_HEAD}
<body style="{_WIDE_BODY_STYLE}">
    <h1 style="color: #2563eb; margin-bottom: 24px;">{safe_report_name}</h1>
    {table_html}
    <p style="{_MUTED_STYLE} margin-top: 32px;">
        You are receiving this email because you are listed as a recipient
        of this scheduled report.
    </p>
</body>
</html>"""
