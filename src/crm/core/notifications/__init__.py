"""Notification utilities - email."""

from src.crm.core.notifications.email import (
    send_invitation_email,
    send_recovery_verification_email,
    send_scheduled_report_email,
)

__all__ = [
    "send_invitation_email",
    "send_recovery_verification_email",
    "send_scheduled_report_email",
]
