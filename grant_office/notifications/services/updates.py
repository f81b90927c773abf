"""
notifications/services/updates.py

Repayment, grant, program and system notifications.
Each sender takes the context type for its own category.
"""

from notifications.contexts import (
    GrantContext,
    ProgramContext,
    RepaymentContext,
    SystemContext,
)
from notifications.exceptions import InvalidArgument
from notifications.models import Notification

from .core import (
    create_notification,
    format_due,
    get_user_settings,
    send_notification_email,
)


def _require(context, expected, purpose):
    if not isinstance(context, expected):
        raise InvalidArgument(
            f"{expected.__name__} is required for {purpose} notifications"
        )
    return context


# ============================================================
# REPAYMENTS
# ============================================================

def send_repayment_reminder(user_id, context, *, overdue=False):
    repayment = _require(context, RepaymentContext, "repayment")

    user_settings = get_user_settings(user_id)
    if not user_settings.in_app_repayment_reminders:
        return None

    grant_label = repayment.grant_title or f"grant #{repayment.grant_id}"
    due_label = format_due(repayment.due_date, missing="an unspecified date")

    if overdue:
        notification_type = Notification.Type.REPAYMENT_OVERDUE
        title = f"Repayment overdue: {grant_label}"
        message = (
            f"The installment of {repayment.amount} for {grant_label} "
            f"was due on {due_label} and has not been recorded as paid."
        )
    else:
        notification_type = Notification.Type.REPAYMENT_DUE
        title = f"Repayment due: {grant_label}"
        message = (
            f"An installment of {repayment.amount} for {grant_label} "
            f"is due on {due_label}."
        )

    notification = create_notification(
        type=notification_type,
        title=title,
        message=message,
        recipient_id=user_id,
        related_entity_id=repayment.id,
        related_entity_type="RepaymentInstallment",
    )

    if user_settings.email_repayment_reminders:
        send_notification_email(
            notification,
            subject=title,
            body=f"Good day.\n\n{message}\n\nThis notice is issued for monitoring and follow-up.",
        )

    return notification


# ============================================================
# GRANTS
# ============================================================

def send_grant_status_update(user_id, context):
    grant = _require(context, GrantContext, "grant status")

    user_settings = get_user_settings(user_id)
    if not user_settings.in_app_grant_updates:
        return None

    title = f"Grant updated: {grant.title}"
    message = f'The grant "{grant.title}" is now {grant.status}.'

    notification = create_notification(
        type=Notification.Type.GRANT_STATUS_UPDATE,
        title=title,
        message=message,
        recipient_id=user_id,
        related_entity_id=grant.id,
        related_entity_type="Grant",
    )

    if user_settings.email_grant_updates:
        send_notification_email(notification, subject=title, body=message)

    return notification


# ============================================================
# PROGRAMS
# ============================================================

def send_program_update(user_id, context, *, detail=None):
    program = _require(context, ProgramContext, "program")

    user_settings = get_user_settings(user_id)
    if not user_settings.in_app_program_updates:
        return None

    title = f"Program update: {program.name}"
    message = detail or f'The program "{program.name}" has been updated.'

    notification = create_notification(
        type=Notification.Type.PROGRAM_UPDATE,
        title=title,
        message=message,
        recipient_id=user_id,
        related_entity_id=program.id,
        related_entity_type="Program",
    )

    if user_settings.email_program_updates:
        send_notification_email(notification, subject=title, body=message)

    return notification


# ============================================================
# SYSTEM (NEVER GATED)
# ============================================================

def send_system_message(user_id, context, *, title="System message", expires_at=None):
    system = _require(context, SystemContext, "system")

    return create_notification(
        type=Notification.Type.SYSTEM_MESSAGE,
        title=title,
        message=system.message,
        recipient_id=user_id,
        expires_at=expires_at,
    )
