"""
notifications/services/core.py

Single choke point for writing notifications and for reading
(or lazily creating) per-user notification settings.
"""

import logging
from datetime import datetime

from django.conf import settings
from django.core.mail import send_mail
from django.db import DatabaseError
from django.utils import timezone

from notifications.exceptions import InvalidArgument, StorageError
from notifications.models import Notification, NotificationSetting

logger = logging.getLogger(__name__)


# Fixed defaults for a lazily created settings row.
DEFAULT_SETTINGS = {
    "email_task_reminders": True,
    "in_app_task_reminders": True,
    "email_repayment_reminders": True,
    "in_app_repayment_reminders": True,
    "email_grant_updates": True,
    "in_app_grant_updates": True,
    "email_program_updates": True,
    "in_app_program_updates": True,
    "reminder_lead_time": 24,
}


# ============================================================
# CREATE
# ============================================================

def create_notification(
    *,
    type,
    title,
    message,
    recipient_id,
    sender_id=None,
    related_entity_id=None,
    related_entity_type=None,
    task_id=None,
    expires_at=None,
):
    """
    Persist a single notification row.

    Raises InvalidArgument when a required field is missing or
    expires_at is not in the future, StorageError when the
    database rejects the write.
    """

    if recipient_id is None:
        raise InvalidArgument("recipient_id is required")

    if type not in Notification.Type.values:
        raise InvalidArgument(f"Unknown notification type: {type!r}")

    if not title or not message:
        raise InvalidArgument("title and message are required")

    created_at = timezone.now()
    if expires_at is not None and expires_at <= created_at:
        raise InvalidArgument("expires_at must be later than created_at")

    try:
        return Notification.objects.create(
            type=type,
            title=title,
            message=message,
            recipient_id=recipient_id,
            sender_id=sender_id,
            related_entity_id=(
                str(related_entity_id) if related_entity_id is not None else None
            ),
            related_entity_type=related_entity_type,
            task_id=task_id,
            created_at=created_at,
            expires_at=expires_at,
        )
    except DatabaseError as exc:
        logger.exception(
            "Error creating %s notification for user %s", type, recipient_id
        )
        raise StorageError("Could not create notification") from exc


# ============================================================
# SETTINGS (READ OR CREATE)
# ============================================================

def get_user_settings(user_id):
    """
    Return the user's settings row, creating it with DEFAULT_SETTINGS
    on first access. The OneToOne constraint on user makes concurrent
    first calls converge on a single row.
    """

    try:
        user_settings, created = NotificationSetting.objects.get_or_create(
            user_id=user_id,
            defaults=dict(DEFAULT_SETTINGS),
        )
    except DatabaseError as exc:
        logger.exception("Error getting notification settings for user %s", user_id)
        raise StorageError("Could not load notification settings") from exc

    if created:
        logger.info("Created default notification settings for user %s", user_id)

    return user_settings


# ============================================================
# CLEANUP
# ============================================================

def delete_expired_notifications(now=None):
    """
    Delete notifications whose expires_at is strictly in the past.
    Rows without expires_at are kept. Failures are logged, not raised.
    """

    now = now or timezone.now()

    try:
        deleted, _ = (
            Notification.objects
            .filter(expires_at__isnull=False, expires_at__lt=now)
            .delete()
        )
    except DatabaseError:
        logger.exception("Error deleting expired notifications")
        return

    logger.info("Deleted %s expired notifications", deleted)


# ============================================================
# EMAIL CHANNEL
# ============================================================

def send_notification_email(notification, *, subject, body):
    """
    Mirror an in-app notification by email when the recipient has
    an address. Delivery problems never affect the in-app row.
    """

    recipient = notification.recipient
    if not recipient.email:
        return

    send_mail(
        subject=subject,
        message=body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[recipient.email],
        fail_silently=True,
    )


def format_due(value, *, missing):
    if value is None:
        return missing

    if isinstance(value, datetime) and timezone.is_aware(value):
        value = timezone.localtime(value)

    return f"{value:%d %B %Y}"
