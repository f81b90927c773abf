"""
notifications/services/reminders/sweep.py

Task reminder sweep shared by the UPCOMING (hourly) and
OVERDUE (daily) modes.

Idempotence rests on the de-dup window: a task/recipient pair that
already received a matching TASK_REMINDER inside the window is skipped.
Each task is processed in its own savepoint; one failing task is
logged and counted, the rest of the sweep continues.
"""

import enum
import logging
from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist
from django.db import DatabaseError, transaction
from django.utils import timezone

from notifications.contexts import TaskContext
from notifications.exceptions import StorageError
from notifications.models import Notification
from notifications.services.tasks import OVERDUE_TITLE_PREFIX, send_task_reminder
from tasks.models import Task

logger = logging.getLogger(__name__)


class ReminderMode(str, enum.Enum):
    UPCOMING = "upcoming"
    OVERDUE = "overdue"


@dataclass
class ReminderSweepResult:
    mode: ReminderMode
    sent: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def processed(self):
        return self.sent + self.skipped + self.failed


# ============================================================
# CONFIG
# ============================================================

def _lookahead():
    return timedelta(days=getattr(settings, "REMINDER_LOOKAHEAD_DAYS", 2))


def _dedup_window():
    return timedelta(hours=getattr(settings, "REMINDER_DEDUP_WINDOW_HOURS", 24))


def _default_lead_time():
    return getattr(settings, "DEFAULT_REMINDER_LEAD_TIME", 24)


# ============================================================
# HELPERS
# ============================================================

def hours_until(due_date, now):
    """Whole hours from now until due_date, truncated toward zero."""
    return int((due_date - now).total_seconds() / 3600)


def _settings_for(user):
    """The user's settings row, or None when it was never created."""
    try:
        return user.notification_settings
    except ObjectDoesNotExist:
        return None


def candidate_tasks(mode, now):
    qs = (
        Task.objects
        .select_related("assignee", "assignee__notification_settings")
        .filter(
            status__in=Task.REMINDABLE_STATUSES,
            due_date__isnull=False,
            assignee__isnull=False,
        )
    )

    if mode is ReminderMode.UPCOMING:
        qs = qs.filter(due_date__gt=now, due_date__lte=now + _lookahead())
    else:
        qs = qs.filter(due_date__lt=now)

    return qs.order_by("due_date", "pk")


def already_reminded(task, recipient_id, mode, since):
    qs = Notification.objects.filter(
        recipient_id=recipient_id,
        task_id=task.pk,
        type=Notification.Type.TASK_REMINDER,
        created_at__gt=since,
    )

    # Upcoming reminders never carry the overdue title prefix.
    if mode is ReminderMode.OVERDUE:
        qs = qs.filter(title__startswith=OVERDUE_TITLE_PREFIX)

    return qs.exists()


def _process_task(task, mode, now, since):
    """Return True when a reminder was created for this task."""

    user = task.assignee
    user_settings = _settings_for(user)

    # Users who never saved settings are not reminded.
    if user_settings is None or not user_settings.in_app_task_reminders:
        return False

    if mode is ReminderMode.UPCOMING:
        lead_time = user_settings.reminder_lead_time or _default_lead_time()

        if hours_until(task.due_date, now) > lead_time:
            return False

    if already_reminded(task, user.pk, mode, since):
        return False

    notification = send_task_reminder(
        user.pk,
        TaskContext.from_task(task),
        overdue=mode is ReminderMode.OVERDUE,
    )
    return notification is not None


# ============================================================
# SWEEP
# ============================================================

def run_reminder_sweep(mode, now=None):
    now = now or timezone.now()
    since = now - _dedup_window()
    result = ReminderSweepResult(mode=mode)

    try:
        tasks = list(candidate_tasks(mode, now))
    except DatabaseError as exc:
        logger.exception("Could not load tasks for %s reminder sweep", mode.value)
        raise StorageError("Could not load reminder candidates") from exc

    for task in tasks:
        try:
            with transaction.atomic():
                sent = _process_task(task, mode, now, since)
        except Exception:
            result.failed += 1
            logger.exception(
                "Failed to process %s reminder for task %s (assignee=%s)",
                mode.value, task.pk, task.assignee_id,
            )
            continue

        if sent:
            result.sent += 1
            logger.info(
                "Sent %s task reminder for task %s to user %s",
                mode.value, task.pk, task.assignee_id,
            )
        else:
            result.skipped += 1

    logger.info(
        "%s task reminder sweep completed: sent=%s skipped=%s failed=%s",
        mode.value.capitalize(), result.sent, result.skipped, result.failed,
    )

    if result.failed:
        logger.warning(
            "%s task reminder sweep had %s failed task(s)",
            mode.value.capitalize(), result.failed,
        )

    return result
