"""
Reminder notification service layer.

Time-based reminder emitters triggered by schedulers
(APScheduler jobs, the send_task_reminders management command,
or any external cron).

Reminder logic is:
- service-layer only
- lead-time aware, lookahead bounded
- deduplicated over a 24 hour window
- isolated per task (one failure never aborts the sweep)
"""

from .sweep import (
    ReminderMode,
    ReminderSweepResult,
    run_reminder_sweep,
)


def check_and_send_task_reminders(now=None):
    """
    Hourly sweep: remind assignees about tasks coming due
    within their personal lead time.
    """
    return run_reminder_sweep(ReminderMode.UPCOMING, now=now)


def send_overdue_task_reminders(now=None):
    """
    Daily sweep: remind assignees about open tasks whose
    due date has already passed.
    """
    return run_reminder_sweep(ReminderMode.OVERDUE, now=now)


__all__ = [
    "ReminderMode",
    "ReminderSweepResult",
    "check_and_send_task_reminders",
    "send_overdue_task_reminders",
    "run_reminder_sweep",
]
