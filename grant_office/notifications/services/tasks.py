"""
notifications/services/tasks.py

Task lifecycle notifications: reminder, assigned, completed.
All three are gated by the recipient's in_app_task_reminders toggle.
"""

from accounts.models import get_display_name
from notifications.contexts import TaskContext
from notifications.exceptions import InvalidArgument
from notifications.models import Notification

from .core import (
    create_notification,
    format_due,
    get_user_settings,
    send_notification_email,
)

OVERDUE_TITLE_PREFIX = "Overdue Task: "


def _require_task(context, purpose):
    if not isinstance(context, TaskContext):
        raise InvalidArgument(
            f"Task context is required for task {purpose} notifications"
        )
    return context


# ============================================================
# TASK REMINDER (UPCOMING + OVERDUE)
# ============================================================

def send_task_reminder(user_id, context, *, overdue=False):
    """
    Remind a user about a task due date.

    Returns None (and creates nothing) when the user has
    in-app task reminders disabled.
    """

    task = _require_task(context, "reminder")

    user_settings = get_user_settings(user_id)
    if not user_settings.in_app_task_reminders:
        return None

    if overdue:
        due_label = format_due(task.due_date, missing="an unspecified date")
        title = f"{OVERDUE_TITLE_PREFIX}{task.title}"
        message = (
            f'Your task "{task.title}" is overdue. It was due on {due_label}. '
            f"Please complete it as soon as possible."
        )
    else:
        due_label = format_due(task.due_date, missing="not specified")
        title = f"Reminder: {task.title} is due soon"
        message = (
            f'Your task "{task.title}" is due on {due_label}. '
            f"Please complete it in time."
        )

    notification = create_notification(
        type=Notification.Type.TASK_REMINDER,
        title=title,
        message=message,
        recipient_id=user_id,
        task_id=task.id,
        related_entity_id=task.id,
        related_entity_type="Task",
    )

    if user_settings.email_task_reminders:
        send_notification_email(
            notification,
            subject=title,
            body=(
                f"Good day.\n\n"
                f"{message}\n\n"
                f"This notice is issued for your guidance and appropriate action."
            ),
        )

    return notification


# ============================================================
# TASK ASSIGNED
# ============================================================

def send_task_assigned_notification(user_id, assigned_by_id, context):
    task = _require_task(context, "assigned")

    user_settings = get_user_settings(user_id)
    if not user_settings.in_app_task_reminders:
        return None

    actor_name = get_display_name(assigned_by_id) or "Someone"
    title = f"New Task Assigned: {task.title}"
    message = f'{actor_name} has assigned you a new task: "{task.title}".'

    notification = create_notification(
        type=Notification.Type.TASK_ASSIGNED,
        title=title,
        message=message,
        recipient_id=user_id,
        sender_id=assigned_by_id,
        task_id=task.id,
        related_entity_id=task.id,
        related_entity_type="Task",
    )

    if user_settings.email_task_reminders:
        body = f"Good day.\n\n{message}\n\n"
        if task.due_date:
            body += f"The task is due on {format_due(task.due_date, missing='')}.\n\n"
        body += "Please log in to review the task details."

        send_notification_email(notification, subject=title, body=body)

    return notification


# ============================================================
# TASK COMPLETED
# ============================================================

def send_task_completed_notification(user_id, completed_by_id, context):
    task = _require_task(context, "completed")

    user_settings = get_user_settings(user_id)
    if not user_settings.in_app_task_reminders:
        return None

    actor_name = get_display_name(completed_by_id) or "Someone"
    title = f"Task Completed: {task.title}"
    message = f'{actor_name} has completed the task: "{task.title}".'

    notification = create_notification(
        type=Notification.Type.TASK_COMPLETED,
        title=title,
        message=message,
        recipient_id=user_id,
        sender_id=completed_by_id,
        task_id=task.id,
        related_entity_id=task.id,
        related_entity_type="Task",
    )

    if user_settings.email_task_reminders:
        send_notification_email(
            notification,
            subject=title,
            body=f"Good day.\n\n{message}\n\nThis notice is issued for your information.",
        )

    return notification
