import logging

from django.db import transaction

from notifications.contexts import TaskContext
from notifications.services import (
    send_task_assigned_notification,
    send_task_completed_notification,
)

from .models import Task

logger = logging.getLogger(__name__)


@transaction.atomic
def assign_task(task, *, assignee, assigned_by=None):
    """
    Assign (or reassign) a task and notify the new assignee.
    Re-assigning to the current assignee is a no-op.
    Returns the notification, or None when nothing was sent.
    """

    if assignee is None:
        raise ValueError("An assignee is required.")

    if task.assignee_id == assignee.pk:
        return None

    task.assignee = assignee
    task.save(update_fields=["assignee", "updated_at"])

    logger.info(
        "Task %s assigned to user %s by %s",
        task.pk, assignee.pk, getattr(assigned_by, "pk", None),
    )

    # Self-assignment does not notify.
    if assigned_by is not None and assigned_by.pk == assignee.pk:
        return None

    return send_task_assigned_notification(
        assignee.pk,
        getattr(assigned_by, "pk", None),
        TaskContext.from_task(task),
    )


@transaction.atomic
def complete_task(task, *, completed_by):
    """
    Mark a task COMPLETED and notify its creator.
    The creator is not notified about their own completion.
    """

    if task.status == Task.Status.COMPLETED:
        return None

    if task.status == Task.Status.CANCELLED:
        raise ValueError("A cancelled task cannot be completed.")

    task.status = Task.Status.COMPLETED
    task.save(update_fields=["status", "updated_at"])

    logger.info("Task %s completed by user %s", task.pk, completed_by.pk)

    creator_id = task.created_by_id
    if creator_id is None or creator_id == completed_by.pk:
        return None

    return send_task_completed_notification(
        creator_id,
        completed_by.pk,
        TaskContext.from_task(task),
    )
