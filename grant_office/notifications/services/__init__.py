"""
Notification service layer.

Every notification in the system is written through these
functions; views, task services and schedulers never create
Notification rows directly.
"""

# =====================================================
# CORE
# =====================================================
from .core import (
    create_notification,
    delete_expired_notifications,
    get_user_settings,
)

# =====================================================
# TASKS
# =====================================================
from .tasks import (
    send_task_reminder,
    send_task_assigned_notification,
    send_task_completed_notification,
)

# =====================================================
# REPAYMENTS / GRANTS / PROGRAMS / SYSTEM
# =====================================================
from .updates import (
    send_repayment_reminder,
    send_grant_status_update,
    send_program_update,
    send_system_message,
)

# =====================================================
# REMINDERS
# =====================================================
from .reminders import (
    check_and_send_task_reminders,
    send_overdue_task_reminders,
)

# =====================================================
# PUBLIC EXPORTS
# =====================================================
__all__ = [
    # Core
    "create_notification",
    "delete_expired_notifications",
    "get_user_settings",

    # Tasks
    "send_task_reminder",
    "send_task_assigned_notification",
    "send_task_completed_notification",

    # Repayments / grants / programs / system
    "send_repayment_reminder",
    "send_grant_status_update",
    "send_program_update",
    "send_system_message",

    # Reminders
    "check_and_send_task_reminders",
    "send_overdue_task_reminders",
]
