from django.db import models
from django.conf import settings
from django.utils import timezone


class Notification(models.Model):
    """
    A derived, user-facing notification.
    Notifications are NOT the source of truth; they reflect
    events happening to Tasks, Grants, Programs, etc.
    """

    # =====================================================
    # TYPE
    # =====================================================
    class Type(models.TextChoices):
        TASK_REMINDER = "TASK_REMINDER", "Task reminder"
        TASK_ASSIGNED = "TASK_ASSIGNED", "Task assigned"
        TASK_COMPLETED = "TASK_COMPLETED", "Task completed"
        TASK_COMMENTED = "TASK_COMMENTED", "Task commented"
        REPAYMENT_DUE = "REPAYMENT_DUE", "Repayment due"
        REPAYMENT_OVERDUE = "REPAYMENT_OVERDUE", "Repayment overdue"
        GRANT_STATUS_UPDATE = "GRANT_STATUS_UPDATE", "Grant status update"
        PROGRAM_UPDATE = "PROGRAM_UPDATE", "Program update"
        SYSTEM_MESSAGE = "SYSTEM_MESSAGE", "System message"

    # =====================================================
    # CORE RELATIONSHIPS
    # =====================================================
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        help_text="User who receives this notification",
    )

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sent_notifications",
    )

    # =====================================================
    # CLASSIFICATION + CONTENT
    # =====================================================
    type = models.CharField(
        max_length=30,
        choices=Type.choices,
        db_index=True,
    )

    title = models.CharField(
        max_length=255,
        help_text="Short headline shown in notification list",
    )

    message = models.TextField(
        help_text="Detailed message shown when expanded",
    )

    # =====================================================
    # OPTIONAL CONTEXT
    # =====================================================
    related_entity_id = models.CharField(max_length=64, null=True, blank=True)
    related_entity_type = models.CharField(max_length=50, null=True, blank=True)

    task = models.ForeignKey(
        "tasks.Task",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications",
    )

    # =====================================================
    # STATE
    # =====================================================
    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    expires_at = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["recipient", "is_read"],
                name="notif_recipient_read_idx",
            ),
            models.Index(
                fields=["recipient", "task", "type", "created_at"],
                name="notif_reminder_dedup_idx",
            ),
        ]

    def __str__(self):
        return f"{self.recipient} | {self.type} | {self.title}"

    def mark_as_read(self):
        """Safely mark notification as read."""
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=["is_read", "read_at"])

    @classmethod
    def mark_all_as_read(cls, user, ids=None):
        """
        Mark unread notifications (optionally restricted to ids)
        as read for a user. Returns the number of rows updated.
        """
        qs = cls.objects.filter(recipient=user, is_read=False)
        if ids is not None:
            qs = qs.filter(id__in=ids)

        return qs.update(is_read=True, read_at=timezone.now())


class NotificationSetting(models.Model):
    """
    Per-user channel x category toggles.
    Exactly one row per user, created lazily with the defaults below.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notification_settings",
    )

    email_task_reminders = models.BooleanField(default=True)
    in_app_task_reminders = models.BooleanField(default=True)
    email_repayment_reminders = models.BooleanField(default=True)
    in_app_repayment_reminders = models.BooleanField(default=True)
    email_grant_updates = models.BooleanField(default=True)
    in_app_grant_updates = models.BooleanField(default=True)
    email_program_updates = models.BooleanField(default=True)
    in_app_program_updates = models.BooleanField(default=True)

    # Hours before a task's due date at which a reminder may fire.
    reminder_lead_time = models.PositiveIntegerField(default=24)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Notification settings for {self.user}"
