from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from .models import Notification, NotificationSetting


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """
    Admin configuration for in-app notifications.
    """

    # =====================================================
    # LIST VIEW
    # =====================================================
    list_display = (
        "id",
        "recipient",
        "type",
        "colored_title",
        "is_read",
        "created_at",
        "expires_at",
    )

    list_filter = (
        "type",
        "is_read",
        "created_at",
    )

    search_fields = (
        "title",
        "message",
        "recipient__username",
        "recipient__first_name",
        "recipient__last_name",
    )

    ordering = ("-created_at",)
    list_per_page = 25

    # =====================================================
    # FIELDSETS (DETAIL VIEW)
    # =====================================================
    fieldsets = (
        ("Recipient", {
            "fields": ("recipient", "sender"),
        }),
        ("Content", {
            "fields": ("type", "title", "message"),
        }),
        ("Context", {
            "fields": ("task", "related_entity_type", "related_entity_id"),
        }),
        ("Status", {
            "fields": ("is_read", "read_at", "created_at", "expires_at"),
        }),
    )

    readonly_fields = (
        "created_at",
        "read_at",
    )

    actions = (
        "mark_as_read",
        "mark_as_unread",
    )

    # =====================================================
    # CUSTOM DISPLAY HELPERS
    # =====================================================
    def colored_title(self, obj):
        """
        Color the title based on type for fast scanning.
        """
        color_map = {
            Notification.Type.TASK_REMINDER: "#f59e0b",        # orange
            Notification.Type.TASK_ASSIGNED: "#2563eb",        # blue
            Notification.Type.TASK_COMPLETED: "#16a34a",       # green
            Notification.Type.REPAYMENT_DUE: "#7c3aed",        # purple
            Notification.Type.REPAYMENT_OVERDUE: "#dc2626",    # red
            Notification.Type.SYSTEM_MESSAGE: "#6b7280",       # gray
        }

        color = color_map.get(obj.type, "#000000")

        return format_html(
            '<span style="color:{}; font-weight:600;">{}</span>',
            color,
            obj.title,
        )

    colored_title.short_description = "Title"

    # =====================================================
    # ADMIN ACTIONS
    # =====================================================
    @admin.action(description="Mark selected notifications as READ")
    def mark_as_read(self, request, queryset):
        queryset.update(is_read=True, read_at=timezone.now())

    @admin.action(description="Mark selected notifications as UNREAD")
    def mark_as_unread(self, request, queryset):
        queryset.update(is_read=False, read_at=None)


@admin.register(NotificationSetting)
class NotificationSettingAdmin(admin.ModelAdmin):
    list_display = (
        "user",
        "in_app_task_reminders",
        "email_task_reminders",
        "in_app_repayment_reminders",
        "reminder_lead_time",
        "updated_at",
    )

    search_fields = (
        "user__username",
        "user__email",
    )

    readonly_fields = (
        "created_at",
        "updated_at",
    )
