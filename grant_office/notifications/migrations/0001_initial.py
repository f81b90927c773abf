import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tasks", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(choices=[("TASK_REMINDER", "Task reminder"), ("TASK_ASSIGNED", "Task assigned"), ("TASK_COMPLETED", "Task completed"), ("TASK_COMMENTED", "Task commented"), ("REPAYMENT_DUE", "Repayment due"), ("REPAYMENT_OVERDUE", "Repayment overdue"), ("GRANT_STATUS_UPDATE", "Grant status update"), ("PROGRAM_UPDATE", "Program update"), ("SYSTEM_MESSAGE", "System message")], db_index=True, max_length=30)),
                ("title", models.CharField(help_text="Short headline shown in notification list", max_length=255)),
                ("message", models.TextField(help_text="Detailed message shown when expanded")),
                ("related_entity_id", models.CharField(blank=True, max_length=64, null=True)),
                ("related_entity_type", models.CharField(blank=True, max_length=50, null=True)),
                ("is_read", models.BooleanField(db_index=True, default=False)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("expires_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("recipient", models.ForeignKey(help_text="User who receives this notification", on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
                ("sender", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="sent_notifications", to=settings.AUTH_USER_MODEL)),
                ("task", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to="tasks.task")),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
                    models.Index(fields=["recipient", "task", "type", "created_at"], name="notif_reminder_dedup_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="NotificationSetting",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("email_task_reminders", models.BooleanField(default=True)),
                ("in_app_task_reminders", models.BooleanField(default=True)),
                ("email_repayment_reminders", models.BooleanField(default=True)),
                ("in_app_repayment_reminders", models.BooleanField(default=True)),
                ("email_grant_updates", models.BooleanField(default=True)),
                ("in_app_grant_updates", models.BooleanField(default=True)),
                ("email_program_updates", models.BooleanField(default=True)),
                ("in_app_program_updates", models.BooleanField(default=True)),
                ("reminder_lead_time", models.PositiveIntegerField(default=24)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="notification_settings", to=settings.AUTH_USER_MODEL)),
            ],
        ),
    ]
