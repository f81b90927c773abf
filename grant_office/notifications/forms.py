from django import forms

from .models import NotificationSetting


class NotificationSettingForm(forms.ModelForm):
    reminder_lead_time = forms.IntegerField(
        min_value=1,
        max_value=72,
        help_text="Hours before a task's due date to send a reminder",
    )

    class Meta:
        model = NotificationSetting
        fields = [
            "email_task_reminders",
            "in_app_task_reminders",
            "email_repayment_reminders",
            "in_app_repayment_reminders",
            "email_grant_updates",
            "in_app_grant_updates",
            "email_program_updates",
            "in_app_program_updates",
            "reminder_lead_time",
        ]
