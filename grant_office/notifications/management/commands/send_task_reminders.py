"""
notifications/management/commands/send_task_reminders.py

Scheduled command for cron-driven deployments
(APScheduler calls the same command in-process).

- default:    upcoming-due reminders (run hourly)
- --overdue:  overdue reminders (run daily)
- --cleanup:  delete expired notifications
- --all:      everything above, in that order

The sweeps de-duplicate over a 24 hour window,
so running the command twice is safe.
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from notifications.services import (
    check_and_send_task_reminders,
    delete_expired_notifications,
    send_overdue_task_reminders,
)


class Command(BaseCommand):
    help = "Send task reminders (upcoming by default, overdue with --overdue)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--overdue",
            action="store_true",
            help="Send reminders for tasks whose due date has passed",
        )
        parser.add_argument(
            "--cleanup",
            action="store_true",
            help="Delete notifications whose expiry date has passed",
        )
        parser.add_argument(
            "--all",
            action="store_true",
            help="Run upcoming, overdue and cleanup passes",
        )

    def handle(self, *args, **options):
        now = timezone.now()
        run_all = options["all"]

        run_upcoming = run_all or not (options["overdue"] or options["cleanup"])
        run_overdue = run_all or options["overdue"]
        run_cleanup = run_all or options["cleanup"]

        self.stdout.write(
            self.style.NOTICE(
                f"[{now:%Y-%m-%d %H:%M:%S}] Starting scheduled task reminders"
            )
        )

        if run_upcoming:
            self._report(check_and_send_task_reminders(now=now))

        if run_overdue:
            self._report(send_overdue_task_reminders(now=now))

        if run_cleanup:
            delete_expired_notifications(now=now)
            self.stdout.write(
                self.style.SUCCESS("Expired notification cleanup completed")
            )

    def _report(self, result):
        line = (
            f"{result.mode.value.capitalize()} reminders: "
            f"{result.sent} sent, {result.skipped} skipped, {result.failed} failed"
        )

        if result.failed:
            self.stdout.write(self.style.WARNING(line))
        else:
            self.stdout.write(self.style.SUCCESS(line))
