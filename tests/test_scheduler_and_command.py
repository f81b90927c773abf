from datetime import timedelta
from io import StringIO

import pytest
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger
from django.core.management import call_command

from notifications import scheduler
from notifications.models import Notification


def run_command(*args):
    out = StringIO()
    call_command("send_task_reminders", *args, stdout=out)
    return out.getvalue()


# ============================================================
# Management command
# ============================================================

@pytest.mark.django_db
def test_command_runs_upcoming_sweep_by_default(opted_in, make_task, now):
    make_task(due_date=now + timedelta(hours=3))
    make_task(due_date=now - timedelta(hours=3))

    output = run_command()

    assert "Upcoming reminders: 1 sent, 0 skipped, 0 failed" in output
    assert "Overdue reminders" not in output
    assert Notification.objects.count() == 1


@pytest.mark.django_db
def test_command_overdue_flag(opted_in, make_task, now):
    make_task(due_date=now - timedelta(hours=3))

    output = run_command("--overdue")

    assert "Overdue reminders: 1 sent, 0 skipped, 0 failed" in output
    assert "Upcoming reminders" not in output


@pytest.mark.django_db
def test_command_cleanup_flag(user, now):
    Notification.objects.create(
        recipient=user,
        type=Notification.Type.SYSTEM_MESSAGE,
        title="old",
        message="old",
        expires_at=now - timedelta(days=1),
    )

    output = run_command("--cleanup")

    assert "Expired notification cleanup completed" in output
    assert Notification.objects.count() == 0


@pytest.mark.django_db
def test_command_all_runs_every_pass_and_is_idempotent(opted_in, make_task, now):
    make_task(due_date=now + timedelta(hours=3))
    make_task(due_date=now - timedelta(hours=3))

    first = run_command("--all")
    second = run_command("--all")

    assert "Upcoming reminders: 1 sent" in first
    assert "Overdue reminders: 1 sent" in first
    assert "Expired notification cleanup completed" in first

    assert "Upcoming reminders: 0 sent, 1 skipped" in second
    assert "Overdue reminders: 0 sent, 1 skipped" in second
    assert Notification.objects.count() == 2


# ============================================================
# Scheduler
# ============================================================

def test_register_jobs_adds_reminder_and_cleanup_jobs():
    sched = BackgroundScheduler(timezone="UTC")

    scheduler.register_jobs(sched)

    jobs = {job.id: job for job in sched.get_jobs()}
    assert set(jobs) == {
        "send_task_reminders",
        "send_overdue_task_reminders",
        "delete_expired_notifications",
    }

    assert isinstance(jobs["send_task_reminders"].trigger, IntervalTrigger)
    assert jobs["send_task_reminders"].trigger.interval == timedelta(hours=1)
    assert isinstance(jobs["send_overdue_task_reminders"].trigger, CronTrigger)
    assert isinstance(jobs["delete_expired_notifications"].trigger, CronTrigger)

    for job in jobs.values():
        assert job.max_instances == 1
        assert job.coalesce is True


def test_start_scheduler_disabled_by_setting():
    assert scheduler.start_scheduler() is None


def test_start_scheduler_starts_once(settings):
    settings.ENABLE_SCHEDULER = True

    try:
        first = scheduler.start_scheduler()
        second = scheduler.start_scheduler()

        assert first is not None
        assert first is second
        assert first.running
    finally:
        scheduler.shutdown_scheduler()

    assert scheduler._scheduler is None


@pytest.mark.parametrize(
    "job, expected",
    [
        (scheduler.run_task_reminders, ("send_task_reminders",)),
        (scheduler.run_overdue_task_reminders, ("send_task_reminders", "--overdue")),
        (scheduler.run_notification_cleanup, ("send_task_reminders", "--cleanup")),
    ],
)
def test_job_wrappers_delegate_to_command(monkeypatch, job, expected):
    calls = []
    monkeypatch.setattr(scheduler, "call_command", lambda *args: calls.append(args))

    job()

    assert calls == [expected]
