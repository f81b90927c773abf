from apscheduler.schedulers.background import BackgroundScheduler
from django.conf import settings
from django.core.management import call_command
from django.utils import timezone
import logging

logger = logging.getLogger(__name__)

# ============================================================
# GLOBAL SAFETY LOCK
# Prevents scheduler from starting more than once
# ============================================================
_scheduler = None


def start_scheduler():
    """
    Start APScheduler safely.

    - Respects ENABLE_SCHEDULER setting
    - Prevents double start (Django autoreload, imports)
    - Safe for development and single-process production

    Returns the running scheduler, or None when disabled.
    """
    global _scheduler

    # --------------------------------------------
    # DEV / PROD TOGGLE
    # --------------------------------------------
    if not getattr(settings, "ENABLE_SCHEDULER", False):
        logger.info("APScheduler disabled via settings (ENABLE_SCHEDULER=False)")
        return None

    # --------------------------------------------
    # SAFETY LOCK (NO DOUBLE START)
    # --------------------------------------------
    if _scheduler is not None:
        logger.info("APScheduler already running, skipping initialization")
        return _scheduler

    logger.info("Starting APScheduler...")

    scheduler = BackgroundScheduler(timezone=settings.TIME_ZONE)
    register_jobs(scheduler)
    scheduler.start()

    _scheduler = scheduler

    logger.info(
        "APScheduler started: upcoming task reminders every %s hour(s), "
        "overdue reminders daily at %02d:00, cleanup daily at %02d:00",
        getattr(settings, "TASK_REMINDER_INTERVAL_HOURS", 1),
        getattr(settings, "OVERDUE_REMINDER_HOUR", 8),
        getattr(settings, "NOTIFICATION_CLEANUP_HOUR", 3),
    )
    return _scheduler


def register_jobs(scheduler):
    """Attach the reminder and cleanup jobs to a scheduler."""

    # --------------------------------------------
    # UPCOMING DUE: HOURLY
    # --------------------------------------------
    scheduler.add_job(
        run_task_reminders,
        trigger="interval",
        hours=getattr(settings, "TASK_REMINDER_INTERVAL_HOURS", 1),
        id="send_task_reminders",
        replace_existing=True,
        max_instances=1,      # Prevent overlapping runs
        coalesce=True,        # Merge missed runs if server was down
    )

    # --------------------------------------------
    # OVERDUE: DAILY
    # --------------------------------------------
    scheduler.add_job(
        run_overdue_task_reminders,
        trigger="cron",
        hour=getattr(settings, "OVERDUE_REMINDER_HOUR", 8),
        minute=0,
        id="send_overdue_task_reminders",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    # --------------------------------------------
    # EXPIRED NOTIFICATION CLEANUP: DAILY
    # --------------------------------------------
    scheduler.add_job(
        run_notification_cleanup,
        trigger="cron",
        hour=getattr(settings, "NOTIFICATION_CLEANUP_HOUR", 3),
        minute=0,
        id="delete_expired_notifications",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )


def shutdown_scheduler():
    global _scheduler

    if _scheduler is None:
        return

    _scheduler.shutdown(wait=False)
    _scheduler = None
    logger.info("APScheduler stopped")


# ============================================================
# JOB WRAPPERS
# Keep all business logic in the management command / services.
# ============================================================

def run_task_reminders():
    now = timezone.now()
    logger.info(f"Running scheduled task reminders at {now:%Y-%m-%d %H:%M:%S}")

    call_command("send_task_reminders")


def run_overdue_task_reminders():
    now = timezone.now()
    logger.info(f"Running scheduled overdue task reminders at {now:%Y-%m-%d %H:%M:%S}")

    call_command("send_task_reminders", "--overdue")


def run_notification_cleanup():
    now = timezone.now()
    logger.info(f"Running expired notification cleanup at {now:%Y-%m-%d %H:%M:%S}")

    call_command("send_task_reminders", "--cleanup")
