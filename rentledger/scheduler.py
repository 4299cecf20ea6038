"""Daily overdue sweep scheduling."""

import logging

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from rentledger.config import settings

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "overdue_sweep"


def run_overdue_sweep() -> int:
    """Run one overdue sweep in its own session.

    Failures are logged and re-raised; the sweep is idempotent, so the next
    scheduled run simply picks up whatever this one missed.

    Returns:
        Number of rents marked OVERDUE
    """
    from rentledger.services import SessionLocal
    from rentledger.services.overdue_service import OverdueSweeper

    db = SessionLocal()
    try:
        return OverdueSweeper(db).sweep_overdue()
    except Exception as e:
        logger.error("Overdue sweep failed: %s", e, exc_info=True)
        raise
    finally:
        db.close()


def job_listener(event) -> None:
    if event.exception:
        logger.error("Job %s failed: %s", event.job_id, event.exception)
    else:
        logger.info("Job %s finished: %s", event.job_id, event.retval)


def build_scheduler(hour: int | None = None, minute: int | None = None) -> BackgroundScheduler:
    """Create a scheduler with the daily sweep job registered (not started).

    Args:
        hour: Hour to run at (default from settings)
        minute: Minute to run at (default from settings)
    """
    hour = settings.sweep_hour if hour is None else hour
    minute = settings.sweep_minute if minute is None else minute

    scheduler = BackgroundScheduler(
        job_defaults={
            "coalesce": True,  # Missed runs collapse into one
            "max_instances": 1,
            "misfire_grace_time": 3600,
        }
    )
    scheduler.add_listener(job_listener, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR)
    scheduler.add_job(
        run_overdue_sweep,
        trigger=CronTrigger(hour=hour, minute=minute),
        id=SWEEP_JOB_ID,
        name="Daily Overdue Sweep",
        replace_existing=True,
    )
    logger.info("Scheduled overdue sweep daily at %02d:%02d", hour, minute)
    return scheduler


def start_scheduler() -> BackgroundScheduler:
    scheduler = build_scheduler()
    scheduler.start()
    logger.info("Overdue sweep scheduler started")
    return scheduler


__all__ = ["run_overdue_sweep", "build_scheduler", "start_scheduler", "SWEEP_JOB_ID"]
