"""
Scheduler infrastructure for running the scrape on a cron schedule.
"""

import logging
from typing import Any, Callable, Dict, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from croniter import croniter


logger = logging.getLogger(__name__)


class Scheduler:
    """Async task scheduler wrapper around APScheduler with an in-memory job store."""

    def __init__(self, timezone: str = "UTC"):
        job_defaults = {
            'coalesce': True,
            'max_instances': 1,
            'misfire_grace_time': 300  # seconds
        }

        self._scheduler = AsyncIOScheduler(job_defaults=job_defaults, timezone=timezone)
        self._started = False

    @property
    def running(self) -> bool:
        return self._started

    async def start(self) -> None:
        """Start the scheduler."""
        if not self._started:
            self._scheduler.start()
            self._started = True
            logger.info("Scheduler started")

    async def stop(self) -> None:
        """Stop the scheduler."""
        if self._started:
            self._scheduler.shutdown()
            self._started = False
            logger.info("Scheduler stopped")

    def add_cron_job(
        self,
        func: Callable,
        cron_expression: str,
        job_id: Optional[str] = None,
        **kwargs
    ) -> None:
        """Add a job that runs on a cron schedule (minute hour day month day_of_week)."""
        if not self._validate_cron_expression(cron_expression):
            raise ValueError(f"Invalid cron expression: {cron_expression}")

        parts = cron_expression.split()
        if len(parts) != 5:
            raise ValueError("Cron expression must have 5 parts: minute hour day month day_of_week")

        trigger = CronTrigger.from_crontab(cron_expression, timezone=self._scheduler.timezone)

        self._scheduler.add_job(
            func,
            trigger=trigger,
            id=job_id,
            name=job_id or func.__name__,
            replace_existing=True,
            **kwargs
        )

        logger.info(f"Added cron job: {job_id or func.__name__} ({cron_expression})")

    def _validate_cron_expression(self, cron_expression: str) -> bool:
        """Validate cron expression using croniter."""
        if not croniter.is_valid(cron_expression):
            logger.error(f"Invalid cron expression '{cron_expression}'")
            return False
        return True

    def remove_job(self, job_id: str) -> None:
        """Remove a job by ID."""
        self._scheduler.remove_job(job_id)
        logger.info(f"Removed job: {job_id}")

    def list_jobs(self) -> Dict[str, Any]:
        """List all scheduled jobs."""
        jobs = {}
        for job in self._scheduler.get_jobs():
            jobs[job.id] = {
                "name": job.name,
                "next_run": getattr(job, "next_run_time", None),
                "trigger": str(job.trigger),
            }
        return jobs
