"""
Tests for the cron scheduler wrapper.
"""

import pytest

from core.infra.scheduler import Scheduler


async def job():
    pass


@pytest.mark.asyncio
async def test_add_cron_job_registers_job():
    scheduler = Scheduler(timezone="America/Chicago")

    scheduler.add_cron_job(job, "0 5 * * *", job_id="daily_scrape")

    jobs = scheduler.list_jobs()
    assert list(jobs) == ["daily_scrape"]
    assert "cron" in jobs["daily_scrape"]["trigger"]


@pytest.mark.asyncio
async def test_add_cron_job_replaces_existing_id():
    scheduler = Scheduler()

    scheduler.add_cron_job(job, "0 5 * * *", job_id="daily_scrape")
    scheduler.add_cron_job(job, "30 6 * * 1-5", job_id="daily_scrape")

    assert len(scheduler.list_jobs()) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("expression", ["not a cron", "61 5 * * *", "0 5 * * * 0"])
async def test_invalid_cron_expression_is_rejected(expression):
    scheduler = Scheduler()

    with pytest.raises(ValueError):
        scheduler.add_cron_job(job, expression, job_id="bad")

    assert scheduler.list_jobs() == {}


@pytest.mark.asyncio
async def test_start_and_stop():
    scheduler = Scheduler()

    await scheduler.start()
    assert scheduler.running
    await scheduler.stop()
    assert not scheduler.running
