"""
Main entry point for the dining hall scraper with scheduling support.
"""

import argparse
import asyncio
import logging
import os
import signal
import sys
from datetime import date
from typing import Optional

from dotenv import load_dotenv

# Add project root to PYTHONPATH so imports work when running this script directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core.config import load_config
from core.errors import ScraperError
from core.infra.http import HttpClient
from core.infra.scheduler import Scheduler
from core.interfaces import MenuSink
from core.orchestrator import DiningHallScraper
from plugins.dineoncampus import DatabaseSink, MenuFetcher


logger = logging.getLogger(__name__)


async def run_once(scraper: DiningHallScraper, sink: MenuSink, target_date: Optional[str] = None) -> None:
    """Scrape menus for one day, save them, then refresh operating hours."""
    target_date = target_date or date.today().isoformat()
    logger.info(f"Scraping menus for {target_date}")

    daily_items, all_data_items = await scraper.scrape_food(target_date)
    await sink.save_menu(daily_items, all_data_items)
    await scraper.scrape_operation_hours(target_date)


async def _scheduled_run(scraper: DiningHallScraper, sink: MenuSink) -> None:
    # The scheduler must survive a bad day upstream
    try:
        await run_once(scraper, sink)
    except ScraperError as e:
        logger.error(f"Scheduled scrape failed: {e}")


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scrape dining hall menus and operating hours")
    parser.add_argument("--date", help="Date to scrape (YYYY-MM-DD), defaults to today")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single scrape even if SCHEDULER_MODE is enabled",
    )
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    """Main entry point with optional scheduler."""
    load_dotenv()
    args = _parse_args(argv)

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s"
    )

    try:
        config = load_config(os.getenv("SCRAPER_CONFIG", "config.yaml"))
    except ScraperError as e:
        logger.error(f"Startup failed: {e}")
        return 1

    db_path = os.getenv("DB_PATH", "dining.db")
    scheduler_mode = os.getenv("SCHEDULER_MODE", "disabled")

    async with HttpClient(timeout=config.http_timeout) as http, DatabaseSink(db_path) as sink:
        fetcher = MenuFetcher(http)
        scraper = DiningHallScraper(config, fetcher, hours_sink=sink)

        if args.once or scheduler_mode != "enabled":
            try:
                await run_once(scraper, sink, args.date)
            except ScraperError as e:
                logger.error(f"Scrape failed: {e}")
                return 1
            return 0

        scheduler = Scheduler(timezone=os.getenv("SCHEDULER_TIMEZONE", "America/Chicago"))
        cron = os.getenv("SCRAPE_CRON", "0 5 * * *")
        scheduler.add_cron_job(_scheduled_run, cron, job_id="daily_scrape", args=[scraper, sink])

        stop_event = asyncio.Event()

        def signal_handler():
            logger.info("Received shutdown signal")
            stop_event.set()

        for sig in (signal.SIGTERM, signal.SIGINT):
            asyncio.get_running_loop().add_signal_handler(sig, signal_handler)

        await scheduler.start()
        try:
            await stop_event.wait()
        finally:
            await scheduler.stop()
            logger.info("Shutdown complete")

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
