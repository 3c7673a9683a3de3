"""
Orchestrator for the fetch → retry → parse run across every location and
meal period.
"""

from __future__ import annotations

import logging
from datetime import date as Date
from functools import partial
from typing import List, Optional, Tuple, Union

from plugins.dineoncampus.fetcher import MenuFetcher
from plugins.dineoncampus.filters import ItemFilter
from plugins.dineoncampus.parser import MenuParser
from sinks.log_sink import LoggingHoursSink

from .config import ScrapeConfig
from .errors import DecodeError, RetryExhaustedError
from .interfaces import HoursSink
from .models import AllDataItem, DailyItem, TimeOfDay
from .retry import retry


logger = logging.getLogger(__name__)


class DiningHallScraper:
    """Scrapes menus and operating hours for the configured dining halls.

    Locations and meal periods are visited one at a time, in config order.
    """

    def __init__(
        self,
        config: ScrapeConfig,
        fetcher: MenuFetcher,
        parser: Optional[MenuParser] = None,
        hours_sink: Optional[HoursSink] = None,
    ):
        self.config = config
        self.fetcher = fetcher
        self.parser = parser or MenuParser(ItemFilter.from_config(config))
        self.hours_sink = hours_sink or LoggingHoursSink()

    async def scrape_food(self, date: Union[str, Date]) -> Tuple[List[DailyItem], List[AllDataItem]]:
        """Fetch and parse every location/service menu for ``date``.

        Fails fast: if any single request exhausts its retries the error
        propagates and nothing gathered so far is returned.
        """
        daily_items: List[DailyItem] = []
        all_data_items: List[AllDataItem] = []

        for location in self.config.locations:
            for service in location.services:
                url = self.config.menu_url(location, service, date)
                try:
                    d_items, a_items = await retry(
                        url,
                        self.config.max_retries,
                        partial(self._visit_dining_hall, url, location.name, service.time_of_day),
                    )
                except RetryExhaustedError:
                    logger.error(f"All retries failed for URL: {url}")
                    raise

                daily_items.extend(d_items)
                all_data_items.extend(a_items)

        logger.info(
            f"Scraping successful: {len(daily_items)} daily items from "
            f"{self.config.request_count} menus"
        )
        return daily_items, all_data_items

    async def scrape_operation_hours(self, date: Union[str, Date]) -> None:
        """Fetch the weekly schedule and hand it to the hours sink."""
        url = self.config.operation_hours_url(date)
        try:
            await retry(url, self.config.max_retries, partial(self._visit_operation_hours, url))
        except RetryExhaustedError:
            logger.error(f"All retries failed for URL: {url}")
            raise

        logger.info("Scraping operation hours successful")

    async def _visit_dining_hall(
        self,
        url: str,
        location_name: str,
        time_of_day: TimeOfDay,
    ) -> Tuple[List[DailyItem], List[AllDataItem]]:
        try:
            response = await self.fetcher.fetch_menu(url)
        except DecodeError as e:
            # A bad payload is not retried; this visit just contributes nothing
            logger.error(f"Error decoding menu for {location_name} {time_of_day}: {e}")
            return [], []

        return self.parser.parse_menu(response.menu, location_name, time_of_day)

    async def _visit_operation_hours(self, url: str) -> None:
        try:
            response = await self.fetcher.fetch_operation_hours(url)
        except DecodeError as e:
            logger.error(f"Error decoding operation hours: {e}")
            return

        try:
            await self.hours_sink.post_operation_hours(response.locations)
        except Exception as e:
            logger.error(f"Hours sink {self.hours_sink.name} failed: {e}")
