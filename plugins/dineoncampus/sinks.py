"""
Database sink for scraped menus and operating hours.
"""

import logging
from typing import Any, Sequence

from core.infra.db import Database
from core.interfaces import HoursSink, MenuSink
from core.models import AllDataItem, DailyItem


logger = logging.getLogger(__name__)


class DatabaseSink(MenuSink, HoursSink):
    """Persists records to SQLite.

    The daily table only ever holds one date: a batch for a new date replaces
    whatever was there. The catalog is deduplicated by item name.
    """

    name = "DatabaseSink"

    def __init__(self, db_path: str = "dining.db", db: Database = None):
        self.db = db or Database(db_path)

    async def __aenter__(self):
        await self.db.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.db.close()

    async def save_menu(
        self,
        daily_items: Sequence[DailyItem],
        all_data_items: Sequence[AllDataItem],
    ) -> None:
        async with self.db.transaction():
            previous_date = await self.db.date_of_daily_items()
            if daily_items:
                new_date = daily_items[0].date
                if previous_date is not None and previous_date != new_date:
                    logger.info(f"Replacing daily items for {previous_date} with {new_date}")
                    await self.db.delete_daily_items()
            elif previous_date is not None:
                logger.warning(f"No daily items in batch; stored menu for {previous_date} left in place")

            inserted_daily = await self.db.insert_daily_items(daily_items)
            inserted_all = await self.db.insert_all_data_items(all_data_items)
        logger.info(
            f"Saved {inserted_daily}/{len(daily_items)} daily items, "
            f"{inserted_all}/{len(all_data_items)} new catalog items"
        )

    async def post_operation_hours(self, locations: Sequence[Any]) -> None:
        rows = [loc.model_dump() if hasattr(loc, "model_dump") else dict(loc) for loc in locations]
        saved = await self.db.upsert_operation_hours(rows)
        logger.info(f"Saved operation hours for {saved} locations")
