"""
Menu parser – turns a decoded menu into DailyItem / AllDataItem records.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from core.models import AllDataItem, DailyItem, TimeOfDay

from .filters import ItemFilter
from .schemas import Menu

logger = logging.getLogger(__name__)


class MenuParser:
    """Stateless transform from :class:`Menu` to domain records."""

    name = "MenuParser"

    def __init__(self, item_filter: Optional[ItemFilter] = None):
        self.item_filter = item_filter or ItemFilter((), ())

    def parse_menu(
        self,
        menu: Menu,
        location_name: str,
        time_of_day: TimeOfDay,
    ) -> Tuple[List[DailyItem], List[AllDataItem]]:
        """Emit one record pair per non-ingredient item, in payload order.

        An ingredient category drops every item in it; an ingredient item
        drops only itself.
        """
        daily_items: List[DailyItem] = []
        all_data_items: List[AllDataItem] = []

        for category in menu.periods.categories:
            if self.item_filter.is_ingredient_category(category.name):
                logger.debug("Skipping category %r at %s", category.name, location_name)
                continue

            for item in category.items:
                if self.item_filter.is_ingredient(item.name):
                    continue

                all_data_items.append(AllDataItem(name=item.name))
                daily_items.append(
                    DailyItem(
                        name=item.name,
                        description=item.description or "",
                        date=menu.date,
                        location=location_name,
                        station_name=category.name,
                        time_of_day=time_of_day,
                    )
                )

        return daily_items, all_data_items
