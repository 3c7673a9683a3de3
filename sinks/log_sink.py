"""
Logging sink for operating hours.
"""

import logging
from typing import Any, Sequence

from core.interfaces import HoursSink


logger = logging.getLogger(__name__)


class LoggingHoursSink(HoursSink):
    """Writes the weekly schedule to the log instead of posting it anywhere."""

    name = "LoggingHoursSink"

    async def post_operation_hours(self, locations: Sequence[Any]) -> None:
        logger.info("Posting operation hours for %d locations", len(locations))
        for location in locations:
            label = getattr(location, "name", None) or getattr(location, "id", None) or location
            logger.info("Operation hours for %s", label)
