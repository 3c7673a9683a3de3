"""
Core interfaces for the collaborators the scraper hands its results to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from .models import AllDataItem, DailyItem


class MenuSink(ABC):
    """Abstract base class for menu persistence.

    Sinks own deduplication of catalog entries; the scraper never does.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this sink."""
        pass

    @abstractmethod
    async def save_menu(
        self,
        daily_items: Sequence[DailyItem],
        all_data_items: Sequence[AllDataItem],
    ) -> None:
        """Persist one scrape run's records."""
        pass


class HoursSink(ABC):
    """Abstract base class for operating-hours consumers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this sink."""
        pass

    @abstractmethod
    async def post_operation_hours(self, locations: Sequence[Any]) -> None:
        """Handle the decoded per-location operating hours."""
        pass
