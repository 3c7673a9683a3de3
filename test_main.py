"""
Tests for the one-shot run wiring.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from core.errors import RetryExhaustedError
from core.interfaces import MenuSink
from core.models import AllDataItem, DailyItem
from main import main, run_once


def scraper_returning(daily, all_data):
    scraper = MagicMock()
    scraper.scrape_food = AsyncMock(return_value=(daily, all_data))
    scraper.scrape_operation_hours = AsyncMock()
    return scraper


@pytest.mark.asyncio
async def test_run_once_saves_menu_then_scrapes_hours():
    daily = [DailyItem(name="Burger", date="2024-10-18", location="Allison", station_name="Grill", time_of_day="Lunch")]
    all_data = [AllDataItem(name="Burger")]
    scraper = scraper_returning(daily, all_data)
    sink = AsyncMock(spec=MenuSink)

    await run_once(scraper, sink, "2024-10-18")

    scraper.scrape_food.assert_awaited_once_with("2024-10-18")
    sink.save_menu.assert_awaited_once_with(daily, all_data)
    scraper.scrape_operation_hours.assert_awaited_once_with("2024-10-18")


@pytest.mark.asyncio
async def test_run_once_saves_nothing_when_scrape_fails():
    scraper = MagicMock()
    scraper.scrape_food = AsyncMock(side_effect=RetryExhaustedError("url", 3, None))
    scraper.scrape_operation_hours = AsyncMock()
    sink = AsyncMock(spec=MenuSink)

    with pytest.raises(RetryExhaustedError):
        await run_once(scraper, sink, "2024-10-18")

    sink.save_menu.assert_not_awaited()
    scraper.scrape_operation_hours.assert_not_awaited()


@pytest.mark.asyncio
async def test_main_exits_non_zero_when_config_is_missing(tmp_path, monkeypatch, caplog):
    monkeypatch.setenv("SCRAPER_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("DB_PATH", str(tmp_path / "dining.db"))

    assert await main(["--once"]) == 1
    assert "Config file not found" in caplog.text
    assert not (tmp_path / "dining.db").exists()
