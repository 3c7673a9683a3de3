"""
Core data models for the dining scraper.
"""

from __future__ import annotations

from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict

TimeOfDay = Literal["Breakfast", "Lunch", "Dinner"]


class Service(BaseModel):
    """A meal period served at a location."""
    model_config = ConfigDict(frozen=True)

    time_of_day: TimeOfDay
    hash: str


class Location(BaseModel):
    """A dining hall and the meal periods it serves, in fetch order."""
    model_config = ConfigDict(frozen=True)

    name: str
    hash: str
    services: Tuple[Service, ...] = ()


class DailyItem(BaseModel):
    """A filtered menu entry for one item on one day at one location/service."""
    name: str
    description: str = ""
    date: str
    location: str
    station_name: str
    time_of_day: TimeOfDay


class AllDataItem(BaseModel):
    """Catalog entry holding only an item name."""
    name: str
