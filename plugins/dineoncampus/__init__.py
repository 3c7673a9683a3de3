"""
DineOnCampus plugin for scraping dining hall menus and operating hours.

This plugin provides the fetcher, parser, filter and sink for:
- Per-location, per-meal-period menus
- Weekly operating hours for the whole site
- SQLite persistence
"""

from .fetcher import MenuFetcher
from .filters import ItemFilter
from .parser import MenuParser
from .sinks import DatabaseSink

__all__ = [
    "MenuFetcher",
    "ItemFilter",
    "MenuParser",
    "DatabaseSink",
]
