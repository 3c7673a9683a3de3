"""
Response schemas for the DineOnCampus location API.

Only the fields the scraper reads are declared; everything else in the
payload is ignored, except on :class:`LocationOperationInfo`, which is handed
on to the hours sink untouched.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MenuItem(BaseModel):
    name: str
    description: Optional[str] = None


class MenuCategory(BaseModel):
    name: str
    items: List[MenuItem] = Field(default_factory=list)


class MenuPeriod(BaseModel):
    categories: List[MenuCategory] = Field(default_factory=list)


class Menu(BaseModel):
    date: str
    periods: MenuPeriod


class DiningHallResponse(BaseModel):
    """``GET <base>/<location>/periods/<service>``"""
    menu: Menu


class LocationOperationInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None
    week: List[dict] = Field(default_factory=list)


class OperationHoursResponse(BaseModel):
    """``GET <base>/weekly_schedule/``"""
    locations: List[LocationOperationInfo] = Field(default_factory=list)
