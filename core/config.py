"""
Scrape configuration: locations, service periods, API endpoints and the
ingredient exclusion lists.
"""

from __future__ import annotations

import logging
from datetime import date as Date
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .models import Location, Service


logger = logging.getLogger(__name__)

# Maximum attempts for a single request
MAX_RETRIES = 3

DEFAULT_SITE_ID = "5acea5d8f3eeb60b08c5a50d"
DEFAULT_BASE_URL = "https://api.dineoncampus.com/v1/location"

DEFAULT_LOCATIONS: Tuple[Location, ...] = (
    Location(
        name="Allison",
        hash="5b33ae291178e909d807593d",
        services=(
            Service(time_of_day="Breakfast", hash="66e1fc2de45d43074be3a0e5"),
            Service(time_of_day="Lunch", hash="66e1fc2de45d43074be3a0fb"),
            Service(time_of_day="Dinner", hash="66e1fc2de45d43074be3a111"),
        ),
    ),
    Location(
        name="Sargent",
        hash="5b33ae291178e909d807593e",
        services=(
            Service(time_of_day="Breakfast", hash="66e97bac351d530685467360"),
            Service(time_of_day="Lunch", hash="66e97bac351d53068546737e"),
            Service(time_of_day="Dinner", hash="66e97bac351d53068546736f"),
        ),
    ),
    Location(
        name="Plex West",
        hash="5bae7de3f3eeb60c7d3854ba",
        services=(
            Service(time_of_day="Breakfast", hash="66e99466351d5306ad498440"),
            Service(time_of_day="Lunch", hash="66e99466351d5306ad498450"),
            Service(time_of_day="Dinner", hash="66e99466351d5306ad49845b"),
        ),
    ),
    Location(
        name="Plex East",
        hash="5bae7ee9f3eeb60cb4f8f3af",
        services=(
            Service(time_of_day="Lunch", hash="66e99466351d5306ad498467"),
            Service(time_of_day="Dinner", hash="66e99466351d5306ad498461"),
        ),
    ),
    Location(
        name="Elder",
        hash="5d113c924198d409c34fdf5c",
        services=(
            Service(time_of_day="Breakfast", hash="66e43426c625af07233bfef2"),
            Service(time_of_day="Lunch", hash="66e43426c625af07233bff01"),
            Service(time_of_day="Dinner", hash="66e85380351d5306adcbcbcd"),
        ),
    ),
)

DEFAULT_INGREDIENT_CATEGORIES = [
    "condiments",
    "condiments & toppings",
    "salad bar toppings",
    "dressings",
    "sauces",
    "spreads",
    "garnish",
]

DEFAULT_INGREDIENTS = [
    "ketchup",
    "mustard",
    "mayonnaise",
    "relish",
    "salt",
    "black pepper",
    "butter",
    "margarine",
    "cream cheese",
    "hot sauce",
    "soy sauce",
    "lemon wedge",
    "lime wedge",
    "chopped parsley",
    "shredded lettuce",
    "sliced tomatoes",
    "sliced onions",
    "pickles",
    "croutons",
    "syrup",
]


def normalize(name: str) -> str:
    """Normalized form used for exclusion lookups."""
    return name.strip().lower()


class ScrapeConfig(BaseModel):
    """Everything a scrape run needs; built once and passed by reference."""
    model_config = ConfigDict(frozen=True)

    locations: Tuple[Location, ...] = DEFAULT_LOCATIONS
    site_id: str = DEFAULT_SITE_ID
    base_url: str = DEFAULT_BASE_URL
    ingredient_categories: FrozenSet[str] = frozenset(DEFAULT_INGREDIENT_CATEGORIES)
    ingredients: FrozenSet[str] = frozenset(DEFAULT_INGREDIENTS)
    max_retries: int = Field(default=MAX_RETRIES, ge=1)
    http_timeout: float = Field(default=30.0, gt=0)

    @field_validator("ingredient_categories", "ingredients", mode="before")
    @classmethod
    def _normalize_names(cls, value: Any) -> FrozenSet[str]:
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError(f"expected a list of names, got {type(value).__name__}")
        if not all(isinstance(v, str) for v in value):
            raise ValueError("every name must be a string")
        return frozenset(normalize(v) for v in value)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def menu_url(self, location: Location, service: Service, date: Union[str, Date]) -> str:
        return (
            f"{self.base_url}/{location.hash}/periods/{service.hash}"
            f"?platform=0&date={_format_date(date)}"
        )

    def operation_hours_url(self, date: Union[str, Date]) -> str:
        return f"{self.base_url}/weekly_schedule/?site_id={self.site_id}&date={_format_date(date)}"

    @property
    def request_count(self) -> int:
        return sum(len(loc.services) for loc in self.locations)


def _format_date(date: Union[str, Date]) -> str:
    if isinstance(date, Date):
        return date.isoformat()
    return date


def load_config(path: Optional[Union[str, Path]] = None) -> ScrapeConfig:
    """Load configuration from a YAML file; built-in defaults when path is None."""
    if path is None:
        return ScrapeConfig()

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with path.open() as f:
            data: Dict[str, Any] = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")

    try:
        config = ScrapeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info(
        f"Loaded config from {path}: {len(config.locations)} locations, "
        f"{config.request_count} service periods"
    )
    return config
