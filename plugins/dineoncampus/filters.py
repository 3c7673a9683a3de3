"""
Ingredient filtering: separates condiments and garnishes from real dishes.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable

from core.config import ScrapeConfig, normalize


class ItemFilter:
    """Set lookups over normalized (trimmed, lowercased) names."""

    def __init__(self, ingredient_categories: Iterable[str], ingredients: Iterable[str]):
        self._categories: FrozenSet[str] = frozenset(normalize(c) for c in ingredient_categories)
        self._items: FrozenSet[str] = frozenset(normalize(i) for i in ingredients)

    @classmethod
    def from_config(cls, config: ScrapeConfig) -> "ItemFilter":
        return cls(config.ingredient_categories, config.ingredients)

    def is_ingredient_category(self, category_name: str) -> bool:
        return normalize(category_name) in self._categories

    def is_ingredient(self, item_name: str) -> bool:
        return normalize(item_name) in self._items
