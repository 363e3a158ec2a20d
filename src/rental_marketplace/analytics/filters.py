"""Catalog predicates and ordering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional

from rental_marketplace.config import (
    CATALOG_PRICE_MAX,
    CATALOG_PRICE_MIN,
    CATALOG_RATING_MAX,
    CATALOG_RATING_MIN,
)

Row = Mapping[str, Any]
Predicate = Callable[[Row], bool]

ALL_CATEGORIES = "all"


def _always(_row: Row) -> bool:
    return True


def _number(value: Any, default: float = 0.0) -> float:
    try:
        return float(value) if value is not None else default
    except (TypeError, ValueError):
        return default


def category_equals(category: Optional[str]) -> Predicate:
    if not category or category == ALL_CATEGORIES:
        return _always
    return lambda row: row.get("category") == category


def sub_category_in(selected: Iterable[str]) -> Predicate:
    wanted = frozenset(selected)
    if not wanted:
        return _always
    return lambda row: row.get("sub_category") in wanted


def price_in_range(low: float, high: float) -> Predicate:
    return lambda row: low <= _number(row.get("rental_price")) <= high


def rating_in_range(low: float, high: float) -> Predicate:
    """Inclusive rating window; unrated products count as 0."""
    return lambda row: low <= _number(row.get("avg_rating")) <= high


def name_contains(term: Optional[str]) -> Predicate:
    needle = (term or "").strip().lower()
    if not needle:
        return _always
    return lambda row: needle in str(row.get("name") or "").lower()


def compose(predicates: Iterable[Predicate]) -> Predicate:
    """Logical AND of the predicates."""
    active = tuple(predicates)
    return lambda row: all(predicate(row) for predicate in active)


def apply_filters(rows: Iterable[Row], predicates: Iterable[Predicate]) -> list[Row]:
    combined = compose(predicates)
    return [row for row in rows if combined(row)]


class SortOption(str, Enum):
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    RATING_DESC = "rating_desc"


def sort_rows(rows: Iterable[Row], option: SortOption | str) -> list[Row]:
    """Return a new list ordered by ``option``; the input is left untouched."""
    option = SortOption(option)
    if option is SortOption.PRICE_DESC:
        return sorted(rows, key=lambda row: _number(row.get("rental_price")), reverse=True)
    if option is SortOption.RATING_DESC:
        return sorted(rows, key=lambda row: _number(row.get("avg_rating")), reverse=True)
    return sorted(rows, key=lambda row: _number(row.get("rental_price")))


@dataclass
class ProductFilter:
    """Active catalog filters."""

    search: str = ""
    category: str = ALL_CATEGORIES
    sub_categories: set[str] = field(default_factory=set)
    price_range: tuple[float, float] = (CATALOG_PRICE_MIN, CATALOG_PRICE_MAX)
    rating_range: tuple[float, float] = (CATALOG_RATING_MIN, CATALOG_RATING_MAX)
    sort: SortOption = SortOption.PRICE_ASC

    def toggle_sub_category(self, sub_category: str) -> None:
        if sub_category in self.sub_categories:
            self.sub_categories.discard(sub_category)
        else:
            self.sub_categories.add(sub_category)

    def reset(self) -> None:
        defaults = ProductFilter()
        self.search = defaults.search
        self.category = defaults.category
        self.sub_categories = defaults.sub_categories
        self.price_range = defaults.price_range
        self.rating_range = defaults.rating_range
        self.sort = defaults.sort

    def predicates(self) -> list[Predicate]:
        return [
            name_contains(self.search),
            category_equals(self.category),
            sub_category_in(self.sub_categories),
            price_in_range(*self.price_range),
            rating_in_range(*self.rating_range),
        ]

    def apply(self, rows: Iterable[Row]) -> list[Row]:
        return sort_rows(apply_filters(rows, self.predicates()), self.sort)
