"""Price comparisons relative to each product's category."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from rental_marketplace.analytics.aggregation import (
    AggregationStats,
    _numeric,
    _skip,
    average_by_group,
    global_mean,
)

Row = Mapping[str, Any]


def _category(row: Row) -> Optional[str]:
    return row.get("category")


def _price(row: Row) -> Any:
    return row.get("rental_price")


def category_averages(
    products: Iterable[Row],
    stats: Optional[AggregationStats] = None,
) -> dict[str, float]:
    """Mean rental price per category."""
    averages = average_by_group(products, _category, _price, stats)
    return {category: value for category, value in averages.items() if value is not None}


def above_category_average(
    products: Iterable[Row],
    stats: Optional[AggregationStats] = None,
) -> list[dict[str, Any]]:
    """Products priced strictly above the mean of their own category.

    Each returned row is a copy carrying ``avg_category_price``.
    """
    products = list(products)
    averages = category_averages(products, stats)
    selected: list[dict[str, Any]] = []
    for product in products:
        average = averages.get(_category(product))
        # Unusable prices were already counted by category_averages.
        price = _numeric(_price(product))
        if average is None or price is None:
            continue
        if price > average:
            selected.append({**product, "avg_category_price": round(average, 2)})
    return selected


def above_global_average(
    products: Iterable[Row],
    stats: Optional[AggregationStats] = None,
) -> list[dict[str, Any]]:
    """Products priced strictly above the mean over all products, priciest first."""
    priced: list[tuple[Row, float]] = []
    for product in products:
        price = _numeric(_price(product))
        if price is None:
            _skip(stats, "missing value", product)
            continue
        priced.append((product, price))
    average = global_mean(price for _product, price in priced)
    if average is None:
        return []
    selected = [(dict(product), price) for product, price in priced if price > average]
    selected.sort(key=lambda item: item[1], reverse=True)
    return [row for row, _price_value in selected]
