from __future__ import annotations

import math
from datetime import date

from rental_marketplace.analytics.aggregation import (
    AggregationStats,
    average_by_group,
    count_by_group,
    global_mean,
    rental_duration_days,
    set_difference,
    shared_keys,
    sum_by_group,
    top_n,
)

RENTALS = [
    {"product_id": 1, "cost": 100},
    {"product_id": 1, "cost": 150},
    {"product_id": 2, "cost": 400},
]


def by_product(row):
    return row["product_id"]


def cost(row):
    return row["cost"]


def test_sum_by_group_totals_per_key():
    assert sum_by_group(RENTALS, by_product, cost) == {1: 250, 2: 400}


def test_top_n_picks_highest_total():
    totals = sum_by_group(RENTALS, by_product, cost)
    summary = [{"product_id": key, "total": value} for key, value in totals.items()]
    assert [row["product_id"] for row in top_n(summary, lambda row: row["total"], 1)] == [2]


def test_average_equals_sum_divided_by_count():
    rows = RENTALS + [{"product_id": 3, "cost": 7}, {"product_id": 2, "cost": 1}]
    sums = sum_by_group(rows, by_product, cost)
    counts = count_by_group(rows, by_product)
    averages = average_by_group(rows, by_product, cost)
    assert averages == {key: sums[key] / counts[key] for key in sums}


def test_average_of_empty_group_is_none():
    averages = average_by_group([], by_product, cost, keys=[5])
    assert averages == {5: None}


def test_aggregations_over_no_rows_are_empty():
    assert count_by_group([], by_product) == {}
    assert sum_by_group([], by_product, cost) == {}
    assert average_by_group([], by_product, cost) == {}
    assert top_n([], cost, 3) == []
    assert global_mean([]) is None


def test_rows_with_missing_key_or_value_are_skipped_and_counted():
    rows = [
        {"product_id": 1, "cost": 10},
        {"product_id": None, "cost": 20},
        {"product_id": 1, "cost": None},
        {"cost": 5},
        {"product_id": 1, "cost": float("nan")},
    ]
    stats = AggregationStats()
    assert sum_by_group(rows, by_product, cost, stats) == {1: 10}
    assert stats.skipped == 4
    assert stats.reasons["missing key"] == 2
    assert stats.reasons["missing value"] == 2


def test_average_never_returns_nan_or_infinity():
    rows = [{"product_id": 1, "cost": float("inf")}, {"product_id": 1, "cost": 4}]
    averages = average_by_group(rows, by_product, cost)
    assert averages == {1: 4}
    assert all(value is None or math.isfinite(value) for value in averages.values())


def test_top_n_is_idempotent_and_stable():
    rows = [
        {"id": "a", "revenue": 10},
        {"id": "b", "revenue": 30},
        {"id": "c", "revenue": 10},
        {"id": "d", "revenue": None},
        {"id": "e", "revenue": 30},
    ]
    first = top_n(rows, lambda row: row["revenue"], 5)
    assert [row["id"] for row in first] == ["b", "e", "a", "c", "d"]
    assert top_n(first, lambda row: row["revenue"], 5) == first


def test_top_n_with_non_positive_n_is_empty():
    assert top_n(RENTALS, cost, 0) == []
    assert top_n(RENTALS, cost, -1) == []


def test_top_n_does_not_mutate_input():
    rows = [{"cost": 1}, {"cost": 3}, {"cost": 2}]
    snapshot = list(rows)
    top_n(rows, cost, 2)
    assert rows == snapshot


def test_set_difference_returns_unrented_products():
    products = [{"id": 1}, {"id": 2}, {"id": 3}]
    rentals = [{"product_id": 1}, {"product_id": 2}]
    rented = [row["product_id"] for row in rentals]
    first = set_difference(products, rented, lambda row: row["id"])
    assert first == [{"id": 3}]
    assert set_difference(products, rented, lambda row: row["id"]) == first


def test_set_difference_ignores_null_keys():
    products = [{"id": 1}, {"id": 2}]
    assert set_difference(products, [None, 2], lambda row: row["id"]) == [{"id": 1}]


def test_shared_keys_keeps_first_seen_order():
    assert shared_keys([3, 1, 3, None, 2], [2, 3, None]) == [3, 2]


def test_global_mean_ignores_non_numeric_values():
    assert global_mean([2, "x", None, 4]) == 3


def test_rental_duration_in_whole_days():
    assert rental_duration_days("2023-01-01", "2023-01-03") == 2
    assert rental_duration_days(date(2023, 1, 1), date(2023, 1, 1)) == 0
    assert rental_duration_days("2023-01-01T10:00:00", "2023-01-02") == 1


def test_rental_duration_rejects_reversed_or_bad_dates():
    assert rental_duration_days("2023-01-03", "2023-01-01") is None
    assert rental_duration_days("not a date", "2023-01-01") is None
    assert rental_duration_days(None, "2023-01-01") is None
