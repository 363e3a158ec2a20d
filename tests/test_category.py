from __future__ import annotations

from rental_marketplace.analytics.aggregation import AggregationStats
from rental_marketplace.analytics.category import (
    above_category_average,
    above_global_average,
    category_averages,
)


def test_above_category_average_uses_own_category():
    products = [
        {"product_id": 1, "rental_price": 100, "category": "mens"},
        {"product_id": 2, "rental_price": 300, "category": "mens"},
        {"product_id": 3, "rental_price": 50, "category": "womens"},
    ]
    assert category_averages(products) == {"mens": 200, "womens": 50}
    rows = above_category_average(products)
    assert [row["product_id"] for row in rows] == [2]
    assert rows[0]["avg_category_price"] == 200


def test_price_equal_to_category_average_is_excluded():
    products = [
        {"product_id": 1, "rental_price": 100, "category": "mens"},
        {"product_id": 2, "rental_price": 100, "category": "mens"},
    ]
    assert above_category_average(products) == []


def test_category_result_differs_from_global_comparison():
    products = [
        {"product_id": 1, "rental_price": 10, "category": "accessories"},
        {"product_id": 2, "rental_price": 20, "category": "accessories"},
        {"product_id": 3, "rental_price": 1000, "category": "womens"},
        {"product_id": 4, "rental_price": 2000, "category": "womens"},
    ]
    by_category = {row["product_id"] for row in above_category_average(products)}
    by_global = {row["product_id"] for row in above_global_average(products)}
    assert by_category == {2, 4}
    assert by_global == {3, 4}


def test_inclusion_matches_strict_category_mean_for_every_product():
    products = [
        {"product_id": index, "rental_price": price, "category": category}
        for index, (price, category) in enumerate(
            [(5, "a"), (7, "a"), (9, "a"), (3, "b"), (3, "b"), (1, "c")]
        )
    ]
    selected = {row["product_id"] for row in above_category_average(products)}
    for product in products:
        peers = [row["rental_price"] for row in products if row["category"] == product["category"]]
        expected = product["rental_price"] > sum(peers) / len(peers)
        assert (product["product_id"] in selected) == expected


def test_rows_without_category_are_skipped_and_counted():
    stats = AggregationStats()
    products = [
        {"product_id": 1, "rental_price": 10, "category": None},
        {"product_id": 2, "rental_price": 30, "category": "mens"},
        {"product_id": 3, "rental_price": 10, "category": "mens"},
    ]
    assert [row["product_id"] for row in above_category_average(products, stats)] == [2]
    assert stats.skipped == 1


def test_input_rows_are_not_modified():
    products = [
        {"product_id": 1, "rental_price": 100, "category": "mens"},
        {"product_id": 2, "rental_price": 300, "category": "mens"},
    ]
    above_category_average(products)
    assert all("avg_category_price" not in row for row in products)


def test_above_global_average_sorted_priciest_first():
    products = [
        {"product_id": 1, "rental_price": 300},
        {"product_id": 2, "rental_price": 100},
        {"product_id": 3, "rental_price": 500},
    ]
    assert [row["product_id"] for row in above_global_average(products)] == [3]
    assert above_global_average([]) == []


def test_malformed_price_is_skipped_and_counted_in_category_comparison():
    stats = AggregationStats()
    products = [
        {"product_id": 1, "rental_price": 100, "category": "mens"},
        {"product_id": 2, "rental_price": 300, "category": "mens"},
        {"product_id": 3, "rental_price": "n/a", "category": "mens"},
        {"product_id": 4, "rental_price": None, "category": "mens"},
    ]
    rows = above_category_average(products, stats)
    assert [row["product_id"] for row in rows] == [2]
    assert rows[0]["avg_category_price"] == 200
    assert stats.skipped == 2
    assert stats.reasons["missing value"] == 2


def test_malformed_price_is_skipped_and_counted_in_global_comparison():
    stats = AggregationStats()
    products = [{"product_id": 1, "rental_price": 100}, {"product_id": 2, "rental_price": "n/a"}]
    assert above_global_average(products, stats) == []
    assert stats.skipped == 1
    assert stats.reasons["missing value"] == 1

    stats = AggregationStats()
    products = [
        {"product_id": 1, "rental_price": 100},
        {"product_id": 2, "rental_price": None},
        {"product_id": 3, "rental_price": 300},
    ]
    assert [row["product_id"] for row in above_global_average(products, stats)] == [3]
    assert stats.skipped == 1
