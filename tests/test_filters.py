from __future__ import annotations

import itertools

from rental_marketplace.analytics.filters import (
    ALL_CATEGORIES,
    ProductFilter,
    SortOption,
    apply_filters,
    category_equals,
    name_contains,
    price_in_range,
    rating_in_range,
    sort_rows,
    sub_category_in,
)

PRODUCTS = [
    {"product_id": 1, "name": "Formal Tuxedo", "category": "mens", "sub_category": "tuxedo", "rental_price": 1200.0, "avg_rating": 5.0},
    {"product_id": 2, "name": "Evening Gown", "category": "womens", "sub_category": "gown", "rental_price": 1100.0, "avg_rating": 4.0},
    {"product_id": 3, "name": "Leather Jacket", "category": "mens", "sub_category": "casual", "rental_price": 800.0, "avg_rating": 3.0},
    {"product_id": 4, "name": "Luxury Scarf", "category": "accessories", "sub_category": "scarf", "rental_price": 400.0, "avg_rating": None},
    {"product_id": 5, "name": "Business Suit", "category": "mens", "sub_category": "suit", "rental_price": 1100.0, "avg_rating": None},
]


def ids(rows):
    return [row["product_id"] for row in rows]


def test_filter_order_does_not_change_result_set():
    predicates = [
        category_equals("mens"),
        price_in_range(500, 1200),
        name_contains("u"),
    ]
    expected = set(ids(apply_filters(PRODUCTS, predicates)))
    for ordering in itertools.permutations(predicates):
        assert set(ids(apply_filters(PRODUCTS, ordering))) == expected


def test_filters_applied_in_stages_match_single_pass():
    first, second, third = category_equals("mens"), price_in_range(900, 3000), sub_category_in({"suit", "tuxedo"})
    staged = apply_filters(apply_filters(PRODUCTS, [first, second]), [third])
    assert ids(staged) == ids(apply_filters(PRODUCTS, [first, second, third]))


def test_all_category_and_empty_selection_are_no_ops():
    predicates = [category_equals(ALL_CATEGORIES), sub_category_in(()), name_contains("  ")]
    assert apply_filters(PRODUCTS, predicates) == PRODUCTS


def test_price_range_is_inclusive():
    assert ids(apply_filters(PRODUCTS, [price_in_range(800, 1100)])) == [2, 3, 5]


def test_unrated_products_count_as_zero_rating():
    assert ids(apply_filters(PRODUCTS, [rating_in_range(0, 0)])) == [4, 5]
    assert ids(apply_filters(PRODUCTS, [rating_in_range(1, 5)])) == [1, 2, 3]


def test_name_search_is_case_insensitive():
    assert ids(apply_filters(PRODUCTS, [name_contains("LEATHER")])) == [3]


def test_sort_returns_new_list_and_keeps_input():
    snapshot = list(PRODUCTS)
    ordered = sort_rows(PRODUCTS, SortOption.PRICE_ASC)
    assert ordered is not PRODUCTS
    assert PRODUCTS == snapshot
    assert ids(ordered) == [4, 3, 2, 5, 1]


def test_sort_descending_keeps_ties_in_input_order():
    assert ids(sort_rows(PRODUCTS, "price_desc")) == [1, 2, 5, 3, 4]


def test_rating_sort_puts_unrated_last():
    assert ids(sort_rows(PRODUCTS, SortOption.RATING_DESC))[-2:] == [4, 5]


def test_product_filter_combines_and_sorts():
    product_filter = ProductFilter(category="mens", sort=SortOption.PRICE_DESC)
    product_filter.toggle_sub_category("suit")
    product_filter.toggle_sub_category("casual")
    assert ids(product_filter.apply(PRODUCTS)) == [5, 3]
    product_filter.toggle_sub_category("casual")
    assert ids(product_filter.apply(PRODUCTS)) == [5]


def test_product_filter_reset_restores_defaults():
    product_filter = ProductFilter(search="tux", category="womens", price_range=(0, 10))
    product_filter.reset()
    assert product_filter == ProductFilter()
    assert len(product_filter.apply(PRODUCTS)) == len(PRODUCTS)
