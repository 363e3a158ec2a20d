from __future__ import annotations

from datetime import date

from rental_marketplace.analytics.joins import (
    flatten_maintenance,
    flatten_product_details,
    flatten_rental_history,
    flatten_rental_pair,
    flatten_review,
)
from rental_marketplace.analytics.presentation import (
    build_chart,
    build_table,
    columns,
    format_cell,
    format_rating,
)


def test_rental_pair_with_all_relations():
    row = {
        "rental_id": 7,
        "total_cost": 250.0,
        "renter": {"name": "John Doe"},
        "product": {"name": "Formal Tuxedo", "owner": {"name": "Jane Smith"}},
    }
    assert flatten_rental_pair(row) == {
        "rental_id": 7,
        "renter_name": "John Doe",
        "product_name": "Formal Tuxedo",
        "owner_name": "Jane Smith",
        "total_cost": 250.0,
    }


def test_missing_relations_render_unknown():
    row = {"rental_id": 8, "total_cost": None, "renter": None, "product": {"name": "Scarf", "owner": None}}
    flat = flatten_rental_pair(row)
    assert flat["renter_name"] == "Unknown"
    assert flat["owner_name"] == "Unknown"
    assert flat["total_cost"] == 0.0
    assert flatten_rental_pair({"rental_id": 9})["product_name"] == "Unknown"


def test_rental_history_includes_duration():
    row = {
        "rental_id": 1,
        "product_id": 1,
        "rental_start": "2023-01-01",
        "rental_end": "2023-01-03",
        "total_cost": 2400.0,
        "status": "completed",
        "product": {"name": "Formal Tuxedo"},
    }
    assert flatten_rental_history(row)["duration_days"] == 2


def test_product_details_without_reviews_have_no_rating():
    row = {"product_id": 5, "name": "Dress", "owner": {"name": "David"}}
    flat = flatten_product_details(row, {5: None})
    assert flat["avg_rating"] is None
    assert flat["owner_name"] == "David"


def test_review_with_deleted_user():
    flat = flatten_review({"review_id": 1, "rating": 4, "user": None, "product": {"name": "Gown"}})
    assert flat["user_name"] == "Unknown"
    assert flat["comment"] == ""


def test_maintenance_due_state():
    row = {"maintenance_id": 1, "next_cleaning_due": "2023-04-01", "product": {"name": "Suit"}}
    assert flatten_maintenance(row, date(2023, 4, 2))["maintenance_due"] == "Overdue"
    assert flatten_maintenance(row, date(2023, 4, 1))["maintenance_due"] == "On Schedule"


def test_missing_rating_renders_no_rating_not_zero():
    assert format_rating(None) == "No rating"
    assert format_cell("avg_rating", None) == "No rating"
    assert format_cell("avg_rating", 4) == "4.0"


def test_format_cell_flattens_values():
    assert format_cell("total_cost", 1234.5) == "$1,234.50"
    assert format_cell("name", None) == ""
    assert format_cell("avg_duration_days", 2.3333) == 2.33
    assert format_cell("owner", {"name": "x"}) == "{'name': 'x'}"


def test_build_table_keeps_only_manifest_keys():
    manifest = columns(("name", "Name"), ("total_spent", "Total Spent"))
    table = build_table("Spenders", manifest, [{"name": "Bob", "total_spent": 6100, "email": "bob@x"}])
    assert table.labels == ["Name", "Total Spent"]
    assert table.rows == ({"name": "Bob", "total_spent": "$6,100.00"},)
    assert not table.is_empty()
    assert build_table("Empty", manifest, []).is_empty()


def test_build_chart_skips_rows_without_value():
    chart = build_chart("Revenue", [{"name": "A", "v": 2}, {"name": "B", "v": None}], "name", "v")
    assert chart.labels == ("A",)
    assert chart.values == (2.0,)
