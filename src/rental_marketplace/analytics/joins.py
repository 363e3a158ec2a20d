"""Flatten rows with embedded relations into flat summary rows."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from dateutil import parser

from rental_marketplace.analytics.aggregation import rental_duration_days
from rental_marketplace.config import UNKNOWN_LABEL

Row = Mapping[str, Any]


def _embedded(row: Optional[Row], name: str) -> Optional[Row]:
    if not row:
        return None
    value = row.get(name)
    return value if isinstance(value, Mapping) else None


def _name_of(row: Optional[Row]) -> str:
    if not row:
        return UNKNOWN_LABEL
    return row.get("name") or UNKNOWN_LABEL


def flatten_rental_pair(row: Row) -> dict[str, Any]:
    """Rental joined with its renter, product and product owner."""
    product = _embedded(row, "product")
    return {
        "rental_id": row.get("rental_id"),
        "renter_name": _name_of(_embedded(row, "renter")),
        "product_name": _name_of(product),
        "owner_name": _name_of(_embedded(product, "owner")),
        "total_cost": row.get("total_cost") or 0.0,
    }


def flatten_rental_history(row: Row) -> dict[str, Any]:
    product = _embedded(row, "product")
    return {
        "rental_id": row.get("rental_id"),
        "product_id": row.get("product_id"),
        "product_name": _name_of(product),
        "rental_start": row.get("rental_start"),
        "rental_end": row.get("rental_end"),
        "duration_days": rental_duration_days(
            row.get("rental_start"), row.get("rental_end")
        ),
        "total_cost": row.get("total_cost") or 0.0,
        "status": row.get("status"),
    }


def flatten_product_details(
    row: Row,
    ratings: Mapping[Any, Optional[float]],
) -> dict[str, Any]:
    """Catalog row: product fields plus owner name and average rating."""
    return {
        "product_id": row.get("product_id"),
        "name": row.get("name"),
        "category": row.get("category"),
        "sub_category": row.get("sub_category"),
        "rental_price": row.get("rental_price"),
        "available_quantity": row.get("available_quantity"),
        "owner_id": row.get("owner_id"),
        "owner_name": _name_of(_embedded(row, "owner")),
        "avg_rating": ratings.get(row.get("product_id")),
    }


def flatten_review(row: Row) -> dict[str, Any]:
    return {
        "review_id": row.get("review_id"),
        "user_name": _name_of(_embedded(row, "user")),
        "product_name": _name_of(_embedded(row, "product")),
        "rating": row.get("rating"),
        "comment": row.get("comment") or "",
        "review_date": row.get("review_date"),
    }


def _parse_date(value: Any) -> Optional[date]:
    if not value:
        return None
    try:
        return parser.isoparse(str(value)).date()
    except (ValueError, OverflowError):
        return None


def flatten_maintenance(row: Row, today: Optional[date] = None) -> dict[str, Any]:
    """Maintenance record with its product name and due state."""
    today = today or date.today()
    due = _parse_date(row.get("next_cleaning_due"))
    return {
        "maintenance_id": row.get("maintenance_id"),
        "product_id": row.get("product_id"),
        "product_name": _name_of(_embedded(row, "product")),
        "last_cleaned": row.get("last_cleaned"),
        "next_cleaning_due": row.get("next_cleaning_due"),
        "status": row.get("status"),
        "maintenance_due": "Overdue" if due is not None and due < today else "On Schedule",
    }
