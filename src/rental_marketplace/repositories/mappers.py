"""SQLite row mappers for domain models."""

from __future__ import annotations

import sqlite3
from typing import Any

from rental_marketplace.domain.models import (
    Payment,
    PaymentStatus,
    Product,
    ProductCategory,
    Rental,
    RentalStatus,
    User,
    UserRole,
)


def _row_value(row: sqlite3.Row, key: str) -> Any:
    return row[key] if key in row.keys() else None


def user_from_row(row: sqlite3.Row) -> User:
    return User(
        id=_row_value(row, "user_id"),
        name=row["name"],
        email=row["email"],
        phone=_row_value(row, "phone"),
        role=UserRole(row["role"]),
    )


def product_from_row(row: sqlite3.Row) -> Product:
    return Product(
        id=_row_value(row, "product_id"),
        name=row["name"],
        category=ProductCategory(row["category"]),
        sub_category=_row_value(row, "sub_category"),
        owner_id=row["owner_id"],
        rental_price=float(row["rental_price"]),
        available_quantity=int(row["available_quantity"]),
    )


def rental_from_row(row: sqlite3.Row) -> Rental:
    return Rental(
        id=_row_value(row, "rental_id"),
        renter_id=row["renter_id"],
        product_id=row["product_id"],
        rental_start=row["rental_start"],
        rental_end=row["rental_end"],
        total_cost=float(row["total_cost"]),
        status=RentalStatus(row["status"]),
        quantity=int(_row_value(row, "quantity") or 1),
    )


def payment_from_row(row: sqlite3.Row) -> Payment:
    return Payment(
        id=_row_value(row, "payment_id"),
        rental_id=row["rental_id"],
        user_id=row["user_id"],
        amount=float(row["amount"]),
        payment_status=PaymentStatus(row["payment_status"]),
        payment_date=_row_value(row, "payment_date"),
    )
