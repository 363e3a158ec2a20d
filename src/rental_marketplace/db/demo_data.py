"""Demo marketplace data used by the seed script, smoke test and tests."""

from __future__ import annotations

import sqlite3
from typing import Any, Iterable

from rental_marketplace.db.connection import transaction
from rental_marketplace.logging_config import get_logger

USERS = [
    (1, "John Doe", "john@example.com", "555-1234", "renter"),
    (2, "Jane Smith", "jane@example.com", "555-5678", "owner"),
    (3, "Admin User", "admin@example.com", "555-9012", "admin"),
    (4, "Alice Johnson", "alice@example.com", "555-3456", "owner"),
    (5, "Bob Williams", "bob@example.com", "555-7890", "renter"),
    (6, "Carol Brown", "carol@example.com", "555-2345", "renter"),
    (7, "David Miller", "david@example.com", "555-6789", "owner"),
    (8, "Eva Wilson", "eva@example.com", "555-0123", "renter"),
]

PRODUCTS = [
    (1, "Formal Tuxedo", "mens", "tuxedo", 2, 1200.0, 5),
    (2, "Evening Gown", "womens", "gown", 2, 1100.0, 3),
    (3, "Diamond Necklace", "accessories", "jewelry", 4, 1500.0, 2),
    (4, "Leather Jacket", "mens", "casual", 4, 800.0, 4),
    (5, "Cocktail Dress", "womens", "dress", 7, 950.0, 6),
    (6, "Designer Watch", "accessories", "watch", 7, 1300.0, 3),
    (7, "Business Suit", "mens", "suit", 2, 1100.0, 8),
    (8, "Wedding Dress", "womens", "bridal", 4, 2500.0, 2),
    (9, "Designer Handbag", "accessories", "bag", 7, 900.0, 5),
    (10, "Luxury Scarf", "accessories", "scarf", 4, 400.0, 10),
]

RENTALS = [
    (1, 1, 1, "2023-01-01", "2023-01-03", 2400.0, "completed"),
    (2, 5, 2, "2023-01-05", "2023-01-07", 2200.0, "completed"),
    (3, 6, 3, "2023-01-10", "2023-01-12", 3000.0, "completed"),
    (4, 8, 4, "2023-01-15", "2023-01-17", 1600.0, "completed"),
    (5, 1, 5, "2023-02-01", "2023-02-03", 1900.0, "completed"),
    (6, 5, 6, "2023-02-05", "2023-02-08", 3900.0, "completed"),
    (7, 6, 7, "2023-04-10", "2023-04-14", 4400.0, "active"),
    (8, 8, 8, "2023-04-15", "2023-04-16", 2500.0, "active"),
]

PAYMENTS = [
    (1, 1, 1, 2400.0, "completed", "2023-01-01"),
    (2, 2, 5, 2200.0, "completed", "2023-01-05"),
    (3, 3, 6, 3000.0, "completed", "2023-01-10"),
    (4, 4, 8, 1600.0, "completed", "2023-01-15"),
    (5, 5, 1, 1900.0, "completed", "2023-02-01"),
    (6, 6, 5, 3900.0, "completed", "2023-02-05"),
    (7, 7, 6, 4400.0, "pending", "2023-04-10"),
    (8, 8, 8, 2500.0, "pending", "2023-04-15"),
]

REVIEWS = [
    (1, 1, 1, 5, "Great tuxedo, perfect fit!", "2023-01-04"),
    (2, 5, 2, 4, "Beautiful gown, minor issue with zipper.", "2023-01-08"),
    (3, 6, 3, 5, "Stunning necklace, received many compliments.", "2023-01-13"),
    (4, 8, 4, 3, "Good jacket, but had a small stain.", "2023-01-18"),
    (5, 1, 5, 5, "Perfect for the occasion!", "2023-02-04"),
    (6, 5, 6, 4, "Beautiful watch, ran a bit slow.", "2023-02-09"),
]

MAINTENANCE = [
    (1, 1, "2023-01-05", "2023-02-05", "completed"),
    (2, 2, "2023-01-08", "2023-02-08", "completed"),
    (3, 3, "2023-01-13", "2023-02-13", "completed"),
    (4, 4, "2023-01-19", "2023-02-19", "completed"),
    (5, 5, "2023-02-04", "2023-03-04", "completed"),
    (6, 6, "2023-02-09", "2023-03-09", "completed"),
    (7, 7, "2023-03-01", "2023-04-01", "pending"),
    (8, 8, "2023-03-05", "2023-04-05", "pending"),
    (9, 9, "2023-03-10", "2023-04-10", "pending"),
    (10, 10, "2023-03-15", "2023-04-15", "pending"),
]

TABLES: list[tuple[str, tuple[str, ...], list[tuple[Any, ...]]]] = [
    ("users", ("user_id", "name", "email", "phone", "role"), USERS),
    (
        "products",
        (
            "product_id",
            "name",
            "category",
            "sub_category",
            "owner_id",
            "rental_price",
            "available_quantity",
        ),
        PRODUCTS,
    ),
    (
        "rentals",
        ("rental_id", "renter_id", "product_id", "rental_start", "rental_end", "total_cost", "status"),
        RENTALS,
    ),
    (
        "payments",
        ("payment_id", "rental_id", "user_id", "amount", "payment_status", "payment_date"),
        PAYMENTS,
    ),
    (
        "reviews",
        ("review_id", "user_id", "product_id", "rating", "comment", "review_date"),
        REVIEWS,
    ),
    (
        "maintenance",
        ("maintenance_id", "product_id", "last_cleaned", "next_cleaning_due", "status"),
        MAINTENANCE,
    ),
]


def _insert_rows(
    connection: sqlite3.Connection,
    table: str,
    column_names: Iterable[str],
    rows: Iterable[tuple[Any, ...]],
) -> int:
    column_names = tuple(column_names)
    placeholders = ", ".join(["?"] * len(column_names))
    cursor = connection.executemany(
        f"INSERT INTO {table} ({', '.join(column_names)}) VALUES ({placeholders})",
        list(rows),
    )
    return cursor.rowcount


def has_data(connection: sqlite3.Connection) -> bool:
    row = connection.execute("SELECT COUNT(*) FROM users").fetchone()
    return bool(row and row[0])


def seed_demo_data(connection: sqlite3.Connection) -> dict[str, int]:
    """Insert the demo rows in one transaction and return counts per table."""
    logger = get_logger(__name__)
    counts: dict[str, int] = {}
    with transaction(connection):
        for table, column_names, rows in TABLES:
            counts[table] = _insert_rows(connection, table, column_names, rows)
    logger.info("Seeded demo data: %s", counts)
    return counts
