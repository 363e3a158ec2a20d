"""Database migrations for SQLite schema versioning."""

from __future__ import annotations

from dataclasses import dataclass
import sqlite3

from rental_marketplace.db.connection import transaction
from rental_marketplace.logging_config import get_logger


@dataclass(frozen=True)
class Migration:
    version: int
    script: str
    requires_foreign_keys_off: bool = False


MIGRATIONS: list[Migration] = [
    Migration(
        version=1,
        script="""
        CREATE TABLE IF NOT EXISTS users (
            user_id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            phone TEXT,
            role TEXT NOT NULL
                CHECK (role IN ('renter', 'owner', 'admin', 'both'))
        );

        CREATE TABLE IF NOT EXISTS products (
            product_id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            category TEXT NOT NULL
                CHECK (category IN ('mens', 'womens', 'accessories')),
            sub_category TEXT,
            owner_id INTEGER,
            rental_price REAL NOT NULL DEFAULT 0,
            available_quantity INTEGER NOT NULL DEFAULT 0
                CHECK (available_quantity >= 0),
            FOREIGN KEY (owner_id) REFERENCES users(user_id) ON DELETE SET NULL
        );

        CREATE TABLE IF NOT EXISTS rentals (
            rental_id INTEGER PRIMARY KEY AUTOINCREMENT,
            renter_id INTEGER,
            product_id INTEGER,
            rental_start TEXT NOT NULL,
            rental_end TEXT NOT NULL,
            total_cost REAL NOT NULL DEFAULT 0,
            status TEXT NOT NULL
                CHECK (status IN ('active', 'pending', 'completed', 'cancelled')),
            FOREIGN KEY (renter_id) REFERENCES users(user_id) ON DELETE SET NULL,
            FOREIGN KEY (product_id) REFERENCES products(product_id) ON DELETE SET NULL
        );

        CREATE TABLE IF NOT EXISTS reviews (
            review_id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER,
            product_id INTEGER NOT NULL,
            rating INTEGER NOT NULL CHECK (rating BETWEEN 1 AND 5),
            comment TEXT,
            review_date TEXT,
            FOREIGN KEY (user_id) REFERENCES users(user_id) ON DELETE SET NULL,
            FOREIGN KEY (product_id) REFERENCES products(product_id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS maintenance (
            maintenance_id INTEGER PRIMARY KEY AUTOINCREMENT,
            product_id INTEGER NOT NULL,
            last_cleaned TEXT NOT NULL,
            next_cleaning_due TEXT NOT NULL,
            status TEXT NOT NULL,
            FOREIGN KEY (product_id) REFERENCES products(product_id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS payments (
            payment_id INTEGER PRIMARY KEY AUTOINCREMENT,
            rental_id INTEGER NOT NULL,
            user_id INTEGER,
            amount REAL NOT NULL,
            payment_status TEXT NOT NULL,
            payment_date TEXT,
            FOREIGN KEY (rental_id) REFERENCES rentals(rental_id) ON DELETE CASCADE,
            FOREIGN KEY (user_id) REFERENCES users(user_id) ON DELETE SET NULL
        );

        CREATE INDEX IF NOT EXISTS idx_products_owner_id
            ON products(owner_id);
        CREATE INDEX IF NOT EXISTS idx_products_category
            ON products(category);
        CREATE INDEX IF NOT EXISTS idx_rentals_renter_id
            ON rentals(renter_id);
        CREATE INDEX IF NOT EXISTS idx_rentals_product_id
            ON rentals(product_id);
        CREATE INDEX IF NOT EXISTS idx_reviews_product_id
            ON reviews(product_id);
        CREATE INDEX IF NOT EXISTS idx_maintenance_product_id
            ON maintenance(product_id);
        """,
    ),
    Migration(
        version=2,
        script="""
        ALTER TABLE rentals ADD COLUMN quantity INTEGER NOT NULL DEFAULT 1;
        """,
    ),
]


def _fetch_schema_version(connection: sqlite3.Connection) -> int:
    connection.execute(
        """
        CREATE TABLE IF NOT EXISTS app_meta (
            schema_version INTEGER NOT NULL
        );
        """
    )
    row = connection.execute(
        "SELECT schema_version FROM app_meta LIMIT 1"
    ).fetchone()
    if row is None:
        connection.execute("INSERT INTO app_meta (schema_version) VALUES (0)")
        return 0
    return int(row[0])


def apply_migrations(connection: sqlite3.Connection) -> None:
    """Apply pending database migrations."""
    logger = get_logger(__name__)
    with transaction(connection):
        current_version = _fetch_schema_version(connection)

    for migration in MIGRATIONS:
        if migration.version <= current_version:
            continue

        if migration.requires_foreign_keys_off:
            connection.execute("PRAGMA foreign_keys = OFF;")

        with transaction(connection):
            connection.executescript(migration.script)
            connection.execute(
                "UPDATE app_meta SET schema_version = ?",
                (migration.version,),
            )

        if migration.requires_foreign_keys_off:
            connection.execute("PRAGMA foreign_keys = ON;")

        logger.info("Applied schema migration %s", migration.version)
        current_version = migration.version
