from __future__ import annotations

import sqlite3

import pytest

from rental_marketplace.db.connection import get_connection
from rental_marketplace.db.demo_data import seed_demo_data
from rental_marketplace.db.migrations import apply_migrations


@pytest.fixture()
def connection() -> sqlite3.Connection:
    conn = get_connection(":memory:")
    apply_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture()
def seeded(connection: sqlite3.Connection) -> sqlite3.Connection:
    seed_demo_data(connection)
    return connection
