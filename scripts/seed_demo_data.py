"""Seed demo data into the RentalMarketplace SQLite database."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from rental_marketplace.db.connection import get_connection  # noqa: E402
from rental_marketplace.db.demo_data import has_data, seed_demo_data  # noqa: E402
from rental_marketplace.db.migrations import apply_migrations  # noqa: E402
from rental_marketplace.logging_config import configure_logging  # noqa: E402
from rental_marketplace.paths import get_db_path  # noqa: E402


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed demo data for RentalMarketplace")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete the current database and recreate it before seeding.",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Database file to seed (defaults to the per-user data directory).",
    )
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    configure_logging(install_excepthook=False)

    db_path = args.db or get_db_path()
    if args.reset and db_path.exists():
        db_path.unlink()
        print(f"Database removed: {db_path}")

    print(f"Using database: {db_path}")
    connection = get_connection(db_path)
    try:
        apply_migrations(connection)
        if has_data(connection):
            print("Data already present. Use --reset to recreate the database.")
            return
        counts = seed_demo_data(connection)
    finally:
        connection.close()

    print("\nSeed completed:")
    for table, count in counts.items():
        print(f"{table}: {count}")


if __name__ == "__main__":
    main()
