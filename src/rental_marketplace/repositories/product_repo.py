"""Repository for product persistence."""

from __future__ import annotations

import sqlite3
from typing import Optional

from rental_marketplace.db.connection import transaction
from rental_marketplace.domain.models import Product, ProductCategory
from rental_marketplace.logging_config import get_logger
from rental_marketplace.repositories.mappers import product_from_row


class ProductRepo:
    """CRUD operations for products."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)

    def create(
        self,
        name: str,
        category: ProductCategory,
        sub_category: Optional[str],
        owner_id: int,
        rental_price: float,
        available_quantity: int,
    ) -> Product:
        try:
            with transaction(self._connection):
                cursor = self._connection.execute(
                    """
                    INSERT INTO products (
                        name,
                        category,
                        sub_category,
                        owner_id,
                        rental_price,
                        available_quantity
                    )
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        name,
                        category.value,
                        sub_category,
                        owner_id,
                        rental_price,
                        available_quantity,
                    ),
                )
        except Exception:
            self._logger.exception("Failed to create product")
            raise

        return Product(
            id=cursor.lastrowid,
            name=name,
            category=category,
            sub_category=sub_category,
            owner_id=owner_id,
            rental_price=rental_price,
            available_quantity=available_quantity,
        )

    def adjust_quantity(self, product_id: int, delta: int) -> bool:
        """Add ``delta`` to the stock without committing.

        Returns False when the product is missing or the stock would go
        negative; callers run this inside their own transaction.
        """
        try:
            cursor = self._connection.execute(
                """
                UPDATE products
                SET available_quantity = available_quantity + ?
                WHERE product_id = ?
                  AND available_quantity + ? >= 0
                """,
                (delta, product_id, delta),
            )
        except Exception:
            self._logger.exception(
                "Failed to adjust quantity product_id=%s delta=%s", product_id, delta
            )
            raise
        return cursor.rowcount > 0

    def delete(self, product_id: int) -> bool:
        try:
            with transaction(self._connection):
                cursor = self._connection.execute(
                    "DELETE FROM products WHERE product_id = ?",
                    (product_id,),
                )
        except Exception:
            self._logger.exception("Failed to delete product id=%s", product_id)
            raise
        return cursor.rowcount > 0

    def get_by_id(self, product_id: int) -> Optional[Product]:
        try:
            row = self._connection.execute(
                "SELECT * FROM products WHERE product_id = ?",
                (product_id,),
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to get product id=%s", product_id)
            raise
        return product_from_row(row) if row else None
