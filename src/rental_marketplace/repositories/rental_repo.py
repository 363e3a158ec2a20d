"""Repository helpers for rental persistence."""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from rental_marketplace.domain.models import Rental, RentalStatus
from rental_marketplace.logging_config import get_logger
from rental_marketplace.repositories.mappers import rental_from_row


class RentalRepo:
    """Data access for rentals.

    Writes do not commit; :class:`~rental_marketplace.services.rental_service.RentalService`
    wraps them together with stock and payment updates in one transaction.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)

    def insert(
        self,
        renter_id: int,
        product_id: int,
        rental_start: str,
        rental_end: str,
        total_cost: float,
        status: RentalStatus,
        quantity: int = 1,
    ) -> Rental:
        try:
            cursor = self._connection.execute(
                """
                INSERT INTO rentals (
                    renter_id,
                    product_id,
                    rental_start,
                    rental_end,
                    total_cost,
                    status,
                    quantity
                )
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    renter_id,
                    product_id,
                    rental_start,
                    rental_end,
                    total_cost,
                    status.value,
                    quantity,
                ),
            )
        except Exception:
            self._logger.exception(
                "Failed to insert rental renter_id=%s product_id=%s",
                renter_id,
                product_id,
            )
            raise
        return Rental(
            id=cursor.lastrowid,
            renter_id=renter_id,
            product_id=product_id,
            rental_start=rental_start,
            rental_end=rental_end,
            total_cost=total_cost,
            status=status,
            quantity=quantity,
        )

    def update_status(self, rental_id: int, status: RentalStatus) -> bool:
        try:
            cursor = self._connection.execute(
                "UPDATE rentals SET status = ? WHERE rental_id = ?",
                (status.value, rental_id),
            )
        except Exception:
            self._logger.exception("Failed to update status rental_id=%s", rental_id)
            raise
        return cursor.rowcount > 0

    def get_by_id(self, rental_id: int) -> Optional[Rental]:
        try:
            row = self._connection.execute(
                "SELECT * FROM rentals WHERE rental_id = ?",
                (rental_id,),
            ).fetchone()
        except Exception:
            self._logger.exception("Failed to get rental id=%s", rental_id)
            raise
        return rental_from_row(row) if row else None

    def list_by_renter(self, renter_id: int) -> List[Rental]:
        try:
            rows = self._connection.execute(
                """
                SELECT * FROM rentals
                WHERE renter_id = ?
                ORDER BY rental_start DESC, rental_id DESC
                """,
                (renter_id,),
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to list rentals renter_id=%s", renter_id)
            raise
        return [rental_from_row(row) for row in rows]
