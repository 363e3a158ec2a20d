"""Repository for payments persistence."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Optional

from rental_marketplace.domain.models import Payment, PaymentStatus
from rental_marketplace.logging_config import get_logger
from rental_marketplace.repositories.mappers import payment_from_row


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


class PaymentRepository:
    """Data access for payments."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)

    def list_by_rental(self, rental_id: int) -> list[Payment]:
        try:
            rows = self._connection.execute(
                """
                SELECT *
                FROM payments
                WHERE rental_id = ?
                ORDER BY payment_date IS NULL, payment_date, payment_id
                """,
                (rental_id,),
            ).fetchall()
        except Exception:
            self._logger.exception("Failed to list payments rental_id=%s", rental_id)
            raise
        return [payment_from_row(row) for row in rows]

    def create(
        self,
        rental_id: int,
        user_id: int,
        amount: float,
        payment_status: PaymentStatus,
        payment_date: Optional[str] = None,
    ) -> Payment:
        payment_date = payment_date or _now_iso()
        try:
            cursor = self._connection.execute(
                """
                INSERT INTO payments (
                    rental_id, user_id, amount, payment_status, payment_date
                )
                VALUES (?, ?, ?, ?, ?)
                """,
                (rental_id, user_id, amount, payment_status.value, payment_date),
            )
        except Exception:
            self._logger.exception("Failed to create payment rental_id=%s", rental_id)
            raise
        return Payment(
            id=cursor.lastrowid,
            rental_id=rental_id,
            user_id=user_id,
            amount=amount,
            payment_status=payment_status,
            payment_date=payment_date,
        )
