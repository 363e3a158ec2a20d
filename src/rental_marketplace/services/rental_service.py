"""Rental service for business rules."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date
from typing import Optional

from rental_marketplace.db.connection import transaction
from rental_marketplace.domain.models import PaymentStatus, Rental, RentalStatus
from rental_marketplace.domain.roles import capabilities_for
from rental_marketplace.logging_config import get_logger
from rental_marketplace.repositories import (
    PaymentRepository,
    ProductRepo,
    RentalRepo,
    UserRepo,
)
from rental_marketplace.services.errors import NotFoundError, ValidationError

OPEN_STATUSES = (RentalStatus.ACTIVE, RentalStatus.PENDING)


@dataclass(frozen=True)
class RentalQuote:
    rental_start: str
    rental_end: str
    days: int
    quantity: int
    daily_price: float
    total_cost: float


class RentalService:
    """Service for rental business rules."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._users = UserRepo(connection)
        self._products = ProductRepo(connection)
        self._rentals = RentalRepo(connection)
        self._payments = PaymentRepository(connection)
        self._logger = get_logger(self.__class__.__name__)

    def _normalize_dates(self, start_date: str | date, end_date: str | date) -> tuple[date, date]:
        try:
            start = start_date if isinstance(start_date, date) else date.fromisoformat(start_date)
            end = end_date if isinstance(end_date, date) else date.fromisoformat(end_date)
        except (TypeError, ValueError) as exc:
            raise ValidationError("Invalid dates. Check the rental start and end.") from exc
        if end <= start:
            raise ValidationError("The rental end date must be after the start date.")
        return start, end

    def quote(
        self,
        product_id: int,
        start_date: str | date,
        end_date: str | date,
        quantity: int = 1,
    ) -> RentalQuote:
        """Price a rental: daily price × days × quantity."""
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1.")
        product = self._products.get_by_id(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found.")
        start, end = self._normalize_dates(start_date, end_date)
        days = (end - start).days
        total_cost = round(product.rental_price * days * quantity, 2)
        return RentalQuote(
            rental_start=start.isoformat(),
            rental_end=end.isoformat(),
            days=days,
            quantity=quantity,
            daily_price=product.rental_price,
            total_cost=total_cost,
        )

    def create_rental(
        self,
        renter_id: int,
        product_id: int,
        start_date: str | date,
        end_date: str | date,
        quantity: int = 1,
    ) -> Rental:
        """Create an active rental, take stock and record the payment."""
        renter = self._users.get_by_id(renter_id)
        if not renter:
            raise NotFoundError(f"User {renter_id} not found.")
        if not capabilities_for(renter.role).can_rent:
            raise ValidationError("This account cannot rent products.")

        quote = self.quote(product_id, start_date, end_date, quantity)
        with transaction(self._connection):
            if not self._products.adjust_quantity(product_id, -quantity):
                raise ValidationError("This product is currently not available.")
            rental = self._rentals.insert(
                renter_id=renter_id,
                product_id=product_id,
                rental_start=quote.rental_start,
                rental_end=quote.rental_end,
                total_cost=quote.total_cost,
                status=RentalStatus.ACTIVE,
                quantity=quantity,
            )
            self._payments.create(
                rental_id=rental.id or 0,
                user_id=renter_id,
                amount=quote.total_cost,
                payment_status=PaymentStatus.COMPLETED,
            )
        self._logger.info(
            "Rental %s created: product=%s renter=%s total=%.2f",
            rental.id,
            product_id,
            renter_id,
            quote.total_cost,
        )
        return rental

    def _close(self, rental_id: int, status: RentalStatus) -> Rental:
        rental = self._rentals.get_by_id(rental_id)
        if not rental:
            raise NotFoundError(f"Rental {rental_id} not found.")
        if rental.status not in OPEN_STATUSES:
            raise ValidationError(
                f"Rental {rental_id} is already {rental.status.value}."
            )
        with transaction(self._connection):
            self._rentals.update_status(rental_id, status)
            if rental.product_id is not None:
                self._products.adjust_quantity(rental.product_id, rental.quantity)
        rental.status = status
        return rental

    def complete_rental(self, rental_id: int) -> Rental:
        """Mark a rental returned and put its stock back."""
        return self._close(rental_id, RentalStatus.COMPLETED)

    def cancel_rental(self, rental_id: int) -> Rental:
        return self._close(rental_id, RentalStatus.CANCELLED)

    def list_for_renter(self, renter_id: int) -> list[Rental]:
        return self._rentals.list_by_renter(renter_id)

    def get_rental(self, rental_id: int) -> Optional[Rental]:
        return self._rentals.get_by_id(rental_id)
