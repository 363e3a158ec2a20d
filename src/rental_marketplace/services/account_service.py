"""Account registration and product listing rules."""

from __future__ import annotations

import re
import sqlite3
from typing import Optional

from rental_marketplace.domain.models import Product, ProductCategory, User, UserRole
from rental_marketplace.domain.roles import capabilities_for
from rental_marketplace.logging_config import get_logger
from rental_marketplace.repositories import ProductRepo, UserRepo
from rental_marketplace.services.errors import NotFoundError, ValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AccountService:
    """Register users and let owners list products."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._users = UserRepo(connection)
        self._products = ProductRepo(connection)
        self._logger = get_logger(self.__class__.__name__)

    def register(
        self,
        name: str,
        email: str,
        phone: Optional[str],
        role: UserRole | str,
    ) -> User:
        name = (name or "").strip()
        email = (email or "").strip().lower()
        phone = (phone or "").strip() or None
        if len(name) < 2:
            raise ValidationError("Name must be at least 2 characters.")
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Please enter a valid email address.")
        try:
            role = UserRole(role)
        except ValueError as exc:
            raise ValidationError(f"Unknown role {role!r}.") from exc
        if self._users.get_by_email(email):
            raise ValidationError("An account with this email already exists.")
        user = self._users.create(name=name, email=email, phone=phone, role=role)
        self._logger.info("Registered user %s with role %s", user.id, role.value)
        return user

    def list_product(
        self,
        owner_id: int,
        name: str,
        category: ProductCategory | str,
        sub_category: Optional[str],
        rental_price: float,
        available_quantity: int,
    ) -> Product:
        owner = self._users.get_by_id(owner_id)
        if not owner:
            raise NotFoundError(f"User {owner_id} not found.")
        if not capabilities_for(owner.role).can_list:
            raise ValidationError("This account cannot list products.")
        name = (name or "").strip()
        if len(name) < 2:
            raise ValidationError("Product name must be at least 2 characters.")
        try:
            category = ProductCategory(category)
        except ValueError as exc:
            raise ValidationError(f"Unknown category {category!r}.") from exc
        if rental_price <= 0:
            raise ValidationError("Rental price must be greater than zero.")
        if available_quantity < 0:
            raise ValidationError("Available quantity cannot be negative.")
        return self._products.create(
            name=name,
            category=category,
            sub_category=(sub_category or "").strip() or None,
            owner_id=owner_id,
            rental_price=float(rental_price),
            available_quantity=int(available_quantity),
        )
