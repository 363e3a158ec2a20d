"""Repositories for data access."""

from rental_marketplace.repositories.mappers import (
    payment_from_row,
    product_from_row,
    rental_from_row,
    user_from_row,
)
from rental_marketplace.repositories.payment_repo import PaymentRepository
from rental_marketplace.repositories.product_repo import ProductRepo
from rental_marketplace.repositories.rental_repo import RentalRepo
from rental_marketplace.repositories.user_repo import UserRepo

__all__ = [
    "payment_from_row",
    "PaymentRepository",
    "ProductRepo",
    "product_from_row",
    "RentalRepo",
    "rental_from_row",
    "UserRepo",
    "user_from_row",
]
