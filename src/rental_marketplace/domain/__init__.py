"""Domain models for RentalMarketplace."""

from rental_marketplace.domain.models import (
    MaintenanceStatus,
    Payment,
    PaymentStatus,
    Product,
    ProductCategory,
    Rental,
    RentalStatus,
    User,
    UserRole,
)

__all__ = [
    "MaintenanceStatus",
    "Payment",
    "PaymentStatus",
    "Product",
    "ProductCategory",
    "Rental",
    "RentalStatus",
    "User",
    "UserRole",
]
