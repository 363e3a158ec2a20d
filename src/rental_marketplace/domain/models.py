"""Domain dataclasses and enums."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    RENTER = "renter"
    OWNER = "owner"
    ADMIN = "admin"
    BOTH = "both"


class ProductCategory(str, Enum):
    MENS = "mens"
    WOMENS = "womens"
    ACCESSORIES = "accessories"


class RentalStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MaintenanceStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"
    CLEAN = "clean"
    NEEDS_CLEANING = "needs_cleaning"
    DAMAGED = "damaged"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True)
class User:
    id: Optional[int]
    name: str
    email: str
    phone: Optional[str]
    role: UserRole


@dataclass(slots=True)
class Product:
    id: Optional[int]
    name: str
    category: ProductCategory
    sub_category: Optional[str]
    owner_id: int
    rental_price: float
    available_quantity: int


@dataclass(slots=True)
class Rental:
    id: Optional[int]
    renter_id: int
    product_id: int
    rental_start: str
    rental_end: str
    total_cost: float
    status: RentalStatus
    quantity: int = 1


@dataclass(slots=True)
class Payment:
    id: Optional[int]
    rental_id: int
    user_id: int
    amount: float
    payment_status: PaymentStatus
    payment_date: Optional[str] = None
