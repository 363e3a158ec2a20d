"""Role capabilities resolved once per session."""

from __future__ import annotations

from dataclasses import dataclass

from rental_marketplace.domain.models import UserRole


@dataclass(frozen=True)
class RoleCapabilities:
    role: UserRole
    can_rent: bool
    can_list: bool
    is_admin: bool


_CAPABILITIES = {
    UserRole.RENTER: RoleCapabilities(UserRole.RENTER, can_rent=True, can_list=False, is_admin=False),
    UserRole.OWNER: RoleCapabilities(UserRole.OWNER, can_rent=False, can_list=True, is_admin=False),
    UserRole.BOTH: RoleCapabilities(UserRole.BOTH, can_rent=True, can_list=True, is_admin=False),
    UserRole.ADMIN: RoleCapabilities(UserRole.ADMIN, can_rent=True, can_list=True, is_admin=True),
}

ROLE_LABELS = {
    UserRole.RENTER: "Customer",
    UserRole.OWNER: "Product Owner",
    UserRole.BOTH: "Customer & Owner",
    UserRole.ADMIN: "Administrator",
}


def capabilities_for(role: UserRole | str) -> RoleCapabilities:
    return _CAPABILITIES[UserRole(role)]


def role_label(role: UserRole | str) -> str:
    try:
        return ROLE_LABELS[UserRole(role)]
    except ValueError:
        return str(role)
