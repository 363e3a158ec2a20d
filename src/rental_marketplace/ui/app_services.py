"""Service container for the UI layer."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rental_marketplace.domain.models import User
from rental_marketplace.repositories import UserRepo
from rental_marketplace.services.account_service import AccountService
from rental_marketplace.services.catalog_service import CatalogService
from rental_marketplace.services.dashboard_service import DashboardService
from rental_marketplace.services.rental_service import RentalService
from rental_marketplace.services.report_service import ReportService
from rental_marketplace.ui.data_bus import DataEventBus
from rental_marketplace.utils.theme import ThemeManager


@dataclass
class SessionState:
    """User the screens act on behalf of."""

    user: Optional[User] = None


@dataclass(frozen=True)
class AppServices:
    """Shared repositories and services for dependency injection."""

    connection: sqlite3.Connection
    db_path: Path
    data_bus: DataEventBus
    user_repo: UserRepo
    account_service: AccountService
    catalog_service: CatalogService
    rental_service: RentalService
    report_service: ReportService
    dashboard_service: DashboardService
    theme_manager: ThemeManager
    session: SessionState = field(default_factory=SessionState)

    def set_current_user(self, user: Optional[User]) -> None:
        self.session.user = user
        self.data_bus.user_changed.emit(user)
