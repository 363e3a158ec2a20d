"""Screen widgets for the RentalMarketplace UI."""

from rental_marketplace.ui.screens.accounts_screen import AccountsScreen
from rental_marketplace.ui.screens.catalog_screen import CatalogScreen
from rental_marketplace.ui.screens.dashboard_screen import DashboardScreen
from rental_marketplace.ui.screens.reports_screen import ReportsScreen

__all__ = [
    "AccountsScreen",
    "CatalogScreen",
    "DashboardScreen",
    "ReportsScreen",
]
