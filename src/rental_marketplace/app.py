"""Application entry point."""

from __future__ import annotations

import sys

from PySide6 import QtWidgets

from rental_marketplace.config import AppConfig
from rental_marketplace.db.connection import get_connection
from rental_marketplace.db.migrations import apply_migrations
from rental_marketplace.logging_config import configure_logging, get_logger
from rental_marketplace.paths import get_config_path, get_db_path, get_exports_dir
from rental_marketplace.repositories import UserRepo
from rental_marketplace.services.account_service import AccountService
from rental_marketplace.services.catalog_service import CatalogService
from rental_marketplace.services.dashboard_service import DashboardService
from rental_marketplace.services.rental_service import RentalService
from rental_marketplace.services.report_service import ReportService
from rental_marketplace.ui.app_services import AppServices
from rental_marketplace.ui.data_bus import DataEventBus
from rental_marketplace.ui.main_window import MainWindow
from rental_marketplace.utils.theme import ThemeManager


def main() -> int:
    """Start the RentalMarketplace application."""
    configure_logging()
    get_exports_dir()
    db_path = get_db_path()
    connection = get_connection(db_path)
    apply_migrations(connection)

    config = AppConfig()
    logger = get_logger(__name__)
    logger.info("Starting %s with database %s", config.app_name, db_path)

    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName(config.app_name)
    app.setOrganizationName(config.organization_name)
    app.setOrganizationDomain(config.organization_domain)

    services = AppServices(
        connection=connection,
        db_path=db_path,
        data_bus=DataEventBus(),
        user_repo=UserRepo(connection),
        account_service=AccountService(connection),
        catalog_service=CatalogService(connection),
        rental_service=RentalService(connection),
        report_service=ReportService(connection),
        dashboard_service=DashboardService(connection),
        theme_manager=ThemeManager(app, get_config_path()),
    )

    window = MainWindow(services)
    app.aboutToQuit.connect(connection.close)
    window.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
