"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass

from rental_marketplace.version import __app_name__, __company__

APP_NAME = __app_name__
APP_DATA_DIRNAME = "RentalMarketplace"
APP_HOME_ENV = "RENTAL_MARKETPLACE_HOME"
DB_FILENAME = "rental_marketplace.db"
LOGS_DIRNAME = "logs"
LOG_FILENAME = "app.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3
EXPORTS_DIRNAME = "exports"
CONFIG_FILENAME = "config.json"

UNKNOWN_LABEL = "Unknown"
NO_RATING_LABEL = "No rating"

CATALOG_PRICE_MIN = 0.0
CATALOG_PRICE_MAX = 3000.0
CATALOG_RATING_MIN = 0.0
CATALOG_RATING_MAX = 5.0

TOP_REVENUE_LIMIT = 10
REVENUE_CHART_LIMIT = 5
OWNER_MIN_PRODUCTS = 2
QUALITY_MIN_RATING = 4.0
CLEAN_MIN_STOCK = 3
CLEAN_WINDOW_MONTHS = 1
POWER_USER_MIN_PRODUCTS = 2
POWER_USER_MIN_SPENDING = 700.0


@dataclass(frozen=True)
class AppConfig:
    """Static configuration values for RentalMarketplace."""

    app_name: str = APP_NAME
    organization_name: str = __company__
    organization_domain: str = "rentalmarketplace.local"
