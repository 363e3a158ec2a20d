"""Per-user dashboard composed from the user's role capabilities."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from rental_marketplace.analytics.aggregation import AggregationStats, sum_by_group
from rental_marketplace.analytics.joins import flatten_rental_history
from rental_marketplace.analytics.presentation import Metric, ReportResult, build_table, columns
from rental_marketplace.db.query_client import Embed, QueryClient, eq
from rental_marketplace.domain.models import MaintenanceStatus, User
from rental_marketplace.domain.roles import RoleCapabilities, capabilities_for
from rental_marketplace.logging_config import get_logger
from rental_marketplace.services.report_service import ReportService

PENDING_MAINTENANCE_LIMIT = 3


@dataclass(frozen=True)
class DashboardSummary:
    user: User
    capabilities: RoleCapabilities
    panels: dict[str, ReportResult] = field(default_factory=dict)
    metrics: tuple[Metric, ...] = ()


class DashboardService:
    """Build the panels a user sees after logging in."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._client = QueryClient(connection)
        self._reports = ReportService(connection)
        self._logger = get_logger(self.__class__.__name__)

    def summary(self, user: User, today: Optional[date] = None) -> DashboardSummary:
        capabilities = capabilities_for(user.role)
        panels: dict[str, ReportResult] = {}
        metrics: list[Metric] = []
        if capabilities.can_rent:
            panel = self.my_rentals(user.id or 0)
            panels[panel.key] = panel
            metrics.extend(panel.metrics)
        if capabilities.can_list:
            panel = self.my_products(user.id or 0)
            panels[panel.key] = panel
            metrics.extend(panel.metrics)
            panel = self.my_maintenance(user.id or 0, today)
            panels[panel.key] = panel
        if capabilities.is_admin:
            for panel in (
                self._reports.role_counts(),
                self._reports.maintenance_overview(today=today),
            ):
                panels[panel.key] = panel
        return DashboardSummary(
            user=user,
            capabilities=capabilities,
            panels=panels,
            metrics=tuple(metrics),
        )

    def my_rentals(self, renter_id: int) -> ReportResult:
        key = "my_rentals"
        rentals = self._client.select(
            "rentals",
            filters=[eq("renter_id", renter_id)],
            embed=[Embed("product", ("name", "owner_id"), children=(Embed("owner", ("name",)),))],
            order_by="-rental_start",
        )
        if not rentals.ok:
            return ReportResult(key=key, error=rentals.error)
        rows = []
        for row in rentals.rows:
            owner = (row.get("product") or {}).get("owner") or {}
            rows.append({**flatten_rental_history(row), "owner_name": owner.get("name")})
        stats = AggregationStats()
        spent = sum_by_group(
            rentals.rows, lambda row: row["renter_id"], lambda row: row.get("total_cost"), stats
        )
        total_spent = spent.get(renter_id, 0.0)
        return ReportResult(
            key=key,
            table=build_table(
                "My Rentals",
                columns(
                    ("product_name", "Product"),
                    ("owner_name", "Owner"),
                    ("rental_start", "Start"),
                    ("rental_end", "End"),
                    ("total_cost", "Total Cost"),
                    ("status", "Status"),
                ),
                rows,
            ),
            metrics=(
                Metric("Total Spent", total_spent, "Across all your rentals"),
                Metric("Rentals", len(rows)),
            ),
            skipped=stats.skipped,
        )

    def my_products(self, owner_id: int) -> ReportResult:
        """Owner's listings with revenue matched by product id."""
        key = "my_products"
        products = self._client.select(
            "products",
            filters=[eq("owner_id", owner_id)],
            embed=[Embed("rentals", ("rental_id", "total_cost"))],
            order_by="name",
        )
        if not products.ok:
            return ReportResult(key=key, error=products.error)
        stats = AggregationStats()
        revenue = sum_by_group(
            [
                {"product_id": product["product_id"], "total_cost": rental.get("total_cost")}
                for product in products.rows
                for rental in product["rentals"]
            ],
            lambda row: row["product_id"],
            lambda row: row["total_cost"],
            stats,
        )
        rows = [
            {
                **product,
                "rental_count": len(product["rentals"]),
                "revenue": revenue.get(product["product_id"], 0.0),
            }
            for product in products.rows
        ]
        return ReportResult(
            key=key,
            table=build_table(
                "My Products",
                columns(
                    ("name", "Product"),
                    ("category", "Category"),
                    ("rental_price", "Price"),
                    ("available_quantity", "Available"),
                    ("rental_count", "Rentals"),
                    ("revenue", "Revenue"),
                ),
                rows,
            ),
            metrics=(
                Metric("Total Revenue", sum(revenue.values()), "From your listed products"),
                Metric("Listed Products", len(rows)),
            ),
            skipped=stats.skipped,
        )

    def my_maintenance(self, owner_id: int, today: Optional[date] = None) -> ReportResult:
        key = "my_maintenance"
        products = self._client.select(
            "products", ("product_id",), filters=[eq("owner_id", owner_id)]
        )
        if not products.ok:
            return ReportResult(key=key, error=products.error)
        overview = self._reports.maintenance_overview(
            [row["product_id"] for row in products.rows], today
        )
        if not overview.ok or overview.table is None:
            return ReportResult(key=key, error=overview.error)
        pending = [
            row
            for row in overview.table.rows
            if row["status"] == MaintenanceStatus.PENDING.value
        ][:PENDING_MAINTENANCE_LIMIT]
        return ReportResult(
            key=key,
            table=build_table(
                "Pending Maintenance",
                overview.table.columns,
                pending,
            ),
            metrics=overview.metrics,
        )
