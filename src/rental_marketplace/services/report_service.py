"""Analytics reports built from independently fetched rows.

Each report fetches what it needs through :class:`QueryClient`, stops at the
first failed fetch, and otherwise runs the pure aggregation helpers before
shaping the result for a table or chart.
"""

from __future__ import annotations

import sqlite3
from datetime import date
from typing import Any, Callable, Iterable, Optional, Sequence

from dateutil import parser
from dateutil.relativedelta import relativedelta

from rental_marketplace.analytics.aggregation import (
    AggregationStats,
    average_by_group,
    count_by_group,
    global_mean,
    rental_duration_days,
    set_difference,
    shared_keys,
    sum_by_group,
    top_n,
)
from rental_marketplace.analytics.category import (
    above_category_average,
    above_global_average,
)
from rental_marketplace.analytics.joins import flatten_maintenance, flatten_rental_pair
from rental_marketplace.analytics.presentation import (
    ChartSeries,
    Column,
    Metric,
    ReportResult,
    build_chart,
    build_table,
    columns,
)
from rental_marketplace.config import (
    CLEAN_MIN_STOCK,
    CLEAN_WINDOW_MONTHS,
    OWNER_MIN_PRODUCTS,
    POWER_USER_MIN_PRODUCTS,
    POWER_USER_MIN_SPENDING,
    QUALITY_MIN_RATING,
    REVENUE_CHART_LIMIT,
    TOP_REVENUE_LIMIT,
    UNKNOWN_LABEL,
)
from rental_marketplace.db.query_client import (
    Embed,
    FetchResult,
    QueryClient,
    eq,
    first_error,
    gt,
    in_,
    lt,
)
from rental_marketplace.domain.models import MaintenanceStatus, UserRole
from rental_marketplace.domain.roles import role_label
from rental_marketplace.logging_config import get_logger

NAME_EMAIL = ("name", "email")
# Duration grouping -> embedded product column used as the row label.
DURATION_GROUPS = {"product": "name", "category": "category"}


def _embedded(row: dict[str, Any], name: str) -> dict[str, Any]:
    return row.get(name) or {}


def _embedded_value(relation: str, column: str) -> Callable[[dict[str, Any]], Any]:
    def key(row: dict[str, Any]) -> Any:
        return _embedded(row, relation).get(column)

    return key


def _joined_key(id_column: str, relation: str) -> Callable[[dict[str, Any]], Any]:
    """Group by ``id_column`` only when the embedded ``relation`` resolved."""

    def key(row: dict[str, Any]) -> Any:
        return row.get(id_column) if row.get(relation) else None

    return key


class ReportService:
    """Compose fetches, aggregations and presentation for each report."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._client = QueryClient(connection)
        self._logger = get_logger(self.__class__.__name__)

    def _failed(self, key: str, *results: FetchResult) -> Optional[ReportResult]:
        error = first_error(*results)
        if error is None:
            return None
        self._logger.error("Report %s failed: %s", key, error)
        return ReportResult(key=key, error=error)

    def _result(
        self,
        key: str,
        title: str,
        manifest: Sequence[Column],
        rows: Iterable[dict[str, Any]],
        *,
        description: str = "",
        chart: Optional[ChartSeries] = None,
        metrics: Sequence[Metric] = (),
        stats: Optional[AggregationStats] = None,
    ) -> ReportResult:
        skipped = stats.skipped if stats else 0
        if skipped:
            self._logger.warning(
                "Report %s skipped %s malformed rows: %s",
                key,
                skipped,
                dict(stats.reasons),
            )
        return ReportResult(
            key=key,
            table=build_table(title, manifest, rows, description),
            chart=chart,
            metrics=tuple(metrics),
            skipped=skipped,
        )

    # Renters and spending

    def top_renters(self) -> ReportResult:
        key = "top_renters"
        rentals = self._client.select(
            "rentals",
            ("rental_id", "renter_id"),
            embed=[Embed("renter", ("name", "email", "phone"))],
        )
        failed = self._failed(key, rentals)
        if failed:
            return failed
        stats = AggregationStats()
        counts = count_by_group(rentals.rows, _joined_key("renter_id", "renter"), stats)
        renters = {row["renter_id"]: row["renter"] for row in rentals.rows if row.get("renter")}
        summary = [
            {**renters[renter_id], "renter_id": renter_id, "rental_count": count}
            for renter_id, count in counts.items()
        ]
        ordered = top_n(summary, lambda row: row["rental_count"], len(summary))
        return self._result(
            key,
            "Top Renters",
            columns(
                ("name", "Name"),
                ("email", "Email"),
                ("phone", "Phone"),
                ("rental_count", "Rentals"),
            ),
            ordered,
            description="Users who rent the most products",
            stats=stats,
        )

    def high_spenders(self) -> ReportResult:
        """Renters whose total spending exceeds the mean rental cost."""
        key = "high_spenders"
        rentals = self._client.select(
            "rentals",
            ("rental_id", "renter_id", "total_cost"),
            embed=[Embed("renter", NAME_EMAIL)],
        )
        failed = self._failed(key, rentals)
        if failed:
            return failed
        stats = AggregationStats()
        average = global_mean(row.get("total_cost") for row in rentals.rows)
        spent = sum_by_group(
            rentals.rows,
            _joined_key("renter_id", "renter"),
            lambda row: row["total_cost"],
            stats,
        )
        renters = {row["renter_id"]: row["renter"] for row in rentals.rows if row.get("renter")}
        rows = [
            {
                "name": renters[renter_id].get("name"),
                "email": renters[renter_id].get("email"),
                "total_spent": total,
            }
            for renter_id, total in spent.items()
            if average is not None and total > average
        ]
        rows = top_n(rows, lambda row: row["total_spent"], len(rows))
        return self._result(
            key,
            "High Spenders",
            columns(("name", "Name"), ("email", "Email"), ("total_spent", "Total Spent")),
            rows,
            description="Customers with spending above average",
            metrics=[Metric("Average rental cost", average)],
            stats=stats,
        )

    # Revenue

    def _product_revenue(self, key: str) -> tuple[Optional[ReportResult], list[dict[str, Any]], AggregationStats]:
        rentals = self._client.select(
            "rentals",
            ("rental_id", "product_id", "total_cost"),
            embed=[Embed("product", ("name", "category"))],
        )
        stats = AggregationStats()
        failed = self._failed(key, rentals)
        if failed:
            return failed, [], stats
        revenue = sum_by_group(
            rentals.rows,
            _joined_key("product_id", "product"),
            lambda row: row["total_cost"],
            stats,
        )
        products = {row["product_id"]: row["product"] for row in rentals.rows if row.get("product")}
        summary = [
            {
                "product_id": product_id,
                "name": products[product_id].get("name"),
                "category": products[product_id].get("category") or UNKNOWN_LABEL,
                "total_revenue": total,
            }
            for product_id, total in revenue.items()
        ]
        return None, summary, stats

    def top_revenue_products(self, limit: int = TOP_REVENUE_LIMIT) -> ReportResult:
        key = "top_revenue"
        failed, summary, stats = self._product_revenue(key)
        if failed:
            return failed
        rows = top_n(summary, lambda row: row["total_revenue"], limit)
        return self._result(
            key,
            "Top Revenue Products",
            columns(
                ("name", "Product"),
                ("category", "Category"),
                ("total_revenue", "Total Revenue"),
            ),
            rows,
            description=f"Top {limit} products by total rental revenue",
            chart=build_chart(
                "Revenue by Product", rows, "name", "total_revenue", value_label="Revenue"
            ),
            stats=stats,
        )

    def revenue_per_product(self, limit: int = REVENUE_CHART_LIMIT) -> ReportResult:
        key = "revenue_per_product"
        failed, summary, stats = self._product_revenue(key)
        if failed:
            return failed
        rows = top_n(summary, lambda row: row["total_revenue"], limit)
        total = sum(row["total_revenue"] for row in summary)
        return self._result(
            key,
            "Top Products by Revenue",
            columns(("name", "Product"), ("total_revenue", "Revenue")),
            rows,
            chart=build_chart(
                "Top Products by Revenue",
                rows,
                "name",
                "total_revenue",
                value_label="Revenue",
            ),
            metrics=[Metric("Total revenue", total)],
            stats=stats,
        )

    # Products and categories

    def category_distribution(self) -> ReportResult:
        key = "categories"
        products = self._client.select("products", ("product_id", "category"), order_by="category")
        failed = self._failed(key, products)
        if failed:
            return failed
        stats = AggregationStats()
        counts = count_by_group(products.rows, lambda row: row["category"], stats)
        rows = [{"category": category, "count": count} for category, count in counts.items()]
        return self._result(
            key,
            "Product Categories Distribution",
            columns(("category", "Category"), ("count", "Number of Products")),
            rows,
            chart=build_chart("Products per Category", rows, "category", "count"),
            stats=stats,
        )

    def subcategory_distribution(self, category: Optional[str]) -> ReportResult:
        key = "subcategories"
        manifest = columns(("sub_category", "Sub-category"), ("count", "Number of Products"))
        if not category:
            return self._result(key, "Sub-categories", manifest, [])
        products = self._client.select(
            "products",
            ("product_id", "sub_category"),
            filters=[eq("category", category)],
            order_by="sub_category",
        )
        failed = self._failed(key, products)
        if failed:
            return failed
        counts = count_by_group(
            products.rows, lambda row: row.get("sub_category") or "Unspecified"
        )
        rows = [{"sub_category": name, "count": count} for name, count in counts.items()]
        return self._result(
            key,
            f"Sub-categories in {category}",
            manifest,
            rows,
            chart=build_chart(f"Sub-categories in {category}", rows, "sub_category", "count", kind="pie"),
        )

    def average_rental_duration(self, by: str = "product") -> ReportResult:
        """Average rental length in days per product, or per product category.

        Rentals whose end precedes their start, or whose product was deleted,
        are skipped and counted.
        """
        key = "avg_rental_duration"
        if by not in DURATION_GROUPS:
            raise ValueError(f"Unknown duration grouping {by!r}.")
        rentals = self._client.select(
            "rentals",
            ("rental_id", "product_id", "rental_start", "rental_end"),
            embed=[Embed("product", ("name", "category"))],
        )
        failed = self._failed(key, rentals)
        if failed:
            return failed
        stats = AggregationStats()
        if by == "category":
            group_key = _embedded_value("product", "category")
        else:
            group_key = _joined_key("product_id", "product")
        averages = average_by_group(
            rentals.rows,
            group_key,
            lambda row: rental_duration_days(row["rental_start"], row["rental_end"]),
            stats,
        )
        labels = {
            group_key(row): _embedded(row, "product").get(DURATION_GROUPS[by])
            for row in rentals.rows
            if row.get("product")
        }
        rows = [
            {"label": labels.get(group) or UNKNOWN_LABEL, "avg_duration_days": round(value, 1)}
            for group, value in averages.items()
            if value is not None
        ]
        return self._result(
            key,
            "Average Rental Duration",
            columns(
                ("label", "Category" if by == "category" else "Product"),
                ("avg_duration_days", "Avg. Days"),
            ),
            rows,
            chart=build_chart(
                "Average Rental Duration", rows, "label", "avg_duration_days", value_label="Days"
            ),
            stats=stats,
        )

    def above_average_price(self) -> ReportResult:
        key = "above_avg_price"
        products = self._client.select("products")
        failed = self._failed(key, products)
        if failed:
            return failed
        stats = AggregationStats()
        rows = above_global_average(products.rows, stats)
        return self._result(
            key,
            "Above Average Price",
            columns(
                ("name", "Product"),
                ("category", "Category"),
                ("rental_price", "Price"),
            ),
            rows,
            description="Products priced above the overall average",
            stats=stats,
        )

    def above_category_average_price(self) -> ReportResult:
        key = "above_category_avg"
        products = self._client.select("products")
        failed = self._failed(key, products)
        if failed:
            return failed
        stats = AggregationStats()
        rows = above_category_average(products.rows, stats)
        return self._result(
            key,
            "Premium Products",
            columns(
                ("name", "Product"),
                ("category", "Category"),
                ("rental_price", "Price"),
                ("avg_category_price", "Category Avg Price"),
            ),
            rows,
            description="Products priced above average for their category",
            stats=stats,
        )

    def _products_with_owner(self, filters: Sequence[Any], embeds: Sequence[Embed] = ()) -> FetchResult:
        return self._client.select(
            "products",
            filters=filters,
            embed=[Embed("owner", ("name",)), *embeds],
            order_by="rental_price",
        )

    @staticmethod
    def _product_columns(*extra: tuple[str, str]) -> tuple[Column, ...]:
        return columns(
            ("name", "Product"),
            ("owner_name", "Owner"),
            ("category", "Category"),
            ("sub_category", "Sub-category"),
            ("rental_price", "Price"),
            *extra,
        )

    @staticmethod
    def _with_owner_name(row: dict[str, Any]) -> dict[str, Any]:
        return {**row, "owner_name": _embedded(row, "owner").get("name") or UNKNOWN_LABEL}

    def affordable_products(self, sub_category: str = "tuxedo", max_price: float = 100.0) -> ReportResult:
        key = "affordable"
        products = self._products_with_owner(
            [eq("sub_category", sub_category), lt("rental_price", max_price)]
        )
        failed = self._failed(key, products)
        if failed:
            return failed
        return self._result(
            key,
            f"Affordable {sub_category.title()}",
            self._product_columns(),
            [self._with_owner_name(row) for row in products.rows],
            description=f"{sub_category.title()} rentals under {max_price:g} per day",
        )

    def quality_products(self, category: str = "womens", min_rating: float = QUALITY_MIN_RATING) -> ReportResult:
        key = "quality"
        products = self._products_with_owner(
            [eq("category", category)],
            [Embed("reviews", ("rating",), inner=True)],
        )
        failed = self._failed(key, products)
        if failed:
            return failed
        stats = AggregationStats()
        ratings = average_by_group(
            [
                {"product_id": row["product_id"], "rating": review.get("rating")}
                for row in products.rows
                for review in row["reviews"]
            ],
            lambda item: item["product_id"],
            lambda item: item["rating"],
            stats,
        )
        rows = []
        for row in products.rows:
            rating = ratings.get(row["product_id"])
            if rating is not None and rating >= min_rating:
                rows.append({**self._with_owner_name(row), "avg_rating": round(rating, 1)})
        return self._result(
            key,
            f"Quality {category.title()} Products",
            self._product_columns(("avg_rating", "Rating")),
            rows,
            description=f"Average rating of at least {min_rating:g}",
            stats=stats,
        )

    def clean_products(
        self,
        category: str = "accessories",
        min_stock: int = CLEAN_MIN_STOCK,
        today: Optional[date] = None,
    ) -> ReportResult:
        """Well-stocked products cleaned within the last month."""
        key = "clean"
        cutoff = (today or date.today()) - relativedelta(months=CLEAN_WINDOW_MONTHS)
        products = self._products_with_owner(
            [eq("category", category), gt("available_quantity", min_stock)],
            [Embed("maintenance", ("last_cleaned", "status"), inner=True)],
        )
        failed = self._failed(key, products)
        if failed:
            return failed
        stats = AggregationStats()
        rows = []
        for row in products.rows:
            cleaned = []
            for record in row["maintenance"]:
                try:
                    cleaned.append(parser.isoparse(str(record["last_cleaned"])).date())
                except (ValueError, OverflowError):
                    stats.record("invalid date")
            last_cleaned = max(cleaned, default=None)
            if last_cleaned is not None and last_cleaned > cutoff:
                rows.append(
                    {
                        **self._with_owner_name(row),
                        "last_cleaned": last_cleaned.isoformat(),
                    }
                )
        return self._result(
            key,
            f"Clean {category.title()}",
            self._product_columns(
                ("available_quantity", "Available"), ("last_cleaned", "Last Cleaned")
            ),
            rows,
            description=f"More than {min_stock} in stock and cleaned since {cutoff.isoformat()}",
            stats=stats,
        )

    def rated_products(self) -> ReportResult:
        key = "rated"
        products = self._client.select(
            "products",
            ("product_id", "name", "category"),
            embed=[Embed("reviews", ("rating",))],
        )
        failed = self._failed(key, products)
        if failed:
            return failed
        stats = AggregationStats()
        ratings = average_by_group(
            [
                {"product_id": row["product_id"], "rating": review.get("rating")}
                for row in products.rows
                for review in row["reviews"]
            ],
            lambda item: item["product_id"],
            lambda item: item["rating"],
            stats,
        )
        rows = [
            {
                "name": row["name"],
                "category": row["category"],
                "avg_rating": round(ratings[row["product_id"]], 1),
            }
            for row in products.rows
            if ratings.get(row["product_id"]) is not None
        ]
        rows = top_n(rows, lambda row: row["avg_rating"], len(rows))
        return self._result(
            key,
            "Rated Products",
            columns(("name", "Product"), ("category", "Category"), ("avg_rating", "Rating")),
            rows,
            stats=stats,
        )

    def unrented_products(self) -> ReportResult:
        key = "unrented"
        products = self._client.select("products", embed=[Embed("owner", ("name",))])
        rentals = self._client.select("rentals", ("rental_id", "product_id"))
        failed = self._failed(key, products, rentals)
        if failed:
            return failed
        rows = set_difference(
            products.rows,
            (row["product_id"] for row in rentals.rows),
            lambda row: row["product_id"],
        )
        return self._result(
            key,
            "Unrented Products",
            self._product_columns(),
            [self._with_owner_name(row) for row in rows],
            description="Products that have never been rented",
        )

    # Users and roles

    def sellers_and_admins(self) -> ReportResult:
        key = "sellers_admins"
        users = self._client.select(
            "users",
            ("user_id", "email", "role"),
            filters=[in_("role", [UserRole.OWNER.value, UserRole.ADMIN.value])],
            order_by="email",
        )
        failed = self._failed(key, users)
        if failed:
            return failed
        return self._result(
            key,
            "Sellers & Admins",
            columns(("email", "Email"), ("role", "Role")),
            users.rows,
        )

    def role_counts(self) -> ReportResult:
        key = "role_counts"
        users = self._client.select("users", ("user_id", "role"))
        failed = self._failed(key, users)
        if failed:
            return failed
        stats = AggregationStats()
        counts = count_by_group(users.rows, lambda row: row["role"], stats)
        rows = [
            {"role": role, "role_label": role_label(role), "count": count}
            for role, count in counts.items()
        ]
        return self._result(
            key,
            "User Roles",
            columns(("role_label", "Role"), ("count", "Users")),
            rows,
            chart=build_chart("User Roles", rows, "role_label", "count", kind="pie"),
            stats=stats,
        )

    def role_labels(self) -> ReportResult:
        key = "role_labels"
        users = self._client.select("users", ("user_id", "name", "role"), order_by="name")
        failed = self._failed(key, users)
        if failed:
            return failed
        rows = [{**row, "role_label": role_label(row["role"])} for row in users.rows]
        return self._result(
            key,
            "Users by Role",
            columns(("name", "Name"), ("role_label", "Role")),
            rows,
        )

    def buyers_and_sellers(self) -> ReportResult:
        """Users who both rent products and list their own."""
        key = "buyers_sellers"
        manifest = columns(("name", "Name"), ("email", "Email"), ("role", "Role"))
        rentals = self._client.select("rentals", ("rental_id", "renter_id"))
        products = self._client.select("products", ("product_id", "owner_id"))
        failed = self._failed(key, rentals, products)
        if failed:
            return failed
        both = shared_keys(
            (row["renter_id"] for row in rentals.rows),
            (row["owner_id"] for row in products.rows),
        )
        if not both:
            return self._result(key, "Buyers & Sellers", manifest, [])
        users = self._client.select("users", filters=[in_("user_id", both)], order_by="name")
        failed = self._failed(key, users)
        if failed:
            return failed
        return self._result(key, "Buyers & Sellers", manifest, users.rows)

    def power_users(
        self,
        min_products: int = POWER_USER_MIN_PRODUCTS,
        min_spending: float = POWER_USER_MIN_SPENDING,
    ) -> ReportResult:
        """Users listing more than ``min_products`` and spending more than ``min_spending``."""
        key = "power_users"
        users = self._client.select(
            "users",
            ("user_id", "name", "email"),
            embed=[
                Embed("products", ("product_id",)),
                Embed("rentals", ("rental_id", "total_cost")),
            ],
            order_by="name",
        )
        failed = self._failed(key, users)
        if failed:
            return failed
        stats = AggregationStats()
        spent = sum_by_group(
            [
                {"user_id": user["user_id"], "total_cost": rental.get("total_cost")}
                for user in users.rows
                for rental in user["rentals"]
            ],
            lambda row: row["user_id"],
            lambda row: row["total_cost"],
            stats,
        )
        rows = [
            {
                "name": user["name"],
                "email": user["email"],
                "total_products_listed": len(user["products"]),
                "total_spent_on_rentals": spent.get(user["user_id"], 0.0),
            }
            for user in users.rows
            if len(user["products"]) > min_products
            and spent.get(user["user_id"], 0.0) > min_spending
        ]
        return self._result(
            key,
            "Power Users",
            columns(
                ("name", "User"),
                ("email", "Email"),
                ("total_products_listed", "Products Listed"),
                ("total_spent_on_rentals", "Total Spent"),
            ),
            rows,
            description="Users who both list products and rent from others",
            stats=stats,
        )

    def product_owners(self, more_than: int = OWNER_MIN_PRODUCTS) -> ReportResult:
        """Owners listing more than ``more_than`` products."""
        key = "product_owners"
        products = self._client.select(
            "products",
            ("product_id", "owner_id"),
            embed=[Embed("owner", NAME_EMAIL)],
            order_by="owner_id",
        )
        failed = self._failed(key, products)
        if failed:
            return failed
        stats = AggregationStats()
        counts = count_by_group(
            products.rows,
            _joined_key("owner_id", "owner"),
            stats,
        )
        owners = {row["owner_id"]: row["owner"] for row in products.rows if row.get("owner")}
        rows = [
            {
                "owner_name": owners[owner_id].get("name") or UNKNOWN_LABEL,
                "email": owners[owner_id].get("email"),
                "total_products": count,
            }
            for owner_id, count in counts.items()
            if count > more_than
        ]
        return self._result(
            key,
            "Product Owners",
            columns(("owner_name", "Owner"), ("email", "Email"), ("total_products", "Products")),
            rows,
            description=f"Owners with more than {more_than} products",
            stats=stats,
        )

    def users_directory(self, role: UserRole) -> ReportResult:
        """Users with one role, with their rental and listing counts."""
        key = f"users_{role.value}"
        users = self._client.select(
            "users",
            filters=[eq("role", role.value)],
            embed=[Embed("rentals", ("rental_id",)), Embed("products", ("product_id",))],
            order_by="name",
        )
        failed = self._failed(key, users)
        if failed:
            return failed
        rows = [
            {
                **row,
                "rental_count": len(row["rentals"]),
                "total_products": len(row["products"]),
            }
            for row in users.rows
        ]
        count_column = ("total_products", "Products") if role is UserRole.OWNER else ("rental_count", "Rentals")
        return self._result(
            key,
            f"{role_label(role)}s",
            columns(("name", "Name"), ("email", "Email"), ("phone", "Phone"), count_column),
            rows,
        )

    # Joined views

    def rental_pairs(self) -> ReportResult:
        key = "rental_pairs"
        rentals = self._client.select(
            "rentals",
            ("rental_id", "renter_id", "product_id", "total_cost"),
            embed=[
                Embed("renter", ("name",)),
                Embed("product", ("name", "owner_id"), children=(Embed("owner", ("name",)),)),
            ],
            order_by="rental_id",
        )
        failed = self._failed(key, rentals)
        if failed:
            return failed
        return self._result(
            key,
            "Rental Pairs",
            columns(
                ("rental_id", "Rental"),
                ("renter_name", "Renter"),
                ("product_name", "Product"),
                ("owner_name", "Owner"),
                ("total_cost", "Total Cost"),
            ),
            [flatten_rental_pair(row) for row in rentals.rows],
            description="Who rented what from whom",
        )

    def maintenance_overview(
        self,
        product_ids: Optional[Iterable[int]] = None,
        today: Optional[date] = None,
    ) -> ReportResult:
        key = "maintenance"
        filters = [] if product_ids is None else [in_("product_id", list(product_ids))]
        records = self._client.select(
            "maintenance",
            filters=filters,
            embed=[Embed("product", ("name",))],
            order_by="next_cleaning_due",
        )
        failed = self._failed(key, records)
        if failed:
            return failed
        rows = [flatten_maintenance(row, today) for row in records.rows]
        overdue = sum(1 for row in rows if row["maintenance_due"] == "Overdue")
        clean = sum(1 for row in rows if row["status"] == MaintenanceStatus.CLEAN.value)
        return self._result(
            key,
            "Maintenance",
            columns(
                ("product_name", "Product"),
                ("last_cleaned", "Last Cleaned"),
                ("next_cleaning_due", "Next Cleaning Due"),
                ("status", "Status"),
                ("maintenance_due", "Maintenance Due"),
            ),
            rows,
            description="Product maintenance schedule and status",
            metrics=[
                Metric("Total Products", len(rows), "Products in maintenance tracking"),
                Metric("Maintenance Due", overdue, "Products overdue for cleaning"),
                Metric("Clean Products", clean, "Products with clean status"),
            ],
        )

    def catalog(self) -> dict[str, Callable[[], ReportResult]]:
        """Parameterless reports by key, in display order."""
        return {
            "top_renters": self.top_renters,
            "categories": self.category_distribution,
            "avg_rental_duration": self.average_rental_duration,
            "top_revenue": self.top_revenue_products,
            "revenue_per_product": self.revenue_per_product,
            "high_spenders": self.high_spenders,
            "above_avg_price": self.above_average_price,
            "above_category_avg": self.above_category_average_price,
            "sellers_admins": self.sellers_and_admins,
            "role_counts": self.role_counts,
            "role_labels": self.role_labels,
            "affordable": self.affordable_products,
            "quality": self.quality_products,
            "clean": self.clean_products,
            "rated": self.rated_products,
            "buyers_sellers": self.buyers_and_sellers,
            "power_users": self.power_users,
            "product_owners": self.product_owners,
            "unrented": self.unrented_products,
            "rental_pairs": self.rental_pairs,
            "maintenance": self.maintenance_overview,
        }
