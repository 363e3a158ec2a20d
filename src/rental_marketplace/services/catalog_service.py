"""Catalog browsing: products with owner names and ratings."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from typing import Any, Optional

from rental_marketplace.analytics.aggregation import AggregationStats, average_by_group
from rental_marketplace.analytics.filters import ProductFilter
from rental_marketplace.analytics.joins import flatten_product_details, flatten_review
from rental_marketplace.db.query_client import (
    Embed,
    FetchResult,
    QueryClient,
    eq,
    first_error,
)
from rental_marketplace.logging_config import get_logger
from rental_marketplace.services.errors import FetchError, NotFoundError


@dataclass(frozen=True)
class CategoryIndex:
    categories: tuple[str, ...] = ()
    sub_categories: tuple[str, ...] = ()
    error: Optional[FetchError] = None


@dataclass(frozen=True)
class ProductDetail:
    product: dict[str, Any]
    reviews: list[dict[str, Any]] = field(default_factory=list)

    @property
    def avg_rating(self) -> Optional[float]:
        return self.product.get("avg_rating")


class CatalogService:
    """Read side of the product catalog."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._client = QueryClient(connection)
        self._logger = get_logger(self.__class__.__name__)
        self.last_stats = AggregationStats()

    def products_with_details(self) -> FetchResult:
        """All products joined with owner name and average rating.

        Products and reviews are fetched independently; the result waits for
        both and carries the first error if either failed.
        """
        products = self._client.select(
            "products",
            embed=[Embed("owner", ("name",))],
            order_by="name",
        )
        reviews = self._client.select("reviews", ("review_id", "product_id", "rating"))
        error = first_error(products, reviews)
        if error is not None:
            return FetchResult("products", error=error)
        self.last_stats = AggregationStats()
        ratings = average_by_group(
            reviews.rows,
            lambda row: row["product_id"],
            lambda row: row["rating"],
            self.last_stats,
            keys=[row["product_id"] for row in products.rows],
        )
        rows = [flatten_product_details(row, ratings) for row in products.rows]
        return FetchResult("products", rows=rows)

    def browse(self, product_filter: Optional[ProductFilter] = None) -> FetchResult:
        result = self.products_with_details()
        if not result.ok:
            return result
        product_filter = product_filter or ProductFilter()
        return FetchResult("products", rows=product_filter.apply(result.rows))

    def categories(self) -> CategoryIndex:
        result = self._client.select(
            "products", ("product_id", "category", "sub_category"), order_by="category"
        )
        if not result.ok:
            return CategoryIndex(error=result.error)
        categories = dict.fromkeys(row["category"] for row in result.rows)
        sub_categories = dict.fromkeys(
            row["sub_category"] for row in result.rows if row.get("sub_category")
        )
        return CategoryIndex(tuple(categories), tuple(sub_categories))

    def product_detail(self, product_id: int) -> ProductDetail:
        """Product with its reviews.

        Raises :class:`NotFoundError` for unknown ids and the fetch error
        when the read fails.
        """
        product = self._client.select(
            "products",
            filters=[eq("product_id", product_id)],
            embed=[Embed("owner", ("name",))],
        )
        reviews = self._client.select(
            "reviews",
            filters=[eq("product_id", product_id)],
            embed=[Embed("user", ("name",)), Embed("product", ("name",))],
            order_by="-review_date",
        )
        error = first_error(product, reviews)
        if error is not None:
            raise error
        if not product.rows:
            raise NotFoundError(f"Product {product_id} not found.")
        ratings = average_by_group(
            reviews.rows,
            lambda row: row["product_id"],
            lambda row: row["rating"],
            keys=[product_id],
        )
        return ProductDetail(
            product=flatten_product_details(product.rows[0], ratings),
            reviews=[flatten_review(row) for row in reviews.rows],
        )
