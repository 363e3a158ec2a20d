"""Centralized UI strings for consistent communication."""

from __future__ import annotations

from rental_marketplace.domain.models import ProductCategory
from rental_marketplace.version import __app_name__

APP_NAME = __app_name__

TITLE_WARNING = "Warning"
TITLE_ERROR = "Error"
TITLE_SUCCESS = "Success"

TERM_PRODUCT = "Product"

LABEL_ALL_CATEGORIES = "All"
LABEL_NO_DATA = "No data available."
LABEL_LOADING = "Loading..."
LABEL_NO_USER = "Select a user to see their dashboard."

CATEGORY_LABELS = {
    ProductCategory.MENS: "Men's",
    ProductCategory.WOMENS: "Women's",
    ProductCategory.ACCESSORIES: "Accessories",
}

REPORT_TITLES = {
    "top_renters": "Top Renters",
    "categories": "Products per Category",
    "avg_rental_duration": "Average Rental Duration",
    "avg_rental_duration_category": "Rental Duration by Category",
    "top_revenue": "Top Revenue Products",
    "revenue_per_product": "Revenue per Product",
    "high_spenders": "High Spenders",
    "above_avg_price": "Above Average Price",
    "above_category_avg": "Above Category Average",
    "sellers_admins": "Sellers and Admins",
    "role_counts": "Users per Role",
    "role_labels": "Role Labels",
    "affordable": "Affordable Tuxedos",
    "quality": "Top Rated Women's",
    "clean": "Clean Accessories",
    "rated": "Rated Products",
    "buyers_sellers": "Buyers and Sellers",
    "power_users": "Power Users",
    "product_owners": "Active Product Owners",
    "unrented": "Never Rented",
    "rental_pairs": "Rental Pairs",
    "maintenance": "Maintenance",
    "users_renter": "Customers",
    "users_owner": "Product Owners",
}


def category_label(category: ProductCategory | str) -> str:
    try:
        return CATEGORY_LABELS[ProductCategory(category)]
    except ValueError:
        return str(category)


def report_title(key: str) -> str:
    return REPORT_TITLES.get(key, key.replace("_", " ").title())
