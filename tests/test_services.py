from __future__ import annotations

from datetime import date

import pytest

from rental_marketplace.analytics.filters import ProductFilter, SortOption
from rental_marketplace.domain.models import RentalStatus, UserRole
from rental_marketplace.repositories import PaymentRepository, ProductRepo, UserRepo
from rental_marketplace.services.account_service import AccountService
from rental_marketplace.services.catalog_service import CatalogService
from rental_marketplace.services.dashboard_service import DashboardService
from rental_marketplace.services.errors import FetchError, NotFoundError, ValidationError
from rental_marketplace.services.rental_service import RentalService


# Rentals


def test_quote_multiplies_price_days_and_quantity(seeded):
    quote = RentalService(seeded).quote(4, "2023-06-01", "2023-06-04", quantity=2)
    assert quote.days == 3
    assert quote.total_cost == 800.0 * 3 * 2


def test_same_day_rental_is_rejected_and_not_stored(seeded):
    service = RentalService(seeded)
    with pytest.raises(ValidationError):
        service.quote(4, date(2023, 6, 1), date(2023, 6, 1))
    with pytest.raises(ValidationError):
        service.create_rental(1, 4, "2024-03-01", "2024-03-01")
    stored = seeded.execute("SELECT COUNT(*) FROM rentals WHERE rental_start = '2024-03-01'")
    assert stored.fetchone()[0] == 0
    assert ProductRepo(seeded).get_by_id(4).available_quantity == 4


@pytest.mark.parametrize(
    ("start", "end", "quantity"),
    [("2023-06-04", "2023-06-01", 1), ("06/01/2023", "2023-06-04", 1), ("2023-06-01", "2023-06-02", 0)],
)
def test_quote_rejects_bad_input(seeded, start, end, quantity):
    with pytest.raises(ValidationError):
        RentalService(seeded).quote(4, start, end, quantity)


def test_quote_unknown_product(seeded):
    with pytest.raises(NotFoundError):
        RentalService(seeded).quote(99, "2023-06-01", "2023-06-02")


def test_create_rental_takes_stock_and_records_payment(seeded):
    service = RentalService(seeded)
    rental = service.create_rental(1, 4, "2023-06-01", "2023-06-03")
    assert rental.status is RentalStatus.ACTIVE
    assert rental.total_cost == 1600.0
    assert ProductRepo(seeded).get_by_id(4).available_quantity == 3
    payments = PaymentRepository(seeded).list_by_rental(rental.id)
    assert [payment.amount for payment in payments] == [1600.0]


def test_owner_cannot_rent(seeded):
    with pytest.raises(ValidationError):
        RentalService(seeded).create_rental(2, 4, "2023-06-01", "2023-06-03")


def test_cannot_rent_more_than_available(seeded):
    with pytest.raises(ValidationError):
        RentalService(seeded).create_rental(1, 8, "2023-06-01", "2023-06-03", quantity=3)
    assert ProductRepo(seeded).get_by_id(8).available_quantity == 2


def test_complete_rental_returns_stock_once(seeded):
    service = RentalService(seeded)
    rental = service.create_rental(1, 4, "2023-06-01", "2023-06-03")
    service.complete_rental(rental.id)
    assert service.get_rental(rental.id).status is RentalStatus.COMPLETED
    assert ProductRepo(seeded).get_by_id(4).available_quantity == 4
    with pytest.raises(ValidationError):
        service.cancel_rental(rental.id)


def test_close_unknown_rental(seeded):
    with pytest.raises(NotFoundError):
        RentalService(seeded).complete_rental(404)


# Accounts


def test_register_normalizes_email(connection):
    user = AccountService(connection).register(" Ana ", "ANA@Example.com", "", "both")
    assert user.name == "Ana"
    assert user.email == "ana@example.com"
    assert user.phone is None
    assert user.role is UserRole.BOTH


@pytest.mark.parametrize(
    ("name", "email", "role"),
    [("A", "a@example.com", "renter"), ("Ana", "not-an-email", "renter"), ("Ana", "a@example.com", "guest")],
)
def test_register_rejects_invalid_input(connection, name, email, role):
    with pytest.raises(ValidationError):
        AccountService(connection).register(name, email, None, role)


def test_register_rejects_duplicate_email(seeded):
    with pytest.raises(ValidationError):
        AccountService(seeded).register("John Again", "john@example.com", None, "renter")


def test_list_product_requires_listing_role(seeded):
    accounts = AccountService(seeded)
    with pytest.raises(ValidationError):
        accounts.list_product(1, "Kilt", "mens", "kilt", 50.0, 1)
    with pytest.raises(NotFoundError):
        accounts.list_product(99, "Kilt", "mens", "kilt", 50.0, 1)
    product = accounts.list_product(2, "Kilt", "mens", " ", 50.0, 1)
    assert product.owner_id == 2
    assert product.sub_category is None


@pytest.mark.parametrize(
    ("name", "category", "price", "quantity"),
    [("K", "mens", 50.0, 1), ("Kilt", "kids", 50.0, 1), ("Kilt", "mens", 0.0, 1), ("Kilt", "mens", 5.0, -1)],
)
def test_list_product_validation(seeded, name, category, price, quantity):
    with pytest.raises(ValidationError):
        AccountService(seeded).list_product(2, name, category, None, price, quantity)


# Catalog


def test_catalog_rows_carry_owner_and_rating(seeded):
    rows = {row["product_id"]: row for row in CatalogService(seeded).products_with_details().rows}
    assert rows[1]["owner_name"] == "Jane Smith"
    assert rows[1]["avg_rating"] == 5
    assert rows[10]["avg_rating"] is None


def test_browse_applies_filter(seeded):
    product_filter = ProductFilter(category="accessories", sort=SortOption.PRICE_DESC)
    rows = CatalogService(seeded).browse(product_filter).rows
    assert [row["product_id"] for row in rows] == [3, 6, 9, 10]
    product_filter.rating_range = (4, 5)
    assert [row["product_id"] for row in CatalogService(seeded).browse(product_filter).rows] == [3, 6]


def test_browse_propagates_fetch_error(seeded):
    seeded.execute("DROP TABLE reviews")
    result = CatalogService(seeded).browse()
    assert not result.ok
    assert isinstance(result.error, FetchError)


def test_categories_index(seeded):
    index = CatalogService(seeded).categories()
    assert index.categories == ("accessories", "mens", "womens")
    assert "tuxedo" in index.sub_categories


def test_product_detail(seeded):
    detail = CatalogService(seeded).product_detail(1)
    assert detail.avg_rating == 5
    assert [review["user_name"] for review in detail.reviews] == ["Bob Williams", "John Doe"]
    assert CatalogService(seeded).product_detail(10).reviews == []
    with pytest.raises(NotFoundError):
        CatalogService(seeded).product_detail(404)


# Dashboard


def summary_for(connection, user_id, today=date(2023, 3, 20)):
    user = UserRepo(connection).get_by_id(user_id)
    return DashboardService(connection).summary(user, today)


def test_renter_dashboard(seeded):
    summary = summary_for(seeded, 1)
    assert list(summary.panels) == ["my_rentals"]
    metrics = {metric.label: metric.value for metric in summary.metrics}
    assert metrics == {"Total Spent": 4300.0, "Rentals": 2}
    owners = [row["owner_name"] for row in summary.panels["my_rentals"].table.rows]
    assert owners == ["David Miller", "Jane Smith"]


def test_renter_total_spent_skips_malformed_cost(seeded):
    seeded.execute("UPDATE rentals SET total_cost = 'n/a' WHERE rental_id = 1")
    panel = DashboardService(seeded).my_rentals(1)
    metrics = {metric.label: metric.value for metric in panel.metrics}
    assert metrics == {"Total Spent": 1900.0, "Rentals": 2}
    assert panel.skipped == 1


def test_owner_dashboard(seeded):
    summary = summary_for(seeded, 2)
    assert list(summary.panels) == ["my_products", "my_maintenance"]
    metrics = {metric.label: metric.value for metric in summary.metrics}
    assert metrics["Total Revenue"] == 2400.0 + 2200.0 + 4400.0
    assert metrics["Listed Products"] == 3
    pending = summary.panels["my_maintenance"].table.rows
    assert [row["product_name"] for row in pending] == ["Business Suit"]


def test_admin_dashboard_includes_site_panels(seeded):
    summary = summary_for(seeded, 3)
    assert set(summary.panels) == {"my_rentals", "my_products", "my_maintenance", "role_counts", "maintenance"}
    assert summary.capabilities.is_admin


def test_owner_without_products_has_empty_panels(seeded):
    user = AccountService(seeded).register("New Owner", "new@example.com", None, "owner")
    summary = DashboardService(seeded).summary(user)
    assert summary.panels["my_products"].table.is_empty()
    assert summary.panels["my_maintenance"].table.is_empty()
