from __future__ import annotations

from datetime import date

import pytest

from rental_marketplace.domain.models import UserRole
from rental_marketplace.repositories import ProductRepo, UserRepo
from rental_marketplace.services.account_service import AccountService
from rental_marketplace.services.rental_service import RentalService
from rental_marketplace.services.report_service import ReportService


def column(result, key):
    return [row[key] for row in result.table.rows]


def test_every_catalog_report_renders(seeded):
    for key, report in ReportService(seeded).catalog().items():
        result = report()
        assert result.ok, key
        assert result.key == key
        assert result.table is not None


def test_reports_over_empty_store_are_empty_not_errors(connection):
    for key, report in ReportService(connection).catalog().items():
        result = report()
        assert result.ok, key
        assert result.table.is_empty(), key


def test_fetch_error_short_circuits(seeded):
    seeded.execute("DROP TABLE reviews")
    result = ReportService(seeded).rated_products()
    assert not result.ok
    assert result.table is None
    assert result.error_message.startswith("Error loading data")


def test_unrented_products(seeded):
    assert column(ReportService(seeded).unrented_products(), "name") == [
        "Designer Handbag",
        "Luxury Scarf",
    ]


def test_above_category_average(seeded):
    names = set(column(ReportService(seeded).above_category_average_price(), "name"))
    assert names == {"Formal Tuxedo", "Business Suit", "Wedding Dress", "Diamond Necklace", "Designer Watch"}


def test_above_global_average(seeded):
    assert column(ReportService(seeded).above_average_price(), "name") == [
        "Wedding Dress",
        "Diamond Necklace",
        "Designer Watch",
        "Formal Tuxedo",
    ]


def test_malformed_price_is_skipped_by_price_comparisons(seeded):
    seeded.execute("UPDATE products SET rental_price = 'n/a' WHERE product_id = 1")
    service = ReportService(seeded)
    for result in (service.above_average_price(), service.above_category_average_price()):
        assert result.ok
        assert result.skipped == 1
        assert "Formal Tuxedo" not in column(result, "name")


def test_high_spenders_use_global_mean_rental_cost(seeded):
    result = ReportService(seeded).high_spenders()
    assert column(result, "name") == ["Carol Brown", "Bob Williams", "John Doe", "Eva Wilson"]
    assert result.metrics[0].value == pytest.approx(2737.5)


def test_top_renters_counts_rentals(seeded):
    result = ReportService(seeded).top_renters()
    assert column(result, "rental_count") == [2, 2, 2, 2]
    assert column(result, "name")[0] == "John Doe"


def test_top_revenue_products(seeded):
    result = ReportService(seeded).top_revenue_products(limit=2)
    assert column(result, "name") == ["Business Suit", "Designer Watch"]
    assert column(result, "total_revenue") == ["$4,400.00", "$3,900.00"]
    assert result.chart.values == (4400.0, 3900.0)


def test_revenue_per_product_reports_total(seeded):
    result = ReportService(seeded).revenue_per_product()
    assert len(result.table.rows) == 5
    assert result.metrics[0].value == pytest.approx(21900.0)


def test_category_distribution(seeded):
    result = ReportService(seeded).category_distribution()
    counts = dict(zip(column(result, "category"), column(result, "count")))
    assert counts == {"accessories": 4, "mens": 3, "womens": 3}


def test_subcategory_distribution(seeded):
    service = ReportService(seeded)
    assert service.subcategory_distribution(None).table.is_empty()
    result = service.subcategory_distribution("womens")
    assert set(column(result, "sub_category")) == {"bridal", "dress", "gown"}
    assert result.chart.kind == "pie"


def test_average_rental_duration_per_product(seeded):
    result = ReportService(seeded).average_rental_duration()
    durations = dict(zip(column(result, "label"), column(result, "avg_duration_days")))
    assert durations["Formal Tuxedo"] == 2
    assert durations["Designer Watch"] == 3
    assert durations["Business Suit"] == 4


def test_average_rental_duration_per_category(seeded):
    result = ReportService(seeded).average_rental_duration(by="category")
    durations = dict(zip(column(result, "label"), column(result, "avg_duration_days")))
    assert durations["mens"] == pytest.approx(2.7)
    assert durations["womens"] == pytest.approx(1.7)
    assert durations["accessories"] == pytest.approx(2.5)


def test_average_rental_duration_rejects_unknown_grouping(seeded):
    with pytest.raises(ValueError):
        ReportService(seeded).average_rental_duration(by="owner")


def test_reversed_rental_dates_are_skipped(seeded):
    seeded.execute("UPDATE rentals SET rental_end = '2022-12-01' WHERE rental_id = 1")
    result = ReportService(seeded).average_rental_duration()
    assert result.skipped == 1
    assert "Formal Tuxedo" not in column(result, "label")


def test_rentals_of_deleted_products_are_skipped_and_counted(seeded):
    ProductRepo(seeded).delete(1)
    result = ReportService(seeded).top_revenue_products()
    assert result.skipped == 1
    assert "Formal Tuxedo" not in column(result, "name")


def test_rental_pairs_show_unknown_for_deleted_renter(seeded):
    UserRepo(seeded).delete(1)
    rows = ReportService(seeded).rental_pairs().table.rows
    assert rows[0]["renter_name"] == "Unknown"
    assert rows[0]["owner_name"] == "Jane Smith"


def test_rated_products_only_lists_reviewed(seeded):
    result = ReportService(seeded).rated_products()
    assert len(result.table.rows) == 6
    assert "Luxury Scarf" not in column(result, "name")


def test_quality_products(seeded):
    assert column(ReportService(seeded).quality_products(), "name") == ["Cocktail Dress", "Evening Gown"]


def test_affordable_products(seeded):
    service = ReportService(seeded)
    assert service.affordable_products().table.is_empty()
    assert column(service.affordable_products(max_price=1500), "name") == ["Formal Tuxedo"]


def test_clean_products_within_last_month(seeded):
    result = ReportService(seeded).clean_products(today=date(2023, 4, 1))
    assert column(result, "name") == ["Luxury Scarf", "Designer Handbag"]
    assert ReportService(seeded).clean_products(today=date(2024, 1, 1)).table.is_empty()


def test_product_owners(seeded):
    result = ReportService(seeded).product_owners()
    counts = dict(zip(column(result, "owner_name"), column(result, "total_products")))
    assert counts == {"Jane Smith": 3, "Alice Johnson": 4, "David Miller": 3}
    assert column(ReportService(seeded).product_owners(more_than=3), "owner_name") == ["Alice Johnson"]


def test_sellers_and_admins(seeded):
    result = ReportService(seeded).sellers_and_admins()
    assert set(column(result, "role")) == {"owner", "admin"}
    assert len(result.table.rows) == 4


def test_role_counts(seeded):
    result = ReportService(seeded).role_counts()
    counts = dict(zip(column(result, "role_label"), column(result, "count")))
    assert counts == {"Customer": 4, "Product Owner": 3, "Administrator": 1}


def test_buyers_and_sellers_and_power_users(seeded):
    service = ReportService(seeded)
    assert service.buyers_and_sellers().table.is_empty()
    assert service.power_users().table.is_empty()

    accounts = AccountService(seeded)
    user = accounts.register("Sam Both", "sam@example.com", None, UserRole.BOTH)
    for index in range(3):
        accounts.list_product(user.id, f"Listing {index}", "mens", "suit", 100.0, 1)
    RentalService(seeded).create_rental(user.id, 7, "2023-05-01", "2023-05-02")

    assert column(service.buyers_and_sellers(), "name") == ["Sam Both"]
    result = service.power_users()
    assert column(result, "name") == ["Sam Both"]
    assert column(result, "total_products_listed") == [3]
    assert column(result, "total_spent_on_rentals") == ["$1,100.00"]


def test_users_directory(seeded):
    result = ReportService(seeded).users_directory(UserRole.OWNER)
    assert result.key == "users_owner"
    assert column(result, "total_products") == [4, 3, 3]


def test_maintenance_overview(seeded):
    result = ReportService(seeded).maintenance_overview(today=date(2023, 4, 6))
    metrics = {metric.label: metric.value for metric in result.metrics}
    assert metrics["Total Products"] == 10
    assert metrics["Maintenance Due"] == 8
    assert len(ReportService(seeded).maintenance_overview([1, 2]).table.rows) == 2
