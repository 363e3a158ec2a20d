from __future__ import annotations

import pytest

pytest.importorskip("PySide6")

from PySide6 import QtCore  # noqa: E402

from rental_marketplace.analytics.presentation import build_table, columns  # noqa: E402
from rental_marketplace.ui.strings import category_label, report_title  # noqa: E402
from rental_marketplace.ui.table_model import RowTableModel  # noqa: E402
from rental_marketplace.utils.theme import (  # noqa: E402
    ThemeSettings,
    load_theme_settings,
    resolve_theme_choice,
    save_theme_settings,
)


def make_table():
    return build_table(
        "Spenders",
        columns(("name", "Name"), ("rentals", "Rentals")),
        [{"name": "Bob", "rentals": 2}, {"name": None, "rentals": 1}],
    )


def test_table_model_shape_and_cells():
    model = RowTableModel(make_table())
    assert model.rowCount() == 2
    assert model.columnCount() == 2
    assert model.data(model.index(0, 0)) == "Bob"
    assert model.data(model.index(1, 0)) == ""
    assert model.headerData(1, QtCore.Qt.Horizontal) == "Rentals"
    assert model.headerData(0, QtCore.Qt.Vertical) == "1"


def test_table_model_aligns_numbers_right():
    model = RowTableModel(make_table())
    alignment = model.data(model.index(0, 1), QtCore.Qt.TextAlignmentRole)
    assert alignment == int(QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter)
    assert model.data(model.index(0, 0), QtCore.Qt.TextAlignmentRole) is None


def test_table_model_without_table_is_empty():
    model = RowTableModel()
    assert model.rowCount() == 0
    model.set_table(make_table())
    assert model.rowCount() == 2


def test_theme_settings_round_trip(tmp_path):
    path = tmp_path / "config.json"
    assert load_theme_settings(path).theme == "system"
    save_theme_settings(path, ThemeSettings(theme="dark"))
    assert load_theme_settings(path).theme == "dark"
    assert resolve_theme_choice("light") == "light"


def test_ui_labels():
    assert category_label("mens") == "Men's"
    assert category_label("kids") == "kids"
    assert report_title("power_users") == "Power Users"
    assert report_title("users_owner") == "Product Owners"
    assert report_title("users_admin") == "Users Admin"


def test_run_report_dispatches_report_variants(seeded):
    from rental_marketplace.services.report_service import ReportService
    from rental_marketplace.ui.screens.reports_screen import run_report

    service = ReportService(seeded)
    assert run_report(service, "subcategories", "mens").key == "subcategories"
    by_category = run_report(service, "avg_rental_duration_category")
    assert by_category.table.labels[0] == "Category"
    assert run_report(service, "users_renter").key == "users_renter"
    assert run_report(service, "unrented").key == "unrented"
