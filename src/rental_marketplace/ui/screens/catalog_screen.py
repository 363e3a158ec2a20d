"""Screen for browsing and renting catalog products."""

from __future__ import annotations

import sqlite3
from typing import Any, Optional

from PySide6 import QtCore, QtWidgets

from rental_marketplace.analytics.filters import ALL_CATEGORIES, ProductFilter, SortOption
from rental_marketplace.analytics.presentation import (
    build_table,
    columns,
    format_money,
    format_rating,
)
from rental_marketplace.config import (
    CATALOG_PRICE_MAX,
    CATALOG_PRICE_MIN,
    CATALOG_RATING_MAX,
    CATALOG_RATING_MIN,
)
from rental_marketplace.domain.roles import capabilities_for
from rental_marketplace.logging_config import get_logger
from rental_marketplace.services.catalog_service import ProductDetail
from rental_marketplace.services.errors import FetchError, NotFoundError, ValidationError
from rental_marketplace.services.rental_service import RentalService
from rental_marketplace.ui.app_services import AppServices
from rental_marketplace.ui.screens.base_screen import BaseScreen
from rental_marketplace.ui.strings import (
    LABEL_ALL_CATEGORIES,
    TERM_PRODUCT,
    TITLE_SUCCESS,
    TITLE_WARNING,
    category_label,
)
from rental_marketplace.ui.table_model import RowTableModel

CATALOG_COLUMNS = columns(
    ("name", TERM_PRODUCT),
    ("category", "Category"),
    ("sub_category", "Type"),
    ("owner_name", "Owner"),
    ("rental_price", "Price / day"),
    ("avg_rating", "Rating"),
    ("available_quantity", "Available"),
)

SORT_LABELS = {
    SortOption.PRICE_ASC: "Price: low to high",
    SortOption.PRICE_DESC: "Price: high to low",
    SortOption.RATING_DESC: "Best rated",
}

REVIEW_COLUMNS = columns(
    ("user_name", "Customer"),
    ("rating", "Rating"),
    ("comment", "Comment"),
    ("review_date", "Date"),
)


class RentalDialog(QtWidgets.QDialog):
    """Dialog that quotes and confirms a rental."""

    def __init__(
        self,
        rental_service: RentalService,
        product: dict[str, Any],
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._rental_service = rental_service
        self._product = product
        self.setWindowTitle(f"Rent {product.get('name')}")
        self.setModal(True)
        self._build_ui()
        self._update_quote()

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        form = QtWidgets.QFormLayout()

        today = QtCore.QDate.currentDate()
        self.start_input = QtWidgets.QDateEdit(today)
        self.start_input.setCalendarPopup(True)
        self.start_input.setDisplayFormat("yyyy-MM-dd")
        self.end_input = QtWidgets.QDateEdit(today.addDays(1))
        self.end_input.setCalendarPopup(True)
        self.end_input.setDisplayFormat("yyyy-MM-dd")
        self.quantity_input = QtWidgets.QSpinBox()
        self.quantity_input.setRange(1, max(1, int(self._product.get("available_quantity") or 1)))
        self.total_label = QtWidgets.QLabel()

        for widget in (self.start_input, self.end_input):
            widget.dateChanged.connect(self._update_quote)
        self.quantity_input.valueChanged.connect(self._update_quote)

        form.addRow("Start date:", self.start_input)
        form.addRow("End date:", self.end_input)
        form.addRow("Quantity:", self.quantity_input)
        form.addRow("Total:", self.total_label)
        layout.addLayout(form)

        self.button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel
        )
        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)
        layout.addWidget(self.button_box)

    def get_data(self) -> dict[str, Any]:
        return {
            "start_date": self.start_input.date().toPython(),
            "end_date": self.end_input.date().toPython(),
            "quantity": self.quantity_input.value(),
        }

    def _update_quote(self) -> None:
        data = self.get_data()
        ok_button = self.button_box.button(QtWidgets.QDialogButtonBox.Ok)
        try:
            quote = self._rental_service.quote(
                self._product["product_id"],
                data["start_date"],
                data["end_date"],
                data["quantity"],
            )
        except (ValidationError, NotFoundError) as exc:
            self.total_label.setText(str(exc))
            ok_button.setEnabled(False)
            return
        self.total_label.setText(f"${quote.total_cost:,.2f} ({quote.days} days)")
        ok_button.setEnabled(True)


class ProductDetailDialog(QtWidgets.QDialog):
    """Read-only view of a product and its reviews."""

    def __init__(self, detail: ProductDetail, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        product = detail.product
        self.setWindowTitle(str(product.get("name")))
        self.resize(560, 380)
        layout = QtWidgets.QVBoxLayout(self)

        form = QtWidgets.QFormLayout()
        form.addRow("Category:", QtWidgets.QLabel(category_label(product.get("category") or "")))
        form.addRow("Type:", QtWidgets.QLabel(product.get("sub_category") or "-"))
        form.addRow("Owner:", QtWidgets.QLabel(product.get("owner_name")))
        form.addRow("Price / day:", QtWidgets.QLabel(format_money(product.get("rental_price"))))
        form.addRow("Rating:", QtWidgets.QLabel(format_rating(detail.avg_rating)))
        layout.addLayout(form)

        if detail.reviews:
            view = QtWidgets.QTableView()
            view.setModel(RowTableModel(build_table("Reviews", REVIEW_COLUMNS, detail.reviews), view))
            view.verticalHeader().setVisible(False)
            view.horizontalHeader().setSectionResizeMode(QtWidgets.QHeaderView.Stretch)
            layout.addWidget(view)
        else:
            layout.addWidget(QtWidgets.QLabel("No reviews yet."))

        buttons = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)


class CatalogScreen(BaseScreen):
    """Screen for the product catalog."""

    def __init__(self, services: AppServices) -> None:
        super().__init__(services)
        self._logger = get_logger(self.__class__.__name__)
        self._filter = ProductFilter()
        self._rows: list[dict[str, Any]] = []
        self._sub_category_boxes: dict[str, QtWidgets.QCheckBox] = {}
        self._search_timer = QtCore.QTimer(self)
        self._search_timer.setSingleShot(True)
        self._search_timer.setInterval(250)
        self._search_timer.timeout.connect(self.refresh)
        self._model = RowTableModel()
        self._build_ui()
        self._load_categories()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        self._header(layout, "Catalog", "Browse products, filter by category, price and rating.")

        filters = QtWidgets.QGroupBox("Filters")
        filter_layout = QtWidgets.QGridLayout(filters)

        self.search_input = QtWidgets.QLineEdit()
        self.search_input.setPlaceholderText("Search by product name")
        self.search_input.textChanged.connect(lambda _text: self._search_timer.start())

        self.category_combo = QtWidgets.QComboBox()
        self.category_combo.currentIndexChanged.connect(self._on_filters_changed)

        self.sort_combo = QtWidgets.QComboBox()
        for option, label in SORT_LABELS.items():
            self.sort_combo.addItem(label, option)
        self.sort_combo.currentIndexChanged.connect(self._on_filters_changed)

        self.price_min = self._range_spin(CATALOG_PRICE_MIN, CATALOG_PRICE_MAX, CATALOG_PRICE_MIN, "$ ")
        self.price_max = self._range_spin(CATALOG_PRICE_MIN, CATALOG_PRICE_MAX, CATALOG_PRICE_MAX, "$ ")
        self.rating_min = self._range_spin(CATALOG_RATING_MIN, CATALOG_RATING_MAX, CATALOG_RATING_MIN)
        self.rating_max = self._range_spin(CATALOG_RATING_MIN, CATALOG_RATING_MAX, CATALOG_RATING_MAX)

        self.sub_category_layout = QtWidgets.QHBoxLayout()
        reset_button = QtWidgets.QPushButton("Reset")
        reset_button.clicked.connect(self._on_reset)

        filter_layout.addWidget(QtWidgets.QLabel("Search:"), 0, 0)
        filter_layout.addWidget(self.search_input, 0, 1, 1, 3)
        filter_layout.addWidget(QtWidgets.QLabel("Category:"), 1, 0)
        filter_layout.addWidget(self.category_combo, 1, 1)
        filter_layout.addWidget(QtWidgets.QLabel("Sort:"), 1, 2)
        filter_layout.addWidget(self.sort_combo, 1, 3)
        filter_layout.addWidget(QtWidgets.QLabel("Price:"), 2, 0)
        filter_layout.addWidget(self.price_min, 2, 1)
        filter_layout.addWidget(self.price_max, 2, 2)
        filter_layout.addWidget(QtWidgets.QLabel("Rating:"), 3, 0)
        filter_layout.addWidget(self.rating_min, 3, 1)
        filter_layout.addWidget(self.rating_max, 3, 2)
        filter_layout.addWidget(QtWidgets.QLabel("Types:"), 4, 0)
        filter_layout.addLayout(self.sub_category_layout, 4, 1, 1, 2)
        filter_layout.addWidget(reset_button, 4, 3)
        layout.addWidget(filters)

        self.table = QtWidgets.QTableView()
        self.table.setModel(self._model)
        self.table.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QtWidgets.QAbstractItemView.SingleSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(QtWidgets.QHeaderView.Stretch)
        self.table.doubleClicked.connect(lambda _index: self._on_rent())
        layout.addWidget(self.table)

        button_layout = QtWidgets.QHBoxLayout()
        self.count_label = QtWidgets.QLabel()
        self.details_button = QtWidgets.QPushButton("Details")
        self.details_button.clicked.connect(self._on_details)
        self.rent_button = QtWidgets.QPushButton("Rent")
        self.rent_button.clicked.connect(self._on_rent)
        button_layout.addWidget(self.count_label)
        button_layout.addStretch()
        button_layout.addWidget(self.details_button)
        button_layout.addWidget(self.rent_button)
        layout.addLayout(button_layout)

    def _range_spin(
        self, low: float, high: float, value: float, prefix: str = ""
    ) -> QtWidgets.QDoubleSpinBox:
        spin = QtWidgets.QDoubleSpinBox()
        spin.setRange(low, high)
        spin.setDecimals(1 if high <= CATALOG_RATING_MAX else 0)
        spin.setPrefix(prefix)
        spin.setValue(value)
        spin.valueChanged.connect(self._on_filters_changed)
        return spin

    def _load_categories(self) -> None:
        index = self._services.catalog_service.categories()
        if index.error is not None:
            self._logger.error("Could not load categories: %s", index.error)
        self.category_combo.blockSignals(True)
        self.category_combo.clear()
        self.category_combo.addItem(LABEL_ALL_CATEGORIES, ALL_CATEGORIES)
        for category in index.categories:
            self.category_combo.addItem(category_label(category), category)
        self.category_combo.blockSignals(False)

        for box in self._sub_category_boxes.values():
            box.deleteLater()
        self._sub_category_boxes = {}
        for sub_category in index.sub_categories:
            box = QtWidgets.QCheckBox(sub_category.title())
            box.toggled.connect(
                lambda _checked, value=sub_category: self._on_sub_category_toggled(value)
            )
            self.sub_category_layout.addWidget(box)
            self._sub_category_boxes[sub_category] = box

    def _on_sub_category_toggled(self, sub_category: str) -> None:
        self._filter.toggle_sub_category(sub_category)
        self.refresh()

    def _on_filters_changed(self) -> None:
        self._filter.category = self.category_combo.currentData() or ALL_CATEGORIES
        self._filter.sort = self.sort_combo.currentData() or SortOption.PRICE_ASC
        self._filter.price_range = (self.price_min.value(), self.price_max.value())
        self._filter.rating_range = (self.rating_min.value(), self.rating_max.value())
        self.refresh()

    def _on_reset(self) -> None:
        self._filter.reset()
        widgets = [
            self.search_input,
            self.category_combo,
            self.sort_combo,
            self.price_min,
            self.price_max,
            self.rating_min,
            self.rating_max,
            *self._sub_category_boxes.values(),
        ]
        for widget in widgets:
            widget.blockSignals(True)
        self.search_input.clear()
        self.category_combo.setCurrentIndex(0)
        self.sort_combo.setCurrentIndex(0)
        self.price_min.setValue(CATALOG_PRICE_MIN)
        self.price_max.setValue(CATALOG_PRICE_MAX)
        self.rating_min.setValue(CATALOG_RATING_MIN)
        self.rating_max.setValue(CATALOG_RATING_MAX)
        for box in self._sub_category_boxes.values():
            box.setChecked(False)
        for widget in widgets:
            widget.blockSignals(False)
        self.refresh()

    def refresh(self) -> None:
        self._filter.search = self.search_input.text()
        result = self._services.catalog_service.browse(self._filter)
        if not result.ok:
            self._model.set_table(None)
            self.count_label.setText(f"Error loading data: {result.error}")
            return
        self._rows = result.rows
        self._model.set_table(build_table("Catalog", CATALOG_COLUMNS, result.rows))
        self.count_label.setText(f"{len(result.rows)} products")
        self._update_actions()

    def _update_actions(self) -> None:
        user = self._services.session.user
        self.rent_button.setEnabled(
            user is not None and capabilities_for(user.role).can_rent
        )

    def _selected_product(self) -> Optional[dict[str, Any]]:
        selection = self.table.selectionModel().selectedRows()
        if not selection:
            return None
        return self._rows[selection[0].row()]

    def _on_details(self) -> None:
        product = self._selected_product()
        if product is None:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, "Select a product first.")
            return
        try:
            detail = self._services.catalog_service.product_detail(product["product_id"])
        except NotFoundError as exc:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, str(exc))
            self.refresh()
            return
        except FetchError as exc:
            self._show_error(f"Error loading data: {exc}")
            return
        ProductDetailDialog(detail, self).exec()

    def _on_rent(self) -> None:
        user = self._services.session.user
        product = self._selected_product()
        if user is None or product is None:
            QtWidgets.QMessageBox.warning(
                self, TITLE_WARNING, "Select a user and a product first."
            )
            return
        dialog = RentalDialog(self._services.rental_service, product, self)
        if dialog.exec() != QtWidgets.QDialog.Accepted:
            return
        data = dialog.get_data()
        try:
            rental = self._services.rental_service.create_rental(
                user.id or 0,
                product["product_id"],
                data["start_date"],
                data["end_date"],
                data["quantity"],
            )
        except (ValidationError, NotFoundError) as exc:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, str(exc))
            return
        except sqlite3.Error:
            self._logger.exception("Rental creation failed.")
            self._show_error("Could not create the rental.")
            return
        QtWidgets.QMessageBox.information(
            self,
            TITLE_SUCCESS,
            f"Rental confirmed. Total: ${rental.total_cost:,.2f}",
        )
        self._services.data_bus.data_changed.emit()
