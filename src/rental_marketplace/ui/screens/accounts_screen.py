"""Screen for registering users and listing products."""

from __future__ import annotations

import sqlite3

from PySide6 import QtWidgets

from rental_marketplace.domain.models import ProductCategory, UserRole
from rental_marketplace.domain.roles import capabilities_for, role_label
from rental_marketplace.logging_config import get_logger
from rental_marketplace.services.errors import NotFoundError, ValidationError
from rental_marketplace.ui.app_services import AppServices
from rental_marketplace.ui.screens.base_screen import BaseScreen
from rental_marketplace.ui.strings import (
    LABEL_NO_USER,
    TITLE_SUCCESS,
    TITLE_WARNING,
    category_label,
)


class AccountsScreen(BaseScreen):
    """Registration form plus the owner's product listing form."""

    def __init__(self, services: AppServices) -> None:
        super().__init__(services)
        self._logger = get_logger(self.__class__.__name__)
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        self._header(layout, "Accounts", "Register users and list products for rent.")

        register_group = QtWidgets.QGroupBox("Register")
        register_form = QtWidgets.QFormLayout(register_group)
        self.name_input = QtWidgets.QLineEdit()
        self.email_input = QtWidgets.QLineEdit()
        self.phone_input = QtWidgets.QLineEdit()
        self.role_combo = QtWidgets.QComboBox()
        for role in (UserRole.RENTER, UserRole.OWNER, UserRole.BOTH):
            self.role_combo.addItem(role_label(role), role)
        register_button = QtWidgets.QPushButton("Register")
        register_button.clicked.connect(self._on_register)
        register_form.addRow("Name:", self.name_input)
        register_form.addRow("Email:", self.email_input)
        register_form.addRow("Phone:", self.phone_input)
        register_form.addRow("I want to:", self.role_combo)
        register_form.addRow("", register_button)
        layout.addWidget(register_group)

        self.listing_group = QtWidgets.QGroupBox("List a product")
        listing_form = QtWidgets.QFormLayout(self.listing_group)
        self.product_name_input = QtWidgets.QLineEdit()
        self.category_combo = QtWidgets.QComboBox()
        for category in ProductCategory:
            self.category_combo.addItem(category_label(category), category)
        self.sub_category_input = QtWidgets.QLineEdit()
        self.sub_category_input.setPlaceholderText("e.g. tuxedo, dress, handbag")
        self.price_input = QtWidgets.QDoubleSpinBox()
        self.price_input.setRange(0.0, 1_000_000.0)
        self.price_input.setDecimals(2)
        self.price_input.setPrefix("$ ")
        self.quantity_input = QtWidgets.QSpinBox()
        self.quantity_input.setRange(0, 10_000)
        self.quantity_input.setValue(1)
        list_button = QtWidgets.QPushButton("List product")
        list_button.clicked.connect(self._on_list_product)
        listing_form.addRow("Name:", self.product_name_input)
        listing_form.addRow("Category:", self.category_combo)
        listing_form.addRow("Type:", self.sub_category_input)
        listing_form.addRow("Price / day:", self.price_input)
        listing_form.addRow("Quantity:", self.quantity_input)
        listing_form.addRow("", list_button)
        layout.addWidget(self.listing_group)

        self.listing_hint = QtWidgets.QLabel()
        self.listing_hint.setWordWrap(True)
        layout.addWidget(self.listing_hint)
        layout.addStretch()

    def refresh(self) -> None:
        user = self._services.session.user
        can_list = user is not None and capabilities_for(user.role).can_list
        self.listing_group.setEnabled(can_list)
        if user is None:
            self.listing_hint.setText(LABEL_NO_USER)
        elif not can_list:
            self.listing_hint.setText(f"{role_label(user.role)} accounts cannot list products.")
        else:
            self.listing_hint.setText(f"Listing as {user.name}.")

    def _on_register(self) -> None:
        try:
            user = self._services.account_service.register(
                self.name_input.text(),
                self.email_input.text(),
                self.phone_input.text(),
                self.role_combo.currentData(),
            )
        except ValidationError as exc:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, str(exc))
            return
        except sqlite3.Error:
            self._logger.exception("Registration failed.")
            self._show_error("Could not register the account.")
            return
        for widget in (self.name_input, self.email_input, self.phone_input):
            widget.clear()
        QtWidgets.QMessageBox.information(self, TITLE_SUCCESS, f"Welcome, {user.name}!")
        self._services.data_bus.data_changed.emit()

    def _on_list_product(self) -> None:
        user = self._services.session.user
        if user is None:
            return
        try:
            product = self._services.account_service.list_product(
                user.id or 0,
                self.product_name_input.text(),
                self.category_combo.currentData(),
                self.sub_category_input.text(),
                self.price_input.value(),
                self.quantity_input.value(),
            )
        except (ValidationError, NotFoundError) as exc:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, str(exc))
            return
        except sqlite3.Error:
            self._logger.exception("Product listing failed.")
            self._show_error("Could not list the product.")
            return
        self.product_name_input.clear()
        self.sub_category_input.clear()
        QtWidgets.QMessageBox.information(self, TITLE_SUCCESS, f"{product.name} is now listed.")
        self._services.data_bus.data_changed.emit()
