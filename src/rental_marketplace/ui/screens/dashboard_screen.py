"""Role-aware dashboard for the selected user."""

from __future__ import annotations

import sqlite3

from PySide6 import QtWidgets

from rental_marketplace.analytics.presentation import ReportResult
from rental_marketplace.domain.models import RentalStatus
from rental_marketplace.domain.roles import role_label
from rental_marketplace.logging_config import get_logger
from rental_marketplace.services.errors import NotFoundError, ValidationError
from rental_marketplace.ui.app_services import AppServices
from rental_marketplace.ui.screens.base_screen import BaseScreen
from rental_marketplace.ui.strings import LABEL_NO_DATA, LABEL_NO_USER, TITLE_WARNING
from rental_marketplace.ui.table_model import RowTableModel
from rental_marketplace.ui.widgets import MetricsRow

PANEL_TITLES = {
    "my_rentals": "My Rentals",
    "my_products": "My Products",
    "my_maintenance": "Pending Maintenance",
    "role_counts": "Users per Role",
    "maintenance": "All Maintenance",
}


class DashboardScreen(BaseScreen):
    """Dashboard whose panels follow the selected user's capabilities."""

    def __init__(self, services: AppServices) -> None:
        super().__init__(services)
        self._logger = get_logger(self.__class__.__name__)
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        self._header(layout, "Dashboard", "Your rentals, listings and pending work.")

        self.user_label = QtWidgets.QLabel(LABEL_NO_USER)
        self.user_label.setStyleSheet("font-size: 15px;")
        layout.addWidget(self.user_label)

        self.metrics_row = MetricsRow(self._services.theme_manager)
        layout.addWidget(self.metrics_row)

        self.tabs = QtWidgets.QTabWidget()
        layout.addWidget(self.tabs, 1)

        rental_actions = QtWidgets.QHBoxLayout()
        self.open_rentals_combo = QtWidgets.QComboBox()
        self.return_button = QtWidgets.QPushButton("Return")
        self.cancel_button = QtWidgets.QPushButton("Cancel rental")
        self.return_button.clicked.connect(lambda: self._close_rental(cancel=False))
        self.cancel_button.clicked.connect(lambda: self._close_rental(cancel=True))
        rental_actions.addWidget(QtWidgets.QLabel("Open rentals:"))
        rental_actions.addWidget(self.open_rentals_combo, 1)
        rental_actions.addWidget(self.return_button)
        rental_actions.addWidget(self.cancel_button)
        self.rental_actions = QtWidgets.QWidget()
        self.rental_actions.setLayout(rental_actions)
        layout.addWidget(self.rental_actions)

    def refresh(self) -> None:
        self.tabs.clear()
        user = self._services.session.user
        if user is None:
            self.user_label.setText(LABEL_NO_USER)
            self.metrics_row.set_metrics(())
            self.rental_actions.setVisible(False)
            return
        self.user_label.setText(f"{user.name} - {role_label(user.role)}")
        summary = self._services.dashboard_service.summary(user)
        self.metrics_row.set_metrics(summary.metrics)
        for key, panel in summary.panels.items():
            self.tabs.addTab(self._panel_widget(panel), PANEL_TITLES.get(key, key))
        self.rental_actions.setVisible(summary.capabilities.can_rent)
        if summary.capabilities.can_rent:
            self._load_open_rentals(user.id or 0)

    def _panel_widget(self, panel: ReportResult) -> QtWidgets.QWidget:
        if not panel.ok:
            label = QtWidgets.QLabel(panel.error_message)
            label.setWordWrap(True)
            return label
        if panel.table is None or panel.table.is_empty():
            return QtWidgets.QLabel(LABEL_NO_DATA)
        view = QtWidgets.QTableView()
        view.setModel(RowTableModel(panel.table, view))
        view.verticalHeader().setVisible(False)
        view.horizontalHeader().setSectionResizeMode(QtWidgets.QHeaderView.Stretch)
        return view

    def _load_open_rentals(self, renter_id: int) -> None:
        self.open_rentals_combo.clear()
        for rental in self._services.rental_service.list_for_renter(renter_id):
            if rental.status not in (RentalStatus.ACTIVE, RentalStatus.PENDING):
                continue
            label = f"#{rental.id} {rental.rental_start} to {rental.rental_end}"
            self.open_rentals_combo.addItem(label, rental.id)
        has_open = self.open_rentals_combo.count() > 0
        self.return_button.setEnabled(has_open)
        self.cancel_button.setEnabled(has_open)

    def _close_rental(self, *, cancel: bool) -> None:
        rental_id = self.open_rentals_combo.currentData()
        if rental_id is None:
            return
        service = self._services.rental_service
        try:
            if cancel:
                service.cancel_rental(rental_id)
            else:
                service.complete_rental(rental_id)
        except (ValidationError, NotFoundError) as exc:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, str(exc))
            return
        except sqlite3.Error:
            self._logger.exception("Could not update rental %s.", rental_id)
            self._show_error("Could not update the rental.")
            return
        self._services.data_bus.data_changed.emit()
