"""Base class for screens that can refresh their data."""

from __future__ import annotations

from PySide6 import QtGui, QtWidgets

from rental_marketplace.ui.app_services import AppServices
from rental_marketplace.ui.strings import TITLE_ERROR


class BaseScreen(QtWidgets.QWidget):
    """Base screen with refresh hooks and data change handling."""

    def __init__(self, services: AppServices) -> None:
        super().__init__()
        self._services = services
        self._needs_refresh = False
        self._services.data_bus.data_changed.connect(self._on_data_changed)
        self._services.data_bus.user_changed.connect(self._on_user_changed)

    def refresh(self) -> None:
        """Reload data for this screen."""

    def _on_data_changed(self) -> None:
        if self.isVisible():
            self.refresh()
        else:
            self._needs_refresh = True

    def _on_user_changed(self, _user: object) -> None:
        self._on_data_changed()

    def showEvent(self, event: QtGui.QShowEvent) -> None:
        super().showEvent(event)
        if self._needs_refresh:
            self._needs_refresh = False
            self.refresh()

    def _header(self, layout: QtWidgets.QVBoxLayout, title: str, subtitle: str) -> None:
        title_label = QtWidgets.QLabel(title)
        title_label.setStyleSheet("font-size: 24px; font-weight: 600;")
        subtitle_label = QtWidgets.QLabel(subtitle)
        subtitle_label.setWordWrap(True)
        layout.addWidget(title_label)
        layout.addWidget(subtitle_label)

    def _show_error(self, message: str) -> None:
        QtWidgets.QMessageBox.critical(self, TITLE_ERROR, message)
