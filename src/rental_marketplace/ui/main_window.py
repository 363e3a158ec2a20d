"""Main window for the RentalMarketplace application."""

from __future__ import annotations

import sqlite3
from typing import Optional

from PySide6 import QtCore, QtGui, QtWidgets

from rental_marketplace.domain.roles import role_label
from rental_marketplace.logging_config import get_logger
from rental_marketplace.paths import get_config_path
from rental_marketplace.ui.app_services import AppServices
from rental_marketplace.ui.screens import (
    AccountsScreen,
    CatalogScreen,
    DashboardScreen,
    ReportsScreen,
)
from rental_marketplace.ui.strings import APP_NAME
from rental_marketplace.utils.config_store import load_config_data, update_config_data
from rental_marketplace.version import __version__

LAST_USER_KEY = "last_user_id"


class MainWindow(QtWidgets.QMainWindow):
    """Primary window with navigation, user selection and stacked screens."""

    def __init__(self, services: AppServices) -> None:
        super().__init__()
        self._services = services
        self._logger = get_logger(self.__class__.__name__)
        self._stack = QtWidgets.QStackedWidget()
        self._theme_manager = services.theme_manager
        self.setWindowTitle(f"{APP_NAME} - v{__version__}")
        self.resize(1180, 720)
        self._build_ui()
        self._services.data_bus.data_changed.connect(self._load_users)
        self._load_users()

    def _build_ui(self) -> None:
        central = QtWidgets.QWidget(self)
        main_layout = QtWidgets.QHBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)

        sidebar = QtWidgets.QFrame()
        sidebar.setObjectName("sidebar")
        sidebar.setFixedWidth(240)
        sidebar_layout = QtWidgets.QVBoxLayout(sidebar)
        sidebar_layout.setContentsMargins(16, 16, 16, 16)
        sidebar_layout.setSpacing(12)

        title = QtWidgets.QLabel(APP_NAME)
        title.setStyleSheet("font-size: 18px; font-weight: 600;")
        title.setAlignment(QtCore.Qt.AlignLeft)
        sidebar_layout.addWidget(title)

        sidebar_layout.addWidget(QtWidgets.QLabel("Acting as:"))
        self.user_combo = QtWidgets.QComboBox()
        self.user_combo.currentIndexChanged.connect(self._on_user_selected)
        sidebar_layout.addWidget(self.user_combo)

        button_group = QtWidgets.QButtonGroup(self)
        button_group.setExclusive(True)

        screens = [
            ("Dashboard", DashboardScreen(self._services)),
            ("Catalog", CatalogScreen(self._services)),
            ("Reports", ReportsScreen(self._services)),
            ("Accounts", AccountsScreen(self._services)),
        ]

        for index, (label, screen) in enumerate(screens):
            button = QtWidgets.QPushButton(label)
            button.setCheckable(True)
            button.setProperty("nav", True)
            button.setMinimumHeight(52)
            button.clicked.connect(lambda _checked, idx=index: self._stack.setCurrentIndex(idx))
            button_group.addButton(button)
            sidebar_layout.addWidget(button)
            self._stack.addWidget(screen)

        sidebar_layout.addStretch()

        main_layout.addWidget(sidebar)
        main_layout.addWidget(self._stack)

        self.setCentralWidget(central)
        self._apply_styles()
        self._build_menu()
        button_group.buttons()[0].setChecked(True)
        self._stack.setCurrentIndex(0)
        self._stack.currentChanged.connect(self._on_screen_changed)

    def _load_users(self) -> None:
        try:
            users = self._services.user_repo.list_all()
        except sqlite3.Error:
            QtWidgets.QMessageBox.critical(self, "Error", "Could not load users.")
            return
        current = self._services.session.user
        selected_id: Optional[int] = current.id if current else None
        if selected_id is None:
            selected_id = load_config_data(get_config_path()).get(LAST_USER_KEY)
        self.user_combo.blockSignals(True)
        self.user_combo.clear()
        self.user_combo.addItem("(nobody)", None)
        for user in users:
            self.user_combo.addItem(f"{user.name} ({role_label(user.role)})", user)
            if user.id == selected_id:
                self.user_combo.setCurrentIndex(self.user_combo.count() - 1)
        self.user_combo.blockSignals(False)
        self._on_user_selected(self.user_combo.currentIndex())

    def _on_user_selected(self, _index: int) -> None:
        user = self.user_combo.currentData()
        if user == self._services.session.user:
            return
        self._services.set_current_user(user)
        try:
            update_config_data(get_config_path(), **{LAST_USER_KEY: user.id if user else None})
        except OSError:
            self._logger.warning("Could not save the selected user.")

    def _on_screen_changed(self, index: int) -> None:
        screen = self._stack.widget(index)
        refresh = getattr(screen, "refresh", None)
        if callable(refresh):
            refresh()

    def _apply_styles(self) -> None:
        self.setStyleSheet(
            """
            QPushButton[nav="true"] {
                font-size: 16px;
                padding: 12px;
                text-align: left;
                border-radius: 8px;
            }
            """
        )

    def _build_menu(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("File")
        exit_action = file_menu.addAction("Quit")
        exit_action.triggered.connect(self.close)

        view_menu = menu_bar.addMenu("View")
        theme_menu = view_menu.addMenu("Theme")
        theme_group = QtGui.QActionGroup(self)
        theme_group.setExclusive(True)
        theme_actions = {
            "light": theme_menu.addAction("Light"),
            "dark": theme_menu.addAction("Dark"),
            "system": theme_menu.addAction("System"),
        }
        for key, action in theme_actions.items():
            action.setCheckable(True)
            action.setData(key)
            theme_group.addAction(action)
        theme_actions.get(self._theme_manager.theme_choice, theme_actions["system"]).setChecked(True)
        theme_group.triggered.connect(self._on_theme_selected)

        help_menu = menu_bar.addMenu("Help")
        about_action = help_menu.addAction("About")
        about_action.triggered.connect(self._show_about)

    def _on_theme_selected(self, action: QtGui.QAction) -> None:
        self._theme_manager.set_theme(action.data())

    def _show_about(self) -> None:
        message = QtWidgets.QMessageBox(self)
        message.setWindowTitle("About")
        message.setIcon(QtWidgets.QMessageBox.Information)
        message.setText(f"{APP_NAME}\nVersion {__version__}")
        message.setStandardButtons(QtWidgets.QMessageBox.Ok)
        message.exec()
