"""Theme utilities for RentalMarketplace."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from PySide6 import QtCore, QtGui, QtWidgets

from rental_marketplace.logging_config import get_logger
from rental_marketplace.utils.config_store import load_config_data, update_config_data

ThemeChoice = Literal["light", "dark", "system"]
THEME_CHOICES = ("light", "dark", "system")


@dataclass(frozen=True)
class ThemeSettings:
    """Persisted theme settings."""

    theme: ThemeChoice = "system"


class ThemeManager(QtCore.QObject):
    """Central theme manager with change notifications."""

    theme_changed = QtCore.Signal(str)

    def __init__(self, app: QtWidgets.QApplication, config_path: Path) -> None:
        super().__init__()
        self._app = app
        self._config_path = config_path
        self._logger = get_logger(self.__class__.__name__)
        self._settings = load_theme_settings(config_path)
        self._resolved_theme = resolve_theme_choice(self._settings.theme)
        apply_theme(self._app, self._resolved_theme)

    @property
    def theme_choice(self) -> ThemeChoice:
        return self._settings.theme

    def set_theme(self, choice: str) -> None:
        if choice not in THEME_CHOICES:
            choice = "system"
        self._settings = ThemeSettings(theme=choice)
        try:
            save_theme_settings(self._config_path, self._settings)
        except OSError:
            self._logger.warning("Could not save the theme preference.")
        self._resolved_theme = resolve_theme_choice(choice)
        apply_theme(self._app, self._resolved_theme)
        self._logger.info("Theme applied: %s (configured: %s)", self._resolved_theme, choice)
        self.theme_changed.emit(self._resolved_theme)

    def is_dark(self) -> bool:
        return self._resolved_theme == "dark"


def load_theme_settings(config_path: Path) -> ThemeSettings:
    theme = load_config_data(config_path).get("theme", "system")
    if theme not in THEME_CHOICES:
        theme = "system"
    return ThemeSettings(theme=theme)


def save_theme_settings(config_path: Path, settings: ThemeSettings) -> None:
    update_config_data(config_path, theme=settings.theme)


def _system_prefers_dark() -> bool:
    hints = QtGui.QGuiApplication.styleHints()
    scheme = getattr(hints, "colorScheme", None)
    if scheme is None:
        return False
    return scheme() == QtCore.Qt.ColorScheme.Dark


def resolve_theme_choice(choice: str) -> str:
    """Resolve a theme choice to ``"light"`` or ``"dark"``."""
    if choice in ("light", "dark"):
        return choice
    return "dark" if _system_prefers_dark() else "light"


def apply_theme(app: QtWidgets.QApplication, theme_name: str) -> None:
    app.setStyle("Fusion")
    if theme_name == "dark":
        app.setPalette(_build_dark_palette())
        app.setStyleSheet(_dark_stylesheet())
    else:
        app.setPalette(app.style().standardPalette())
        app.setStyleSheet("")


def _build_dark_palette() -> QtGui.QPalette:
    palette = QtGui.QPalette()
    palette.setColor(QtGui.QPalette.Window, QtGui.QColor(32, 34, 40))
    palette.setColor(QtGui.QPalette.WindowText, QtGui.QColor(240, 240, 240))
    palette.setColor(QtGui.QPalette.Base, QtGui.QColor(24, 26, 31))
    palette.setColor(QtGui.QPalette.AlternateBase, QtGui.QColor(32, 34, 40))
    palette.setColor(QtGui.QPalette.Text, QtGui.QColor(240, 240, 240))
    palette.setColor(QtGui.QPalette.Button, QtGui.QColor(45, 48, 58))
    palette.setColor(QtGui.QPalette.ButtonText, QtGui.QColor(240, 240, 240))
    palette.setColor(QtGui.QPalette.Highlight, QtGui.QColor(45, 108, 223))
    palette.setColor(QtGui.QPalette.HighlightedText, QtGui.QColor(255, 255, 255))
    palette.setColor(QtGui.QPalette.PlaceholderText, QtGui.QColor(143, 152, 170))
    palette.setColor(QtGui.QPalette.Disabled, QtGui.QPalette.Text, QtGui.QColor(143, 152, 170))
    return palette


def _dark_stylesheet() -> str:
    return """
    QHeaderView::section {
        background-color: #2b2f36;
        color: #f1f1f1;
        padding: 6px 8px;
        border: 1px solid #3a3f48;
    }
    QFrame#sidebar {
        background-color: #1f232b;
    }
    QPushButton[nav="true"]:checked {
        background-color: #2d6cdf;
        color: #ffffff;
    }
    QTableView {
        selection-background-color: #2d6cdf;
        gridline-color: #3a3f48;
    }
    """
