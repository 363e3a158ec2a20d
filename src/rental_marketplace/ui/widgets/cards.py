"""Card widgets with theme-aware styling."""

from __future__ import annotations

from PySide6 import QtWidgets

from rental_marketplace.analytics.presentation import Metric, format_money
from rental_marketplace.utils.theme import ThemeManager

MONEY_METRICS = frozenset({"Total Spent", "Total Revenue"})

_LIGHT_CARD = """
QFrame#KpiCard {
    background: #ffffff;
    border: 1px solid rgba(0, 0, 0, 0.10);
    border-radius: 12px;
}
QLabel#KpiTitle { color: rgba(0, 0, 0, 0.70); font-weight: 600; font-size: 13px; }
QLabel#KpiValue { color: rgba(0, 0, 0, 0.92); font-size: 22px; font-weight: 700; }
QLabel#KpiHint { color: rgba(0, 0, 0, 0.55); font-size: 11px; }
"""

_DARK_CARD = """
QFrame#KpiCard {
    background: #2b2f36;
    border: 1px solid #3a3f48;
    border-radius: 12px;
}
QLabel#KpiTitle { color: rgba(255, 255, 255, 0.82); font-weight: 600; font-size: 13px; }
QLabel#KpiValue { color: #ffffff; font-size: 22px; font-weight: 700; }
QLabel#KpiHint { color: rgba(255, 255, 255, 0.60); font-size: 11px; }
"""


def metric_text(metric: Metric) -> str:
    if metric.label in MONEY_METRICS:
        return format_money(metric.value)
    if isinstance(metric.value, float):
        return f"{metric.value:,.2f}"
    return str(metric.value)


class KpiCard(QtWidgets.QFrame):
    """Summary card showing one metric."""

    def __init__(
        self,
        theme_manager: ThemeManager,
        metric: Metric,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._theme_manager = theme_manager
        self.setObjectName("KpiCard")

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(6)

        self._title_label = QtWidgets.QLabel(metric.label)
        self._title_label.setObjectName("KpiTitle")
        self._value_label = QtWidgets.QLabel(metric_text(metric))
        self._value_label.setObjectName("KpiValue")
        self._hint_label = QtWidgets.QLabel(metric.description)
        self._hint_label.setObjectName("KpiHint")
        self._hint_label.setWordWrap(True)
        self._hint_label.setVisible(bool(metric.description))

        layout.addWidget(self._title_label)
        layout.addWidget(self._value_label)
        layout.addWidget(self._hint_label)

        self._theme_manager.theme_changed.connect(self.apply_theme)
        self.apply_theme()

    def apply_theme(self) -> None:
        self.setStyleSheet(_DARK_CARD if self._theme_manager.is_dark() else _LIGHT_CARD)


class MetricsRow(QtWidgets.QWidget):
    """Horizontal strip of KPI cards, rebuilt on every update."""

    def __init__(self, theme_manager: ThemeManager, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self._theme_manager = theme_manager
        self._layout = QtWidgets.QHBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(12)

    def set_metrics(self, metrics: tuple[Metric, ...] | list[Metric]) -> None:
        while self._layout.count():
            item = self._layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        for metric in metrics:
            self._layout.addWidget(KpiCard(self._theme_manager, metric, self))
        self._layout.addStretch()
        self.setVisible(bool(metrics))
