"""Embedded matplotlib chart with an empty-state message."""

from __future__ import annotations

from typing import Optional

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from matplotlib.figure import Figure
from PySide6 import QtCore, QtWidgets

from rental_marketplace.analytics.presentation import ChartSeries
from rental_marketplace.ui.strings import LABEL_NO_DATA
from rental_marketplace.utils.charts import draw_chart, has_data


class ChartPanel(QtWidgets.QWidget):
    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self._series: Optional[ChartSeries] = None
        self._stack = QtWidgets.QStackedLayout(self)

        self._figure = Figure(figsize=(10, 4))
        self._canvas = FigureCanvasQTAgg(self._figure)
        self._canvas.setMinimumHeight(300)
        self._canvas.setSizePolicy(
            QtWidgets.QSizePolicy.Expanding, QtWidgets.QSizePolicy.Expanding
        )
        self._axis = self._figure.add_subplot(111)

        self._empty_label = QtWidgets.QLabel(LABEL_NO_DATA)
        self._empty_label.setAlignment(QtCore.Qt.AlignCenter)

        self._stack.addWidget(self._canvas)
        self._stack.addWidget(self._empty_label)

    @property
    def series(self) -> Optional[ChartSeries]:
        return self._series

    def set_series(self, series: Optional[ChartSeries], *, currency: bool = False) -> None:
        self._series = series
        self._axis.clear()
        if not has_data(series):
            self._canvas.draw()
            self._stack.setCurrentWidget(self._empty_label)
            return
        draw_chart(self._axis, series, currency=currency)
        self._figure.tight_layout()
        self._canvas.draw()
        self._stack.setCurrentWidget(self._canvas)
