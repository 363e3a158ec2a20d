"""Screen for analytics reports."""

from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path
from typing import Optional

from PySide6 import QtCore, QtWidgets

from rental_marketplace.analytics.presentation import ReportResult
from rental_marketplace.db.connection import get_connection
from rental_marketplace.domain.models import ProductCategory, UserRole
from rental_marketplace.logging_config import get_logger
from rental_marketplace.paths import get_exports_dir
from rental_marketplace.services.report_service import ReportService
from rental_marketplace.ui.app_services import AppServices
from rental_marketplace.ui.screens.base_screen import BaseScreen
from rental_marketplace.ui.strings import (
    LABEL_LOADING,
    LABEL_NO_DATA,
    TITLE_SUCCESS,
    category_label,
    report_title,
)
from rental_marketplace.ui.table_model import RowTableModel
from rental_marketplace.ui.widgets import ChartPanel, MetricsRow
from rental_marketplace.utils.charts import has_data, render_chart_png
from rental_marketplace.utils.pdf_report import generate_report_pdf

SUBCATEGORY_REPORT = "subcategories"
DURATION_BY_CATEGORY_REPORT = "avg_rental_duration_category"
DIRECTORY_REPORTS = {
    "users_renter": UserRole.RENTER,
    "users_owner": UserRole.OWNER,
}
CURRENCY_CHARTS = frozenset({"top_revenue", "revenue_per_product"})


def run_report(service: ReportService, key: str, category: Optional[str] = None) -> ReportResult:
    """Dispatch a report key to the service method that builds it."""
    if key == SUBCATEGORY_REPORT:
        return service.subcategory_distribution(category)
    if key == DURATION_BY_CATEGORY_REPORT:
        return service.average_rental_duration(by="category")
    if key in DIRECTORY_REPORTS:
        return service.users_directory(DIRECTORY_REPORTS[key])
    return service.catalog()[key]()


class ReportLoadSignals(QtCore.QObject):
    completed = QtCore.Signal(object)
    failed = QtCore.Signal(object)


class ReportLoadTask(QtCore.QRunnable):
    """Build one report on a worker thread with its own connection."""

    def __init__(
        self,
        *,
        request_id: int,
        db_path: Path,
        key: str,
        category: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.request_id = request_id
        self.db_path = db_path
        self.key = key
        self.category = category
        self.signals = ReportLoadSignals()

    def run(self) -> None:
        logger = get_logger("Reports")
        connection = None
        start_time = time.perf_counter()
        try:
            connection = get_connection(self.db_path)
            result = run_report(ReportService(connection), self.key, self.category)
            logger.info(
                "Report %s built in %.3fs", self.key, time.perf_counter() - start_time
            )
            self.signals.completed.emit((self.request_id, result))
        except Exception:
            logger.exception("Error building report %s.", self.key)
            self.signals.failed.emit((self.request_id, f"Could not build {report_title(self.key)}."))
        finally:
            if connection is not None:
                connection.close()


class ReportsScreen(BaseScreen):
    """Screen listing every report with its table and chart."""

    def __init__(self, services: AppServices) -> None:
        super().__init__(services)
        self._logger = get_logger("Reports")
        self._thread_pool = QtCore.QThreadPool.globalInstance()
        self._load_sequence = 0
        self._result: Optional[ReportResult] = None
        self._model = RowTableModel()
        self._build_ui()
        self.report_list.setCurrentRow(0)

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        self._header(layout, "Reports", "Revenue, catalog, user and maintenance analytics.")

        body = QtWidgets.QHBoxLayout()
        self.report_list = QtWidgets.QListWidget()
        self.report_list.setFixedWidth(220)
        keys = list(self._services.report_service.catalog())
        keys.insert(2, SUBCATEGORY_REPORT)
        keys.insert(keys.index("avg_rental_duration") + 1, DURATION_BY_CATEGORY_REPORT)
        keys.extend(DIRECTORY_REPORTS)
        for key in keys:
            item = QtWidgets.QListWidgetItem(report_title(key))
            item.setData(QtCore.Qt.UserRole, key)
            self.report_list.addItem(item)
        self.report_list.currentRowChanged.connect(lambda _row: self.refresh())
        body.addWidget(self.report_list)

        content = QtWidgets.QVBoxLayout()
        toolbar = QtWidgets.QHBoxLayout()
        self.category_combo = QtWidgets.QComboBox()
        self.category_combo.addItem("Select a category", None)
        for category in ProductCategory:
            self.category_combo.addItem(category_label(category), category.value)
        self.category_combo.currentIndexChanged.connect(lambda _index: self.refresh())
        self.status_label = QtWidgets.QLabel()
        self.status_label.setWordWrap(True)
        self.export_pdf_button = QtWidgets.QPushButton("Export PDF")
        self.export_pdf_button.clicked.connect(self._on_export_pdf)
        self.export_chart_button = QtWidgets.QPushButton("Save chart")
        self.export_chart_button.clicked.connect(self._on_export_chart)
        toolbar.addWidget(self.category_combo)
        toolbar.addWidget(self.status_label, 1)
        toolbar.addWidget(self.export_pdf_button)
        toolbar.addWidget(self.export_chart_button)
        content.addLayout(toolbar)

        self.metrics_row = MetricsRow(self._services.theme_manager)
        content.addWidget(self.metrics_row)

        splitter = QtWidgets.QSplitter(QtCore.Qt.Vertical)
        self.table = QtWidgets.QTableView()
        self.table.setModel(self._model)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(QtWidgets.QHeaderView.Stretch)
        self.chart_panel = ChartPanel()
        splitter.addWidget(self.table)
        splitter.addWidget(self.chart_panel)
        content.addWidget(splitter, 1)

        body.addLayout(content, 1)
        layout.addLayout(body)
        self._set_actions_enabled(False)

    def _current_key(self) -> Optional[str]:
        item = self.report_list.currentItem()
        return item.data(QtCore.Qt.UserRole) if item else None

    def refresh(self) -> None:
        key = self._current_key()
        if key is None:
            return
        self.category_combo.setVisible(key == SUBCATEGORY_REPORT)
        self._load_sequence += 1
        self.status_label.setText(LABEL_LOADING)
        self._set_actions_enabled(False)
        task = ReportLoadTask(
            request_id=self._load_sequence,
            db_path=self._services.db_path,
            key=key,
            category=self.category_combo.currentData(),
        )
        task.signals.completed.connect(self._on_load_completed)
        task.signals.failed.connect(self._on_load_failed)
        self._thread_pool.start(task)

    def _on_load_completed(self, payload: object) -> None:
        request_id, result = payload
        if request_id != self._load_sequence:
            return
        self._apply_result(result)

    def _on_load_failed(self, payload: object) -> None:
        request_id, message = payload
        if request_id != self._load_sequence:
            return
        self._result = None
        self._model.set_table(None)
        self.chart_panel.set_series(None)
        self.metrics_row.set_metrics(())
        self.status_label.setText(message)

    def _apply_result(self, result: ReportResult) -> None:
        self._result = result
        if not result.ok:
            self._model.set_table(None)
            self.chart_panel.set_series(None)
            self.metrics_row.set_metrics(())
            self.status_label.setText(result.error_message)
            return
        self._model.set_table(result.table)
        self.metrics_row.set_metrics(result.metrics)
        self.chart_panel.setVisible(result.chart is not None)
        self.chart_panel.set_series(result.chart, currency=result.key in CURRENCY_CHARTS)
        table = result.table
        if table is None or table.is_empty():
            status = LABEL_NO_DATA
        else:
            status = table.description or table.title
        if result.skipped:
            status = f"{status} ({result.skipped} incomplete rows skipped)"
        self.status_label.setText(status)
        self._set_actions_enabled(True)

    def _set_actions_enabled(self, enabled: bool) -> None:
        result = self._result
        self.export_pdf_button.setEnabled(
            enabled and result is not None and result.table is not None
        )
        self.export_chart_button.setEnabled(
            enabled and result is not None and has_data(result.chart)
        )

    def _export_path(self, suffix: str) -> Path:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return get_exports_dir() / f"{self._result.key}_{stamp}.{suffix}"

    def _on_export_pdf(self) -> None:
        if self._result is None or self._result.table is None:
            return
        try:
            path = generate_report_pdf(
                self._result.table,
                self._export_path("pdf"),
                metrics=self._result.metrics,
            )
        except OSError:
            self._logger.exception("PDF export failed.")
            self._show_error("Could not write the PDF file.")
            return
        QtWidgets.QMessageBox.information(self, TITLE_SUCCESS, f"Saved to {path}")

    def _on_export_chart(self) -> None:
        if self._result is None or not has_data(self._result.chart):
            return
        try:
            path = render_chart_png(
                self._result.chart,
                self._export_path("png"),
                currency=self._result.key in CURRENCY_CHARTS,
            )
        except OSError:
            self._logger.exception("Chart export failed.")
            self._show_error("Could not write the chart image.")
            return
        QtWidgets.QMessageBox.information(self, TITLE_SUCCESS, f"Saved to {path}")
