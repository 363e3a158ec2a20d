"""Qt item model over a presentation table."""

from __future__ import annotations

from typing import Any, Optional

from PySide6 import QtCore

from rental_marketplace.analytics.presentation import TableSpec


class RowTableModel(QtCore.QAbstractTableModel):
    """Read-only model that renders the columns of a :class:`TableSpec`."""

    def __init__(self, table: Optional[TableSpec] = None, parent: QtCore.QObject | None = None) -> None:
        super().__init__(parent)
        self._table = table

    def set_table(self, table: Optional[TableSpec]) -> None:
        self.beginResetModel()
        self._table = table
        self.endResetModel()

    def rowCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid() or self._table is None:
            return 0
        return len(self._table.rows)

    def columnCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid() or self._table is None:
            return 0
        return len(self._table.columns)

    def data(self, index: QtCore.QModelIndex, role: int = QtCore.Qt.DisplayRole) -> Any:
        if not index.isValid() or self._table is None:
            return None
        key = self._table.columns[index.column()].key
        value = self._table.rows[index.row()].get(key)
        if role == QtCore.Qt.DisplayRole:
            return "" if value is None else str(value)
        if role == QtCore.Qt.TextAlignmentRole and isinstance(value, (int, float)):
            return int(QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter)
        return None

    def headerData(
        self,
        section: int,
        orientation: QtCore.Qt.Orientation,
        role: int = QtCore.Qt.DisplayRole,
    ) -> Any:
        if role != QtCore.Qt.DisplayRole or self._table is None:
            return None
        if orientation == QtCore.Qt.Horizontal:
            return self._table.columns[section].label
        return str(section + 1)
