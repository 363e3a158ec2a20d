"""Shared event bus for UI refresh signals."""

from __future__ import annotations

from PySide6 import QtCore


class DataEventBus(QtCore.QObject):
    """Global signal emitter for data and session change events."""

    data_changed = QtCore.Signal()
    # Emits the selected ``User`` or ``None`` when the selection is cleared.
    user_changed = QtCore.Signal(object)
