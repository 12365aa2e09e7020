from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QHBoxLayout,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from eq_editor.config import load_filter_config, save_filter_config
from eq_editor.filters import (
    CustomFilter,
    Filter,
    FilterSet,
    HighShelfFilter,
    LowShelfFilter,
    PeakingFilter,
)
from .editor import EditorCanvas

_NEW_FILTER_DEFAULTS = {
    "peaking": (PeakingFilter, 1000.0, 0.707),
    "lowshelf": (LowShelfFilter, 100.0, 0.707),
    "highshelf": (HighShelfFilter, 8000.0, 0.707),
}


class MainWindow(QMainWindow):
    def __init__(self, filter_set: FilterSet, name: str = "EQ") -> None:
        super().__init__()
        self.setWindowTitle(f"EQ Curve Editor - {name}")
        self.resize(1200, 650)

        self._name = name
        self._filters = filter_set
        self._suspend_selection = False

        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        left_panel = QWidget()
        left_layout = QVBoxLayout(left_panel)
        left_layout.setContentsMargins(0, 0, 0, 0)
        self.list_widget = QListWidget()
        left_layout.addWidget(self.list_widget)

        add_row = QHBoxLayout()
        for kind, title in (("peaking", "Peaking"), ("lowshelf", "Low shelf"), ("highshelf", "High shelf")):
            button = QPushButton(f"+ {title}")
            button.clicked.connect(lambda _=False, k=kind: self._add_filter(k))
            add_row.addWidget(button)
        left_layout.addLayout(add_row)

        action_row = QHBoxLayout()
        self.remove_button = QPushButton("Remove")
        self.open_button = QPushButton("Open")
        self.export_button = QPushButton("Export")
        for button in (self.remove_button, self.open_button, self.export_button):
            action_row.addWidget(button)
        action_row.addStretch()
        left_layout.addLayout(action_row)
        splitter.addWidget(left_panel)

        self.canvas = EditorCanvas(self._filters, on_commit=self._on_commit, on_select=self._select_row)
        splitter.addWidget(self.canvas)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 3)

        self.list_widget.currentRowChanged.connect(self._on_row_changed)
        self.remove_button.clicked.connect(self._remove_selected)
        self.open_button.clicked.connect(self._open_config)
        self.export_button.clicked.connect(self._export_config)

        self._refresh_list()

    # ------------------------------------------------------------------
    # Filter list
    # ------------------------------------------------------------------
    def _refresh_list(self) -> None:
        self._suspend_selection = True
        self.list_widget.clear()
        for filt in self._filters:
            item = QListWidgetItem(_describe(filt))
            item.setData(Qt.UserRole, filt.id)
            self.list_widget.addItem(item)
        self._suspend_selection = False
        if self._filters.selected_id is not None:
            self._select_row(self._filters.selected_id)

    def _select_row(self, filter_id: int) -> None:
        for row in range(self.list_widget.count()):
            item = self.list_widget.item(row)
            if item.data(Qt.UserRole) == filter_id:
                self._suspend_selection = True
                self.list_widget.setCurrentRow(row)
                self._suspend_selection = False
                break

    def _on_row_changed(self, row: int) -> None:
        if self._suspend_selection:
            return
        item = self.list_widget.item(row) if row >= 0 else None
        self._filters.select(item.data(Qt.UserRole) if item is not None else None)
        self.canvas.redraw()

    def _on_commit(self, filt: Filter) -> None:
        for row in range(self.list_widget.count()):
            item = self.list_widget.item(row)
            if item.data(Qt.UserRole) == filt.id:
                item.setText(_describe(filt))
                break

    def _add_filter(self, kind: str) -> None:
        factory, hz, q = _NEW_FILTER_DEFAULTS[kind]
        filt = factory(id=self._filters.new_id(), hz=hz, db=0.0, q=q)
        self._filters.add(filt)
        self._filters.select(filt.id)
        self._refresh_list()
        self.canvas.redraw()

    def _remove_selected(self) -> None:
        if self._filters.selected_id is None:
            return
        self._filters.remove(self._filters.selected_id)
        self._refresh_list()
        self.canvas.redraw()

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------
    def _open_config(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Open filter set", str(Path.cwd()), "JSON (*.json)")
        if not path:
            return
        try:
            filter_set, metadata = load_filter_config(Path(path))
        except (OSError, ValueError) as exc:
            QMessageBox.critical(self, "Open filter set", str(exc))
            return
        self._name = metadata["name"]
        self.setWindowTitle(f"EQ Curve Editor - {self._name}")
        self._filters = filter_set
        self.canvas.committed = filter_set
        self._refresh_list()
        self.canvas.redraw()

    def _export_config(self) -> None:
        path, _ = QFileDialog.getSaveFileName(self, "Export filter set", f"{self._name}.json", "JSON (*.json)")
        if not path:
            return
        try:
            destination = save_filter_config(self._filters, self._name, Path(path))
        except OSError as exc:
            QMessageBox.critical(self, "Export filter set", str(exc))
            return
        QMessageBox.information(self, "Export filter set", f"Saved to {destination}")


def _describe(filt: Filter) -> str:
    if isinstance(filt, CustomFilter):
        return f"#{filt.id}  custom  b=({filt.b0:.3g}, {filt.b1:.3g}, {filt.b2:.3g})  a=(1, {filt.a1:.3g}, {filt.a2:.3g})"
    return f"#{filt.id}  {filt.kind}  {filt.hz:.0f} Hz  {filt.db:+.1f} dB  Q {filt.q:.2f}"


def launch_gui(filter_set: Optional[FilterSet] = None, name: str = "EQ") -> None:
    app = QApplication.instance()
    owns_app = False
    if app is None:
        app = QApplication(sys.argv)
        owns_app = True

    if filter_set is None:
        filter_set, metadata = load_filter_config(None)
        name = metadata["name"]
    window = MainWindow(filter_set, name)
    window.show()

    if owns_app:
        app.exec()
