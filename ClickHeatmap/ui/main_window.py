from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage
from PyQt6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from ClickHeatmap.analysis.click_io import export_clicks_csv, export_clicks_json, load_clicks, load_tasks
from ClickHeatmap.analysis.models import ClickRecord, ClickStats, TaskInfo
from ClickHeatmap.core.settings import SettingsManager
from .heatmap_view import HeatmapView

logger = logging.getLogger(__name__)


def _legend_dot(color: str, text: str) -> QLabel:
    lbl = QLabel(f'<span style="color:{color}; font-size:16px;">●</span> {text}')
    lbl.setTextFormat(Qt.TextFormat.RichText)
    return lbl


class MainWindow(QMainWindow):
    def __init__(self, settings: Optional[SettingsManager] = None):
        super().__init__()
        self.settings = settings or SettingsManager()
        self.setWindowTitle("Click Heatmap")
        self._clicks: List[ClickRecord] = []
        self._tasks: Dict[str, TaskInfo] = {}
        self._build_ui()
        w, h = self.settings.window_size()
        self.resize(w, h)

    def _build_ui(self) -> None:
        central = QWidget()
        v = QVBoxLayout()

        toolbar = QHBoxLayout()
        self.btn_image = QPushButton("Open Image…")
        self.btn_clicks = QPushButton("Open Clicks…")
        self.btn_tasks = QPushButton("Open Tasks…")
        self.cmb_task = QComboBox()
        self.cmb_task.setMinimumWidth(180)
        toolbar.addWidget(self.btn_image)
        toolbar.addWidget(self.btn_clicks)
        toolbar.addWidget(self.btn_tasks)
        toolbar.addWidget(QLabel("Task"))
        toolbar.addWidget(self.cmb_task)
        toolbar.addStretch(1)
        self.cmb_format = QComboBox()
        self.cmb_format.addItems(["csv", "json"])
        self.cmb_format.setCurrentText(self.settings.export_format())
        self.btn_export = QPushButton("Export Clicks")
        self.btn_png = QPushButton("Export PNG")
        toolbar.addWidget(self.cmb_format)
        toolbar.addWidget(self.btn_export)
        toolbar.addWidget(self.btn_png)
        v.addLayout(toolbar)

        self.lbl_question = QLabel("")
        self.lbl_question.setWordWrap(True)
        self.lbl_question.setStyleSheet("font-size: 15px; font-weight: bold;")
        self.lbl_question.setVisible(False)
        v.addWidget(self.lbl_question)

        self.view = HeatmapView(self.settings.style())
        v.addWidget(self.view, stretch=1)

        bottom = QHBoxLayout()
        bottom.addWidget(_legend_dot("#ef4444", "High activity"))
        bottom.addWidget(_legend_dot("#eab308", "Medium activity"))
        bottom.addWidget(_legend_dot("#3b82f6", "Low activity"))
        bottom.addStretch(1)
        self.lbl_stats = QLabel("0 total clicks • 0 unique areas")
        bottom.addWidget(self.lbl_stats)
        v.addLayout(bottom)

        central.setLayout(v)
        self.setCentralWidget(central)
        self.setStatusBar(QStatusBar())

        self.btn_image.clicked.connect(self._open_image)  # type: ignore[attr-defined]
        self.btn_clicks.clicked.connect(self._open_clicks)  # type: ignore[attr-defined]
        self.btn_tasks.clicked.connect(self._open_tasks)  # type: ignore[attr-defined]
        self.btn_export.clicked.connect(self._export_clicks)  # type: ignore[attr-defined]
        self.btn_png.clicked.connect(self._export_png)  # type: ignore[attr-defined]
        self.cmb_task.currentIndexChanged.connect(self._apply_task_filter)  # type: ignore[attr-defined]
        self.cmb_format.currentTextChanged.connect(self.settings.set_export_format)  # type: ignore[attr-defined]
        self.view.statsChanged.connect(self._on_stats)  # type: ignore[attr-defined]

    # Loading -----------------------------------------------------------
    def load_image(self, path: str) -> bool:
        img = QImage(path)
        if img.isNull():
            QMessageBox.warning(self, "Open Image", f"Could not read image:\n{path}")
            return False
        self.view.set_image(img)
        self.statusBar().showMessage(f"{os.path.basename(path)} ({img.width()}x{img.height()})", 5000)
        return True

    def load_clicks(self, path: str) -> bool:
        try:
            clicks = load_clicks(path)
        except (OSError, ValueError) as e:
            logger.warning("failed to load clicks from %s: %s", path, e)
            QMessageBox.warning(self, "Open Clicks", str(e))
            return False
        self._clicks = clicks
        tasks = sorted({c.task_id for c in clicks if c.task_id})
        self.cmb_task.blockSignals(True)
        self.cmb_task.clear()
        self.cmb_task.addItem("All tasks", None)
        for t in tasks:
            self.cmb_task.addItem(t, t)
        self.cmb_task.blockSignals(False)
        self._apply_task_filter()
        return True

    def load_tasks(self, path: str) -> bool:
        try:
            tasks = load_tasks(path)
        except (OSError, ValueError) as e:
            logger.warning("failed to load tasks from %s: %s", path, e)
            QMessageBox.warning(self, "Open Tasks", str(e))
            return False
        self._tasks = tasks
        self._refresh_question()
        return True

    def set_question(self, text: str) -> None:
        self.lbl_question.setText(text)
        self.lbl_question.setVisible(bool(text))

    def _refresh_question(self) -> None:
        task_id = self.cmb_task.currentData()
        if task_id is None and len(self._tasks) == 1:
            task_id = next(iter(self._tasks))
        task = self._tasks.get(task_id) if task_id is not None else None
        self.set_question(task.label() if task is not None else "")

    def _selected_clicks(self) -> List[ClickRecord]:
        task = self.cmb_task.currentData()
        if task is None:
            return list(self._clicks)
        return [c for c in self._clicks if c.task_id == task]

    def _apply_task_filter(self, *_args) -> None:
        self.view.set_clicks(self._selected_clicks())
        self._refresh_question()

    def _on_stats(self, stats: ClickStats) -> None:
        text = f"{stats.total_clicks} total clicks • {stats.unique_areas} unique areas"
        if stats.unique_testers:
            text += f" • {stats.unique_testers} testers"
        self.lbl_stats.setText(text)

    # Dialogs -----------------------------------------------------------
    def _remember_dir(self, path: str) -> None:
        self.settings.set_last_dir(os.path.dirname(path))

    def _open_image(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Open Image", self.settings.last_dir(), "Images (*.png *.jpg *.jpeg *.bmp *.gif)")
        if path and self.load_image(path):
            self._remember_dir(path)

    def _open_clicks(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Open Clicks", self.settings.last_dir(), "Click exports (*.csv *.json)")
        if path and self.load_clicks(path):
            self._remember_dir(path)

    def _open_tasks(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Open Tasks", self.settings.last_dir(), "Task lists (*.json)")
        if path and self.load_tasks(path):
            self._remember_dir(path)

    def _export_clicks(self) -> None:
        fmt = self.cmb_format.currentText()
        task = self.cmb_task.currentData() or "all"
        default = os.path.join(self.settings.last_dir(), f"task-{task}-clicks.{fmt}")
        path, _ = QFileDialog.getSaveFileName(self, "Export Clicks", default, f"{fmt.upper()} Files (*.{fmt})")
        if not path:
            return
        try:
            if fmt == "json":
                export_clicks_json(self._selected_clicks(), path)
            else:
                export_clicks_csv(self._selected_clicks(), path)
        except OSError as e:
            QMessageBox.warning(self, "Export Clicks", f"Failed to export data:\n{e}")
            return
        self.statusBar().showMessage(f"Exported {len(self._selected_clicks())} clicks", 5000)

    def _export_png(self) -> None:
        r = self.view.image_rect()
        if r.isNull():
            QMessageBox.information(self, "Export PNG", "Open a task image first.")
            return
        path, _ = QFileDialog.getSaveFileName(self, "Export PNG", self.settings.last_dir(), "PNG Files (*.png)")
        if not path:
            return
        out = self.view.composited_image()
        if not out.save(path, "PNG"):
            QMessageBox.warning(self, "Export PNG", f"Could not write {path}")

    def closeEvent(self, e):  # type: ignore[override]
        self.settings.set_window_size(self.width(), self.height())
        try:
            self.settings.save()
        except OSError as err:
            logger.warning("could not save settings: %s", err)
        super().closeEvent(e)
