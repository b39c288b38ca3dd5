from __future__ import annotations

from typing import Optional, Sequence

from PyQt6.QtCore import QRect, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QImage, QPainter
from PyQt6.QtWidgets import QWidget

from ClickHeatmap.analysis.models import ClickRecord
from ClickHeatmap.render.heatmap import HeatmapRenderer, HeatmapStyle
from ClickHeatmap.render.overlay import HeatmapOverlay
from .qt_surface import QtImageSurface, compose_multiply


class HeatmapView(QWidget):
    """
    Task image with the click heatmap multiplied over it.

    The image is scaled to the widget width (aspect kept). Whenever the
    displayed size changes the overlay re-aggregates and repaints at that size.
    """

    statsChanged = pyqtSignal(object)

    def __init__(self, style: Optional[HeatmapStyle] = None):
        super().__init__()
        self._image: Optional[QImage] = None
        self.overlay = HeatmapOverlay(HeatmapRenderer(QtImageSurface(1, 1), style))
        self.setMinimumSize(320, 240)

    def set_image(self, image: QImage) -> None:
        self._image = image
        self._refit()

    def set_clicks(self, clicks: Sequence[ClickRecord]) -> None:
        self.overlay.set_clicks(clicks)
        self.statsChanged.emit(self.overlay.stats())
        self.update()

    def image_rect(self) -> QRect:
        if self._image is None or self._image.isNull():
            return QRect()
        w = self.width()
        h = int(round(self._image.height() * w / float(max(1, self._image.width()))))
        if h > self.height():
            h = self.height()
            w = int(round(self._image.width() * h / float(max(1, self._image.height()))))
        x = (self.width() - w) // 2
        y = (self.height() - h) // 2
        return QRect(x, y, max(1, w), max(1, h))

    def overlay_image(self) -> QImage:
        return self.overlay.renderer.surface.image

    def composited_image(self) -> QImage:
        if self._image is None or self._image.isNull():
            return QImage()
        return compose_multiply(self._image, self.overlay_image(), self.image_rect().size())

    def _refit(self) -> None:
        r = self.image_rect()
        if r.isNull():
            return
        if (r.width(), r.height()) != self.overlay.renderer.surface.dimensions():
            self.overlay.resize(r.width(), r.height())
            self.statsChanged.emit(self.overlay.stats())
        self.update()

    def resizeEvent(self, e):  # type: ignore[override]
        super().resizeEvent(e)
        self._refit()

    def paintEvent(self, e):  # type: ignore[override]
        p = QPainter(self)
        p.fillRect(self.rect(), QColor(30, 30, 30))
        r = self.image_rect()
        if r.isNull():
            p.setPen(QColor(200, 200, 200))
            p.drawText(self.rect(), int(Qt.AlignmentFlag.AlignCenter), "Open a task image to view its heatmap")
            p.end()
            return
        p.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        p.drawImage(r, self._image)
        p.setCompositionMode(QPainter.CompositionMode.CompositionMode_Multiply)
        p.drawImage(r.topLeft(), self.overlay_image())
        p.end()
