from __future__ import annotations

from typing import Sequence, Tuple

from PyQt6.QtCore import QPointF, QSize, Qt
from PyQt6.QtGui import QBrush, QColor, QImage, QPainter, QRadialGradient

from ClickHeatmap.render.surface import ColorStop


class QtImageSurface:
    """PaintSurface on a premultiplied ARGB QImage, drawn later over the task image."""

    def __init__(self, width: int, height: int) -> None:
        self.image = QImage(max(1, int(width)), max(1, int(height)), QImage.Format.Format_ARGB32_Premultiplied)
        self.image.fill(Qt.GlobalColor.transparent)

    def clear(self) -> None:
        self.image.fill(Qt.GlobalColor.transparent)

    def dimensions(self) -> Tuple[int, int]:
        return self.image.width(), self.image.height()

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("surface dimensions must be positive")
        self.image = QImage(int(width), int(height), QImage.Format.Format_ARGB32_Premultiplied)
        self.image.fill(Qt.GlobalColor.transparent)

    def draw_radial_blob(self, center: Tuple[float, float], radius: float, color_stops: Sequence[ColorStop]) -> None:
        if radius <= 0 or not color_stops:
            return
        c = QPointF(float(center[0]), float(center[1]))
        grad = QRadialGradient(c, float(radius))
        for offset, (r, g, b, a) in color_stops:
            grad.setColorAt(float(offset), QColor(int(r), int(g), int(b), int(round(max(0.0, min(1.0, a)) * 255))))
        p = QPainter(self.image)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(QBrush(grad))
        p.drawEllipse(c, float(radius), float(radius))
        p.end()


def compose_multiply(base: QImage, overlay: QImage, size: QSize) -> QImage:
    """Scale base to size on white, then multiply overlay over it."""
    out = QImage(size, QImage.Format.Format_ARGB32_Premultiplied)
    out.fill(Qt.GlobalColor.white)
    p = QPainter(out)
    p.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
    p.drawImage(out.rect(), base)
    p.setCompositionMode(QPainter.CompositionMode.CompositionMode_Multiply)
    p.drawImage(0, 0, overlay)
    p.end()
    return out
