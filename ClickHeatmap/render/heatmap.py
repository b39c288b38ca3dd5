"""
Heatmap renderer.

Paints WeightedPoints (pixel space) onto a PaintSurface as soft radial blobs.
Every paint clears the surface and redraws all points; nothing is kept
between calls except the current point set.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ClickHeatmap.analysis.models import WeightedPoint
from .surface import ColorStop, PaintSurface

logger = logging.getLogger(__name__)

TRANSPARENT = (0.0, 0.0, 0.0, 0.0)


class SurfaceUnavailableError(RuntimeError):
    """Raised when the renderer is constructed without a drawing surface."""


@dataclass
class HeatmapStyle:
    base_radius: float = 20.0
    radius_spread: float = 20.0
    alpha_scale: float = 0.7
    high_threshold: float = 0.7
    medium_threshold: float = 0.4


def intensity_band(intensity: float, style: Optional[HeatmapStyle] = None) -> str:
    st = style or HeatmapStyle()
    if intensity > st.high_threshold:
        return "high"
    if intensity > st.medium_threshold:
        return "medium"
    return "low"


def color_stops_for(intensity: float, style: Optional[HeatmapStyle] = None) -> List[ColorStop]:
    st = style or HeatmapStyle()
    a = intensity * st.alpha_scale
    band = intensity_band(intensity, st)
    if band == "high":
        inner, mid = (255.0, 0.0, 0.0), (255.0, 100.0, 0.0)
    elif band == "medium":
        inner, mid = (255.0, 255.0, 0.0), (255.0, 150.0, 0.0)
    else:
        inner, mid = (0.0, 150.0, 255.0), (0.0, 200.0, 255.0)
    return [
        (0.0, (*inner, a)),
        (0.5, (*mid, a * 0.5)),
        (1.0, TRANSPARENT),
    ]


class HeatmapRenderer:
    def __init__(self, surface: Optional[PaintSurface], style: Optional[HeatmapStyle] = None) -> None:
        if surface is None:
            raise SurfaceUnavailableError("heatmap surface not available")
        self.surface = surface
        self.style = style or HeatmapStyle()
        self._points: List[WeightedPoint] = []

    @property
    def points(self) -> List[WeightedPoint]:
        return list(self._points)

    def set_data(self, points: Sequence[WeightedPoint]) -> None:
        self._points = list(points)
        self.render()

    def resize(self, width: int, height: int, points: Optional[Sequence[WeightedPoint]] = None) -> None:
        """Resize the surface and repaint once; pass points to swap the set in the same paint."""
        self.surface.resize(int(width), int(height))
        if points is not None:
            self._points = list(points)
        self.render()

    def radius_for(self, intensity: float) -> float:
        return self.style.base_radius + intensity * self.style.radius_spread

    def render(self) -> None:
        self.surface.clear()
        if not self._points:
            return
        max_value = max(p.value for p in self._points)
        if max_value == 0:
            max_value = 1
        for p in self._points:
            intensity = p.value / max_value
            self.surface.draw_radial_blob(
                (p.x, p.y),
                self.radius_for(intensity),
                color_stops_for(intensity, self.style),
            )
        logger.debug("rendered %d heatmap points (max=%s) on %s", len(self._points), max_value, self.surface.dimensions())
