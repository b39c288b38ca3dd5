from __future__ import annotations

from typing import List, Sequence

from ClickHeatmap.analysis.aggregation import aggregate_clicks, compute_click_stats
from ClickHeatmap.analysis.models import ClickRecord, ClickStats
from .heatmap import HeatmapRenderer


class HeatmapOverlay:
    """
    Binds one task's clicks to a renderer.

    Aggregation happens in pixel space, so every size change re-aggregates
    from the original percentage records and repaints from scratch.
    """

    def __init__(self, renderer: HeatmapRenderer) -> None:
        self.renderer = renderer
        self._clicks: List[ClickRecord] = []

    @property
    def clicks(self) -> List[ClickRecord]:
        return list(self._clicks)

    def set_clicks(self, clicks: Sequence[ClickRecord]) -> None:
        self._clicks = list(clicks)
        w, h = self.renderer.surface.dimensions()
        self.renderer.set_data(aggregate_clicks(self._clicks, w, h))

    def resize(self, width: int, height: int) -> None:
        points = aggregate_clicks(self._clicks, int(width), int(height))
        self.renderer.resize(width, height, points=points)

    def stats(self) -> ClickStats:
        w, h = self.renderer.surface.dimensions()
        return compute_click_stats(self._clicks, w, h)
