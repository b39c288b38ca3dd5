import pytest

from ClickHeatmap.analysis.models import ClickRecord, WeightedPoint
from ClickHeatmap.render.heatmap import (
    HeatmapRenderer,
    HeatmapStyle,
    SurfaceUnavailableError,
    color_stops_for,
    intensity_band,
)
from ClickHeatmap.render.overlay import HeatmapOverlay
from ClickHeatmap.render.surface import ArraySurface


class RecordingSurface:
    """Counts surface calls instead of painting."""

    def __init__(self, width=200, height=100):
        self.size = (width, height)
        self.clears = 0
        self.blobs = []

    def clear(self):
        self.clears += 1
        self.blobs = []

    def draw_radial_blob(self, center, radius, color_stops):
        self.blobs.append((center, radius, list(color_stops)))

    def dimensions(self):
        return self.size

    def resize(self, width, height):
        self.size = (width, height)


def test_missing_surface_is_fatal():
    with pytest.raises(SurfaceUnavailableError):
        HeatmapRenderer(None)


def test_empty_points_no_drawing():
    surf = RecordingSurface()
    r = HeatmapRenderer(surf)
    r.set_data([])
    assert surf.clears == 1
    assert surf.blobs == []


def test_empty_points_leave_surface_transparent():
    surf = ArraySurface(50, 40)
    r = HeatmapRenderer(surf)
    r.set_data([WeightedPoint(x=25, y=20, value=3)])
    assert not surf.is_blank()
    r.set_data([])
    assert surf.is_blank()


@pytest.mark.parametrize(
    "intensity,band",
    [(1.0, "high"), (0.71, "high"), (0.7, "medium"), (0.5, "medium"), (0.4, "low"), (0.3, "low"), (0.0, "low")],
)
def test_intensity_band(intensity, band):
    assert intensity_band(intensity) == band


def test_color_stops_shape():
    stops = color_stops_for(1.0)
    assert stops[0] == (0.0, (255.0, 0.0, 0.0, pytest.approx(0.7)))
    assert stops[1][0] == 0.5
    assert stops[1][1][:3] == (255.0, 100.0, 0.0)
    assert stops[1][1][3] == pytest.approx(0.35)
    assert stops[-1] == (1.0, (0.0, 0.0, 0.0, 0.0))


def test_radius_and_bands_follow_relative_count():
    surf = RecordingSurface()
    r = HeatmapRenderer(surf)
    r.set_data([WeightedPoint(x=50, y=50, value=10), WeightedPoint(x=150, y=50, value=3)])
    (c_hi, rad_hi, stops_hi), (c_lo, rad_lo, stops_lo) = surf.blobs
    assert c_hi == (50, 50)
    assert rad_hi == pytest.approx(40.0)
    assert stops_hi[0][1][:3] == (255.0, 0.0, 0.0)
    assert rad_lo == pytest.approx(26.0)
    assert stops_lo[0][1][:3] == (0.0, 150.0, 255.0)
    assert stops_lo[0][1][3] == pytest.approx(0.3 * 0.7)


def test_max_point_paints_red_low_point_paints_blue():
    surf = ArraySurface(200, 100)
    r = HeatmapRenderer(surf)
    r.set_data([WeightedPoint(x=50, y=50, value=10), WeightedPoint(x=150, y=50, value=3)])
    red, green, blue, alpha = surf.pixels[50, 50]
    assert red > 200 and green < 20 and blue < 1
    assert alpha > 0.5
    red, green, blue, alpha = surf.pixels[50, 150]
    assert blue > 200 and red < 1
    assert 0.0 < alpha < 0.3
    # well outside both blobs
    assert surf.pixels[5, 100, 3] == 0.0


def test_zero_max_value_does_not_divide_by_zero():
    surf = RecordingSurface()
    r = HeatmapRenderer(surf)
    r.set_data([WeightedPoint(x=10, y=10, value=0)])
    assert len(surf.blobs) == 1
    _, radius, stops = surf.blobs[0]
    assert radius == pytest.approx(20.0)
    assert stops[0][1][3] == 0.0


def test_single_point_is_full_intensity():
    surf = RecordingSurface()
    HeatmapRenderer(surf).set_data([WeightedPoint(x=10, y=10, value=4)])
    _, radius, stops = surf.blobs[0]
    assert radius == pytest.approx(40.0)
    assert intensity_band(1.0) == "high"
    assert stops[0][1][:3] == (255.0, 0.0, 0.0)


def test_set_data_replaces_points_and_repaints():
    surf = RecordingSurface()
    r = HeatmapRenderer(surf)
    r.set_data([WeightedPoint(x=1, y=1, value=1), WeightedPoint(x=5, y=5, value=1)])
    r.set_data([WeightedPoint(x=9, y=9, value=2)])
    assert surf.clears == 2
    assert [b[0] for b in surf.blobs] == [(9, 9)]
    assert r.points == [WeightedPoint(x=9, y=9, value=2)]


def test_custom_style_radius():
    surf = RecordingSurface()
    r = HeatmapRenderer(surf, HeatmapStyle(base_radius=5, radius_spread=10))
    r.set_data([WeightedPoint(x=1, y=1, value=2), WeightedPoint(x=5, y=5, value=1)])
    assert [b[1] for b in surf.blobs] == [pytest.approx(15.0), pytest.approx(10.0)]


def test_resize_repaints_once():
    surf = RecordingSurface(400, 300)
    r = HeatmapRenderer(surf)
    r.set_data([WeightedPoint(x=200, y=150, value=1)])
    r.resize(800, 600)
    assert surf.dimensions() == (800, 600)
    assert surf.clears == 2
    assert len(surf.blobs) == 1


def test_overlay_resize_reaggregates_clicks():
    surf = RecordingSurface(400, 300)
    overlay = HeatmapOverlay(HeatmapRenderer(surf))
    overlay.set_clicks([ClickRecord(x=50, y=50), ClickRecord(x=50, y=50)])
    assert overlay.renderer.points == [WeightedPoint(x=200.0, y=150.0, value=2)]
    clears_before = surf.clears

    overlay.resize(800, 600)
    assert surf.dimensions() == (800, 600)
    assert surf.clears == clears_before + 1
    assert overlay.renderer.points == [WeightedPoint(x=400.0, y=300.0, value=2)]
    assert [b[0] for b in surf.blobs] == [(400.0, 300.0)]


def test_overlay_resize_on_array_surface_repaints_from_scratch():
    surf = ArraySurface(400, 300)
    overlay = HeatmapOverlay(HeatmapRenderer(surf))
    overlay.set_clicks([ClickRecord(x=50, y=50)])
    assert surf.pixels[150, 200, 3] > 0.0
    overlay.resize(800, 600)
    assert surf.pixels.shape == (600, 800, 4)
    assert surf.pixels[300, 400, 3] > 0.0
    # old centre is now outside the 40px blob
    assert surf.pixels[150, 200, 3] == 0.0


def test_overlay_stats_use_current_size():
    overlay = HeatmapOverlay(HeatmapRenderer(RecordingSurface(10, 10)))
    # 51% and 54% of 10px both round to pixel 5
    overlay.set_clicks([ClickRecord(x=51, y=50, session_id="s1"), ClickRecord(x=54, y=50, session_id="s2")])
    assert overlay.stats().unique_areas == 1
    overlay.resize(1000, 1000)
    assert overlay.stats().unique_areas == 2
    assert overlay.stats().unique_testers == 2
