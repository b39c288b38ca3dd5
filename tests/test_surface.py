import numpy as np
import pytest

from ClickHeatmap.render.composite import multiply_composite
from ClickHeatmap.render.surface import ArraySurface

RED_STOPS = [(0.0, (255.0, 0.0, 0.0, 0.8)), (1.0, (0.0, 0.0, 0.0, 0.0))]


def test_new_surface_is_blank():
    s = ArraySurface(30, 20)
    assert s.dimensions() == (30, 20)
    assert s.pixels.shape == (20, 30, 4)
    assert s.is_blank()


def test_blob_fades_to_transparent_at_radius():
    s = ArraySurface(100, 100)
    s.draw_radial_blob((50, 50), 10, RED_STOPS)
    centre_alpha = s.pixels[50, 50, 3]
    mid_alpha = s.pixels[50, 55, 3]
    assert centre_alpha > mid_alpha > 0.0
    assert s.pixels[50, 61, 3] == 0.0
    assert s.pixels[0, 0, 3] == 0.0


def test_clear_and_resize_reset_pixels():
    s = ArraySurface(40, 40)
    s.draw_radial_blob((20, 20), 8, RED_STOPS)
    assert not s.is_blank()
    s.clear()
    assert s.is_blank()
    s.draw_radial_blob((20, 20), 8, RED_STOPS)
    s.resize(80, 60)
    assert s.dimensions() == (80, 60)
    assert s.is_blank()


def test_blob_partly_off_surface():
    s = ArraySurface(20, 20)
    s.draw_radial_blob((0, 0), 15, RED_STOPS)
    s.draw_radial_blob((500, 500), 15, RED_STOPS)
    assert s.pixels[0, 0, 3] > 0.0
    assert s.pixels[19, 19, 3] == 0.0


def test_overlapping_blobs_accumulate_alpha():
    s = ArraySurface(40, 40)
    s.draw_radial_blob((20, 20), 10, RED_STOPS)
    one = s.pixels[20, 20, 3]
    s.draw_radial_blob((20, 20), 10, RED_STOPS)
    assert one < s.pixels[20, 20, 3] <= 1.0


def test_to_rgba8():
    s = ArraySurface(10, 10)
    s.draw_radial_blob((5, 5), 4, [(0.0, (255.0, 0.0, 0.0, 1.0)), (1.0, (255.0, 0.0, 0.0, 1.0))])
    img = s.to_rgba8()
    assert img.dtype == np.uint8
    assert tuple(img[5, 5]) == (255, 0, 0, 255)
    assert img[0, 0, 3] == 0


def test_invalid_size():
    with pytest.raises(ValueError):
        ArraySurface(0, 10)


def test_multiply_transparent_overlay_keeps_base():
    base = np.full((8, 6, 3), 123, dtype=np.uint8)
    overlay = np.zeros((8, 6, 4), dtype=np.uint8)
    assert np.array_equal(multiply_composite(base, overlay), base)


def test_multiply_blend():
    base = np.full((2, 2, 3), 200, dtype=np.uint8)
    overlay = np.zeros((2, 2, 4), dtype=np.uint8)
    overlay[..., 0] = 255
    overlay[..., 3] = 128
    out = multiply_composite(base, overlay)
    assert tuple(out[0, 0]) == (200, 100, 100)

    overlay[..., :3] = 255
    overlay[..., 3] = 255
    assert np.array_equal(multiply_composite(base, overlay), base)


def test_multiply_size_mismatch():
    with pytest.raises(ValueError):
        multiply_composite(np.zeros((4, 4, 3), dtype=np.uint8), np.zeros((4, 5, 4), dtype=np.uint8))
