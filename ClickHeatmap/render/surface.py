"""
Paint surfaces for the heatmap renderer.

A surface only needs four capabilities: clear, draw a soft radial blob,
report its size, and resize. ArraySurface implements them on a numpy RGBA
buffer so rendering works without a display; the Qt surface lives in
ClickHeatmap.ui.qt_surface.
"""
from __future__ import annotations

from typing import Protocol, Sequence, Tuple

import numpy as np  # type: ignore

# (offset in [0, 1], (r, g, b, alpha)) with r/g/b in 0..255 and alpha in 0..1
ColorStop = Tuple[float, Tuple[float, float, float, float]]


class PaintSurface(Protocol):
    def clear(self) -> None: ...

    def draw_radial_blob(self, center: Tuple[float, float], radius: float, color_stops: Sequence[ColorStop]) -> None: ...

    def dimensions(self) -> Tuple[int, int]: ...

    def resize(self, width: int, height: int) -> None: ...


class ArraySurface:
    """In-memory RGBA raster, (H, W, 4) float: colour 0..255, alpha 0..1."""

    def __init__(self, width: int, height: int) -> None:
        self._alloc(width, height)

    def _alloc(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("surface dimensions must be positive")
        self.width = int(width)
        self.height = int(height)
        self.pixels = np.zeros((self.height, self.width, 4), dtype=float)

    def clear(self) -> None:
        self.pixels.fill(0.0)

    def dimensions(self) -> Tuple[int, int]:
        return self.width, self.height

    def resize(self, width: int, height: int) -> None:
        # A resized surface starts blank; callers repaint.
        self._alloc(width, height)

    def draw_radial_blob(self, center: Tuple[float, float], radius: float, color_stops: Sequence[ColorStop]) -> None:
        if radius <= 0 or not color_stops:
            return
        cx, cy = float(center[0]), float(center[1])
        x0 = max(0, int(np.floor(cx - radius)))
        x1 = min(self.width, int(np.ceil(cx + radius)) + 1)
        y0 = max(0, int(np.floor(cy - radius)))
        y1 = min(self.height, int(np.ceil(cy + radius)) + 1)
        if x0 >= x1 or y0 >= y1:
            return

        # Sample at pixel centres
        ys, xs = np.mgrid[y0:y1, x0:x1]
        dist = np.hypot(xs + 0.5 - cx, ys + 0.5 - cy)
        t = dist / float(radius)
        inside = t <= 1.0

        stops = sorted(color_stops, key=lambda s: s[0])
        offsets = np.array([s[0] for s in stops], dtype=float)
        colors = np.array([s[1] for s in stops], dtype=float)
        src = np.stack([np.interp(t, offsets, colors[:, c]) for c in range(4)], axis=-1)
        src[..., 3] = np.where(inside, np.clip(src[..., 3], 0.0, 1.0), 0.0)

        # Source-over compositing, non-premultiplied storage
        dst = self.pixels[y0:y1, x0:x1]
        sa = src[..., 3:4]
        da = dst[..., 3:4]
        out_a = sa + da * (1.0 - sa)
        safe = np.where(out_a > 0.0, out_a, 1.0)
        out_rgb = (src[..., :3] * sa + dst[..., :3] * da * (1.0 - sa)) / safe
        dst[..., :3] = np.where(out_a > 0.0, out_rgb, 0.0)
        dst[..., 3:4] = out_a

    def is_blank(self) -> bool:
        return not np.any(self.pixels[..., 3] > 0.0)

    def to_rgba8(self) -> np.ndarray:
        out = np.empty((self.height, self.width, 4), dtype=np.uint8)
        out[..., :3] = np.clip(np.rint(self.pixels[..., :3]), 0, 255).astype(np.uint8)
        out[..., 3] = np.clip(np.rint(self.pixels[..., 3] * 255.0), 0, 255).astype(np.uint8)
        return out
