"""
Headless heatmap export: composite a task's click heatmap over its image.

    python -m ClickHeatmap.analysis.render_png --image task.png --clicks clicks.csv --out heat.png
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence, Tuple

import cv2  # type: ignore
import numpy as np  # type: ignore

from ClickHeatmap.analysis.click_io import load_clicks
from ClickHeatmap.analysis.models import ClickRecord, ClickStats
from ClickHeatmap.analysis.plots import fig_heatmap, plt
from ClickHeatmap.core.settings import SettingsManager
from ClickHeatmap.render.composite import multiply_composite
from ClickHeatmap.render.heatmap import HeatmapRenderer, HeatmapStyle
from ClickHeatmap.render.overlay import HeatmapOverlay
from ClickHeatmap.render.surface import ArraySurface


def load_image_rgb(path: str, width: Optional[int] = None) -> np.ndarray:
    bgr = cv2.imread(path, cv2.IMREAD_COLOR)
    if bgr is None:
        raise ValueError(f"could not read image: {path}")
    if width is not None and width > 0 and width != bgr.shape[1]:
        h = max(1, int(round(bgr.shape[0] * width / float(bgr.shape[1]))))
        bgr = cv2.resize(bgr, (int(width), h), interpolation=cv2.INTER_AREA)
    return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)


def render_heatmap(base_rgb: np.ndarray, clicks: Sequence[ClickRecord], style: Optional[HeatmapStyle] = None) -> Tuple[np.ndarray, ClickStats]:
    """Return (composited RGB image, stats) for clicks over base_rgb."""
    h, w = base_rgb.shape[:2]
    overlay = HeatmapOverlay(HeatmapRenderer(ArraySurface(w, h), style))
    overlay.set_clicks(clicks)
    surface = overlay.renderer.surface
    return multiply_composite(base_rgb, surface.to_rgba8()), overlay.stats()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Render a click heatmap over a task image")
    ap.add_argument("--image", required=True, help="task image (png/jpg)")
    ap.add_argument("--clicks", required=True, help="click export (.csv or .json)")
    ap.add_argument("--out", required=True, help="output PNG path")
    ap.add_argument("--task", default=None, help="only use clicks for this task id")
    ap.add_argument("--width", type=int, default=None, help="display width in pixels (keeps aspect)")
    ap.add_argument("--report", default=None, help="also save a titled report figure (PNG) here")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    try:
        base = load_image_rgb(args.image, args.width)
        clicks = load_clicks(args.clicks, args.task)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    out, stats = render_heatmap(base, clicks, SettingsManager().style())
    if not cv2.imwrite(args.out, cv2.cvtColor(out, cv2.COLOR_RGB2BGR)):
        print(f"Error: could not write {args.out}")
        return 1
    print(f"{stats.total_clicks} total clicks • {stats.unique_areas} unique areas • {stats.unique_testers} testers")
    print(f"Wrote {args.out} ({out.shape[1]}x{out.shape[0]})")
    if args.report:
        fig = fig_heatmap(out, stats)
        fig.savefig(args.report, dpi=150)
        plt.close(fig)
        print(f"Wrote {args.report}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
