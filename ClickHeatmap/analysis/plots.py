from __future__ import annotations

from typing import Optional

import numpy as np  # type: ignore
import matplotlib
matplotlib.use("Agg")  # figures are only saved to files
import matplotlib.pyplot as plt  # type: ignore
from matplotlib.patches import Patch  # type: ignore

from .models import ClickStats

BAND_LEGEND = [
    ("High activity", (1.0, 0.0, 0.0)),
    ("Medium activity", (1.0, 1.0, 0.0)),
    ("Low activity", (0.0, 150 / 255, 1.0)),
]


def fig_heatmap(composited_rgb: np.ndarray, stats: Optional[ClickStats] = None, title: str = "Click Heatmap"):
    """Show an already composited heatmap image with the band legend."""
    h, w = composited_rgb.shape[:2]
    fig, ax = plt.subplots(figsize=(max(4.0, w / 100.0), max(3.0, h / 100.0 + 0.8)))
    if stats is not None:
        title = f"{title}\n{stats.total_clicks} total clicks • {stats.unique_areas} unique areas • {stats.unique_testers} testers"
    ax.set_title(title, fontsize=10)
    ax.imshow(composited_rgb, origin="upper", interpolation="nearest")
    ax.axis("off")
    handles = [Patch(color=c, label=label) for label, c in BAND_LEGEND]
    ax.legend(handles=handles, loc="lower center", bbox_to_anchor=(0.5, -0.12), ncol=3, fontsize=8, frameon=False)
    fig.tight_layout()
    return fig
