"""
Settings manager for ClickHeatmap.

Loads/saves JSON settings from ClickHeatmap/settings.json and exposes helpers.
"""
from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

from ClickHeatmap.render.heatmap import HeatmapStyle


class SettingsManager:
    def __init__(self, path: Optional[str] = None) -> None:
        here = os.path.dirname(os.path.abspath(__file__))
        self._root = os.path.dirname(here)
        self.path = path or os.path.join(self._root, "settings.json")
        self.data: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        if not os.path.exists(self.path):
            # provide minimal defaults
            self.data = {
                "heatmap": {
                    "base_radius": 20.0,
                    "radius_spread": 20.0,
                    "alpha_scale": 0.7,
                    "high_threshold": 0.7,
                    "medium_threshold": 0.4,
                },
                "export": {"format": "csv"},
                "window": {"size": [1100, 800]},
                "last_dir": "",
            }
            return
        with open(self.path, "r", encoding="utf-8") as f:
            self.data = json.load(f)

    def save(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.data, f, indent=2)

    def _section(self, key: str, create: bool = False) -> dict:
        """Return the dict stored under key; non-dict values are ignored (or replaced when create)."""
        sec = self.data.get(key)
        if isinstance(sec, dict):
            return sec
        if not create:
            return {}
        sec = {}
        self.data[key] = sec
        return sec

    # Heatmap style -----------------------------------------------------
    def style(self) -> HeatmapStyle:
        hm = self._section("heatmap")
        d = HeatmapStyle()
        return HeatmapStyle(
            base_radius=float(hm.get("base_radius", d.base_radius)),
            radius_spread=float(hm.get("radius_spread", d.radius_spread)),
            alpha_scale=float(hm.get("alpha_scale", d.alpha_scale)),
            high_threshold=float(hm.get("high_threshold", d.high_threshold)),
            medium_threshold=float(hm.get("medium_threshold", d.medium_threshold)),
        )

    def set_radius(self, base: float, spread: float) -> None:
        hm = self._section("heatmap", create=True)
        hm["base_radius"] = float(base)
        hm["radius_spread"] = float(spread)

    # Export / window ---------------------------------------------------
    def export_format(self) -> str:
        fmt = str(self._section("export").get("format", "csv")).lower()
        return fmt if fmt in ("csv", "json") else "csv"

    def set_export_format(self, fmt: str) -> None:
        fmt = fmt.lower()
        if fmt not in ("csv", "json"):
            raise ValueError(f"unsupported export format: {fmt}")
        self._section("export", create=True)["format"] = fmt

    def window_size(self) -> tuple[int, int]:
        arr = self._section("window").get("size", [1100, 800])
        try:
            return int(arr[0]), int(arr[1])
        except (TypeError, ValueError, IndexError):
            return 1100, 800

    def set_window_size(self, w: int, h: int) -> None:
        self._section("window", create=True)["size"] = [int(w), int(h)]

    def last_dir(self) -> str:
        return str(self.data.get("last_dir", "") or "")

    def set_last_dir(self, path: str) -> None:
        self.data["last_dir"] = str(path)
