from __future__ import annotations

import math
from typing import Dict, List, Sequence, Tuple

from .models import ClickRecord, ClickStats, WeightedPoint


def round_half_away(v: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    r = math.floor(abs(v) + 0.5)
    return int(r if v >= 0 else -r)


def to_pixel(record: ClickRecord, width: int, height: int) -> Tuple[float, float]:
    return (record.x / 100.0) * width, (record.y / 100.0) * height


def aggregate_clicks(records: Sequence[ClickRecord], width: int, height: int) -> List[WeightedPoint]:
    """Group clicks by rounded pixel position on a width x height surface.

    Each distinct integer (px, py) becomes one WeightedPoint whose value is the
    number of clicks landing there. Output keeps first-appearance order.
    """
    if width <= 0 or height <= 0:
        raise ValueError("surface dimensions must be positive")
    counts: Dict[Tuple[int, int], int] = {}
    for rec in records:
        px, py = to_pixel(rec, width, height)
        key = (round_half_away(px), round_half_away(py))
        counts[key] = counts.get(key, 0) + 1
    return [WeightedPoint(x=float(k[0]), y=float(k[1]), value=n) for k, n in counts.items()]


def compute_click_stats(records: Sequence[ClickRecord], width: int, height: int) -> ClickStats:
    if not records:
        return ClickStats(total_clicks=0, unique_areas=0, unique_testers=0)
    sessions = {r.session_id for r in records if r.session_id}
    return ClickStats(
        total_clicks=len(records),
        unique_areas=len(aggregate_clicks(records, width, height)),
        unique_testers=len(sessions),
    )
