"""
Click data models.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ClickRecord:
    x: float  # percent of displayed image width, 0..100
    y: float  # percent of displayed image height, 0..100
    task_id: Optional[str] = None
    timestamp: Optional[str] = None
    session_id: Optional[str] = None
    user_agent: Optional[str] = None

    def __post_init__(self) -> None:
        if self.x != self.x or self.y != self.y:  # NaN check
            raise ValueError("click coordinates must be numbers")
        if not (0.0 <= self.x <= 100.0) or not (0.0 <= self.y <= 100.0):
            raise ValueError(f"click coordinates must be percentages in [0, 100], got ({self.x}, {self.y})")


@dataclass(frozen=True)
class WeightedPoint:
    x: float  # pixels
    y: float  # pixels
    value: int


@dataclass(frozen=True)
class ClickStats:
    total_clicks: int
    unique_areas: int
    unique_testers: int


@dataclass(frozen=True)
class TaskInfo:
    id: str
    title: str
    question: str = ""
    image_url: Optional[str] = None

    def label(self) -> str:
        if self.question and self.question != self.title:
            return f"{self.title}: {self.question}"
        return self.title
