"""Bounds helpers shared by the geometry kernel and request validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class AxisBounds:
    minimum: float
    maximum: float

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum

    def clamp(self, value: float) -> float:
        if value < self.minimum:
            return self.minimum
        if value > self.maximum:
            return self.maximum
        return value


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box over (lon, lat) vertices, in degrees."""

    minimum: Tuple[float, float]
    maximum: Tuple[float, float]

    @property
    def lon(self) -> AxisBounds:
        return AxisBounds(self.minimum[0], self.maximum[0])

    @property
    def lat(self) -> AxisBounds:
        return AxisBounds(self.minimum[1], self.maximum[1])

    def contains(self, point: Tuple[float, float], tolerance: float = 0.0) -> bool:
        box = self.expanded(tolerance) if tolerance else self
        return box.lon.contains(point[0]) and box.lat.contains(point[1])

    def expanded(self, delta: float) -> "BoundingBox":
        """Grow the box by ``delta`` degrees on every side."""

        return BoundingBox(
            minimum=(self.minimum[0] - delta, self.minimum[1] - delta),
            maximum=(self.maximum[0] + delta, self.maximum[1] + delta),
        )


__all__ = [
    "AxisBounds",
    "BoundingBox",
]
