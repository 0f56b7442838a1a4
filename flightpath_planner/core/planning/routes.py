"""Result containers for generated flight paths."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

Point2D = Tuple[float, float]


def _points_to_lists(points: Sequence[Point2D]) -> List[List[float]]:
    return [[float(p[0]), float(p[1])] for p in points]


@dataclass
class FlightPathLine:
    path: List[Point2D] = field(default_factory=list)
    waypoints: List[Point2D] = field(default_factory=list)
    capture_points: List[Point2D] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "path": _points_to_lists(self.path),
            "waypoints": _points_to_lists(self.waypoints),
            "capturePoints": _points_to_lists(self.capture_points),
        }


@dataclass
class FlightPathResult:
    """Primary line plus the list of variants it was built from.

    ``path`` starts at the takeoff point and ends at the landing point for
    single-area missions; strip missions drop the per-segment anchors.
    """

    path: List[Point2D] = field(default_factory=list)
    waypoints: List[Point2D] = field(default_factory=list)
    capture_points: List[Point2D] = field(default_factory=list)
    capture_interval: Optional[float] = None
    lines: List[FlightPathLine] = field(default_factory=list)

    @classmethod
    def from_line(
        cls,
        line: FlightPathLine,
        capture_interval: Optional[float],
        lines: Optional[List[FlightPathLine]] = None,
    ) -> "FlightPathResult":
        return cls(
            path=list(line.path),
            waypoints=list(line.waypoints),
            capture_points=list(line.capture_points),
            capture_interval=capture_interval,
            lines=list(lines) if lines is not None else [],
        )

    def as_line(self) -> FlightPathLine:
        return FlightPathLine(list(self.path), list(self.waypoints), list(self.capture_points))

    def to_dict(self) -> Dict[str, object]:
        payload = self.as_line().to_dict()
        payload["captureInterval"] = self.capture_interval
        payload["lines"] = [line.to_dict() for line in self.lines]
        return payload


__all__ = ["FlightPathLine", "FlightPathResult"]
