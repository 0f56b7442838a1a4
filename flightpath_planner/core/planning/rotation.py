"""Arbitrary sweep angles on top of the horizontal scanline planner."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from ..geometry import as_point, centroid, normalize_polygon, offset_point, rotate, rotate_all
from ..plan import LineOptions, PlannerSettings
from ..runtime import LoggerLike, resolve_logger
from .coverage_planner import generate_aligned_path, leg_capture_points
from .routes import FlightPathLine, FlightPathResult

Point2D = Tuple[float, float]


def generate_flight_path(
    polygon: Sequence[Sequence[float]],
    spacing: float,
    start: Sequence[float],
    end: Optional[Sequence[float]] = None,
    angle: float = 0.0,
    margin: float = 0.0,
    *,
    options: Optional[LineOptions] = None,
    settings: Optional[PlannerSettings] = None,
    logger: Optional[LoggerLike] = None,
) -> FlightPathResult:
    """Coverage path with scanlines rotated by ``angle`` degrees.

    Inputs are rotated by ``-angle`` about the polygon centroid (``start``
    when there is no polygon), planned with horizontal scanlines and the
    output rotated back by ``+angle`` about the same pivot. Capture points
    are sampled afterwards on the rotated-back legs.
    """

    options = options or LineOptions()
    settings = settings or PlannerSettings()
    log = resolve_logger(logger)

    start_pt = as_point(start)
    end_pt = as_point(end) if end is not None else None
    vertices = normalize_polygon(polygon)
    pivot = centroid(vertices) if vertices else start_pt

    # capture points are sampled below, on the rotated-back legs
    aligned = generate_aligned_path(
        rotate_all(vertices, pivot, -angle),
        spacing,
        rotate(start_pt, pivot, -angle),
        rotate(end_pt, pivot, -angle) if end_pt is not None else None,
        margin,
        options=replace(options, capture_interval=None),
        settings=settings,
        logger=log,
    )

    line = FlightPathLine(
        path=rotate_all(aligned.path, pivot, angle),
        waypoints=rotate_all(aligned.waypoints, pivot, angle),
    )
    if options.has_offset:
        line = apply_lateral_offset(line, options, settings)

    interval = options.capture_interval
    if interval is not None and interval > 0:
        line.capture_points = leg_capture_points(line.waypoints, interval)
    return FlightPathResult.from_line(line, interval)


def apply_lateral_offset(line: FlightPathLine, options: LineOptions, settings: PlannerSettings) -> FlightPathLine:
    """Shift every generated point; the takeoff and landing anchors stay put."""

    direction = options.lateral_offset_direction or 0.0

    def shift(points: List[Point2D]) -> List[Point2D]:
        return [
            offset_point(
                p,
                options.lateral_offset,
                direction,
                meters_per_deg_lat=settings.meters_per_deg_lat,
                meters_per_deg_lon_equator=settings.meters_per_deg_lon,
            )
            for p in points
        ]

    # A direct start -> end line has no generated points.
    if len(line.path) <= 2:
        return line
    path = [line.path[0]] + shift(line.path[1:-1]) + [line.path[-1]]
    return FlightPathLine(path=path, waypoints=shift(line.waypoints), capture_points=shift(line.capture_points))


__all__ = ["generate_flight_path", "apply_lateral_offset"]
