"""Scanline coverage planning (boustrophedon paths over a polygon).

The planner only works in a frame where scanlines are horizontal (constant
latitude). Arbitrary sweep orientations are handled by rotating the inputs
beforehand, see :mod:`.rotation`.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List, Optional, Sequence, Tuple

from ..bounds import BoundingBox
from ..geometry import (
    as_point,
    bounding_box,
    interpolate,
    meters_per_deg_lon,
    normalize_polygon,
    polygon_intersections,
)
from ..plan import LineOptions, PlannerSettings
from ..runtime import LoggerLike, resolve_logger
from .routes import FlightPathLine

Point2D = Tuple[float, float]


def direct_line(start: Point2D, end: Point2D) -> FlightPathLine:
    """Path used when there is nothing to scan: takeoff, then landing if it differs."""

    if end == start:
        return FlightPathLine(path=[start], waypoints=[])
    return FlightPathLine(path=[start, end], waypoints=[end])


def scanline_crossings(
    polygon: Sequence[Point2D],
    bbox: BoundingBox,
    lat: float,
    probe_epsilon_deg: float,
) -> List[Point2D]:
    """Crossings of the constant-latitude probe at ``lat``, sorted west to east.

    ``polygon`` is an open ring. A vertex lying on the probe counts once when
    the boundary passes through it and not at all when the boundary only
    touches the probe there. A vertex joining a horizontal edge counts once.
    """

    count = len(polygon)
    probe = (
        (bbox.minimum[0] - probe_epsilon_deg, lat),
        (bbox.maximum[0] + probe_epsilon_deg, lat),
    )
    points: List[Point2D] = []
    for hit in polygon_intersections(probe, polygon):
        start = polygon[hit.edge_index]
        end = polygon[(hit.edge_index + 1) % count]
        # vertex hits are resolved below
        if start[1] != lat and end[1] != lat:
            points.append(hit.point)

    for idx, vertex in enumerate(polygon):
        if vertex[1] != lat:
            continue
        d_prev = polygon[idx - 1][1] - lat
        d_next = polygon[(idx + 1) % count][1] - lat
        if d_prev == 0 and d_next == 0:
            continue
        if d_prev * d_next > 0:
            continue
        points.append(vertex)

    if len(points) < 2:
        return []
    return sorted(points, key=lambda p: p[0])


def _pairs(crossings: Sequence[Point2D]) -> Iterator[Tuple[Point2D, Point2D]]:
    # A trailing unpaired crossing is ignored.
    for idx in range(0, len(crossings) - 1, 2):
        yield crossings[idx], crossings[idx + 1]


def group_passes(
    polygon: Sequence[Point2D],
    spacing: float,
    margin: float = 0.0,
    *,
    settings: Optional[PlannerSettings] = None,
) -> Tuple[List[List[Point2D]], int]:
    """Collect crossing pairs per rank across all scanlines.

    Pair ``k`` of every scanline lands in ``passes[k]``. Even ranks are stored
    south to north as (west, east); odd ranks are prepended as (east, west),
    so each rank is already a zigzag leg of its own. Returns the passes and
    the number of scanlines that produced at least one pair.
    """

    settings = settings or PlannerSettings()
    polygon = normalize_polygon(polygon)
    bbox = bounding_box(polygon)
    spacing_deg = spacing / settings.meters_per_deg_lat
    margin_m = settings.margin_bounds.clamp(margin)

    passes: List[Deque[Point2D]] = []
    scanlines = 0
    step = 0
    while True:
        lat = bbox.minimum[1] + step * spacing_deg
        if lat > bbox.maximum[1]:
            break
        step += 1

        crossings = scanline_crossings(polygon, bbox, lat, settings.probe_epsilon_deg)
        if not crossings:
            continue
        scanlines += 1

        margin_deg = 0.0
        if margin_m > 0:
            margin_deg = margin_m / meters_per_deg_lon(lat, settings.meters_per_deg_lon)

        for rank, (west, east) in enumerate(_pairs(crossings)):
            if margin_deg:
                west = (west[0] - margin_deg, west[1])
                east = (east[0] + margin_deg, east[1])
            if rank == len(passes):
                passes.append(deque())
            if rank % 2 == 0:
                passes[rank].extend((west, east))
            else:
                passes[rank].appendleft(west)
                passes[rank].appendleft(east)

    return [list(points) for points in passes], scanlines


def leg_capture_points(waypoints: Sequence[Point2D], interval: float) -> List[Point2D]:
    """Capture points along every leg ``(waypoints[2k], waypoints[2k + 1])``."""

    points: List[Point2D] = []
    for idx in range(0, len(waypoints) - 1, 2):
        points.extend(interpolate(waypoints[idx], waypoints[idx + 1], interval))
    return points


def generate_aligned_path(
    polygon: Sequence[Sequence[float]],
    spacing: float,
    start: Sequence[float],
    end: Optional[Sequence[float]] = None,
    margin: float = 0.0,
    *,
    options: Optional[LineOptions] = None,
    settings: Optional[PlannerSettings] = None,
    logger: Optional[LoggerLike] = None,
) -> FlightPathLine:
    """Generate a boustrophedon path over ``polygon`` with horizontal scanlines.

    ``spacing`` and ``margin`` are meters. The path begins at ``start`` and
    ends at ``end`` (``start`` when omitted); every scan leg contributes both
    endpoints to the path and to the waypoints.
    """

    if spacing <= 0:
        raise ValueError("spacing must be positive")
    options = options or LineOptions()
    log = resolve_logger(logger)

    start_pt = as_point(start)
    end_pt = as_point(end) if end is not None else start_pt
    vertices = [as_point(p) for p in polygon]
    if not vertices:
        return direct_line(start_pt, end_pt)

    passes, scanlines = group_passes(vertices, spacing, margin, settings=settings)
    if scanlines == 0:
        log.debug("Scanline coverage produced no scanlines; falling back to a direct line")
        return direct_line(start_pt, end_pt)

    path: List[Point2D] = [start_pt]
    waypoints: List[Point2D] = []
    forward = True
    for points in passes:
        for idx in range(0, len(points) - 1, 2):
            first, second = points[idx], points[idx + 1]
            if not forward:
                first, second = second, first
            path.extend((first, second))
            waypoints.extend((first, second))
            forward = not forward
    path.append(end_pt)

    interval = options.capture_interval
    capture_points: List[Point2D] = []
    if interval is not None and interval > 0:
        capture_points = leg_capture_points(waypoints, interval)

    log.debug(
        f"Scanline coverage: {scanlines} scanlines, {len(passes)} passes, "
        f"{len(waypoints)} waypoints, {len(capture_points)} capture points"
    )
    return FlightPathLine(path=path, waypoints=waypoints, capture_points=capture_points)


__all__ = [
    "direct_line",
    "scanline_crossings",
    "group_passes",
    "leg_capture_points",
    "generate_aligned_path",
]
