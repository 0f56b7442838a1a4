"""Planar and great-circle geometry helpers working on (lon, lat) tuples."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .bounds import BoundingBox

Point = Tuple[float, float]
Polygon = List[Point]

EARTH_RADIUS_M = 6_371_000.0
METERS_PER_DEG_LAT = 111_000.0
METERS_PER_DEG_LON = 111_320.0
MIN_COS_LAT = 1e-6


@dataclass(frozen=True)
class Intersection:
    """A crossing of a probe segment with polygon edge ``edge_index``."""

    point: Point
    edge_index: int


def as_point(value: Sequence[float]) -> Point:
    return (float(value[0]), float(value[1]))


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Great-circle (haversine) distance between two (lon, lat) points in meters."""

    lat1 = math.radians(a[1])
    lat2 = math.radians(b[1])
    d_lat = math.radians(b[1] - a[1])
    d_lon = math.radians(b[0] - a[0])
    h = math.sin(d_lat / 2.0) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2.0) ** 2
    return EARTH_RADIUS_M * 2.0 * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))


def path_length(points: Sequence[Sequence[float]]) -> float:
    if len(points) < 2:
        return 0.0
    return sum(distance(points[i], points[i + 1]) for i in range(len(points) - 1))


def bounding_box(polygon: Sequence[Sequence[float]]) -> BoundingBox:
    if not polygon:
        raise ValueError("bounding box of an empty polygon is undefined")
    lons, lats = zip(*((float(p[0]), float(p[1])) for p in polygon))
    return BoundingBox(minimum=(min(lons), min(lats)), maximum=(max(lons), max(lats)))


def segment_intersection(
    p1: Sequence[float],
    p2: Sequence[float],
    p3: Sequence[float],
    p4: Sequence[float],
) -> Optional[Point]:
    """Return the crossing of segments p1-p2 and p3-p4, or None.

    Parallel and collinear segments (zero denominator) never intersect here.
    """

    x1, y1 = p1[0], p1[1]
    x2, y2 = p2[0], p2[1]
    x3, y3 = p3[0], p3[1]
    x4, y4 = p4[0], p4[1]

    denominator = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if denominator == 0:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denominator
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denominator
    if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
        return (x1 + t * (x2 - x1), y1 + t * (y2 - y1))
    return None


def polygon_intersections(
    probe: Tuple[Sequence[float], Sequence[float]],
    polygon: Sequence[Sequence[float]],
) -> List[Intersection]:
    """Intersect a probe segment with every polygon edge, closing edge included."""

    intersections: List[Intersection] = []
    count = len(polygon)
    if count < 2:
        return intersections
    for idx in range(count):
        start = polygon[idx]
        end = polygon[(idx + 1) % count]
        point = segment_intersection(probe[0], probe[1], start, end)
        if point is not None:
            intersections.append(Intersection(point, idx))
    return intersections


def normalize_polygon(polygon: Sequence[Sequence[float]]) -> Polygon:
    """Drop a trailing vertex that repeats the first one (GeoJSON-style closure)."""

    points = [as_point(p) for p in polygon]
    if len(points) > 1 and points[0] == points[-1]:
        return points[:-1]
    return points


def centroid(polygon: Sequence[Sequence[float]]) -> Point:
    """Vertex mean; used as rotation pivot so a rotation adds no translation."""

    if not polygon:
        raise ValueError("centroid of an empty polygon is undefined")
    count = float(len(polygon))
    return (sum(p[0] for p in polygon) / count, sum(p[1] for p in polygon) / count)


def rotate(point: Sequence[float], pivot: Sequence[float], angle_deg: float) -> Point:
    """Rotate ``point`` about ``pivot`` in the flat lon/lat plane."""

    if angle_deg == 0:
        return as_point(point)
    angle = math.radians(angle_deg)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    dx = point[0] - pivot[0]
    dy = point[1] - pivot[1]
    return (dx * cos_a - dy * sin_a + pivot[0], dx * sin_a + dy * cos_a + pivot[1])


def rotate_all(points: Iterable[Sequence[float]], pivot: Sequence[float], angle_deg: float) -> List[Point]:
    return [rotate(p, pivot, angle_deg) for p in points]


def meters_per_deg_lon(lat_deg: float, meters_per_deg: float = METERS_PER_DEG_LON) -> float:
    # Clamped so the poles do not divide by zero.
    return max(abs(math.cos(math.radians(lat_deg))), MIN_COS_LAT) * meters_per_deg


def offset_point(
    point: Sequence[float],
    distance_m: float,
    direction_deg: float,
    *,
    meters_per_deg_lat: float = METERS_PER_DEG_LAT,
    meters_per_deg_lon_equator: float = METERS_PER_DEG_LON,
) -> Point:
    """Move ``point`` by ``distance_m`` meters along a planar direction.

    The direction uses the same angle convention as :func:`rotate`: 0 points
    along +lon and the unit vector is rotated by ``direction_deg``.
    """

    angle = math.radians(direction_deg)
    east_m = distance_m * math.cos(angle)
    north_m = distance_m * math.sin(angle)
    lon_scale = meters_per_deg_lon(point[1], meters_per_deg_lon_equator)
    return (point[0] + east_m / lon_scale, point[1] + north_m / meters_per_deg_lat)


def interpolate(a: Sequence[float], b: Sequence[float], interval_m: float) -> List[Point]:
    """Evenly spaced points from ``a`` to ``b`` (inclusive), at most ``interval_m`` apart."""

    if interval_m <= 0:
        raise ValueError("interval_m must be positive")
    start = as_point(a)
    end = as_point(b)
    length = distance(start, end)
    steps = max(1, int(math.ceil(length / interval_m)))
    return [
        (start[0] + (end[0] - start[0]) * i / steps, start[1] + (end[1] - start[1]) * i / steps)
        for i in range(steps + 1)
    ]


__all__ = [
    "Point",
    "Polygon",
    "Intersection",
    "EARTH_RADIUS_M",
    "METERS_PER_DEG_LAT",
    "METERS_PER_DEG_LON",
    "as_point",
    "distance",
    "path_length",
    "bounding_box",
    "segment_intersection",
    "polygon_intersections",
    "normalize_polygon",
    "centroid",
    "rotate",
    "rotate_all",
    "meters_per_deg_lon",
    "offset_point",
    "interpolate",
]
