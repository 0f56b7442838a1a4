"""Strip (corridor) missions: per-segment rectangles stitched into one sweep."""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from pyproj import Transformer

from ..plan import MissionRequest, MissionType, NoValidSegmentsError, PlannerSettings, StripSegment
from ..runtime import LoggerLike, resolve_logger
from .oblique import normalize_heading
from .rotation import generate_flight_path
from .routes import FlightPathLine, FlightPathResult

Point2D = Tuple[float, float]


@lru_cache(maxsize=None)
def _mercator_transformer() -> Transformer:
    # Web Mercator is conformal, so bearings measured in it match local ground bearings.
    return Transformer.from_crs("EPSG:4326", "EPSG:3857", always_xy=True)


def segment_heading(p1: Sequence[float], p2: Sequence[float]) -> float:
    """Heading of ``p1 -> p2`` in degrees [0, 360), measured in projected meters."""

    transformer = _mercator_transformer()
    x1, y1 = transformer.transform(p1[0], p1[1])
    x2, y2 = transformer.transform(p2[0], p2[1])
    return normalize_heading(math.degrees(math.atan2(y2 - y1, x2 - x1)))


def segment_polygon(segment: StripSegment) -> List[Point2D]:
    left_front, left_back, right_back, right_front = segment.corners
    return [left_front, left_back, right_back, right_front, left_front]


def trim_anchors(path: Sequence[Point2D]) -> List[Point2D]:
    """Drop the segment's own start and end points before stitching."""

    if len(path) >= 2:
        return list(path[1:-1])
    return list(path)


class StripStrategy:
    mission_type = MissionType.STRIP

    def __init__(self, settings: Optional[PlannerSettings] = None, logger: Optional[LoggerLike] = None) -> None:
        self._settings = settings or PlannerSettings()
        self._logger = resolve_logger(logger)

    def generate(self, request: MissionRequest) -> FlightPathResult:
        segments = request.segments
        if not segments:
            self._logger.error("Strip mission is missing segment data")
            raise NoValidSegmentsError("Strip mission requires at least one valid segment")
        self._logger.debug(f"Strip mission -> segments: {len(segments)}")

        def run(segment: StripSegment) -> FlightPathLine:
            result = generate_flight_path(
                segment_polygon(segment),
                request.spacing,
                segment.p1,
                segment.p2,
                segment_heading(segment.p1, segment.p2),
                0.0,
                options=request.line_options(),
                settings=self._settings,
                logger=self._logger,
            )
            return result.as_line()

        if self._settings.workers > 1:
            with ThreadPoolExecutor(max_workers=self._settings.workers) as pool:
                lines: List[FlightPathLine] = list(pool.map(run, segments))
        else:
            lines = [run(segment) for segment in segments]

        merged = FlightPathLine()
        for line in lines:
            merged.path.extend(trim_anchors(line.path))
            merged.waypoints.extend(line.waypoints)
            merged.capture_points.extend(line.capture_points)

        self._logger.debug(
            f"Strip merge complete: {len(lines)} segments -> path points: {len(merged.path)}, "
            f"waypoints: {len(merged.waypoints)}, capture points: {len(merged.capture_points)}"
        )
        return FlightPathResult.from_line(merged, request.capture_interval, lines)


__all__ = ["StripStrategy", "segment_heading", "segment_polygon", "trim_anchors"]
