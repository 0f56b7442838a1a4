"""Flight path request model, planner settings and request validation."""

from __future__ import annotations

import enum
import json
import math
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .bounds import AxisBounds
from .runtime import LoggerLike, resolve_logger

Point2D = Tuple[float, float]


class MissionRequestError(RuntimeError):
    """Raised when a flight path request is invalid."""


class InvalidStartPointError(MissionRequestError):
    """Raised when the takeoff coordinate is missing or malformed."""


class InvalidSpacingError(MissionRequestError):
    """Raised when the scan spacing is not a positive number."""


class NoValidSegmentsError(MissionRequestError):
    """Raised when a strip mission has no usable corridor segment."""


class MissionType(str, enum.Enum):
    MAPPING = "mapping"
    OBLIQUE = "oblique"
    STRIP = "strip"


@dataclass(frozen=True)
class PlannerSettings:
    probe_epsilon_deg: float = 0.01
    meters_per_deg_lat: float = 111_000.0
    meters_per_deg_lon: float = 111_320.0
    max_margin_m: float = 5000.0
    max_tilt_deg: float = 89.9
    workers: int = 1

    @property
    def margin_bounds(self) -> AxisBounds:
        return AxisBounds(0.0, self.max_margin_m)

    @property
    def tilt_bounds(self) -> AxisBounds:
        return AxisBounds(0.0, self.max_tilt_deg)


@dataclass(frozen=True)
class LineOptions:
    """Per-line optional values threaded from the request down to the engine."""

    mission_type: MissionType = MissionType.MAPPING
    capture_interval: Optional[float] = None
    gimbal_pitch_deg: float = 0.0
    lateral_offset: float = 0.0
    lateral_offset_direction: Optional[float] = None

    @property
    def has_offset(self) -> bool:
        return self.lateral_offset != 0.0 and self.lateral_offset_direction is not None


@dataclass(frozen=True)
class StripSegment:
    index: int
    p1: Point2D
    p2: Point2D
    corners: Tuple[Point2D, Point2D, Point2D, Point2D]


@dataclass
class MissionRequest:
    polygon: List[Point2D]
    spacing: float
    start_point: Point2D
    end_point: Optional[Point2D] = None
    angle: float = 0.0
    margin: float = 0.0
    mission_type: MissionType = MissionType.MAPPING
    gimbal_yaw: Optional[float] = None
    lateral_offset: Optional[float] = None
    capture_interval: Optional[float] = None
    segments: List[StripSegment] = field(default_factory=list)

    def line_options(self) -> LineOptions:
        return LineOptions(mission_type=self.mission_type, capture_interval=self.capture_interval)


def load_request(path: pathlib.Path, logger: Optional[LoggerLike] = None) -> MissionRequest:
    """Read a request from a YAML or JSON file and validate it."""

    text = path.read_text()
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise MissionRequestError(f"Request file {path} could not be parsed: {exc}") from exc
    if not isinstance(data, dict):
        raise MissionRequestError("Request file must contain a top-level mapping")
    return parse_request(data, logger)


def parse_request(data: Dict[str, Any], logger: Optional[LoggerLike] = None) -> MissionRequest:
    """Validate a raw request mapping.

    Fatal problems raise before any geometry is computed; an empty polygon is
    accepted and degrades to a direct line, invalid strip segments are dropped.
    """

    log = resolve_logger(logger)

    start_point = _parse_point(data.get("startPoint"))
    if start_point is None:
        raise InvalidStartPointError("Request 'startPoint' must be a [lon, lat] pair of numbers")

    try:
        spacing = _optional_float(data, "spacing")
    except MissionRequestError as exc:
        raise InvalidSpacingError(str(exc)) from exc
    if spacing is None or spacing <= 0:
        raise InvalidSpacingError("Request 'spacing' must be a positive number of meters")

    end_raw = data.get("endPoint")
    end_point = _parse_point(end_raw) if end_raw is not None else None
    if end_raw is not None and end_point is None:
        raise MissionRequestError("Request 'endPoint' must be a [lon, lat] pair of numbers")

    mission_type = _parse_mission_type(data.get("missionType"))
    polygon = _parse_polygon(data.get("polygon"))

    segments: List[StripSegment] = []
    if mission_type is MissionType.STRIP:
        segments = _parse_segments(data.get("segments"), log)
        if not segments:
            raise NoValidSegmentsError("Strip mission requires at least one valid segment")
    elif not polygon:
        log.warning("Request polygon is empty; generating a direct start -> end line")

    return MissionRequest(
        polygon=polygon,
        spacing=spacing,
        start_point=start_point,
        end_point=end_point,
        angle=_coerce_float(data, "angle", 0.0),
        margin=_coerce_float(data, "margin", 0.0),
        mission_type=mission_type,
        gimbal_yaw=_optional_float(data, "gimbalYaw"),
        lateral_offset=_optional_float(data, "lateralOffset"),
        capture_interval=_optional_float(data, "captureInterval"),
        segments=segments,
    )


def _parse_point(value: object) -> Optional[Point2D]:
    if not isinstance(value, (list, tuple)) or len(value) < 2:
        return None
    try:
        lon, lat = float(value[0]), float(value[1])
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(lon) and math.isfinite(lat)):
        return None
    return (lon, lat)


def _parse_polygon(value: object) -> List[Point2D]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise MissionRequestError("Request 'polygon' must be a list of [lon, lat] pairs")
    polygon: List[Point2D] = []
    for idx, raw in enumerate(value):
        point = _parse_point(raw)
        if point is None:
            raise MissionRequestError(f"Polygon vertex #{idx} must be a [lon, lat] pair of numbers")
        polygon.append(point)
    return polygon


def _parse_mission_type(value: object) -> MissionType:
    if value is None:
        return MissionType.MAPPING
    try:
        return MissionType(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(t.value for t in MissionType)
        raise MissionRequestError(f"Unknown missionType '{value}' (expected one of: {allowed})") from exc


def _parse_segments(value: object, log: LoggerLike) -> List[StripSegment]:
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        return []
    segments: List[StripSegment] = []
    for idx, raw in enumerate(value):
        segment = _parse_segment(raw, idx)
        if segment is None:
            log.warning(f"Strip segment #{idx} is invalid (needs p1, p2 and 4 corners); skipping")
            continue
        segments.append(segment)
    return segments


def _parse_segment(raw: object, position: int) -> Optional[StripSegment]:
    if not isinstance(raw, dict):
        return None
    p1 = _parse_point(raw.get("p1"))
    p2 = _parse_point(raw.get("p2"))
    if p1 is None or p2 is None:
        return None
    corners_raw = raw.get("corners")
    if not isinstance(corners_raw, (list, tuple)):
        return None
    corners = [_parse_point(c) for c in corners_raw[:4]]
    if len(corners) < 4 or any(c is None for c in corners):
        return None
    try:
        index = int(raw.get("index", position))
    except (TypeError, ValueError):
        index = position
    return StripSegment(index=index, p1=p1, p2=p2, corners=(corners[0], corners[1], corners[2], corners[3]))


def _optional_float(container: Dict[str, Any], key: str) -> Optional[float]:
    value = container.get(key)
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise MissionRequestError(f"Request parameter '{key}' must be a number") from exc
    if not math.isfinite(number):
        return None
    return number


def _coerce_float(container: Dict[str, Any], key: str, default: float) -> float:
    value = _optional_float(container, key)
    return default if value is None else value


__all__ = [
    "MissionRequestError",
    "InvalidStartPointError",
    "InvalidSpacingError",
    "NoValidSegmentsError",
    "MissionType",
    "PlannerSettings",
    "LineOptions",
    "StripSegment",
    "MissionRequest",
    "load_request",
    "parse_request",
]
