"""Core planning logic (no I/O beyond the explicit file loaders)."""

from .bounds import AxisBounds, BoundingBox
from .controller import FlightPathPlanner
from .kpi import PathStats, export_path_csv, path_stats
from .plan import (
    InvalidSpacingError,
    InvalidStartPointError,
    LineOptions,
    MissionRequest,
    MissionRequestError,
    MissionType,
    NoValidSegmentsError,
    PlannerSettings,
    StripSegment,
    load_request,
    parse_request,
)
from .planning import FlightPathLine, FlightPathResult, generate_flight_path

__all__ = [
    "FlightPathPlanner",
    "FlightPathLine",
    "FlightPathResult",
    "generate_flight_path",
    "MissionRequest",
    "MissionRequestError",
    "InvalidStartPointError",
    "InvalidSpacingError",
    "NoValidSegmentsError",
    "MissionType",
    "PlannerSettings",
    "LineOptions",
    "StripSegment",
    "load_request",
    "parse_request",
    "AxisBounds",
    "BoundingBox",
    "PathStats",
    "path_stats",
    "export_path_csv",
]
