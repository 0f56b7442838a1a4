"""Coverage flight path planner for polygonal survey areas."""

from .core import (
    FlightPathPlanner,
    FlightPathResult,
    MissionRequest,
    MissionRequestError,
    MissionType,
    PlannerSettings,
    load_request,
    parse_request,
)

__all__ = [
    "FlightPathPlanner",
    "FlightPathResult",
    "MissionRequest",
    "MissionRequestError",
    "MissionType",
    "PlannerSettings",
    "load_request",
    "parse_request",
]
