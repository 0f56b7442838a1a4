"""Top-down mapping missions: a single coverage line."""

from __future__ import annotations

from typing import Optional

from ..plan import MissionRequest, MissionType, PlannerSettings
from ..runtime import LoggerLike, resolve_logger
from .rotation import generate_flight_path
from .routes import FlightPathResult


class MappingStrategy:
    mission_type = MissionType.MAPPING

    def __init__(self, settings: Optional[PlannerSettings] = None, logger: Optional[LoggerLike] = None) -> None:
        self._settings = settings or PlannerSettings()
        self._logger = resolve_logger(logger)

    def generate(self, request: MissionRequest) -> FlightPathResult:
        result = generate_flight_path(
            request.polygon,
            request.spacing,
            request.start_point,
            request.end_point,
            request.angle,
            request.margin,
            options=request.line_options(),
            settings=self._settings,
            logger=self._logger,
        )
        result.lines = [result.as_line()]
        return result


__all__ = ["MappingStrategy"]
