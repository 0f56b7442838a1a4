"""Planner facade dispatching a validated request to its mission strategy."""

from __future__ import annotations

import pathlib
from typing import Dict, Optional, Protocol, Union

from .plan import (
    MissionRequest,
    MissionRequestError,
    MissionType,
    PlannerSettings,
    load_request,
    parse_request,
)
from .planning.mapping import MappingStrategy
from .planning.oblique import ObliqueStrategy
from .planning.routes import FlightPathResult
from .planning.strip import StripStrategy
from .runtime import LoggerLike, resolve_logger


class MissionStrategy(Protocol):
    mission_type: MissionType

    def generate(self, request: MissionRequest) -> FlightPathResult: ...


class FlightPathPlanner:
    def __init__(
        self,
        settings: Optional[PlannerSettings] = None,
        *,
        logger: Optional[LoggerLike] = None,
    ) -> None:
        self._settings = settings or PlannerSettings()
        self._logger = resolve_logger(logger)
        self._mapping = MappingStrategy(self._settings, self._logger)
        self._oblique = ObliqueStrategy(self._settings, self._logger)
        self._strip = StripStrategy(self._settings, self._logger)

    @property
    def settings(self) -> PlannerSettings:
        return self._settings

    def strategy_for(self, mission_type: MissionType) -> MissionStrategy:
        if mission_type is MissionType.MAPPING:
            return self._mapping
        if mission_type is MissionType.OBLIQUE:
            return self._oblique
        if mission_type is MissionType.STRIP:
            return self._strip
        raise MissionRequestError(f"Unsupported mission type: {mission_type!r}")

    def generate(self, request: MissionRequest) -> FlightPathResult:
        strategy = self.strategy_for(request.mission_type)
        self._logger.info(
            f"Generating {request.mission_type.value} flight path "
            f"(spacing={request.spacing:.1f}m angle={request.angle:.1f}deg margin={request.margin:.1f}m)"
        )
        result = strategy.generate(request)
        self._logger.info(
            f"Flight path ready: {len(result.path)} path points, {len(result.waypoints)} waypoints, "
            f"{len(result.lines)} line(s)"
        )
        return result

    def generate_from_file(self, request_path: Union[str, pathlib.Path]) -> FlightPathResult:
        path = pathlib.Path(request_path)
        try:
            request = load_request(path, self._logger)
        except MissionRequestError as exc:
            self._logger.error(f"Flight path request error: {exc}")
            raise
        return self.generate(request)

    def generate_dict(self, payload: Dict[str, object]) -> Dict[str, object]:
        """Validate a raw request mapping and return the response mapping."""

        try:
            request = parse_request(payload, self._logger)
        except MissionRequestError as exc:
            self._logger.error(f"Flight path request error: {exc}")
            raise
        return self.generate(request).to_dict()


__all__ = ["FlightPathPlanner", "MissionStrategy"]
