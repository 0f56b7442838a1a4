"""Oblique (tilted camera) missions built from five coverage variants."""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

from ..plan import LineOptions, MissionRequest, MissionType, PlannerSettings
from ..runtime import LoggerLike, resolve_logger
from .rotation import generate_flight_path
from .routes import FlightPathResult

# (heading delta, offset applied) in output order: top-down reference,
# forward tilt, reverse, right and left.
VARIANTS: Tuple[Tuple[float, bool], ...] = (
    (0.0, False),
    (0.0, True),
    (180.0, True),
    (90.0, True),
    (-90.0, True),
)


def normalize_heading(value: float) -> float:
    return ((value % 360.0) + 360.0) % 360.0


class ObliqueStrategy:
    mission_type = MissionType.OBLIQUE

    def __init__(self, settings: Optional[PlannerSettings] = None, logger: Optional[LoggerLike] = None) -> None:
        self._settings = settings or PlannerSettings()
        self._logger = resolve_logger(logger)

    def generate(self, request: MissionRequest) -> FlightPathResult:
        tilt_deg = self._clamp_tilt(request.gimbal_yaw)
        offset = request.lateral_offset
        if offset is None or not math.isfinite(offset):
            offset = 0.0
        self._logger.debug(f"Oblique strategy -> tilt: {tilt_deg}deg, lateral offset: {offset:.3f}m")

        jobs = [self._options(request, request.angle + delta, tilt_deg, offset, use_offset) for delta, use_offset in VARIANTS]

        def run(job: Tuple[float, LineOptions]) -> FlightPathResult:
            heading, options = job
            return generate_flight_path(
                request.polygon,
                request.spacing,
                request.start_point,
                request.end_point,
                heading,
                request.margin,
                options=options,
                settings=self._settings,
                logger=self._logger,
            )

        if self._settings.workers > 1:
            with ThreadPoolExecutor(max_workers=self._settings.workers) as pool:
                results: List[FlightPathResult] = list(pool.map(run, jobs))
        else:
            results = [run(job) for job in jobs]

        primary = results[0]
        primary.lines = [r.as_line() for r in results]
        return primary

    def _options(
        self,
        request: MissionRequest,
        heading: float,
        tilt_deg: float,
        offset: float,
        use_offset: bool,
    ) -> Tuple[float, LineOptions]:
        options = LineOptions(
            mission_type=self.mission_type,
            capture_interval=request.capture_interval,
            gimbal_pitch_deg=tilt_deg if use_offset else 0.0,
            lateral_offset=offset if use_offset else 0.0,
            lateral_offset_direction=normalize_heading(heading + 180.0) if use_offset else None,
        )
        return heading, options

    def _clamp_tilt(self, value: Optional[float]) -> float:
        if value is None or not math.isfinite(value):
            return 0.0
        return self._settings.tilt_bounds.clamp(value)


__all__ = ["ObliqueStrategy", "VARIANTS", "normalize_heading"]
