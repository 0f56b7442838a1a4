"""Small helpers to summarise and export generated flight paths."""

from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .geometry import path_length
from .planning.routes import FlightPathResult


@dataclass(frozen=True)
class PathStats:
    path_length_m: float
    path_points: int
    waypoints: int
    capture_points: int
    lines: int


def path_stats(result: FlightPathResult) -> PathStats:
    return PathStats(
        path_length_m=path_length(result.path),
        path_points=len(result.path),
        waypoints=len(result.waypoints),
        capture_points=len(result.capture_points),
        lines=len(result.lines),
    )


def stats_rows(stats: PathStats) -> list[tuple[str, object]]:
    return [
        ("path_length_m", f"{stats.path_length_m:.2f}"),
        ("path_points", stats.path_points),
        ("waypoints", stats.waypoints),
        ("capture_points", stats.capture_points),
        ("lines", stats.lines),
    ]


def export_path_csv(result: FlightPathResult, directory: Path, stem: str) -> Path:
    """Write the primary path as ``index,lon,lat,waypoint`` rows."""

    directory.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    output = directory / f"{stem}_{timestamp}.csv"
    waypoint_set = set(result.waypoints)
    with output.open("w", newline="") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(["index", "lon", "lat", "waypoint"])
        for idx, (lon, lat) in enumerate(result.path):
            writer.writerow([idx, f"{lon:.8f}", f"{lat:.8f}", int((lon, lat) in waypoint_set)])
    return output


__all__ = [
    "PathStats",
    "path_stats",
    "stats_rows",
    "export_path_csv",
]
