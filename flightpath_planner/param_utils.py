"""Planner parameter files and the ``flightpath-planner`` command line.

Parameter files are YAML with the planner values nested under
``planner.parameters``; every key is optional and falls back to the
:class:`~flightpath_planner.core.plan.PlannerSettings` default. The CLI
turns a request file into the JSON response on stdout.
"""
from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import shlex
import sys
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .core.controller import FlightPathPlanner
from .core.kpi import export_path_csv, path_stats, stats_rows
from .core.plan import MissionRequestError, PlannerSettings
from .core.runtime import LOGGER_NAME


class SettingsError(RuntimeError):
    """Raised when the planner parameter file is invalid."""


SETTINGS_SECTION = "planner"


# ---------------------------------------------------------------------------
# Core helpers
# ---------------------------------------------------------------------------

def load_config(path: Path) -> Dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as exc:
        raise SettingsError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"{path} must contain a top-level mapping")
    return data


def section_params(config: Dict[str, Any], section: str) -> Dict[str, Any]:
    block = config.get(section, {})
    if not isinstance(block, dict):
        return {}
    params = block.get("parameters", {})
    return params if isinstance(params, dict) else {}


def settings_from_config(config: Dict[str, Any]) -> PlannerSettings:
    params = section_params(config, SETTINGS_SECTION)
    defaults = PlannerSettings()
    known = {f.name for f in dataclasses.fields(PlannerSettings)}
    unknown = sorted(set(params) - known)
    if unknown:
        raise SettingsError(f"Unknown planner parameter(s): {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    for name in known:
        raw = params.get(name, getattr(defaults, name))
        try:
            values[name] = int(raw) if name == "workers" else float(raw)
        except (TypeError, ValueError) as exc:
            raise SettingsError(f"Planner parameter '{name}' must be a number") from exc

    if values["workers"] < 1:
        raise SettingsError("Planner parameter 'workers' must be at least 1")
    for name in ("probe_epsilon_deg", "meters_per_deg_lat", "meters_per_deg_lon"):
        if values[name] <= 0:
            raise SettingsError(f"Planner parameter '{name}' must be positive")
    for name in ("max_margin_m", "max_tilt_deg"):
        if values[name] < 0:
            raise SettingsError(f"Planner parameter '{name}' cannot be negative")
    return PlannerSettings(**values)


def load_settings(path: Path | None) -> PlannerSettings:
    if path is None:
        return PlannerSettings()
    return settings_from_config(load_config(path))


# ---------------------------------------------------------------------------
# Shell emission helpers
# ---------------------------------------------------------------------------

def _quote(value: Any) -> str:
    return shlex.quote("" if value is None else str(value))


def emit_settings_shell(settings: PlannerSettings) -> str:
    return "\n".join(
        f"PLANNER_{name.upper()}={_quote(value)}" for name, value in dataclasses.asdict(settings).items()
    )


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate coverage flight paths")
    parser.add_argument("--settings", help="Path to planner params YAML")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level (default: WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate a flight path from a request file")
    generate.add_argument("--request", required=True, help="Request file (YAML or JSON)")
    generate.add_argument("--output", help="Write the JSON response here instead of stdout")
    generate.add_argument("--csv", dest="csv_dir", help="Also export the primary path as CSV into this directory")
    generate.add_argument("--stats", action="store_true", help="Log path statistics")

    settings = subparsers.add_parser("settings", help="Emit the resolved planner settings")
    settings.add_argument("--format", choices=["shell", "json"], default="json")

    return parser


def main(argv: List[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="[%(levelname)s] %(name)s: %(message)s")
    logger = logging.getLogger(LOGGER_NAME)

    try:
        settings = load_settings(Path(args.settings) if args.settings else None)
    except SettingsError as exc:
        logger.error(f"Planner settings error: {exc}")
        return 2

    if args.command == "settings":
        if args.format == "json":
            print(json.dumps(dataclasses.asdict(settings)))
        else:
            print(emit_settings_shell(settings))
        return 0

    if args.command == "generate":
        planner = FlightPathPlanner(settings, logger=logger)
        try:
            result = planner.generate_from_file(Path(args.request))
        except (MissionRequestError, OSError) as exc:
            logger.error(f"Flight path generation failed: {exc}")
            return 2

        payload = json.dumps(result.to_dict())
        if args.output:
            Path(args.output).write_text(payload + "\n")
        else:
            print(payload)
        if args.stats:
            for key, value in stats_rows(path_stats(result)):
                logger.info(f"{key}: {value}")
        if args.csv_dir:
            outfile = export_path_csv(result, Path(args.csv_dir), Path(args.request).stem)
            logger.info(f"Path exported to {outfile}")
        return 0

    return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
