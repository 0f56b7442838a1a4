"""Planning utilities for coverage flight paths."""

from .coverage_planner import generate_aligned_path
from .mapping import MappingStrategy
from .oblique import ObliqueStrategy
from .rotation import generate_flight_path
from .routes import FlightPathLine, FlightPathResult
from .strip import StripStrategy

__all__ = [
    "FlightPathLine",
    "FlightPathResult",
    "generate_aligned_path",
    "generate_flight_path",
    "MappingStrategy",
    "ObliqueStrategy",
    "StripStrategy",
]
