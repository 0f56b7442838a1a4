"""Logger protocol injected into the planner components."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

LOGGER_NAME = "flightpath_planner"


class LoggerLike(Protocol):
    def info(self, msg: str) -> None: ...

    def warning(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...

    def debug(self, msg: str) -> None: ...


def resolve_logger(logger: Optional[LoggerLike] = None) -> LoggerLike:
    """Return ``logger`` or the package's standard library logger."""

    if logger is not None:
        return logger
    return logging.getLogger(LOGGER_NAME)


__all__ = ["LoggerLike", "LOGGER_NAME", "resolve_logger"]
