from __future__ import annotations

from typing import List, Tuple

import pytest


class RecordingLogger:
    def __init__(self) -> None:
        self.records: List[Tuple[str, str]] = []

    def info(self, msg: str) -> None:
        self.records.append(("info", msg))

    def warning(self, msg: str) -> None:
        self.records.append(("warning", msg))

    def error(self, msg: str) -> None:
        self.records.append(("error", msg))

    def debug(self, msg: str) -> None:
        self.records.append(("debug", msg))

    def messages(self, level: str) -> List[str]:
        return [msg for lvl, msg in self.records if lvl == level]


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def rectangle():
    # ~222 m wide, ~100 m tall near the equator, closed GeoJSON style.
    return [(0.0, 0.0), (0.0, 0.0009), (0.002, 0.0009), (0.002, 0.0), (0.0, 0.0)]


@pytest.fixture
def u_shape():
    # Notch open to the north between lon 0.001 and 0.002.
    return [
        (0.0, 0.0),
        (0.003, 0.0),
        (0.003, 0.003),
        (0.002, 0.003),
        (0.002, 0.001),
        (0.001, 0.001),
        (0.001, 0.003),
        (0.0, 0.003),
    ]
