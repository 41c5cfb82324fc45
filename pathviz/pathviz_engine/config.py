"""
Per-run configuration.

Defaults come from ``constants``; a ``RunConfig`` groups the options one run
needs so the console runner, the viewer and the tests build runs the same way.
"""

from dataclasses import dataclass, replace
from typing import Optional

from .constants import (
    DEFAULT_SPEED, MIN_SPEED, MAX_SPEED, TIME_UNIT, PAUSE_POLL_INTERVAL,
)
from .registry import get_algorithm


def clamp_speed(speed: int) -> int:
    return max(MIN_SPEED, min(MAX_SPEED, int(speed)))


@dataclass(frozen=True)
class RunConfig:
    algorithm: str = 'astar'
    speed: int = DEFAULT_SPEED
    diagonal: Optional[bool] = None    # None: the space's own movement model
    reveal_path: bool = True
    time_unit: float = TIME_UNIT
    poll_interval: float = PAUSE_POLL_INTERVAL
    seed: Optional[int] = None         # tour waypoint sampling

    def __post_init__(self):
        get_algorithm(self.algorithm)
        if not MIN_SPEED <= self.speed <= MAX_SPEED:
            raise ValueError(f"speed must be between {MIN_SPEED} and {MAX_SPEED}")
        if self.time_unit < 0:
            raise ValueError("time_unit must be >= 0")
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be > 0")

    def with_speed(self, speed: int) -> "RunConfig":
        return replace(self, speed=clamp_speed(speed))

    def with_algorithm(self, algorithm: str) -> "RunConfig":
        return replace(self, algorithm=algorithm)

    def with_diagonal(self, diagonal: Optional[bool]) -> "RunConfig":
        return replace(self, diagonal=diagonal)


# Runs in tests and headless comparisons: no animation delay
HEADLESS = RunConfig(reveal_path=False, time_unit=0.0)
