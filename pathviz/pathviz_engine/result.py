from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .constants import CELL_NAMES


class RunState(Enum):
    IDLE = 'idle'
    RUNNING = 'running'
    PAUSED = 'paused'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


@dataclass(frozen=True)
class StepEvent:
    """One classification delta handed to the progress callback."""
    kind: int                      # VISITED, FRONTIER or PATH
    coord: tuple
    visited: int = 0               # nodes visited so far
    frontier: int = 0              # current frontier size
    path_length: int = 0           # path nodes revealed so far

    @property
    def kind_name(self) -> str:
        return CELL_NAMES.get(self.kind, str(self.kind))


@dataclass(frozen=True)
class SearchResult:
    """
    Outcome of one run.

    ``path`` runs from start to goal and is empty when the goal is unreachable
    or the algorithm is a traversal without a goal. ``visited`` includes the
    start node. ``edges`` is only filled by the spanning-tree traversal.
    """
    algorithm: str
    path: Tuple[tuple, ...]
    visited: int
    elapsed_ms: float
    status: RunState = RunState.COMPLETED
    edges: Tuple[Tuple[tuple, tuple], ...] = field(default_factory=tuple)
    cost: Optional[float] = None

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def path_length(self) -> int:
        return len(self.path)

    @property
    def completed(self) -> bool:
        return self.status is RunState.COMPLETED

    @property
    def cancelled(self) -> bool:
        return self.status is RunState.CANCELLED

    def summary(self) -> dict:
        return {
            'algorithm': self.algorithm,
            'status': self.status.value,
            'nodes_visited': self.visited,
            'path_length': self.path_length,
            'runtime_ms': round(self.elapsed_ms, 2),
        }
