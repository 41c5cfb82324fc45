"""
Space model shared by every search algorithm.

A space is a discrete 2-D lattice: either a grid of cells addressed by
``(row, col)`` or a set of geographic points addressed by ``(lat, lng)``.
The search engine only talks to the ``Space`` interface, so one engine serves
both kinds of coordinates.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Hashable, Iterable, List, Optional, Tuple

import numpy as np

from .constants import (
    DIR4, DIR8, EMPTY, WALL, START, END, RUN_MARKINGS,
    GRID_ROWS, GRID_COLS, DEFAULT_START, DEFAULT_END, DEFAULT_WALL_DENSITY,
    GEO_STEP, GEO_GOAL_TOLERANCE, GEO_PRECISION, GEO_MARGIN,
)
from .errors import InvalidEndpointError
from .utils import round_half_up, round_point

GridCoord = Tuple[int, int]
GeoCoord = Tuple[float, float]


class Space(ABC):
    """Coordinate capability consumed by the search engine."""

    # Movement model used when the caller does not choose one
    default_diagonal = False

    @abstractmethod
    def key(self, coord) -> Hashable:
        """Stable key used for visited sets and predecessor maps."""

    @abstractmethod
    def in_bounds(self, coord) -> bool:
        pass

    @abstractmethod
    def is_blocked(self, coord) -> bool:
        pass

    @abstractmethod
    def offset(self, coord, dr: int, dc: int):
        """Coordinate one lattice step away in grid direction (dr, dc)."""

    @abstractmethod
    def is_goal(self, coord, goal) -> bool:
        pass

    @abstractmethod
    def heuristic(self, a, b) -> float:
        """Manhattan distance between two coordinates."""

    @abstractmethod
    def step_cost(self, a, b) -> float:
        pass

    @abstractmethod
    def interpolate(self, a, b) -> list:
        """Lattice points on the straight segment a -> b, excluding a."""

    @abstractmethod
    def sample_walkable(self, rng: np.random.Generator, count: int, exclude=()) -> list:
        pass

    @abstractmethod
    def snapshot(self) -> "Space":
        """Independent copy that a run may read while the caller keeps editing."""

    def is_walkable(self, coord) -> bool:
        return self.in_bounds(coord) and not self.is_blocked(coord)

    def neighbors(self, coord, include_diagonal: bool = False) -> list:
        """
        Walkable coordinates adjacent to ``coord``.

        Order is fixed: up, down, left, right, then up-left, up-right,
        down-left, down-right when diagonals are included.
        """
        directions = DIR8 if include_diagonal else DIR4
        result = []
        for dr, dc in directions:
            nxt = self.offset(coord, dr, dc)
            if self.is_walkable(nxt):
                result.append(nxt)
        return result

    def validate_endpoint(self, coord, role: str = 'start'):
        if not self.in_bounds(coord):
            raise InvalidEndpointError(role, coord, 'out of bounds')
        if self.is_blocked(coord):
            raise InvalidEndpointError(role, coord, 'blocked')


class GridSpace(Space):
    """Rectangular grid of classified cells, backed by a numpy int8 array."""

    def __init__(self, rows: int = GRID_ROWS, cols: int = GRID_COLS,
                 start: GridCoord = DEFAULT_START, end: GridCoord = DEFAULT_END,
                 cells=None):
        if cells is None:
            self.cells = np.full((rows, cols), EMPTY, dtype=np.int8)
        else:
            self.cells = np.array(cells, dtype=np.int8)
            if self.cells.ndim != 2:
                raise ValueError("cells must be a 2-D array")
            # Start/end markers are re-applied from the explicit positions
            self.cells[(self.cells == START) | (self.cells == END)] = EMPTY
        self.rows, self.cols = self.cells.shape

        start, end = tuple(start), tuple(end)
        self.validate_endpoint(start, 'start')
        self.validate_endpoint(end, 'end')
        if start == end:
            raise InvalidEndpointError('end', end, 'the start cell')
        self.start = start
        self.end = end
        self.cells[start] = START
        self.cells[end] = END

    @classmethod
    def from_rows(cls, rows, start: GridCoord, end: GridCoord) -> "GridSpace":
        """Build from rows of 0 (free) / 1 (wall)."""
        blocked = np.array(rows, dtype=bool)
        cells = np.where(blocked, WALL, EMPTY).astype(np.int8)
        return cls(start=start, end=end, cells=cells)

    def __repr__(self):
        return f"GridSpace({self.rows}x{self.cols}, start={self.start}, end={self.end})"

    # ---------- Space interface ----------
    def key(self, coord):
        return coord

    def in_bounds(self, coord) -> bool:
        r, c = coord
        return 0 <= r < self.rows and 0 <= c < self.cols

    def is_blocked(self, coord) -> bool:
        return bool(self.cells[coord[0], coord[1]] == WALL)

    def offset(self, coord, dr, dc):
        return (coord[0] + dr, coord[1] + dc)

    def is_goal(self, coord, goal) -> bool:
        return coord == goal

    def heuristic(self, a, b) -> float:
        return abs(a[0] - b[0]) + abs(a[1] - b[1])

    def step_cost(self, a, b) -> float:
        return 1

    def interpolate(self, a, b) -> list:
        steps = max(abs(b[0] - a[0]), abs(b[1] - a[1]))
        points = []
        for step in range(1, steps + 1):
            r = round_half_up(a[0] + (b[0] - a[0]) * step / steps)
            c = round_half_up(a[1] + (b[1] - a[1]) * step / steps)
            points.append((r, c))
        return points

    def sample_walkable(self, rng, count, exclude=()) -> list:
        excluded = set(exclude)
        candidates = [(int(r), int(c)) for r, c in np.argwhere(self.cells != WALL)]
        candidates = [cell for cell in candidates if cell not in excluded]
        if count <= 0 or not candidates:
            return []
        picks = rng.choice(len(candidates), size=min(count, len(candidates)), replace=False)
        return [candidates[int(i)] for i in picks]

    def snapshot(self) -> "GridSpace":
        return GridSpace(cells=self.cells.copy(), start=self.start, end=self.end)

    # ---------- classification ----------
    def cell(self, coord) -> int:
        return int(self.cells[coord[0], coord[1]])

    def mark(self, coord, kind: int) -> bool:
        """Apply a run marking; walls, start and end keep their class."""
        if not self.in_bounds(coord):
            return False
        if self.cells[coord] in (WALL, START, END):
            return False
        self.cells[coord] = kind
        return True

    def walkable_count(self) -> int:
        return int(np.count_nonzero(self.cells != WALL))

    # ---------- editing between runs ----------
    def toggle_wall(self, coord) -> int:
        current = self.cells[coord]
        if current == EMPTY or current in RUN_MARKINGS:
            self.cells[coord] = WALL
        elif current == WALL:
            self.cells[coord] = EMPTY
        return int(self.cells[coord])

    def set_wall(self, coord, blocked: bool = True) -> bool:
        if self.cells[coord] in (START, END):
            return False
        self.cells[coord] = WALL if blocked else EMPTY
        return True

    def move_start(self, coord) -> bool:
        coord = tuple(coord)
        if not self.in_bounds(coord) or coord == self.end:
            return False
        self.cells[self.start] = EMPTY
        self.start = coord
        self.cells[coord] = START
        return True

    def move_end(self, coord) -> bool:
        coord = tuple(coord)
        if not self.in_bounds(coord) or coord == self.start:
            return False
        self.cells[self.end] = EMPTY
        self.end = coord
        self.cells[coord] = END
        return True

    def clear_visualization(self):
        self.cells[np.isin(self.cells, RUN_MARKINGS)] = EMPTY

    def clear_walls(self):
        self.cells[self.cells == WALL] = EMPTY

    def generate_random_walls(self, density: float = DEFAULT_WALL_DENSITY,
                              rng: Optional[np.random.Generator] = None):
        rng = rng if rng is not None else np.random.default_rng()
        self.clear_walls()
        mask = rng.random(self.cells.shape) < density
        mask &= self.cells == EMPTY
        self.cells[mask] = WALL


@dataclass(frozen=True)
class GeoBounds:
    """Rectangular lat/lng viewport (inclusive)."""

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, lat: float, lng: float, eps: float = 1e-9) -> bool:
        return (self.min_lat - eps <= lat <= self.max_lat + eps and
                self.min_lng - eps <= lng <= self.max_lng + eps)

    @classmethod
    def around(cls, a: GeoCoord, b: GeoCoord, margin: float = GEO_MARGIN) -> "GeoBounds":
        """Viewport enclosing two points with ``margin`` degrees of padding."""
        return cls(
            min_lat=min(a[0], b[0]) - margin,
            max_lat=max(a[0], b[0]) + margin,
            min_lng=min(a[1], b[1]) - margin,
            max_lng=max(a[1], b[1]) + margin,
        )


class GeoSpace(Space):
    """
    Geographic lattice: points ``step`` degrees apart inside ``bounds``.

    Coordinates are rounded to ``precision`` decimal digits so that points
    reached along different routes share one key. "Up" is north (+lat) and
    "right" is east (+lng).
    """

    default_diagonal = True

    def __init__(self, bounds: GeoBounds, obstacles: Iterable[GeoCoord] = (),
                 step: float = GEO_STEP, goal_tolerance: float = GEO_GOAL_TOLERANCE,
                 precision: int = GEO_PRECISION):
        if step <= 0:
            raise ValueError("step must be positive")
        self.bounds = bounds
        self.step = step
        self.goal_tolerance = goal_tolerance
        self.precision = precision
        self.obstacles = frozenset(self.key(point) for point in obstacles)

    def __repr__(self):
        return f"GeoSpace({self.bounds}, obstacles={len(self.obstacles)}, step={self.step})"

    def key(self, coord):
        return round_point(coord[0], coord[1], self.precision)

    def in_bounds(self, coord) -> bool:
        return self.bounds.contains(coord[0], coord[1])

    def is_blocked(self, coord) -> bool:
        return self.key(coord) in self.obstacles

    def offset(self, coord, dr, dc):
        return round_point(coord[0] - dr * self.step, coord[1] + dc * self.step, self.precision)

    def is_goal(self, coord, goal) -> bool:
        return (abs(coord[0] - goal[0]) < self.goal_tolerance and
                abs(coord[1] - goal[1]) < self.goal_tolerance)

    def heuristic(self, a, b) -> float:
        return abs(a[0] - b[0]) + abs(a[1] - b[1])

    def step_cost(self, a, b) -> float:
        return self.heuristic(a, b)

    def interpolate(self, a, b) -> list:
        span = max(abs(b[0] - a[0]), abs(b[1] - a[1]))
        steps = max(1, math.ceil(round(span / self.step, 9)))
        return [
            round_point(a[0] + (b[0] - a[0]) * i / steps,
                        a[1] + (b[1] - a[1]) * i / steps, self.precision)
            for i in range(1, steps + 1)
        ]

    def sample_walkable(self, rng, count, exclude=()) -> list:
        excluded = {self.key(point) for point in exclude}
        picked: List[GeoCoord] = []
        attempts = max(1, count) * 50
        while len(picked) < count and attempts > 0:
            attempts -= 1
            point = self.key((rng.uniform(self.bounds.min_lat, self.bounds.max_lat),
                              rng.uniform(self.bounds.min_lng, self.bounds.max_lng)))
            if point in excluded or not self.is_walkable(point):
                continue
            excluded.add(point)
            picked.append(point)
        return picked

    def snapshot(self) -> "GeoSpace":
        return GeoSpace(self.bounds, self.obstacles, step=self.step,
                        goal_tolerance=self.goal_tolerance, precision=self.precision)

    def with_obstacles(self, points: Iterable[GeoCoord]) -> "GeoSpace":
        return GeoSpace(self.bounds, set(self.obstacles) | {self.key(p) for p in points},
                        step=self.step, goal_tolerance=self.goal_tolerance,
                        precision=self.precision)
