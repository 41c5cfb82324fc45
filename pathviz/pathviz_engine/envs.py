from typing import Optional

import numpy as np

from .constants import EMPTY, WALL, GRID_ROWS, GRID_COLS, DEFAULT_START, DEFAULT_END, DEFAULT_WALL_DENSITY
from .space import GridSpace, GeoBounds, GeoSpace


def create_test_environment(rows: int = GRID_ROWS, cols: int = GRID_COLS,
                            start=DEFAULT_START, end=DEFAULT_END) -> GridSpace:
    """Default grid with a few rectangular wall blocks between start and end."""
    cells = np.full((rows, cols), EMPTY, dtype=np.int8)

    obstacles = [
        (2, 8, 8, 10),
        (12, 8, 17, 10),
        (6, 15, 14, 16),
        (1, 20, 5, 27),
    ]

    for start_r, start_c, end_r, end_c in obstacles:
        cells[start_r:min(end_r + 1, rows), start_c:min(end_c + 1, cols)] = WALL
    # Keep the endpoints free whatever the grid size
    for r, c in (start, end):
        if 0 <= r < rows and 0 <= c < cols:
            cells[r, c] = EMPTY
    return GridSpace(start=start, end=end, cells=cells)


def open_grid(size: int = 5) -> GridSpace:
    return GridSpace(size, size, start=(0, 0), end=(size - 1, size - 1))


def corridor_grid(length: int = 7, blocked: bool = False) -> GridSpace:
    """
    Three rows with walls above and below a single-cell corridor.
    With ``blocked`` a wall cuts the corridor in the middle.
    """
    rows = [[1] * length, [0] * length, [1] * length]
    if blocked:
        rows[1][length // 2] = 1
    return GridSpace.from_rows(rows, start=(1, 0), end=(1, length - 1))


def walled_goal_grid(size: int = 7) -> GridSpace:
    """Goal in the middle, ringed by walls on all eight sides."""
    mid = size // 2
    cells = np.full((size, size), EMPTY, dtype=np.int8)
    cells[mid - 1:mid + 2, mid - 1:mid + 2] = WALL
    cells[mid, mid] = EMPTY
    return GridSpace(start=(0, 0), end=(mid, mid), cells=cells)


def random_wall_grid(seed: Optional[int] = None, rows: int = GRID_ROWS, cols: int = GRID_COLS,
                     density: float = DEFAULT_WALL_DENSITY) -> GridSpace:
    space = GridSpace(rows, cols)
    space.generate_random_walls(density, np.random.default_rng(seed))
    return space


def sample_geo_space(start=(40.7128, -74.0060), end=(40.7168, -74.0010)) -> GeoSpace:
    """Viewport around two points with a short north-south obstacle line."""
    bounds = GeoBounds.around(start, end)
    lng = round(start[1] + 0.002, 6)
    obstacles = [(round(start[0] - 0.001 + i * 0.001, 6), lng) for i in range(4)]
    return GeoSpace(bounds, obstacles)
