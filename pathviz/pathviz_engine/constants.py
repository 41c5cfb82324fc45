# --- Cell classification (grid mode) ---
EMPTY = 0        # Walkable, untouched
WALL = 1         # Blocked
START = 2        # Search origin
END = 3          # Search goal
VISITED = 4      # Expanded by the search
FRONTIER = 5     # Discovered, waiting for expansion
PATH = 6         # Part of the final path

CELL_NAMES = {
    EMPTY: 'empty',
    WALL: 'wall',
    START: 'start',
    END: 'end',
    VISITED: 'visited',
    FRONTIER: 'frontier',
    PATH: 'path',
}

# Markings a run adds on top of the edited grid
RUN_MARKINGS = (VISITED, FRONTIER, PATH)

# --- Directions (dr, dc); the order fixes tie-breaking in every algorithm ---
DIR4 = [
    (-1, 0),   # up
    (1, 0),    # down
    (0, -1),   # left
    (0, 1),    # right
]

DIR8 = DIR4 + [
    (-1, -1),  # up-left
    (-1, 1),   # up-right
    (1, -1),   # down-left
    (1, 1),    # down-right
]

# --- Pacing ---
DEFAULT_SPEED = 50
MIN_SPEED = 1
MAX_SPEED = 200
TIME_UNIT = 0.001            # seconds per delay unit
PAUSE_POLL_INTERVAL = 0.1    # seconds between pause re-checks

# --- Default grid ---
GRID_ROWS = 20
GRID_COLS = 30
DEFAULT_START = (10, 5)
DEFAULT_END = (10, 24)
DEFAULT_WALL_DENSITY = 0.3

# --- Geographic mode ---
GEO_STEP = 0.001             # degrees between neighbouring lattice points
GEO_GOAL_TOLERANCE = 0.0005  # degrees on each axis
GEO_PRECISION = 6            # decimal digits kept in coordinate keys
GEO_MARGIN = 0.02            # viewport padding around start/end

# --- Tour heuristic ---
TOUR_WAYPOINT_CAP = 8        # including the start
