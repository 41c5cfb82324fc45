from typing import Dict, List, Set, Tuple


class SearchState:
    """Bookkeeping owned by a single run; created fresh and never shared."""

    def __init__(self, frontier):
        self.frontier = frontier
        self.visited: Set = set()                          # keys of expanded nodes
        self.came_from: Dict = {}                          # key -> predecessor coordinate
        self.cost: Dict = {}                               # key -> cost so far
        self.scanned: Set = set()                          # keys passed over by jumps
        self.segments: Dict[object, Tuple[int, int, int]] = {}  # key -> (dr, dc, steps)

    @property
    def visited_count(self) -> int:
        if not self.scanned:
            return len(self.visited)
        return len(self.visited | self.scanned)

    def reconstruct_path(self, space, current) -> List[tuple]:
        """Walk predecessors back from ``current`` and return start -> current."""
        path = [current]
        key = space.key(current)
        while key in self.came_from:
            current = self.came_from[key]
            path.append(current)
            key = space.key(current)
        path.reverse()
        return path
