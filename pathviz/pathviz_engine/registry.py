"""
Algorithm registry: the closed set of search strategies and their metadata.

The engine dispatches on these ids and the viewer lists them in its panel.
"""

from dataclasses import dataclass
from typing import Dict, List

from .errors import UnknownAlgorithmError


@dataclass(frozen=True)
class AlgorithmInfo:
    id: str
    name: str
    description: str
    time_complexity: str
    space_complexity: str
    guarantees_optimal: bool
    finds_path: bool = True        # False for the goal-less traversals


ALGORITHMS: Dict[str, AlgorithmInfo] = {
    'bfs': AlgorithmInfo(
        id='bfs', name='Breadth-First Search',
        description='Explores level by level, guarantees shortest path',
        time_complexity='O(V+E)', space_complexity='O(V)',
        guarantees_optimal=True,
    ),
    'dfs': AlgorithmInfo(
        id='dfs', name='Depth-First Search',
        description='Explores deeply before backtracking',
        time_complexity='O(V+E)', space_complexity='O(V)',
        guarantees_optimal=False,
    ),
    'dijkstra': AlgorithmInfo(
        id='dijkstra', name="Dijkstra's Algorithm",
        description='Guarantees shortest path by exploring uniformly',
        time_complexity='O((V+E)log V)', space_complexity='O(V)',
        guarantees_optimal=True,
    ),
    'astar': AlgorithmInfo(
        id='astar', name='A* Algorithm',
        description='Uses heuristics to find the shortest path efficiently',
        time_complexity='O(b^d)', space_complexity='O(b^d)',
        guarantees_optimal=True,
    ),
    'greedy': AlgorithmInfo(
        id='greedy', name='Greedy Best-First',
        description='Fastest but may not find optimal path',
        time_complexity='O(b^d)', space_complexity='O(b^d)',
        guarantees_optimal=False,
    ),
    'jps': AlgorithmInfo(
        id='jps', name='Jump Point Search',
        description='A* that jumps along straight lines, pruning symmetric paths',
        time_complexity='O(b^d)', space_complexity='O(b^d)',
        guarantees_optimal=True,
    ),
    'mst': AlgorithmInfo(
        id='mst', name='Minimum Spanning Tree',
        description="Grows a Prim-style tree over every reachable cell",
        time_complexity='O(E log V)', space_complexity='O(V)',
        guarantees_optimal=False, finds_path=False,
    ),
    'tsp': AlgorithmInfo(
        id='tsp', name='Nearest-Neighbor Tour',
        description='Visits random waypoints, always hopping to the nearest one',
        time_complexity='O(n^2)', space_complexity='O(n)',
        guarantees_optimal=False, finds_path=False,
    ),
}


def get_algorithm(name: str) -> AlgorithmInfo:
    if name not in ALGORITHMS:
        raise UnknownAlgorithmError(name, ALGORITHMS.keys())
    return ALGORITHMS[name]


def list_algorithms() -> List[str]:
    return list(ALGORITHMS.keys())
