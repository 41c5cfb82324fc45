"""
Search engine: one exploration loop shared by every path algorithm.

The algorithms differ only in their frontier, their priority function and
how they relax a successor; ``STRATEGIES`` holds those differences. The
goal-less traversals (``mst``, ``tsp``) live in ``traversal``.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .constants import DIR4, DIR8, VISITED, FRONTIER
from .errors import SearchCancelled
from .frontier import PriorityFrontier, FifoFrontier, LifoFrontier
from .jps import jump, expand_jump_path
from .pacer import Pacer, ACTIVE_STATES
from .registry import get_algorithm
from .result import RunState, SearchResult, StepEvent
from .search_state import SearchState
from .traversal import spanning_tree, nearest_neighbor_tour

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Strategy:
    frontier: type
    relax: str              # 'first' | 'always' | 'improve'
    use_g: bool = False
    use_h: bool = False
    jumps: bool = False

    def priority(self, g: float, h: float) -> float:
        return (g if self.use_g else 0) + (h if self.use_h else 0)


STRATEGIES = {
    'bfs': _Strategy(FifoFrontier, 'first'),
    'dfs': _Strategy(LifoFrontier, 'always'),
    'dijkstra': _Strategy(PriorityFrontier, 'improve', use_g=True),
    'astar': _Strategy(PriorityFrontier, 'improve', use_g=True, use_h=True),
    'greedy': _Strategy(PriorityFrontier, 'improve', use_h=True),
    'jps': _Strategy(PriorityFrontier, 'improve', use_g=True, use_h=True, jumps=True),
    'mst': _Strategy(PriorityFrontier, 'first'),
    'tsp': _Strategy(FifoFrontier, 'first'),
}


class SearchEngine:
    """Runs one algorithm over a space snapshot and reports through a pacer."""

    def run(self, space, start, goal=None, algorithm: str = 'astar',
            pacer: Optional[Pacer] = None, diagonal: Optional[bool] = None,
            reveal_path: bool = False, seed: Optional[int] = None) -> SearchResult:
        """
        Search ``space`` from ``start`` with ``algorithm``.

        ``diagonal`` defaults to the space's own movement model. With diagonals,
        plain neighbour expansion may cut a corner between two walls, while
        'jps' only steps diagonally when both orthogonal cells are open, so its
        path can be longer than the A* path on the same space.
        """
        info = get_algorithm(algorithm)
        start = tuple(start)
        space.validate_endpoint(start, 'start')
        if goal is not None:
            goal = tuple(goal)
            space.validate_endpoint(goal, 'goal')
        elif info.finds_path:
            raise ValueError(f"algorithm '{algorithm}' needs a goal")

        pacer = pacer if pacer is not None else Pacer.immediate()
        diagonal = space.default_diagonal if diagonal is None else diagonal
        strategy = STRATEGIES[algorithm]
        state = SearchState(strategy.frontier())

        logger.debug("Running %s from %s to %s (diagonal=%s) on %r",
                     algorithm, start, goal, diagonal, space)
        t0 = time.perf_counter()
        edges = ()
        cost = None
        try:
            if pacer.state not in ACTIVE_STATES:
                pacer.begin()
            pacer.check()

            if algorithm == 'mst':
                edges = tuple(spanning_tree(space, start, goal, pacer, state, diagonal))
                path = []
            elif algorithm == 'tsp':
                rng = np.random.default_rng(seed)
                path = nearest_neighbor_tour(space, start, pacer, state, rng)
            else:
                path = self._search(space, start, goal, strategy, pacer, state, diagonal)
                if path:
                    cost = state.cost.get(space.key(path[-1]))

            elapsed_ms = (time.perf_counter() - t0) * 1000.0
            if reveal_path and path and info.finds_path:
                pacer.reveal_path(path)
            pacer.complete()
        except SearchCancelled:
            elapsed_ms = (time.perf_counter() - t0) * 1000.0
            logger.info("%s cancelled after %d visited nodes", algorithm, state.visited_count)
            return SearchResult(algorithm=algorithm, path=(), visited=state.visited_count,
                                elapsed_ms=elapsed_ms, status=RunState.CANCELLED)

        result = SearchResult(algorithm=algorithm, path=tuple(path),
                              visited=state.visited_count, elapsed_ms=elapsed_ms,
                              edges=edges, cost=cost)
        logger.info("%s finished: visited=%d path=%d time=%.2fms",
                    algorithm, result.visited, result.path_length, elapsed_ms)
        return result

    def _successors(self, space, current, goal, strategy, state, diagonal):
        """Yield (successor, move cost, jump segment or None)."""
        if not strategy.jumps:
            for nxt in space.neighbors(current, diagonal):
                yield nxt, space.step_cost(current, nxt), None
            return
        for dr, dc in (DIR8 if diagonal else DIR4):
            found = jump(space, current, (dr, dc), goal, diagonal, state.scanned)
            if found is None:
                continue
            point, steps = found
            unit = space.step_cost(current, space.offset(current, dr, dc))
            yield point, steps * unit, (dr, dc, steps)

    def _search(self, space, start, goal, strategy, pacer, state, diagonal):
        start_key = space.key(start)
        state.cost[start_key] = 0
        state.frontier.enqueue(start, strategy.priority(0, space.heuristic(start, goal)))

        while not state.frontier.is_empty():
            current = state.frontier.dequeue()
            key = space.key(current)
            if key in state.visited:
                continue                      # stale entry
            state.visited.add(key)
            if key != start_key:
                pacer.step(StepEvent(VISITED, current, state.visited_count, len(state.frontier)))

            if space.is_goal(current, goal):
                path = state.reconstruct_path(space, current)
                if strategy.jumps:
                    path = expand_jump_path(space, path, state.segments)
                return path

            for nxt, move_cost, segment in self._successors(space, current, goal, strategy,
                                                            state, diagonal):
                nxt_key = space.key(nxt)
                if nxt_key in state.visited:
                    continue
                g = state.cost[key] + move_cost
                if strategy.relax == 'first' and nxt_key in state.cost:
                    continue
                if strategy.relax == 'improve' and g >= state.cost.get(nxt_key, float('inf')):
                    continue

                state.came_from[nxt_key] = current
                state.cost[nxt_key] = g
                if segment is not None:
                    state.segments[nxt_key] = segment
                state.frontier.enqueue(nxt, strategy.priority(g, space.heuristic(nxt, goal)))
                if not space.is_goal(nxt, goal):
                    pacer.report(StepEvent(FRONTIER, nxt, state.visited_count, len(state.frontier)))
        return []
