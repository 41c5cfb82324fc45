"""
Goal-less traversals that reuse the search bookkeeping: a Prim-style
spanning tree and a nearest-neighbor tour over random waypoints.
"""

import math
from typing import List, Tuple

from .constants import VISITED, FRONTIER, TOUR_WAYPOINT_CAP
from .result import StepEvent


def spanning_tree(space, start, goal, pacer, state, diagonal: bool = False) -> List[Tuple[tuple, tuple]]:
    """
    Grow a tree from ``start`` over every reachable cell.

    All edges weigh 1, so the priority frontier hands them out in insertion
    order. Returns the tree edges as (from, to) pairs.
    """
    start_key = space.key(start)
    state.visited.add(start_key)
    edges = []

    def push_edges(node):
        for neighbor in space.neighbors(node, diagonal):
            if space.key(neighbor) in state.visited:
                continue
            state.frontier.enqueue((node, neighbor), 1)
            if goal is None or not space.is_goal(neighbor, goal):
                pacer.report(StepEvent(FRONTIER, neighbor, len(state.visited), len(state.frontier)))

    push_edges(start)
    while not state.frontier.is_empty():
        origin, node = state.frontier.dequeue_min()
        key = space.key(node)
        if key in state.visited:
            continue
        state.visited.add(key)
        state.came_from[key] = origin
        edges.append((origin, node))
        pacer.step(StepEvent(VISITED, node, len(state.visited), len(state.frontier)))
        push_edges(node)
    return edges


def nearest_neighbor_tour(space, start, pacer, state, rng, cap: int = TOUR_WAYPOINT_CAP) -> List[tuple]:
    """
    Sample up to ``cap`` waypoints (start included) and visit them greedily,
    always hopping to the closest unvisited one. Returns the waypoints in
    tour order.
    """
    waypoints = [start] + space.sample_walkable(rng, cap - 1, exclude=[start])
    waypoint_keys = {space.key(point) for point in waypoints}

    for point in waypoints[1:]:
        pacer.report(StepEvent(FRONTIER, point, 1, len(waypoints) - 1))
    pacer.checkpoint()

    count = len(waypoints)
    done = [False] * count
    done[0] = True
    state.visited.add(space.key(start))
    order = [0]
    current = 0

    for _ in range(1, count):
        nearest = -1
        best = math.inf
        for j in range(count):
            if done[j]:
                continue
            dist = space.heuristic(waypoints[current], waypoints[j])
            if dist < best:
                best = dist
                nearest = j

        done[nearest] = True
        order.append(nearest)
        state.visited.add(space.key(waypoints[nearest]))
        state.came_from[space.key(waypoints[nearest])] = waypoints[current]

        for cell in space.interpolate(waypoints[current], waypoints[nearest]):
            if space.key(cell) in waypoint_keys or not space.is_walkable(cell):
                continue
            pacer.report(StepEvent(VISITED, cell, len(state.visited), count - len(order)))
        pacer.checkpoint()
        current = nearest

    return [waypoints[i] for i in order]
