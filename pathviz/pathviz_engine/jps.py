"""
Jump Point Search helpers.

Instead of single steps, a node's successors are the cells reached by
"jumping" in a straight line until the goal or a forced neighbor shows up.
Diagonal moves never cut corners: both orthogonal cells must be walkable.
``Space.neighbors`` does allow corner cutting, so with diagonals a JPS path
may be longer than what BFS or A* return on the same space.
Without diagonals, vertical jumps scan horizontally at every row, the way
diagonal jumps scan along their two components.

Jumps are plain loops; the only nesting is one level of straight sub-jumps.
"""

from typing import List, Optional, Tuple


def can_step(space, coord, dr: int, dc: int) -> bool:
    if not space.is_walkable(space.offset(coord, dr, dc)):
        return False
    if dr and dc:
        return (space.is_walkable(space.offset(coord, dr, 0)) and
                space.is_walkable(space.offset(coord, 0, dc)))
    return True


def has_forced_neighbor(space, coord, dr: int, dc: int) -> bool:
    """A perpendicular cell is open while the cell behind it is blocked."""
    for pr, pc in ((dc, dr), (-dc, -dr)):
        side = space.offset(coord, pr, pc)
        behind = space.offset(coord, pr - dr, pc - dc)
        if space.is_walkable(side) and not space.is_walkable(behind):
            return True
    return False


def jump(space, coord, direction: Tuple[int, int], goal, diagonal: bool,
         scanned: Optional[set] = None) -> Optional[Tuple[tuple, int]]:
    """
    Jump from ``coord`` along ``direction``.

    Returns ``(jump_point, steps)`` or None when the line runs into a wall or
    out of bounds first. Every cell passed over is added to ``scanned``.
    """
    dr, dc = direction
    current = coord
    steps = 0
    while can_step(space, current, dr, dc):
        current = space.offset(current, dr, dc)
        steps += 1
        if scanned is not None:
            scanned.add(space.key(current))

        if space.is_goal(current, goal):
            return current, steps

        if dr and dc:
            if (jump(space, current, (dr, 0), goal, diagonal, scanned) or
                    jump(space, current, (0, dc), goal, diagonal, scanned)):
                return current, steps
        elif dr and not diagonal:
            if has_forced_neighbor(space, current, dr, dc):
                return current, steps
            if (jump(space, current, (0, -1), goal, diagonal, scanned) or
                    jump(space, current, (0, 1), goal, diagonal, scanned)):
                return current, steps
        elif has_forced_neighbor(space, current, dr, dc):
            return current, steps
    return None


def expand_jump_path(space, jump_points: List[tuple], segments: dict) -> List[tuple]:
    """Turn a chain of jump points back into single lattice steps."""
    if not jump_points:
        return []
    path = [jump_points[0]]
    for point in jump_points[1:]:
        dr, dc, steps = segments[space.key(point)]
        current = path[-1]
        for _ in range(steps):
            current = space.offset(current, dr, dc)
            path.append(current)
    return path
