"""Path reconstruction and inspection utilities."""

from collections import deque
from typing import Dict, List, Optional, Sequence

from .maze import MazeGrid, to_logical
from .types import Coord


def reconstruct_path(predecessors: Dict[Coord, Coord], start: Coord, end: Coord) -> List[Coord]:
    """
    Walk predecessor links back from ``end`` to ``start``.

    Returns the path ordered goal first, start last. A node without a
    predecessor is not added: if the chain breaks before reaching ``start``,
    only the nodes walked so far are returned.
    """
    path = []
    current = end

    while current != start:
        parent = predecessors.get(current)
        if parent is None:
            return path
        path.append(current)
        current = parent

    path.append(start)
    return path


def path_length(path: Sequence[Coord]) -> int:
    """Number of unit steps in a path."""
    return max(len(path) - 1, 0)


def validate_path(path: Sequence[Coord], grid: MazeGrid,
                  start: Optional[Coord] = None, end: Optional[Coord] = None) -> bool:
    """
    Check that a doubled-coordinate path is walkable and connected.

    The path may be in either direction. When ``start`` and ``end`` are
    given, the path must run from ``end`` back to ``start``.
    """
    if not path:
        return False

    if end is not None and path[0] != end:
        return False
    if start is not None and path[-1] != start:
        return False

    for coord in path:
        if not grid.is_passable(*coord):
            return False

    for i in range(1, len(path)):
        d_row = abs(path[i][0] - path[i - 1][0])
        d_col = abs(path[i][1] - path[i - 1][1])
        if d_row + d_col != 1:
            return False

    return True


def bfs_distance(grid: MazeGrid, start: Coord, end: Coord) -> Optional[int]:
    """
    Breadth-first shortest distance between two doubled positions.
    Returns None when ``end`` is unreachable.
    """
    if not grid.is_passable(*start) or not grid.is_passable(*end):
        return None

    queue = deque([start])
    distance = {start: 0}

    while queue:
        current = queue.popleft()
        if current == end:
            return distance[current]
        for neighbor in grid.neighbors(current):
            if neighbor not in distance:
                distance[neighbor] = distance[current] + 1
                queue.append(neighbor)

    return None


def to_logical_path(path: Sequence[Coord]) -> List[Coord]:
    """
    Logical cells visited by a doubled path, in the same order.
    Wall-boundary positions between cells are dropped.
    """
    return [to_logical(coord) for coord in path if coord[0] % 2 == 0 and coord[1] % 2 == 0]
