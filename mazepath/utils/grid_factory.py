"""Grid factory for building doubled-resolution mazes."""

from typing import List, Optional, Sequence

import numpy as np

from ..domain.maze import MazeGrid, to_doubled
from ..domain.types import Coord, OPEN, WALL
from .rng import SeededRNG


def _walled_array(rows: int, cols: int) -> np.ndarray:
    """Doubled array with every cell open and every boundary closed."""
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Maze dimensions must be positive, got {rows}x{cols}")
    cells = np.full((rows * 2, cols * 2), WALL, dtype=np.uint8)
    cells[0::2, 0::2] = OPEN
    return cells


def create_open_maze(rows: int, cols: int) -> MazeGrid:
    """
    Create a maze with no internal walls.

    Args:
        rows: Logical row count (must be > 0)
        cols: Logical column count (must be > 0)

    Returns:
        MazeGrid whose only walls are the outer edge and the corner posts

    Raises:
        ValueError: If rows or cols <= 0
    """
    cells = _walled_array(rows, cols)
    # Boundaries between horizontal neighbours
    cells[0::2, 1:-1:2] = OPEN
    # Boundaries between vertical neighbours
    cells[1:-1:2, 0::2] = OPEN
    return MazeGrid(cells)


def maze_from_walls(right_walls: Sequence[Sequence[int]],
                    bottom_walls: Sequence[Sequence[int]]) -> MazeGrid:
    """
    Build a maze from per-cell wall flags.

    ``right_walls[r][c]`` closes the boundary between (r, c) and (r, c + 1);
    ``bottom_walls[r][c]`` closes the one between (r, c) and (r + 1, c).
    Flags on the last column or row are ignored: the outer edge is always
    closed.
    """
    right = np.asarray(right_walls, dtype=np.uint8)
    bottom = np.asarray(bottom_walls, dtype=np.uint8)
    if right.ndim != 2 or right.shape != bottom.shape:
        raise ValueError(
            f"Wall matrices must be 2D and the same shape, got {right.shape} and {bottom.shape}"
        )

    rows, cols = right.shape
    cells = _walled_array(rows, cols)
    cells[0::2, 1:-1:2] = np.where(right[:, :-1] != 0, WALL, OPEN)
    cells[1:-1:2, 0::2] = np.where(bottom[:-1, :] != 0, WALL, OPEN)
    return MazeGrid(cells)


def maze_from_strings(lines: Sequence[str]) -> MazeGrid:
    """
    Build a maze from text rows of the doubled grid.
    ``0`` or ``.`` is open, ``1`` or ``#`` is a wall.
    """
    mapping = {"0": OPEN, ".": OPEN, "1": WALL, "#": WALL}
    rows = []
    for line in lines:
        try:
            rows.append([mapping[char] for char in line.strip()])
        except KeyError as e:
            raise ValueError(f"Unexpected maze character {e.args[0]!r}") from None

    if not rows:
        return MazeGrid.empty()
    if any(len(row) != len(rows[0]) for row in rows):
        raise ValueError("Maze rows must all have the same length")
    return MazeGrid(np.array(rows, dtype=np.uint8))


def enclose_cell(grid: MazeGrid, point: Coord) -> MazeGrid:
    """Return a copy of ``grid`` with all four sides of a logical cell closed."""
    if not grid.contains_logical(point):
        raise ValueError(f"Point {point} is outside the maze")

    cells = grid.cells.copy()
    row, col = to_doubled(point)
    for d_row, d_col in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        if grid.in_bounds((row + d_row, col + d_col)):
            cells[row + d_row, col + d_col] = WALL
    return MazeGrid(cells)


def generate_maze(rows: int, cols: int, seed: Optional[int] = None,
                  extra_openings: int = 0) -> MazeGrid:
    """
    Generate a maze using the recursive backtracking algorithm.

    The result is a perfect maze (exactly one route between any two cells)
    unless ``extra_openings`` asks for that many additional interior walls
    to be knocked out, which creates loops.

    Args:
        rows: Logical row count
        cols: Logical column count
        seed: Random seed for reproducibility
        extra_openings: Interior walls to remove after carving

    Returns:
        Generated MazeGrid
    """
    rng = SeededRNG(seed)
    cells = _walled_array(rows, cols)

    start = (0, 0)
    stack: List[Coord] = [start]
    visited = {start}
    directions = [(0, 1), (1, 0), (0, -1), (-1, 0)]

    while stack:
        current = stack[-1]

        neighbors = []
        for d_row, d_col in directions:
            next_cell = (current[0] + d_row, current[1] + d_col)
            if (0 <= next_cell[0] < rows and 0 <= next_cell[1] < cols and
                    next_cell not in visited):
                neighbors.append((next_cell, (current[0] * 2 + d_row, current[1] * 2 + d_col)))

        if neighbors:
            next_cell, wall_between = rng.choice(neighbors)
            cells[wall_between] = OPEN
            visited.add(next_cell)
            stack.append(next_cell)
        else:
            # Backtrack
            stack.pop()

    if extra_openings > 0:
        _open_random_walls(cells, extra_openings, rng)

    return MazeGrid(cells)


def _open_random_walls(cells: np.ndarray, count: int, rng: SeededRNG) -> None:
    """Open up to ``count`` closed interior boundaries between two cells."""
    height, width = cells.shape
    candidates = [
        (row, col)
        for row in range(height - 1)
        for col in range(width - 1)
        if (row + col) % 2 == 1 and cells[row, col] == WALL
    ]
    rng.shuffle(candidates)
    for coord in candidates[:count]:
        cells[coord] = OPEN
