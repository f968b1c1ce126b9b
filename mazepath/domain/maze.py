"""Doubled-resolution maze grid and coordinate addressing."""

from typing import Iterator, List, Optional

import numpy as np

from .types import Coord, OPEN, WALL, ACTION_DELTAS


class MazeGrid:
    """
    Wall-based maze stored at doubled resolution.

    Logical cell ``(r, c)`` lives at doubled position ``(2r, 2c)``. The odd
    positions between two neighbouring cells say whether the boundary between
    them is open. Both array dimensions are even, so the logical size is the
    array size halved along each axis.

    The grid copies its input and marks the copy read-only; replace the whole
    grid rather than editing it.
    """

    def __init__(self, cells):
        array = np.array(cells, dtype=np.uint8, copy=True)
        if array.ndim != 2:
            raise ValueError(f"Maze must be a 2D array, got {array.ndim} dimensions")
        rows, cols = array.shape
        if rows % 2 or cols % 2:
            raise ValueError(f"Maze dimensions must be even, got {rows}x{cols}")
        if np.any((array != OPEN) & (array != WALL)):
            raise ValueError("Maze cells must be 0 (open) or 1 (wall)")
        array.setflags(write=False)
        self._cells = array

    @classmethod
    def empty(cls) -> "MazeGrid":
        """A grid with no cells."""
        return cls(np.zeros((0, 0), dtype=np.uint8))

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the doubled cell array."""
        return self._cells

    @property
    def rows(self) -> int:
        """Number of doubled rows."""
        return self._cells.shape[0]

    @property
    def cols(self) -> int:
        """Number of doubled columns."""
        return self._cells.shape[1]

    @property
    def logical_rows(self) -> int:
        return self.rows // 2

    @property
    def logical_cols(self) -> int:
        return self.cols // 2

    @property
    def is_empty(self) -> bool:
        """True when the grid has no cells."""
        return self.rows == 0 or self.cols == 0

    def in_bounds(self, coord: Coord) -> bool:
        """Check if a doubled coordinate is inside the array."""
        row, col = coord
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_passable(self, row: int, col: int) -> bool:
        """True iff the doubled cell is inside the grid and open."""
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            return False
        return self._cells[row, col] == OPEN

    def contains_logical(self, point: Coord) -> bool:
        """Check if a logical point lies within the maze."""
        row, col = point
        return 0 <= row < self.logical_rows and 0 <= col < self.logical_cols

    def neighbors(self, coord: Coord) -> Iterator[Coord]:
        """Passable doubled positions one unit step away from ``coord``."""
        row, col = coord
        for d_row, d_col in ACTION_DELTAS.values():
            if self.is_passable(row + d_row, col + d_col):
                yield (row + d_row, col + d_col)

    def to_strings(self, marks: Optional[dict] = None) -> List[str]:
        """
        Render the doubled grid as text, one string per row.

        Open cells are ``.`` and walls ``#``. ``marks`` maps doubled
        coordinates to a single character drawn on top.
        """
        marks = marks or {}
        lines = []
        for row in range(self.rows):
            chars = []
            for col in range(self.cols):
                mark = marks.get((row, col))
                if mark is not None:
                    chars.append(mark)
                else:
                    chars.append("." if self._cells[row, col] == OPEN else "#")
            lines.append("".join(chars))
        return lines

    def __eq__(self, other) -> bool:
        if not isinstance(other, MazeGrid):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f"MazeGrid({self.logical_rows}x{self.logical_cols} logical)"


def to_doubled(point: Coord) -> Coord:
    """Map a logical point to its doubled-grid position."""
    return (point[0] * 2, point[1] * 2)


def to_logical(coord: Coord) -> Coord:
    """Map a doubled position back to the logical cell containing it."""
    return (coord[0] // 2, coord[1] // 2)
