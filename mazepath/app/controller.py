"""Controller connecting a maze view to the path finder."""

from typing import Optional, Tuple

from PySide6.QtCore import QObject, Signal

from ..domain.maze import MazeGrid
from ..domain.pathfinder import PathFinder
from ..domain.types import Coord, QLearningConfig, SearchOutcome
from ..utils.grid_factory import generate_maze


def pixel_to_cell(x: float, y: float, w_ratio: float, h_ratio: float) -> Coord:
    """
    Map a click position to the logical cell under it.

    Args:
        x: Horizontal pixel position
        y: Vertical pixel position
        w_ratio: View width divided by the number of columns
        h_ratio: View height divided by the number of rows

    Returns:
        Logical (row, col)
    """
    if w_ratio <= 0 or h_ratio <= 0:
        raise ValueError(f"Cell ratios must be positive, got {w_ratio}x{h_ratio}")
    return (int(y / h_ratio), int(x / w_ratio))


class PathFinderController(QObject):
    """
    Controller that forwards view input to a PathFinder and reports back.

    Signals:
        maze_changed: Emitted when a new maze replaces the old one
        endpoints_changed: Emitted with (start, end) after an endpoint moves
        path_updated: Emitted with the path tuple after a successful search
        search_completed: Emitted with the SearchOutcome of every search
        error_occurred: Emitted with a message when a search or command fails
    """

    maze_changed = Signal()
    endpoints_changed = Signal(object, object)
    path_updated = Signal(object)
    search_completed = Signal(object)
    error_occurred = Signal(str)

    def __init__(self, qlearning_config: Optional[QLearningConfig] = None, parent=None):
        super().__init__(parent)
        self._pathfinder = PathFinder(qlearning_config=qlearning_config)

    # Properties

    @property
    def pathfinder(self) -> PathFinder:
        """Get the underlying path finder."""
        return self._pathfinder

    @property
    def path(self) -> Tuple[Coord, ...]:
        """Get the current path."""
        return self._pathfinder.get_path()

    # Maze management

    def load_maze(self, grid: MazeGrid):
        """Replace the current maze."""
        self._pathfinder.set_maze(grid)
        self.maze_changed.emit()
        self.endpoints_changed.emit(self._pathfinder.start, self._pathfinder.end)
        self.path_updated.emit(self.path)

    def generate_maze(self, rows: int, cols: int, seed: Optional[int] = None) -> bool:
        """Generate a new maze using recursive backtracking."""
        try:
            grid = generate_maze(rows, cols, seed=seed)
        except ValueError as e:
            self.error_occurred.emit(f"Failed to generate maze: {e}")
            return False
        self.load_maze(grid)
        return True

    # Endpoints

    def click_start(self, x: float, y: float, w_ratio: float, h_ratio: float) -> bool:
        """Set the start point from a click position."""
        return self.set_start(pixel_to_cell(x, y, w_ratio, h_ratio))

    def click_end(self, x: float, y: float, w_ratio: float, h_ratio: float) -> bool:
        """Set the end point from a click position."""
        return self.set_end(pixel_to_cell(x, y, w_ratio, h_ratio))

    def set_start(self, point: Coord) -> bool:
        """Set the start point."""
        return self._handle(self._pathfinder.set_start(point))

    def set_end(self, point: Coord) -> bool:
        """Set the end point."""
        return self._handle(self._pathfinder.set_end(point))

    # Searches

    def find_path(self) -> bool:
        """Recompute the A* path between the current endpoints."""
        return self._handle(self._pathfinder.find_path())

    def solve_with_qlearning(self, start: Optional[Coord] = None, end: Optional[Coord] = None,
                             seed: Optional[int] = None) -> bool:
        """Learn a route with Q-learning, defaulting to the current endpoints."""
        start = self._pathfinder.start if start is None else start
        end = self._pathfinder.end if end is None else end
        return self._handle(self._pathfinder.q_find_path(start, end, seed=seed))

    def _handle(self, outcome: SearchOutcome) -> bool:
        """Emit the signals for a finished search."""
        self.search_completed.emit(outcome)
        self.endpoints_changed.emit(self._pathfinder.start, self._pathfinder.end)
        if not outcome.success:
            self.error_occurred.emit(outcome.message)
            return False
        self.path_updated.emit(self.path)
        return True
