"""Path finder owning the current maze, endpoints and path."""

from typing import Optional, Tuple

from ..utils.rng import SeededRNG
from .astar import AStarSearch
from .maze import MazeGrid, to_doubled
from .qlearning import QLearningSearch
from .types import AStarConfig, Coord, QLearningConfig, SearchOutcome, UNSET


class PathFinder:
    """
    Routes between two user-selected cells of the current maze.

    Setting an endpoint recomputes the A* path when the other endpoint is
    already set. A failed recompute puts the endpoint back to its previous
    value and leaves the stored path alone. Q-learning runs only on request
    through ``q_find_path``.

    Not safe for concurrent mutation; use one instance per caller.
    """

    def __init__(self, astar_config: Optional[AStarConfig] = None,
                 qlearning_config: Optional[QLearningConfig] = None):
        self.astar_config = astar_config or AStarConfig()
        self.qlearning_config = qlearning_config or QLearningConfig()
        self._maze = MazeGrid.empty()
        self._start: Coord = UNSET
        self._end: Coord = UNSET
        self._path: Tuple[Coord, ...] = ()

    # Properties

    @property
    def maze(self) -> MazeGrid:
        """The current maze."""
        return self._maze

    @property
    def start(self) -> Coord:
        """Logical start point, or UNSET."""
        return self._start

    @property
    def end(self) -> Coord:
        """Logical end point, or UNSET."""
        return self._end

    @property
    def doubled_start(self) -> Coord:
        """Start point in doubled coordinates, or UNSET."""
        return to_doubled(self._start) if self._is_set(self._start) else UNSET

    @property
    def doubled_end(self) -> Coord:
        """End point in doubled coordinates, or UNSET."""
        return to_doubled(self._end) if self._is_set(self._end) else UNSET

    # Maze management

    def set_maze(self, grid: MazeGrid):
        """Replace the maze, clearing endpoints and path."""
        self.reset()
        self._maze = grid

    def reset(self):
        """Clear endpoints and path, keeping the maze."""
        self._start = UNSET
        self._end = UNSET
        self._path = ()

    # Endpoints

    def set_start(self, point: Coord) -> SearchOutcome:
        """
        Set the start point and recompute the path if the end is set.
        Passing UNSET clears the start without searching.
        """
        point = tuple(point)
        if point != UNSET and not self._maze.contains_logical(point):
            return SearchOutcome.invalid_point()

        previous = self._start
        self._start = point
        outcome = self.find_path()
        if not outcome.success:
            self._start = previous
        return outcome

    def set_end(self, point: Coord) -> SearchOutcome:
        """
        Set the end point and recompute the path if the start is set.
        Passing UNSET clears the end without searching.
        """
        point = tuple(point)
        if point != UNSET and not self._maze.contains_logical(point):
            return SearchOutcome.invalid_point()

        previous = self._end
        self._end = point
        outcome = self.find_path()
        if not outcome.success:
            self._end = previous
        return outcome

    # Searches

    def find_path(self) -> SearchOutcome:
        """
        Run A* between the current endpoints.
        Does nothing unless a maze is loaded and both endpoints are set.
        """
        if self._maze.is_empty or not (self._is_set(self._start) and self._is_set(self._end)):
            return SearchOutcome.ok(list(self._path))

        outcome = AStarSearch(self.astar_config).search(self._maze, self._start, self._end)
        if outcome.success:
            self._path = tuple(outcome.path)
        return outcome

    def q_find_path(self, start: Coord, end: Coord, seed: Optional[int] = None,
                    rng: Optional[SeededRNG] = None) -> SearchOutcome:
        """
        Learn a route between two logical points with Q-learning.

        Both points become the current endpoints. The stored path is replaced
        only when a route is found.
        """
        start, end = tuple(start), tuple(end)
        if not (self._maze.contains_logical(start) and self._maze.contains_logical(end)):
            return SearchOutcome.invalid_point()

        self._start = start
        self._end = end

        outcome = QLearningSearch(self.qlearning_config, seed=seed, rng=rng).search(
            self._maze, start, end
        )
        if outcome.success:
            self._path = tuple(outcome.path)
        return outcome

    def get_path(self) -> Tuple[Coord, ...]:
        """Last computed path in doubled coordinates, goal first."""
        return self._path

    def _is_set(self, point: Coord) -> bool:
        return point != UNSET and self._maze.contains_logical(point)
