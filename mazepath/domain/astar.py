"""A* search over the doubled-resolution maze."""

from typing import Dict, List, Optional, Set

from .heuristics import get_heuristic
from .maze import MazeGrid, to_doubled
from .path import reconstruct_path
from .priority_queue import PriorityQueue
from .types import AStarConfig, Coord, SearchOutcome


class AStarSearch:
    """
    A* search with unit step costs.

    Every move is one unit along one axis, so the search walks through both
    cell positions and the wall-boundary positions between them. g is the
    accumulated step count along the discovered route. Nodes are marked
    visited when first pushed; an expanded node is never re-opened, while a
    node still on the frontier is re-parented if a strictly cheaper route
    reaches it.

    The search can be driven one expansion at a time with ``step`` (for
    animated views) or to completion with ``run_complete``.
    """

    def __init__(self, config: Optional[AStarConfig] = None):
        self.config = config or AStarConfig()
        self._heuristic = get_heuristic(self.config.heuristic)
        self.reset()

    def reset(self):
        """Reset the search state."""
        self.grid: Optional[MazeGrid] = None
        self.open_set = PriorityQueue()
        self.visited: Set[Coord] = set()
        self.closed: Set[Coord] = set()
        self.predecessors: Dict[Coord, Coord] = {}
        self.g_costs: Dict[Coord, int] = {}
        self.start: Optional[Coord] = None
        self.goal: Optional[Coord] = None
        self.current: Optional[Coord] = None
        self.nodes_explored = 0

    def initialize(self, grid: MazeGrid, start: Coord, end: Coord):
        """
        Prepare a search between two logical points.

        Raises:
            ValueError: If either point is outside the maze.
        """
        if not grid.contains_logical(start):
            raise ValueError(f"Start point {start} is out of bounds")
        if not grid.contains_logical(end):
            raise ValueError(f"End point {end} is out of bounds")

        self.reset()
        self.grid = grid
        self.start = to_doubled(start)
        self.goal = to_doubled(end)

        h_cost = self._heuristic(self.start, self.goal)
        self.g_costs[self.start] = 0
        self.open_set.put(self.start, h_cost, h_cost)
        self.visited.add(self.start)

    def step(self) -> Optional[SearchOutcome]:
        """
        Expand one frontier node.
        Returns a SearchOutcome once the search has finished, None otherwise.
        """
        if self.grid is None or self.start is None or self.goal is None:
            raise ValueError("Search not initialized")

        current = self.open_set.get()
        if current is None:
            return SearchOutcome.not_found(nodes_explored=self.nodes_explored)

        self.current = current
        self.nodes_explored += 1

        if current == self.goal:
            path = reconstruct_path(self.predecessors, self.start, self.goal)
            return SearchOutcome.ok(path, nodes_explored=self.nodes_explored)

        self.closed.add(current)
        tentative_g = self.g_costs[current] + 1
        for neighbor in self.grid.neighbors(current):
            if neighbor in self.closed:
                continue

            # A discovered node only moves if this route is strictly cheaper
            if neighbor in self.visited and tentative_g >= self.g_costs[neighbor]:
                continue

            h_cost = self._heuristic(neighbor, self.goal)
            self.g_costs[neighbor] = tentative_g
            self.predecessors[neighbor] = current
            self.visited.add(neighbor)
            self.open_set.put(neighbor, tentative_g + h_cost, h_cost)

        return None

    def run_complete(self) -> SearchOutcome:
        """Run until the goal is popped or the frontier is exhausted."""
        while True:
            outcome = self.step()
            if outcome is not None:
                return outcome

    def search(self, grid: MazeGrid, start: Coord, end: Coord) -> SearchOutcome:
        """Find a least-cost path between two logical points."""
        if not grid.contains_logical(start) or not grid.contains_logical(end):
            return SearchOutcome.invalid_point()

        self.initialize(grid, start, end)
        return self.run_complete()

    def open_set_size(self) -> int:
        """Number of nodes waiting on the frontier."""
        return len(self.open_set)

    def visited_coords(self) -> List[Coord]:
        """All doubled positions discovered so far, sorted."""
        return sorted(self.visited)


def find_path(grid: MazeGrid, start: Coord, end: Coord,
              config: Optional[AStarConfig] = None) -> SearchOutcome:
    """
    Convenience function to run A* from start to finish.

    Args:
        grid: Maze to search
        start: Logical start point
        end: Logical end point
        config: Search configuration

    Returns:
        SearchOutcome with the path ordered goal first
    """
    return AStarSearch(config).search(grid, start, end)
