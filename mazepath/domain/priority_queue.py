"""Min-priority frontier for A* search."""

import heapq
from dataclasses import dataclass
from typing import Dict, List, Optional

from .types import Coord


@dataclass
class PriorityItem:
    """
    Frontier entry with comparison for tie-breaking.

    Comparison order:
    1. f_cost (lower is better)
    2. h_cost (lower is better - favor nodes closer to the goal)
    3. coord (for a total order)

    Any order among equal-cost entries still yields a least-cost path.
    """
    f_cost: float
    h_cost: float
    coord: Coord
    removed: bool = False

    def __lt__(self, other: "PriorityItem") -> bool:
        if self.f_cost != other.f_cost:
            return self.f_cost < other.f_cost
        if self.h_cost != other.h_cost:
            return self.h_cost < other.h_cost
        return self.coord < other.coord


class PriorityQueue:
    """
    Binary-heap frontier keyed by coordinate.
    Lowering the priority of a queued coordinate marks the old entry removed.
    """

    def __init__(self):
        self._heap: List[PriorityItem] = []
        self._entry_finder: Dict[Coord, PriorityItem] = {}

    def __len__(self) -> int:
        return len(self._entry_finder)

    def is_empty(self) -> bool:
        """Check if the queue is empty."""
        return not self._entry_finder

    def put(self, coord: Coord, f_cost: float, h_cost: float) -> None:
        """
        Add a coordinate or lower its priority.
        A queued coordinate with an equal or lower f cost is left alone.
        """
        existing = self._entry_finder.get(coord)
        if existing is not None:
            if existing.f_cost <= f_cost:
                return
            existing.removed = True

        entry = PriorityItem(f_cost, h_cost, coord)
        self._entry_finder[coord] = entry
        heapq.heappush(self._heap, entry)

    def get(self) -> Optional[Coord]:
        """Remove and return the coordinate with lowest f cost, or None if empty."""
        while self._heap:
            entry = heapq.heappop(self._heap)
            if not entry.removed:
                del self._entry_finder[entry.coord]
                return entry.coord
        return None

    def contains(self, coord: Coord) -> bool:
        """Check if a coordinate is waiting in the queue."""
        return coord in self._entry_finder
