"""Heuristic functions for A* search over the doubled grid."""

import math
from typing import Callable, Dict

from .types import Coord, HeuristicId


def manhattan_distance(start: Coord, target: Coord) -> float:
    """
    Manhattan (L1) distance heuristic.
    Admissible and consistent for unit-cost 4-directional movement.
    """
    return abs(start[0] - target[0]) + abs(start[1] - target[1])


def euclidean_distance(start: Coord, target: Coord) -> float:
    """Euclidean (L2) distance. Admissible but weaker than Manhattan here."""
    d_row = start[0] - target[0]
    d_col = start[1] - target[1]
    return math.sqrt(d_row * d_row + d_col * d_col)


def chebyshev_distance(start: Coord, target: Coord) -> float:
    """Chebyshev (L-inf) distance. Admissible but weaker than Manhattan here."""
    return max(abs(start[0] - target[0]), abs(start[1] - target[1]))


HEURISTICS: Dict[HeuristicId, Callable[[Coord, Coord], float]] = {
    "manhattan": manhattan_distance,
    "euclidean": euclidean_distance,
    "chebyshev": chebyshev_distance,
}


def get_heuristic(heuristic_id: HeuristicId) -> Callable[[Coord, Coord], float]:
    """Get heuristic function by ID."""
    try:
        return HEURISTICS[heuristic_id]
    except KeyError:
        raise ValueError(f"Unknown heuristic: {heuristic_id!r}") from None
