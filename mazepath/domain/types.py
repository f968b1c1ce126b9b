"""Core type definitions for maze path search."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

# Grid position as (row, col), either logical or doubled
Coord = Tuple[int, int]

# Sentinel for an endpoint that has not been chosen yet
UNSET: Coord = (-1, -1)

# Cell values in the doubled-resolution maze array
OPEN = 0
WALL = 1

# Heuristic function identifiers
HeuristicId = Literal["manhattan", "euclidean", "chebyshev"]

# Actions the Q-learning agent can take
ActionInt = Literal[0, 1, 2, 3]

ACTION_DELTAS: Dict[int, Coord] = {
    0: (-1, 0),  # up
    1: (1, 0),   # down
    2: (0, -1),  # left
    3: (0, 1),   # right
}

NOT_FOUND_MESSAGE = "Path not found. Probably the labyrinth has isolated study areas"
INVALID_POINT_MESSAGE = "Incorrect point"


class ErrorKind(Enum):
    """Reasons a search can fail."""
    NOT_FOUND = "not_found"
    INVALID_POINT = "invalid_point"


@dataclass
class AStarConfig:
    """Configuration for the A* search."""
    heuristic: HeuristicId = "manhattan"


@dataclass
class QLearningConfig:
    """Configuration for the Q-learning search."""
    learning_rate: float = 0.9
    discount_factor: float = 0.98
    epsilon_initial: float = 1.0
    epsilon_decay_rate: float = 0.01
    reward_goal: float = 10.0
    reward_wall: float = -10.0
    reward_step: float = -0.1
    max_extraction_steps: int = 40000
    # None means 4 * number of doubled cells
    max_steps_per_episode: Optional[int] = None
    # None means use the maze-size formula
    episodes: Optional[int] = None
    verbose: bool = False
    progress_interval: int = 500

    def validate(self) -> None:
        """Raise ValueError if any setting is out of range."""
        if not 0.0 < self.learning_rate <= 1.0:
            raise ValueError(f"learning_rate must be in (0, 1], got {self.learning_rate}")
        if not 0.0 <= self.discount_factor <= 1.0:
            raise ValueError(f"discount_factor must be in [0, 1], got {self.discount_factor}")
        if not 0.0 <= self.epsilon_initial <= 1.0:
            raise ValueError(f"epsilon_initial must be in [0, 1], got {self.epsilon_initial}")
        if self.epsilon_decay_rate < 0.0:
            raise ValueError(f"epsilon_decay_rate must be >= 0, got {self.epsilon_decay_rate}")
        if self.max_extraction_steps <= 0:
            raise ValueError(f"max_extraction_steps must be positive, got {self.max_extraction_steps}")
        if self.max_steps_per_episode is not None and self.max_steps_per_episode <= 0:
            raise ValueError(f"max_steps_per_episode must be positive, got {self.max_steps_per_episode}")
        if self.episodes is not None and self.episodes < 0:
            raise ValueError(f"episodes must be >= 0, got {self.episodes}")
        if self.progress_interval <= 0:
            raise ValueError(f"progress_interval must be positive, got {self.progress_interval}")

    def epsilon_after(self, episode: int) -> float:
        """Exploration rate used for the episode following ``episode``."""
        return self.epsilon_initial * math.exp(-self.epsilon_decay_rate * episode)


@dataclass
class Episode:
    """Summary of a single training episode."""
    number: int
    steps: int
    total_reward: float
    reached_goal: bool
    epsilon_used: float
    truncated: bool = False


@dataclass
class TrainingResult:
    """Result of Q-learning training."""
    total_episodes: int = 0
    successful_episodes: int = 0
    truncated_episodes: int = 0
    total_steps: int = 0
    final_epsilon: float = 0.0

    @property
    def success_rate(self) -> float:
        """Fraction of episodes that reached the goal."""
        return self.successful_episodes / self.total_episodes if self.total_episodes > 0 else 0.0


@dataclass
class SearchOutcome:
    """Result of a path search, success or failure."""
    found: bool = False
    message: str = ""
    error: Optional[ErrorKind] = None
    path: List[Coord] = field(default_factory=list)
    nodes_explored: int = 0
    training: Optional[TrainingResult] = None

    @property
    def success(self) -> bool:
        """Whether the search produced a path."""
        return self.found and self.error is None

    @property
    def path_length(self) -> int:
        """Number of unit steps along the path."""
        return max(len(self.path) - 1, 0)

    @classmethod
    def ok(cls, path: Optional[List[Coord]] = None, **stats) -> "SearchOutcome":
        """Successful outcome carrying ``path``."""
        return cls(found=True, path=list(path or []), **stats)

    @classmethod
    def not_found(cls, **stats) -> "SearchOutcome":
        """Failure because no route connects the endpoints."""
        return cls(found=False, message=NOT_FOUND_MESSAGE, error=ErrorKind.NOT_FOUND, **stats)

    @classmethod
    def invalid_point(cls) -> "SearchOutcome":
        """Failure because an endpoint lies outside the maze."""
        return cls(found=False, message=INVALID_POINT_MESSAGE, error=ErrorKind.INVALID_POINT)
