"""Command-line entry point: generate a maze and route through it."""

import argparse
import sys
from typing import List, Optional

from .domain.maze import MazeGrid
from .domain.path import to_logical_path
from .domain.pathfinder import PathFinder
from .domain.types import Coord, QLearningConfig, SearchOutcome
from .utils.grid_factory import generate_maze


def parse_point(text: str) -> Coord:
    """Parse a ``row,col`` argument."""
    try:
        row, col = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ROW,COL, got {text!r}") from None
    return (row, col)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mazepath", description="Find a route through a generated maze"
    )
    parser.add_argument("--rows", type=int, default=10, help="Logical maze rows")
    parser.add_argument("--cols", type=int, default=10, help="Logical maze columns")
    parser.add_argument("--seed", type=int, default=None, help="Seed for maze generation and exploration")
    parser.add_argument("--loops", type=int, default=0, help="Extra walls to knock out, creating loops")
    parser.add_argument("--start", type=parse_point, default=(0, 0), help="Start cell as ROW,COL")
    parser.add_argument("--end", type=parse_point, default=None, help="End cell as ROW,COL (default: far corner)")
    parser.add_argument("--qlearning", action="store_true", help="Use Q-learning instead of A*")
    parser.add_argument("--episodes", type=int, default=None, help="Override the Q-learning episode count")
    parser.add_argument("--verbose", action="store_true", help="Print training progress")
    return parser


def render(grid: MazeGrid, outcome: SearchOutcome, start: Coord, end: Coord) -> List[str]:
    """Draw the maze with the path as ``*`` and the endpoints as ``S`` and ``E``."""
    marks = {coord: "*" for coord in outcome.path}
    marks[(start[0] * 2, start[1] * 2)] = "S"
    marks[(end[0] * 2, end[1] * 2)] = "E"
    return grid.to_strings(marks)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        grid = generate_maze(args.rows, args.cols, seed=args.seed, extra_openings=args.loops)
    except ValueError as e:
        print(f"Failed to generate maze: {e}")
        return 2

    end = args.end if args.end is not None else (args.rows - 1, args.cols - 1)
    config = QLearningConfig(episodes=args.episodes, verbose=args.verbose)
    finder = PathFinder(qlearning_config=config)
    finder.set_maze(grid)

    print(f"Maze: {args.rows}x{args.cols} (seed {args.seed})")
    print(f"Start: {args.start} -> End: {end}")

    if args.qlearning:
        outcome = finder.q_find_path(args.start, end, seed=args.seed)
    else:
        outcome = finder.set_start(args.start)
        if outcome.success:
            outcome = finder.set_end(end)

    if not outcome.success:
        print(f"Search failed: {outcome.message}")
        return 1

    for line in render(grid, outcome, args.start, end):
        print(line)
    print(f"Path length: {outcome.path_length} steps")
    print(f"Cells visited: {len(to_logical_path(outcome.path))}")
    if outcome.training is not None:
        training = outcome.training
        print(f"Training: {training.total_episodes} episodes, "
              f"success rate {training.success_rate:.1%}, final epsilon {training.final_epsilon:.3f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
