import numpy as np
import pytest

from mazepath.domain.path import bfs_distance
from mazepath.domain.types import OPEN, WALL
from mazepath.utils.grid_factory import (
    create_open_maze, enclose_cell, generate_maze, maze_from_strings, maze_from_walls,
)


def open_boundaries(grid):
    """Count open interior positions between two cells."""
    cells = grid.cells
    return sum(
        1
        for row in range(grid.rows - 1)
        for col in range(grid.cols - 1)
        if (row + col) % 2 == 1 and cells[row, col] == OPEN
    )


def test_create_open_maze_layout():
    grid = create_open_maze(2, 3)
    assert grid.cells.shape == (4, 6)
    assert grid.is_passable(0, 1)
    assert grid.is_passable(1, 0)
    # Outer edge and corner posts are walls
    assert not grid.is_passable(0, 5)
    assert not grid.is_passable(3, 0)
    assert not grid.is_passable(1, 1)


def test_create_open_maze_rejects_bad_size():
    with pytest.raises(ValueError):
        create_open_maze(0, 3)


def test_maze_from_walls():
    right = [[0, 1],
             [1, 1]]
    bottom = [[1, 0],
              [1, 1]]
    grid = maze_from_walls(right, bottom)

    assert grid.is_passable(0, 1)       # (0,0) -> (0,1)
    assert not grid.is_passable(2, 1)   # (1,0) | (1,1)
    assert not grid.is_passable(1, 0)   # (0,0) / (1,0)
    assert grid.is_passable(1, 2)       # (0,1) / (1,1)
    assert not grid.is_passable(0, 3)   # outer edge


def test_maze_from_walls_shape_mismatch():
    with pytest.raises(ValueError):
        maze_from_walls([[0, 0]], [[0], [0]])


def test_maze_from_strings():
    grid = maze_from_strings(["0.", "#1"])
    assert np.array_equal(grid.cells, [[OPEN, OPEN], [WALL, WALL]])


def test_maze_from_strings_errors():
    with pytest.raises(ValueError):
        maze_from_strings(["0x", "00"])
    with pytest.raises(ValueError):
        maze_from_strings(["00", "0"])
    assert maze_from_strings([]).is_empty


def test_enclose_cell():
    grid = enclose_cell(create_open_maze(3, 3), (1, 1))
    for coord in [(1, 2), (3, 2), (2, 1), (2, 3)]:
        assert not grid.is_passable(*coord)
    assert grid.is_passable(2, 2)


def test_enclose_cell_outside():
    with pytest.raises(ValueError):
        enclose_cell(create_open_maze(2, 2), (2, 0))


def test_generate_maze_is_perfect():
    grid = generate_maze(6, 7, seed=4)
    assert (grid.logical_rows, grid.logical_cols) == (6, 7)
    assert open_boundaries(grid) == 6 * 7 - 1
    for row in range(6):
        for col in range(7):
            assert bfs_distance(grid, (0, 0), (row * 2, col * 2)) is not None


def test_generate_maze_with_loops():
    grid = generate_maze(6, 6, seed=4, extra_openings=5)
    assert open_boundaries(grid) == 6 * 6 - 1 + 5


def test_generate_maze_is_seeded():
    assert generate_maze(5, 5, seed=12) == generate_maze(5, 5, seed=12)
