import numpy as np
import pytest

from mazepath.domain.maze import MazeGrid, to_doubled, to_logical
from mazepath.domain.types import OPEN, WALL


def test_dimensions_and_logical_size(open_maze):
    assert (open_maze.rows, open_maze.cols) == (10, 10)
    assert (open_maze.logical_rows, open_maze.logical_cols) == (5, 5)
    assert not open_maze.is_empty


def test_odd_dimensions_rejected():
    with pytest.raises(ValueError):
        MazeGrid(np.zeros((3, 4), dtype=np.uint8))


def test_non_2d_rejected():
    with pytest.raises(ValueError):
        MazeGrid(np.zeros((2, 2, 2), dtype=np.uint8))


def test_unknown_cell_values_rejected():
    with pytest.raises(ValueError):
        MazeGrid([[0, 2], [0, 0]])


def test_grid_is_read_only_copy():
    source = np.zeros((2, 2), dtype=np.uint8)
    grid = MazeGrid(source)
    source[0, 0] = WALL
    assert grid.is_passable(0, 0)
    with pytest.raises(ValueError):
        grid.cells[0, 0] = WALL


def test_out_of_bounds_is_impassable(open_maze):
    assert not open_maze.is_passable(-1, 0)
    assert not open_maze.is_passable(0, -1)
    assert not open_maze.is_passable(10, 0)
    assert not open_maze.is_passable(0, 10)


def test_passability_follows_cell_values():
    grid = MazeGrid([[OPEN, WALL], [WALL, WALL]])
    assert grid.is_passable(0, 0)
    assert not grid.is_passable(0, 1)


def test_contains_logical(open_maze):
    assert open_maze.contains_logical((0, 0))
    assert open_maze.contains_logical((4, 4))
    assert not open_maze.contains_logical((5, 0))
    assert not open_maze.contains_logical((-1, -1))


def test_neighbors_skip_walls(open_maze):
    assert sorted(open_maze.neighbors((0, 0))) == [(0, 1), (1, 0)]
    # Corner posts between four cells are walls
    assert sorted(open_maze.neighbors((0, 1))) == [(0, 0), (0, 2)]


def test_empty_grid():
    grid = MazeGrid.empty()
    assert grid.is_empty
    assert not grid.contains_logical((0, 0))


def test_coordinate_mapping():
    assert to_doubled((3, 4)) == (6, 8)
    assert to_logical((6, 8)) == (3, 4)
    assert to_logical((7, 8)) == (3, 4)


def test_to_strings_with_marks():
    grid = MazeGrid([[OPEN, OPEN], [WALL, WALL]])
    assert grid.to_strings() == ["..", "##"]
    assert grid.to_strings({(0, 1): "E"}) == [".E", "##"]


def test_equality():
    assert MazeGrid([[0, 0], [1, 1]]) == MazeGrid([[0, 0], [1, 1]])
    assert MazeGrid([[0, 0], [1, 1]]) != MazeGrid([[0, 1], [1, 1]])
