import pytest

from mazepath.utils.grid_factory import create_open_maze, maze_from_walls


@pytest.fixture
def open_maze():
    """5x5 logical maze without internal walls."""
    return create_open_maze(5, 5)


@pytest.fixture
def small_open_maze():
    """3x3 logical maze without internal walls."""
    return create_open_maze(3, 3)


@pytest.fixture
def split_maze():
    """2x2 maze whose left and right columns are walled off from each other."""
    right = [[1, 1],
             [1, 1]]
    bottom = [[0, 0],
              [0, 0]]
    return maze_from_walls(right, bottom)
