import pytest

QtCore = pytest.importorskip("PySide6.QtCore")

from mazepath.app.controller import PathFinderController, pixel_to_cell  # noqa: E402
from mazepath.domain.types import NOT_FOUND_MESSAGE, UNSET  # noqa: E402
from mazepath.utils.grid_factory import create_open_maze  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    return app


@pytest.fixture
def controller(qapp):
    controller = PathFinderController()
    controller.load_maze(create_open_maze(5, 5))
    return controller


@pytest.fixture
def recorder(controller):
    events = {"paths": [], "errors": [], "endpoints": [], "outcomes": []}
    controller.path_updated.connect(events["paths"].append)
    controller.error_occurred.connect(events["errors"].append)
    controller.endpoints_changed.connect(lambda start, end: events["endpoints"].append((start, end)))
    controller.search_completed.connect(events["outcomes"].append)
    return events


def test_pixel_to_cell():
    assert pixel_to_cell(25.0, 55.0, 10.0, 20.0) == (2, 2)
    assert pixel_to_cell(0.0, 0.0, 10.0, 10.0) == (0, 0)
    with pytest.raises(ValueError):
        pixel_to_cell(1.0, 1.0, 0.0, 10.0)


def test_clicks_set_endpoints_and_path(controller, recorder):
    assert controller.click_start(5.0, 5.0, 20.0, 20.0)
    assert controller.click_end(95.0, 95.0, 20.0, 20.0)

    assert controller.pathfinder.start == (0, 0)
    assert controller.pathfinder.end == (4, 4)
    assert len(controller.path) == 17
    assert recorder["paths"][-1] == controller.path
    assert recorder["endpoints"][-1] == ((0, 0), (4, 4))
    assert recorder["errors"] == []


def test_invalid_click_reports_error(controller, recorder):
    assert not controller.click_start(500.0, 5.0, 20.0, 20.0)
    assert recorder["errors"] == ["Incorrect point"]
    assert controller.pathfinder.start == UNSET


def test_failed_search_reports_error(qapp):
    from mazepath.utils.grid_factory import enclose_cell

    controller = PathFinderController()
    controller.load_maze(enclose_cell(create_open_maze(3, 3), (2, 2)))
    errors = []
    controller.error_occurred.connect(errors.append)

    controller.set_start((0, 0))
    assert not controller.set_end((2, 2))
    assert errors == [NOT_FOUND_MESSAGE]
    assert controller.pathfinder.end == UNSET


def test_load_maze_emits_changes(qapp):
    controller = PathFinderController()
    changed = []
    controller.maze_changed.connect(lambda: changed.append(True))
    controller.load_maze(create_open_maze(2, 2))
    assert changed == [True]


def test_generate_maze(controller, recorder):
    assert controller.generate_maze(4, 4, seed=2)
    assert controller.pathfinder.maze.logical_rows == 4
    assert controller.path == ()


def test_generate_maze_bad_size(controller, recorder):
    assert not controller.generate_maze(0, 4)
    assert recorder["errors"][-1].startswith("Failed to generate maze")


def test_solve_with_qlearning_uses_current_endpoints(qapp):
    controller = PathFinderController()
    controller.load_maze(create_open_maze(3, 3))
    controller.set_start((0, 0))
    controller.set_end((2, 2))

    outcomes = []
    controller.search_completed.connect(outcomes.append)
    assert controller.solve_with_qlearning(seed=7)
    assert outcomes[-1].training is not None
    assert controller.path[0] == (4, 4)
    assert controller.path[-1] == (0, 0)
