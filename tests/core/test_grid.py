import pytest

from grid_astar.core.errors import InvalidInput
from grid_astar.core.grid import WALL, Grid


def _costs(n: int, walls=()):
    return [WALL if i in walls else 1 for i in range(n * n)]


def test_grid_basic_properties():
    grid = Grid(3, _costs(3, walls={4}), start=0, goal=8)
    assert grid.size == 3
    assert grid.cell_count == 9
    assert (grid.start, grid.goal) == (0, 8)
    assert grid.cost(0) == 1
    assert grid.cost(4) is WALL
    assert grid.is_wall(4) and not grid.is_wall(5)


def test_grid_default_symbols_and_rows():
    grid = Grid(2, [1, WALL, 1, 1], start=0, goal=3)
    assert grid.rows() == ["O#", ".X"]
    assert grid.symbol(1) == "#"


def test_row_col_and_index_of_roundtrip():
    grid = Grid(4, _costs(4), start=0, goal=15)
    assert grid.row_col(6) == (1, 2)
    assert grid.index_of(1, 2) == 6
    with pytest.raises(IndexError):
        grid.index_of(4, 0)


def test_in_bounds():
    grid = Grid(2, _costs(2), start=0, goal=3)
    assert grid.in_bounds(0) and grid.in_bounds(3)
    assert not grid.in_bounds(4) and not grid.in_bounds(-1)


@pytest.mark.parametrize("size", [0, 1, 15001])
def test_size_out_of_range(size):
    with pytest.raises(InvalidInput):
        Grid(size, [1] * 4, start=0, goal=1)


def test_custom_size_limits():
    with pytest.raises(InvalidInput):
        Grid(3, _costs(3), start=0, goal=8, max_size=2)


def test_non_integer_size():
    with pytest.raises(InvalidInput):
        Grid("3", _costs(3), start=0, goal=8)  # type: ignore[arg-type]


def test_cell_count_mismatch():
    with pytest.raises(InvalidInput, match="expected 9 cells"):
        Grid(3, [1] * 8, start=0, goal=7)


def test_missing_start():
    with pytest.raises(InvalidInput, match="no start"):
        Grid(2, _costs(2), start=None, goal=3)  # type: ignore[arg-type]


def test_start_equals_goal():
    with pytest.raises(InvalidInput, match="distinct"):
        Grid(2, _costs(2), start=1, goal=1)


def test_goal_out_of_range():
    with pytest.raises(InvalidInput, match="out of range"):
        Grid(2, _costs(2), start=0, goal=4)


def test_start_on_wall_rejected():
    with pytest.raises(InvalidInput, match="wall"):
        Grid(2, [WALL, 1, 1, 1], start=0, goal=3)


@pytest.mark.parametrize("bad", [0, -2, 1.5, True])
def test_bad_cost_rejected(bad):
    with pytest.raises(InvalidInput, match="invalid cost"):
        Grid(2, [1, bad, 1, 1], start=0, goal=3)


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        Grid(2, [1, 1, 1], start=0, goal=2)
