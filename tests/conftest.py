# tests/conftest.py
import pytest

from grid_astar.io.map_reader import parse_grid


@pytest.fixture
def make_grid():
    """Build a grid from row strings, e.g. ``make_grid("OV", "VX")``."""

    def _make(*rows: str):
        return parse_grid(f"{len(rows)}\n" + "\n".join(rows))

    return _make


@pytest.fixture
def open_4x4(make_grid):
    return make_grid("OVVV", "VVVV", "VVVV", "VVVX")
