"""Immutable square grid of traversal costs."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple, Union

from .errors import InvalidInput


class Wall(Enum):
    """Marker for impassable cells."""

    WALL = "wall"


WALL = Wall.WALL

# Accepted side lengths; beyond MAX_SIZE the tables no longer fit in memory.
MIN_SIZE = 2
MAX_SIZE = 15000

Cost = Union[int, Wall]


def _default_symbols(costs: Sequence[Cost], start: int, goal: int) -> str:
    chars = ["#" if c is WALL else "." for c in costs]
    if 0 <= start < len(chars):
        chars[start] = "O"
    if 0 <= goal < len(chars):
        chars[goal] = "X"
    return "".join(chars)


class Grid:
    """An ``size`` x ``size`` map stored row-major.

    Each cell holds a positive integer traversal cost or :data:`WALL`. The
    cost of a cell is paid when the path *enters* it. ``symbols`` keeps the
    character each cell was read from so results can be rendered back in the
    input alphabet.
    """

    __slots__ = ("_size", "_costs", "_symbols", "_start", "_goal")

    def __init__(
        self,
        size: int,
        costs: Iterable[Cost],
        start: int,
        goal: int,
        symbols: Optional[str] = None,
        *,
        min_size: int = MIN_SIZE,
        max_size: int = MAX_SIZE,
    ) -> None:
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidInput(f"grid size must be an integer, got {size!r}")
        if not min_size <= size <= max_size:
            raise InvalidInput(
                f"grid size {size} outside accepted range [{min_size}, {max_size}]"
            )

        cells = tuple(costs)
        count = size * size
        if len(cells) != count:
            raise InvalidInput(
                f"expected {count} cells for a {size}x{size} grid, got {len(cells)}"
            )
        for index, cost in enumerate(cells):
            if cost is WALL:
                continue
            if isinstance(cost, bool) or not isinstance(cost, int) or cost < 1:
                raise InvalidInput(f"cell {index} has invalid cost {cost!r}")

        for name, value in (("start", start), ("goal", goal)):
            if value is None:
                raise InvalidInput(f"grid has no {name} cell")
            if not 0 <= value < count:
                raise InvalidInput(f"{name} index {value} is out of range")
            if cells[value] is WALL:
                raise InvalidInput(f"{name} cell {value} is a wall")
        if start == goal:
            raise InvalidInput("start and goal must be distinct cells")

        if symbols is None:
            symbols = _default_symbols(cells, start, goal)
        elif len(symbols) != count:
            raise InvalidInput(
                f"expected {count} symbols, got {len(symbols)}"
            )

        self._size = size
        self._costs: Tuple[Cost, ...] = cells
        self._symbols = symbols
        self._start = start
        self._goal = goal

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return self._size

    @property
    def cell_count(self) -> int:
        return self._size * self._size

    @property
    def start(self) -> int:
        return self._start

    @property
    def goal(self) -> int:
        return self._goal

    @property
    def symbols(self) -> str:
        return self._symbols

    # ------------------------------------------------------------------
    # Cell lookup
    # ------------------------------------------------------------------
    def cost(self, index: int) -> Cost:
        """Return the traversal cost of ``index`` or :data:`WALL`."""
        return self._costs[index]

    def is_wall(self, index: int) -> bool:
        return self._costs[index] is WALL

    def symbol(self, index: int) -> str:
        return self._symbols[index]

    def in_bounds(self, index: int) -> bool:
        return 0 <= index < self.cell_count

    def row_col(self, index: int) -> Tuple[int, int]:
        """Return ``(row, col)`` of ``index``."""
        return divmod(index, self._size)

    def index_of(self, row: int, col: int) -> int:
        if not (0 <= row < self._size and 0 <= col < self._size):
            raise IndexError(f"({row}, {col}) is outside a {self._size}x{self._size} grid")
        return row * self._size + col

    def rows(self) -> list[str]:
        """Return the symbol grid as a list of row strings."""
        n = self._size
        return [self._symbols[r * n:(r + 1) * n] for r in range(n)]

    def __repr__(self) -> str:
        return f"Grid(size={self._size}, start={self._start}, goal={self._goal})"


__all__ = ["Grid", "Wall", "WALL", "Cost", "MIN_SIZE", "MAX_SIZE"]
