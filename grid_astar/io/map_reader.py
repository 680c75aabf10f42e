"""Read the textual grid format into a :class:`Grid`.

The format is a leading integer ``size`` followed by ``size * size`` cell
characters in row-major order. Whitespace between cells is ignored::

    4
    OVVV
    VWWV
    V#VV
    VVVX
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional
import logging

from ..core.errors import InvalidInput
from ..core.grid import MAX_SIZE, MIN_SIZE, WALL, Cost, Grid

logger = logging.getLogger(__name__)

START_SYMBOL = "O"
GOAL_SYMBOL = "X"
WALL_SYMBOL = "#"

# Cost paid to enter a cell of each kind.
SYMBOL_COSTS: Dict[str, Cost] = {
    START_SYMBOL: 1,
    GOAL_SYMBOL: 1,
    "V": 1,
    "W": 2,
    WALL_SYMBOL: WALL,
}


def parse_grid(
    text: str,
    *,
    min_size: int = MIN_SIZE,
    max_size: int = MAX_SIZE,
) -> Grid:
    """Parse ``text`` and return the described :class:`Grid`."""

    stripped = text.lstrip()
    head = stripped.split(None, 1)
    if not head:
        raise InvalidInput("input is empty")
    try:
        size = int(head[0])
    except ValueError:
        raise InvalidInput(f"expected grid size, got {head[0]!r}") from None
    if not min_size <= size <= max_size:
        raise InvalidInput(
            f"grid size {size} outside accepted range [{min_size}, {max_size}]"
        )

    body = head[1] if len(head) > 1 else ""
    expected = size * size
    costs: List[Cost] = []
    symbols: List[str] = []
    start: Optional[int] = None
    goal: Optional[int] = None

    for offset, char in enumerate(body):
        if char.isspace():
            continue
        cost = SYMBOL_COSTS.get(char)
        if cost is None:
            raise InvalidInput(
                f"unexpected character {char!r} at offset {offset} of the cell data"
            )
        index = len(costs)
        if index >= expected:
            raise InvalidInput(
                f"too many cells: a {size}x{size} grid holds {expected}"
            )
        if char == START_SYMBOL:
            if start is not None:
                raise InvalidInput(f"duplicate start at cell {index} (first at {start})")
            start = index
        elif char == GOAL_SYMBOL:
            if goal is not None:
                raise InvalidInput(f"duplicate goal at cell {index} (first at {goal})")
            goal = index
        costs.append(cost)
        symbols.append(char)

    if len(costs) != expected:
        raise InvalidInput(
            f"expected {expected} cells for a {size}x{size} grid, got {len(costs)}"
        )

    logger.debug("Parsed %dx%d grid, start=%s goal=%s", size, size, start, goal)
    return Grid(
        size,
        costs,
        start,
        goal,
        "".join(symbols),
        min_size=min_size,
        max_size=max_size,
    )


def read_grid(
    path: str | Path,
    *,
    min_size: int = MIN_SIZE,
    max_size: int = MAX_SIZE,
) -> Grid:
    """Read and parse the grid file at ``path``.

    ``OSError`` from opening the file propagates unchanged.
    """

    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidInput(f"{path} is not a UTF-8 text file") from exc
    return parse_grid(text, min_size=min_size, max_size=max_size)


__all__ = [
    "START_SYMBOL",
    "GOAL_SYMBOL",
    "WALL_SYMBOL",
    "SYMBOL_COSTS",
    "parse_grid",
    "read_grid",
]
