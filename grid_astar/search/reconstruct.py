"""Turn a finished search into a path, its cost and a marked grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..core.grid import Grid
from ..core.scores import NO_PREDECESSOR, ScoreTables


@dataclass
class PathResult:
    cost: int
    path: List[int]
    rows: List[str]


def reconstruct_path(grid: Grid, tables: ScoreTables, marker: str = "*") -> PathResult:
    """Walk predecessors from the goal back to the start.

    The cost counts every cell entered along the way, so the goal's cost is
    included and the start's is not. Cells strictly between start and goal
    are replaced by ``marker`` in the returned ``rows``; the input grid is
    left untouched.
    """

    if len(marker) != 1:
        raise ValueError(f"path marker must be a single character, got {marker!r}")

    start, goal = grid.start, grid.goal
    cells = list(grid.symbols)
    path = [goal]
    cost = 0
    current = goal

    while current != start:
        cost += grid.cost(current)
        previous = tables.get_predecessor(current)
        if previous == NO_PREDECESSOR or len(path) > grid.cell_count:
            raise RuntimeError(f"predecessor chain broken at cell {current}")
        if previous != start:
            cells[previous] = marker
        path.append(previous)
        current = previous

    path.reverse()
    n = grid.size
    rows = ["".join(cells[r * n:(r + 1) * n]) for r in range(n)]
    return PathResult(cost=cost, path=path, rows=rows)


__all__ = ["PathResult", "reconstruct_path"]
