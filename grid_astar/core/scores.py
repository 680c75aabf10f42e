"""Per-cell scoring tables owned by a single search run."""

from __future__ import annotations

import math
from typing import List

from .errors import AllocationError

INFINITY = math.inf
NO_PREDECESSOR = -1


class ScoreTables:
    """Parallel ``g``/``f``/predecessor/closed tables indexed by cell.

    Use :func:`build_score_tables` to create an instance; the constructor only
    wires up lists that were already allocated.
    """

    __slots__ = ("_g", "_f", "_predecessor", "_closed")

    def __init__(
        self,
        g: List[float],
        f: List[float],
        predecessor: List[int],
        closed: bytearray,
    ) -> None:
        self._g = g
        self._f = f
        self._predecessor = predecessor
        self._closed = closed

    def __len__(self) -> int:
        return len(self._g)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_g(self, index: int) -> float:
        return self._g[index]

    def get_f(self, index: int) -> float:
        return self._f[index]

    def get_predecessor(self, index: int) -> int:
        return self._predecessor[index]

    def is_closed(self, index: int) -> bool:
        return bool(self._closed[index])

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def set_g_f_predecessor(self, index: int, g: float, f: float, predecessor: int) -> None:
        self._g[index] = g
        self._f[index] = f
        self._predecessor[index] = predecessor

    def mark_closed(self, index: int) -> None:
        self._closed[index] = 1

    def reopen(self, index: int) -> None:
        """Clear the closed flag of ``index`` after a cheaper path was found."""
        self._closed[index] = 0


def build_score_tables(cell_count: int, start: int, start_f: float) -> ScoreTables:
    """Return fully initialised tables for ``cell_count`` cells.

    ``g[start]`` is set to ``0`` and ``f[start]`` to ``start_f``. Either every
    table is allocated or :class:`AllocationError` is raised and the partial
    lists are dropped with the failing frame.
    """

    try:
        g = [INFINITY] * cell_count
        f = [INFINITY] * cell_count
        predecessor = [NO_PREDECESSOR] * cell_count
        closed = bytearray(cell_count)
    except MemoryError as exc:
        raise AllocationError(
            f"could not allocate score tables for {cell_count} cells"
        ) from exc

    tables = ScoreTables(g, f, predecessor, closed)
    tables.set_g_f_predecessor(start, 0, start_f, NO_PREDECESSOR)
    return tables


__all__ = ["ScoreTables", "build_score_tables", "INFINITY", "NO_PREDECESSOR"]
