"""A* search over a :class:`~grid_astar.core.grid.Grid`."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional, Union
import logging

from ..core.errors import AllocationError
from ..core.frontier import Frontier, make_frontier
from ..core.grid import Grid
from ..core.scores import ScoreTables, build_score_tables
from ..persistence.trace_log import (
    EXPAND,
    GOAL_FOUND,
    REOPEN,
    UNREACHABLE,
    TraceLog,
    TraceSink,
    trace_record,
)
from .reconstruct import reconstruct_path

logger = logging.getLogger(__name__)

Heuristic = Callable[[Grid, int, int], float]


def manhattan(grid: Grid, index: int, goal: int) -> int:
    """Return the Manhattan distance between ``index`` and ``goal``.

    Every cell costs at least 1 to enter, so this never overestimates on a
    4-neighbour grid.
    """

    r1, c1 = grid.row_col(index)
    r2, c2 = grid.row_col(goal)
    return abs(r1 - r2) + abs(c1 - c2)


def neighbors(grid: Grid, index: int) -> Iterator[int]:
    """Yield the passable up/down/left/right neighbours of ``index``."""

    n = grid.size
    row, col = grid.row_col(index)
    candidates = []
    if row > 0:
        candidates.append(index - n)
    if row < n - 1:
        candidates.append(index + n)
    if col > 0:
        candidates.append(index - 1)
    if col < n - 1:
        candidates.append(index + 1)
    for cell in candidates:
        if not grid.is_wall(cell):
            yield cell


class SearchState(Enum):
    RUNNING = "running"
    GOAL_FOUND = "goal_found"
    UNREACHABLE = "unreachable"
    FAILED = "failed"


class SearchEngine:
    """Drive one A* run to a terminal :class:`SearchState`.

    Parameters
    ----------
    grid:
        Map to search; never modified.
    frontier:
        Frontier name accepted by :func:`make_frontier` or a ready instance.
    heuristic:
        ``heuristic(grid, index, goal)``; must not overestimate.
    max_expansions:
        Optional cap on expanded cells. When the next cell to expand is not
        the goal and the cap is reached, the run ends as ``UNREACHABLE``
        with :attr:`aborted` set.
    trace:
        Optional open :class:`~grid_astar.persistence.trace_log.TraceLog` or
        list receiving one record per event.
    """

    def __init__(
        self,
        grid: Grid,
        *,
        frontier: Union[str, Frontier] = "heap",
        heuristic: Heuristic = manhattan,
        max_expansions: Optional[int] = None,
        trace: Optional[TraceSink] = None,
    ) -> None:
        self.grid = grid
        self.heuristic = heuristic
        self.max_expansions = max_expansions
        self._trace = trace

        self.state = SearchState.RUNNING
        self.aborted = False
        self.expansions = 0
        self.reopened = 0
        self.failure: Optional[AllocationError] = None

        start_f = heuristic(grid, grid.start, grid.goal)
        self.tables: ScoreTables = build_score_tables(grid.cell_count, grid.start, start_f)
        self.frontier: Frontier = (
            make_frontier(frontier) if isinstance(frontier, str) else frontier
        )
        self.frontier.insert(grid.start, start_f)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _emit(self, event_type: str, data: dict) -> None:
        if self._trace is None:
            return
        if isinstance(self._trace, list):
            self._trace.append(trace_record(self.expansions, event_type, data))
        else:
            self._trace.record(self.expansions, event_type, data)

    def _finish(self, state: SearchState) -> SearchState:
        self.state = state
        if state is SearchState.GOAL_FOUND:
            self._emit(GOAL_FOUND, {"cell": self.grid.goal, "g": self.tables.get_g(self.grid.goal)})
        else:
            self._emit(UNREACHABLE, {"aborted": self.aborted})
        logger.info(
            "Search finished: %s after %d expansions (%d reopened)",
            state.value,
            self.expansions,
            self.reopened,
        )
        return state

    def _relax(self, current: int) -> None:
        grid, tables, frontier = self.grid, self.tables, self.frontier
        g_current = tables.get_g(current)

        for cell in neighbors(grid, current):
            tentative_g = g_current + grid.cost(cell)
            closed = tables.is_closed(cell)
            if closed and tentative_g >= tables.get_g(cell):
                continue

            in_open = frontier.contains(cell)
            if in_open and tentative_g >= tables.get_g(cell):
                continue

            f = tentative_g + self.heuristic(grid, cell, grid.goal)
            tables.set_g_f_predecessor(cell, tentative_g, f, current)
            if in_open:
                frontier.decrease_priority(cell, f)
                continue
            if closed:
                tables.reopen(cell)
                self.reopened += 1
                logger.debug("Reopened cell %d with g=%s", cell, tentative_g)
                self._emit(REOPEN, {"cell": cell, "g": tentative_g, "from": current})
            frontier.insert(cell, f)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def step(self) -> SearchState:
        """Perform one iteration of the A* loop and return the new state."""

        if self.state is not SearchState.RUNNING:
            return self.state

        current = self.frontier.extract_min()
        if current is None:
            return self._finish(SearchState.UNREACHABLE)
        if current == self.grid.goal:
            return self._finish(SearchState.GOAL_FOUND)

        # the goal is never expanded, so the cap cannot hide it
        if self.max_expansions is not None and self.expansions >= self.max_expansions:
            logger.warning("Expansion cap of %d reached; giving up", self.max_expansions)
            self.aborted = True
            return self._finish(SearchState.UNREACHABLE)

        self.tables.mark_closed(current)
        self.expansions += 1
        self._emit(
            EXPAND,
            {"cell": current, "g": self.tables.get_g(current), "f": self.tables.get_f(current)},
        )

        try:
            self._relax(current)
        except AllocationError as exc:
            self.state = SearchState.FAILED
            self.failure = exc
            logger.error("Search failed after %d expansions: %s", self.expansions, exc)
            raise
        return self.state

    def run_to_completion(self) -> SearchState:
        """Step until the search reaches a terminal state."""

        logger.info(
            "Starting A* on %dx%d grid (start=%d, goal=%d)",
            self.grid.size,
            self.grid.size,
            self.grid.start,
            self.grid.goal,
        )
        while self.state is SearchState.RUNNING:
            self.step()
        return self.state


# ----------------------------------------------------------------------
# Outcomes
# ----------------------------------------------------------------------
@dataclass
class Found:
    """Goal reached; ``rows`` is the grid with the path marked."""

    cost: int
    path: List[int]
    rows: List[str]
    expansions: int = 0


@dataclass
class Unreachable:
    """No path exists, or the expansion cap stopped the search."""

    expansions: int = 0
    aborted: bool = False


@dataclass
class Error:
    """The run could not complete."""

    kind: str
    message: str = ""


Outcome = Union[Found, Unreachable, Error]


def run(
    grid: Grid,
    *,
    frontier: Union[str, Frontier] = "heap",
    heuristic: Heuristic = manhattan,
    max_expansions: Optional[int] = None,
    trace: Optional[TraceSink] = None,
    marker: str = "*",
) -> Outcome:
    """Search ``grid`` and return the :data:`Outcome` of the run.

    A :class:`TraceLog` passed as ``trace`` is opened for the run and closed
    afterwards. ``OSError`` from the trace file propagates.
    """

    trace_ctx = trace if isinstance(trace, TraceLog) else nullcontext()
    try:
        with trace_ctx:
            engine = SearchEngine(
                grid,
                frontier=frontier,
                heuristic=heuristic,
                max_expansions=max_expansions,
                trace=trace,
            )
            state = engine.run_to_completion()
    except AllocationError as exc:
        return Error(kind=type(exc).__name__, message=str(exc))

    if state is SearchState.GOAL_FOUND:
        result = reconstruct_path(grid, engine.tables, marker=marker)
        return Found(
            cost=result.cost,
            path=result.path,
            rows=result.rows,
            expansions=engine.expansions,
        )
    return Unreachable(expansions=engine.expansions, aborted=engine.aborted)


__all__ = [
    "SearchEngine",
    "SearchState",
    "Heuristic",
    "manhattan",
    "neighbors",
    "Found",
    "Unreachable",
    "Error",
    "Outcome",
    "run",
]
