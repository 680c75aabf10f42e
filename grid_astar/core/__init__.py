"""core package."""

from .errors import AllocationError, GridAStarError, InvalidInput
from .frontier import HeapFrontier, SortedListFrontier, make_frontier
from .grid import WALL, Grid
from .scores import INFINITY, NO_PREDECESSOR, ScoreTables, build_score_tables

__all__ = [
    "AllocationError",
    "GridAStarError",
    "InvalidInput",
    "HeapFrontier",
    "SortedListFrontier",
    "make_frontier",
    "WALL",
    "Grid",
    "INFINITY",
    "NO_PREDECESSOR",
    "ScoreTables",
    "build_score_tables",
]
