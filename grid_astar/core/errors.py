"""Error taxonomy for a single search run."""

from __future__ import annotations


class GridAStarError(Exception):
    """Base class for all errors raised by :mod:`grid_astar`."""


class InvalidInput(GridAStarError, ValueError):
    """Malformed grid: bad size, start/goal problems, bad cell data."""


class AllocationError(GridAStarError, MemoryError):
    """Tables or frontier could not be allocated; the run cannot continue."""


__all__ = ["GridAStarError", "InvalidInput", "AllocationError"]
