"""cProfile helpers for measuring a search run."""

from __future__ import annotations

import cProfile
import pstats
from pathlib import Path
from typing import Callable, Tuple, TypeVar

T = TypeVar("T")


def profile_run(
    callback: Callable[[], T],
    out_path: str | Path = "profile.prof",
) -> Tuple[T, pstats.Stats]:
    """Profile a single call of ``callback`` and dump stats to ``out_path``.

    Parameters
    ----------
    callback:
        Zero-argument function to run, typically a bound search call.
    out_path:
        File to write cProfile data to.

    Returns
    -------
    tuple
        The callback's return value and the profiling statistics.
    """

    path = Path(out_path)
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    profiler = cProfile.Profile()
    profiler.enable()
    try:
        result = callback()
    finally:
        profiler.disable()
    profiler.dump_stats(str(path))
    return result, pstats.Stats(profiler)


__all__ = ["profile_run"]
