"""Write a search result in the output text format."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence
import logging

logger = logging.getLogger(__name__)

# Cost line written when the search found no path.
NO_PATH_COST = -1


class MarkedResult(Protocol):
    cost: int
    rows: Sequence[str]


def _format(cost: int, rows: Sequence[str]) -> str:
    return "\n".join([str(cost), *rows]) + "\n"


def format_result(result: MarkedResult) -> str:
    """Return the path cost on one line followed by the marked grid rows."""

    return _format(result.cost, result.rows)


def format_no_path(rows: Sequence[str]) -> str:
    """Return :data:`NO_PATH_COST` followed by the unmarked grid rows."""

    return _format(NO_PATH_COST, rows)


def _write(path: str | Path, text: str) -> Path:
    p = Path(path)
    if not p.parent.exists():
        p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as fh:
        fh.write(text)
    return p


def write_result(path: str | Path, result: MarkedResult) -> None:
    """Write :func:`format_result` output to ``path``, creating parent dirs."""

    p = _write(path, format_result(result))
    logger.info("Result written to %s", p)


def write_no_path(path: str | Path, rows: Sequence[str]) -> None:
    """Write :func:`format_no_path` output to ``path``, creating parent dirs."""

    p = _write(path, format_no_path(rows))
    logger.info("No-path result written to %s", p)


__all__ = [
    "NO_PATH_COST",
    "MarkedResult",
    "format_result",
    "format_no_path",
    "write_result",
    "write_no_path",
]
