"""JSON-lines trace of search events.

Each line is one record ``{"step": ..., "event_type": ..., "data": ...}``
where ``step`` is the number of cells expanded when the event happened.
A :class:`TraceLog` holds its file open for the duration of one run; when the
file has grown past the retention threshold it is archived to a ``.gz``
beside it before the run starts writing.
"""

from __future__ import annotations

import gzip
import json
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, TextIO, Union

from ..config import CONFIG

logger = logging.getLogger(__name__)

# Event types emitted by the search engine
EXPAND = "EXPAND"
REOPEN = "REOPEN"
GOAL_FOUND = "GOAL_FOUND"
UNREACHABLE = "UNREACHABLE"

MEGABYTE = 1024 * 1024

TraceRecord = Dict[str, Any]


def trace_record(step: int, event_type: str, data: Dict[str, Any]) -> TraceRecord:
    return {"step": step, "event_type": event_type, "data": data}


def _archive_path(path: Path) -> Path:
    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
    candidate = path.with_name(f"{path.stem}_{ts}{path.suffix}.gz")
    n = 1
    while candidate.exists():
        candidate = path.with_name(f"{path.stem}_{ts}_{n}{path.suffix}.gz")
        n += 1
    return candidate


def rotate_trace(path: Path) -> Path:
    """Compress ``path`` into a new ``.gz`` archive, remove it, and return the archive."""

    archive = _archive_path(path)
    # "x" refuses to clobber an archive that appeared since the name was chosen
    with path.open("rb") as src, gzip.open(archive, "xb") as dst:
        shutil.copyfileobj(src, dst)
    path.unlink()
    return archive


def archives_of(path: str | Path) -> List[Path]:
    """Return the archives rotated out of ``path``, oldest first."""

    p = Path(path)
    return sorted(p.parent.glob(f"{p.stem}_*{p.suffix}.gz"))


def _read_lines(lines: Iterator[str]) -> Iterator[TraceRecord]:
    for line in lines:
        line = line.strip()
        if not line:
            continue
        try:
            yield json.loads(line)
        except json.JSONDecodeError:
            logger.warning("Skipping malformed trace line: %.60s", line)


def read_trace(path: str | Path, *, include_archives: bool = False) -> Iterator[TraceRecord]:
    """Yield the records in ``path``; with ``include_archives`` older runs come first."""

    p = Path(path)
    if include_archives:
        for archive in archives_of(p):
            with gzip.open(archive, "rt", encoding="utf-8") as fh:
                yield from _read_lines(fh)
    if p.exists():
        with p.open("r", encoding="utf-8") as fh:
            yield from _read_lines(fh)


class TraceLog:
    """File sink for the engine's trace records.

    Use as a context manager around one search run::

        with TraceLog("trace.jsonl", retention_mb=cfg.trace.retention_mb) as log:
            engine = SearchEngine(grid, trace=log)

    ``retention_mb`` defaults to ``trace.retention_mb`` of the repository
    config. Rotation is checked once, on open, so a run's records never
    straddle two files.
    """

    def __init__(self, path: str | Path, *, retention_mb: Optional[int] = None) -> None:
        self.path = Path(path)
        if retention_mb is None:
            retention_mb = CONFIG.trace.retention_mb
        self.retention_bytes = retention_mb * MEGABYTE
        self.records_written = 0
        self._fh: Optional[TextIO] = None

    @property
    def closed(self) -> bool:
        return self._fh is None

    def _needs_rotation(self) -> bool:
        try:
            size = self.path.stat().st_size
        except FileNotFoundError:
            return False
        return size > 0 and size >= self.retention_bytes

    def open(self) -> "TraceLog":
        if self._fh is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self._needs_rotation():
                archive = rotate_trace(self.path)
                logger.info("Archived trace %s to %s", self.path, archive.name)
            self._fh = self.path.open("a", encoding="utf-8")
            self.records_written = 0
        return self

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None
            logger.debug("Wrote %d trace records to %s", self.records_written, self.path)

    def __enter__(self) -> "TraceLog":
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def record(self, step: int, event_type: str, data: Dict[str, Any]) -> None:
        if self._fh is None:
            raise ValueError(f"trace log {self.path} is not open")
        self._fh.write(json.dumps(trace_record(step, event_type, data), ensure_ascii=False))
        self._fh.write("\n")
        self.records_written += 1

    def __iter__(self) -> Iterator[TraceRecord]:
        if self._fh is not None:
            self._fh.flush()
        yield from read_trace(self.path)


# In-memory lists collect records too; the tests use them.
TraceSink = Union[TraceLog, List[TraceRecord]]


__all__ = [
    "TraceLog",
    "TraceRecord",
    "TraceSink",
    "trace_record",
    "rotate_trace",
    "archives_of",
    "read_trace",
    "EXPAND",
    "REOPEN",
    "GOAL_FOUND",
    "UNREACHABLE",
]
