"""Simple configuration loader for grid_astar."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


CONFIG_PATH = Path(__file__).resolve().parents[1] / "config.yaml"


@dataclass
class GridConfig:
    """Accepted grid side lengths."""

    min_size: int = 2
    max_size: int = 15000


@dataclass
class SearchConfig:
    """Search engine options."""

    frontier: str = "heap"
    max_expansions: Optional[int] = None


@dataclass
class RenderConfig:
    """How results are drawn."""

    path_marker: str = "*"
    png_scale: int = 8


@dataclass
class TraceConfig:
    """Search trace log settings."""

    retention_mb: int = 50


@dataclass
class LoggingConfig:
    """Log levels for the root logger and individual modules."""

    global_level: str = "INFO"
    module_levels: Dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """Top level configuration dataclass."""

    grid: GridConfig = field(default_factory=GridConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    trace: TraceConfig = field(default_factory=TraceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _parse_config(data: dict[str, Any]) -> Config:
    """Convert raw ``data`` into :class:`Config`.

    Raises ``ValueError`` for values the rest of the program cannot use.
    """

    if not isinstance(data, dict):
        raise ValueError(f"configuration must be a mapping, got {type(data).__name__}")

    grid_data = data.get("grid") or {}
    grid = GridConfig(
        min_size=int(grid_data.get("min_size", 2)),
        max_size=int(grid_data.get("max_size", 15000)),
    )

    search_data = data.get("search") or {}
    # 0 or a missing value means "no cap"
    max_expansions = int(search_data.get("max_expansions") or 0) or None
    search = SearchConfig(
        frontier=str(search_data.get("frontier", "heap")),
        max_expansions=max_expansions,
    )

    render_data = data.get("render") or {}
    render = RenderConfig(
        path_marker=str(render_data.get("path_marker", "*")),
        png_scale=int(render_data.get("png_scale", 8)),
    )
    if len(render.path_marker) != 1:
        raise ValueError(
            f"render.path_marker must be a single character, got {render.path_marker!r}"
        )
    if render.png_scale < 1:
        raise ValueError(f"render.png_scale must be at least 1, got {render.png_scale}")

    trace_data = data.get("trace") or {}
    trace = TraceConfig(retention_mb=int(trace_data.get("retention_mb", 50)))
    if trace.retention_mb < 0:
        raise ValueError(f"trace.retention_mb must not be negative, got {trace.retention_mb}")

    logging_data = data.get("logging") or {}
    log_cfg = LoggingConfig(
        global_level=str(logging_data.get("global_level", "INFO")).upper(),
        module_levels={
            str(k): str(v) for k, v in (logging_data.get("module_levels") or {}).items()
        },
    )

    return Config(grid=grid, search=search, render=render, trace=trace, logging=log_cfg)


def load_config(path: str | Path = CONFIG_PATH) -> Config:
    """Load configuration from ``path`` and return a :class:`Config`.

    A missing file gives the defaults. ``yaml.YAMLError`` and ``ValueError``
    propagate for a malformed one.
    """

    path = Path(path)
    if path.is_file():
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        raw = {}
    return _parse_config(raw)


# Load configuration at module import time.
CONFIG = load_config()


__all__ = [
    "CONFIG",
    "CONFIG_PATH",
    "Config",
    "GridConfig",
    "SearchConfig",
    "RenderConfig",
    "TraceConfig",
    "LoggingConfig",
    "load_config",
]
