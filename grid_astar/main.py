# grid_astar/main.py
"""Command line entry point: read a grid, search it, write the result."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from enum import IntEnum
from pathlib import Path
from typing import Optional, Sequence

import yaml
from dotenv import load_dotenv

from .config import CONFIG_PATH, Config, LoggingConfig, load_config
from .core.errors import InvalidInput
from .core.frontier import FRONTIERS
from .core.grid import Grid
from .io.image import save_png
from .io.map_reader import read_grid
from .io.writer import format_no_path, format_result, write_no_path, write_result
from .persistence.trace_log import TraceLog
from .search.engine import Error, Found, Outcome, Unreachable, run
from .utils.profiling import profile_run
from .utils.terminal_view import TerminalView

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONFIG_ENV = "GRID_ASTAR_CONFIG"
LOG_LEVEL_ENV = "GRID_ASTAR_LOG_LEVEL"


class ExitCode(IntEnum):
    FOUND = 0
    UNREACHABLE = 1
    INVALID_INPUT = 2
    ALLOCATION_ERROR = 3
    IO_ERROR = 4


def configure_logging(cfg: LoggingConfig, level_override: Optional[str] = None) -> None:
    """Configure the root logger and any per-module levels from ``cfg``."""

    level_str = (level_override or cfg.global_level).upper()
    numeric_level = getattr(logging, level_str, None)
    invalid = not isinstance(numeric_level, int)
    if invalid:
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, force=True)
    if invalid:
        logger.warning("Invalid log level '%s'; using INFO.", level_str)

    for module_name, module_level in cfg.module_levels.items():
        module_numeric_level = getattr(logging, module_level.upper(), None)
        if isinstance(module_numeric_level, int):
            logging.getLogger(module_name).setLevel(module_numeric_level)
        else:
            logger.warning(
                "Invalid log level '%s' for module '%s' in config.", module_level, module_name
            )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="grid-astar",
        description="Find the cheapest 4-connected path between O and X on a square grid.",
    )
    ap.add_argument("input", type=Path, help="grid file: size, then size*size cells")
    ap.add_argument("output", type=Path, nargs="?", help="result file (stdout if omitted)")
    ap.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    ap.add_argument("--frontier", choices=sorted(FRONTIERS), default=None,
                    help="open-set implementation")
    ap.add_argument("--max-expansions", type=int, default=None,
                    help="give up after expanding this many cells (0 = no cap)")
    ap.add_argument("--png", type=Path, default=None, help="also save the path as a PNG")
    ap.add_argument("--trace", type=Path, default=None, help="append search events to this JSONL file")
    ap.add_argument("--profile", type=Path, default=None, help="dump cProfile stats of the search here")
    ap.add_argument("--show", action="store_true", help="print the coloured result grid to the terminal")
    ap.add_argument("--log-level", default=None, help="override the configured log level")
    return ap


def _resolve_config(path: Optional[Path]) -> Config:
    if path is None:
        env_path = os.getenv(CONFIG_ENV)
        path = Path(env_path) if env_path else CONFIG_PATH
    return load_config(path)


def _emit(outcome: Found, args: argparse.Namespace, cfg: Config, grid: Grid) -> None:
    if args.output is not None:
        write_result(args.output, outcome)
    else:
        sys.stdout.write(format_result(outcome))
        sys.stdout.flush()
    if args.png is not None:
        out = save_png(grid, args.png, outcome.path, scale=cfg.render.png_scale)
        logger.info("Path image saved to %s", out)
    if args.show:
        TerminalView(path_marker=cfg.render.path_marker).render(outcome.rows, sys.stderr)


def _emit_no_path(args: argparse.Namespace, grid: Grid) -> None:
    if args.output is not None:
        write_no_path(args.output, grid.rows())
    else:
        sys.stdout.write(format_no_path(grid.rows()))
        sys.stdout.flush()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path)

    try:
        cfg = _resolve_config(args.config)
    except (ValueError, yaml.YAMLError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return ExitCode.INVALID_INPUT
    configure_logging(cfg.logging, args.log_level or os.getenv(LOG_LEVEL_ENV))

    frontier = args.frontier or cfg.search.frontier
    if frontier not in FRONTIERS:
        logger.error("Unknown frontier '%s' in configuration.", frontier)
        return ExitCode.INVALID_INPUT
    if args.max_expansions is not None:
        max_expansions = args.max_expansions or None
    else:
        max_expansions = cfg.search.max_expansions

    try:
        grid = read_grid(args.input, min_size=cfg.grid.min_size, max_size=cfg.grid.max_size)
    except InvalidInput as exc:
        logger.error("Invalid grid in %s: %s", args.input, exc)
        return ExitCode.INVALID_INPUT
    except OSError as exc:
        logger.error("Could not read %s: %s", args.input, exc)
        return ExitCode.IO_ERROR
    logger.info("Loaded %dx%d grid from %s", grid.size, grid.size, args.input)

    trace = None
    if args.trace is not None:
        trace = TraceLog(args.trace, retention_mb=cfg.trace.retention_mb)

    def search() -> Outcome:
        return run(
            grid,
            frontier=frontier,
            max_expansions=max_expansions,
            trace=trace,
            marker=cfg.render.path_marker,
        )

    try:
        if args.profile is not None:
            outcome, _ = profile_run(search, args.profile)
            logger.info("Profile written to %s", args.profile)
        else:
            outcome = search()
    except OSError as exc:
        logger.error("Could not write trace or profile: %s", exc)
        return ExitCode.IO_ERROR

    if isinstance(outcome, Error):
        logger.error("Search aborted (%s): %s", outcome.kind, outcome.message)
        return ExitCode.ALLOCATION_ERROR
    if isinstance(outcome, Unreachable):
        if outcome.aborted:
            logger.warning("Gave up after %d expansions without finding a path.", outcome.expansions)
        else:
            logger.warning("Goal is unreachable from start.")
        try:
            _emit_no_path(args, grid)
        except OSError as exc:
            logger.error("Could not write result: %s", exc)
            return ExitCode.IO_ERROR
        return ExitCode.UNREACHABLE

    logger.info("Path found: cost %d, %d cells.", outcome.cost, len(outcome.path))
    try:
        _emit(outcome, args, cfg, grid)
    except OSError as exc:
        logger.error("Could not write result: %s", exc)
        return ExitCode.IO_ERROR
    return ExitCode.FOUND


__all__ = ["ExitCode", "build_parser", "configure_logging", "main"]
