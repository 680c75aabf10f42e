"""Render a grid and its path to a PNG using :mod:`Pillow`."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Tuple

from PIL import Image, ImageDraw

from ..core.grid import WALL, Grid

RGB = Tuple[int, int, int]

WALL_COLOUR: RGB = (0, 0, 0)
OPEN_COLOUR: RGB = (255, 255, 255)
ROUGH_COLOUR: RGB = (170, 170, 170)
PATH_COLOUR: RGB = (255, 0, 0)
START_COLOUR: RGB = (0, 200, 0)
GOAL_COLOUR: RGB = (0, 0, 255)


def _cell_colour(grid: Grid, index: int) -> RGB:
    cost = grid.cost(index)
    if cost is WALL:
        return WALL_COLOUR
    if cost > 1:
        return ROUGH_COLOUR
    return OPEN_COLOUR


def render_image(
    grid: Grid, path: Optional[Iterable[int]] = None, scale: int = 8
) -> Image.Image:
    """Return an RGB image of ``grid`` with ``path`` drawn in red.

    Each cell becomes a ``scale`` x ``scale`` square.
    """

    if scale < 1:
        raise ValueError("scale must be positive")
    n = grid.size
    img = Image.new("RGB", (n * scale, n * scale), color=OPEN_COLOUR)
    draw = ImageDraw.Draw(img)
    path_set = set(path) if path else set()

    for index in range(grid.cell_count):
        if index == grid.start:
            fill = START_COLOUR
        elif index == grid.goal:
            fill = GOAL_COLOUR
        elif index in path_set:
            fill = PATH_COLOUR
        else:
            fill = _cell_colour(grid, index)
        if fill == OPEN_COLOUR:
            continue
        row, col = grid.row_col(index)
        x0, y0 = col * scale, row * scale
        draw.rectangle([x0, y0, x0 + scale - 1, y0 + scale - 1], fill=fill)
    return img


def save_png(
    grid: Grid,
    filename: str | Path,
    path: Optional[Iterable[int]] = None,
    scale: int = 8,
) -> Path:
    """Write :func:`render_image` output to ``filename`` and return the path."""

    out = Path(filename)
    if not out.parent.exists():
        out.parent.mkdir(parents=True, exist_ok=True)
    render_image(grid, path, scale).save(out, format="PNG")
    return out


__all__ = ["render_image", "save_png"]
