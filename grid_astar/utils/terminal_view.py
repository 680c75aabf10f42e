"""ASCII terminal renderer for marked result grids."""

from __future__ import annotations

import sys
from typing import Sequence, TextIO


# Basic ANSI colour codes used by :class:`TerminalView`
_COLOURS = {
    "black": "\x1b[30m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "white": "\x1b[37m",
    "reset": "\x1b[0m",
}

_GLYPH_COLOURS = {
    "O": "green",
    "X": "blue",
    "#": "black",
    "W": "yellow",
    "V": "white",
}


class TerminalView:
    """Print a marked grid using ANSI colours."""

    def __init__(self, path_marker: str = "*", colour: bool = True) -> None:
        self.path_marker = path_marker
        self.colour = colour

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def format_rows(self, rows: Sequence[str]) -> list[str]:
        """Return ``rows`` with colour codes applied to every glyph."""

        if not self.colour:
            return list(rows)

        lines: list[str] = []
        for row in rows:
            out: list[str] = []
            for glyph in row:
                out.append(f"{_COLOURS[_glyph_to_colour(glyph, self.path_marker)]}{glyph}")
            out.append(_COLOURS["reset"])
            lines.append("".join(out))
        return lines

    def render(self, rows: Sequence[str], stream: TextIO | None = None) -> None:
        """Write the coloured ``rows`` to ``stream`` (``stdout`` by default)."""

        stream = stream if stream is not None else sys.stdout
        stream.write("\n".join(self.format_rows(rows)) + "\n")
        stream.flush()


# ----------------------------------------------------------------------
# Helper functions
# ----------------------------------------------------------------------
def _glyph_to_colour(glyph: str, path_marker: str) -> str:
    if glyph == path_marker:
        return "red"
    return _GLYPH_COLOURS.get(glyph, "reset")


__all__ = ["TerminalView"]
