"""Offset hex lattice utilities for the bubble grid.

Rows are stacked with tight hexagonal packing; odd rows are shifted right by
one radius and hold one column fewer than even rows.
"""
from __future__ import annotations
import math
from typing import List, Tuple

from modifiers import MODIFIERS

SQRT3 = math.sqrt(3.0)
Coord = Tuple[int, int]  # (row, col)

_EVEN_ROW_OFFSETS = ((0, -1), (0, 1), (-1, -1), (-1, 0), (1, -1), (1, 0))
_ODD_ROW_OFFSETS = ((0, -1), (0, 1), (-1, 0), (-1, 1), (1, 0), (1, 1))


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def columns_for_row(row: int, cols: int = MODIFIERS.grid_cols) -> int:
    """Number of valid columns in ``row``."""
    return cols if row % 2 == 0 else cols - 1


def in_bounds(row: int, col: int, cols: int = MODIFIERS.grid_cols) -> bool:
    """Return True if (row, col) is a cell of the lattice."""
    return row >= 0 and 0 <= col < columns_for_row(row, cols)


def grid_to_pixel(row: int, col: int,
                  radius: float = MODIFIERS.bubble_radius) -> Tuple[float, float]:
    """Convert lattice coords to the pixel center of the cell."""
    offset_x = 0.0 if row % 2 == 0 else radius
    x = col * (radius * 2) + radius + offset_x
    y = row * (radius * SQRT3) + radius
    return x, y


def pixel_to_grid(x: float, y: float,
                  radius: float = MODIFIERS.bubble_radius) -> Coord:
    """Inverse of :func:`grid_to_pixel`, rounded to the nearest lattice lines.

    The row is resolved first because the column offset depends on its
    parity. The result is not bounds-checked.
    """
    row = _round_half_up((y - radius) / (radius * SQRT3))
    offset_x = 0.0 if row % 2 == 0 else radius
    col = _round_half_up((x - radius - offset_x) / (radius * 2))
    return row, col


def neighbors(row: int, col: int, cols: int = MODIFIERS.grid_cols) -> List[Coord]:
    """Return the in-bounds lattice neighbors of (row, col).

    Diagonal neighbors sit half a column left on even rows and half a column
    right on odd rows, so the offset set depends on row parity.
    """
    offsets = _EVEN_ROW_OFFSETS if row % 2 == 0 else _ODD_ROW_OFFSETS
    out: List[Coord] = []
    for dr, dc in offsets:
        nr, nc = row + dr, col + dc
        if in_bounds(nr, nc, cols):
            out.append((nr, nc))
    return out


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean pixel distance."""
    return math.hypot(x1 - x2, y1 - y2)
