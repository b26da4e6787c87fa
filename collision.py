"""Contact tests between shots and placed bubbles."""
from __future__ import annotations
import math
from typing import Iterable, Optional, Tuple

from bubbles import Bubble
from hexgrid import Coord, distance, grid_to_pixel, in_bounds, pixel_to_grid
from modifiers import MODIFIERS

Point = Tuple[float, float]


def collides(point: Point, bubble: Bubble,
             radius: float = MODIFIERS.bubble_radius,
             forgiveness: float = MODIFIERS.collision_forgiveness) -> bool:
    """True when ``point`` is within touching distance of ``bubble``.

    The touching distance is shortened by ``forgiveness`` so a fast shot grazing
    a bubble still registers instead of slipping past it between frames.
    """
    return distance(point[0], point[1], bubble.x, bubble.y) < (radius * 2 - forgiveness)


def first_contact(point: Point, bubbles: Iterable[Bubble],
                  radius: float = MODIFIERS.bubble_radius,
                  forgiveness: float = MODIFIERS.collision_forgiveness) -> Optional[Bubble]:
    for b in bubbles:
        if b.active and collides(point, b, radius, forgiveness):
            return b
    return None


def find_snap_cell(x: float, y: float, cells,
                   cols: int = MODIFIERS.grid_cols,
                   radius: float = MODIFIERS.bubble_radius) -> Optional[Coord]:
    """Nearest free cell around the impact point ``(x, y)``.

    Scans the 3x3 block of rows and columns around the rounded lattice cell.
    ``cells`` answers ``get((row, col))`` with the active bubble there, if any.
    Returns ``None`` when every candidate is occupied or out of bounds.
    """
    rough_r, rough_c = pixel_to_grid(x, y, radius)
    best: Optional[Coord] = None
    best_dist = math.inf
    for r in range(rough_r - 1, rough_r + 2):
        for c in range(rough_c - 1, rough_c + 2):
            if not in_bounds(r, c, cols):
                continue
            occupant = cells.get((r, c))
            if occupant is not None and occupant.active:
                continue
            px, py = grid_to_pixel(r, c, radius)
            d = distance(px, py, x, y)
            if d < best_dist:
                best_dist = d
                best = (r, c)
    return best


def beam_hits(origin: Point, angle: float, bubbles: Iterable[Bubble],
              radius: float = MODIFIERS.bubble_radius) -> list[Bubble]:
    """Active bubbles crossed by an instant beam fired from ``origin``.

    The beam is an unbounded ray; a bubble is hit when its center lies closer
    than ``radius`` to the ray's line and ahead of the origin.
    """
    dx, dy = math.cos(angle), math.sin(angle)
    ox, oy = origin
    hits = []
    for b in bubbles:
        if not b.active:
            continue
        rx, ry = b.x - ox, b.y - oy
        # unit direction: cross product is the perpendicular distance
        perp = abs(dx * ry - dy * rx)
        ahead = rx * dx + ry * dy
        if perp < radius and ahead > 0:
            hits.append(b)
    return hits
