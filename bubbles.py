"""Bubble data model and the sparse field that indexes active bubbles."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from hexgrid import Coord, grid_to_pixel, in_bounds
from modifiers import MODIFIERS


class BubbleColor(Enum):
    RED = "#ff0055"
    GREEN = "#00ff66"
    BLUE = "#00ccff"
    YELLOW = "#ffcc00"
    PURPLE = "#cc00ff"
    ORANGE = "#ff6600"
    # Special markers: shot behaviors, never generated into a level
    EXPLOSIVE = "EXPLOSIVE"
    LASER = "LASER"

    @property
    def is_special(self) -> bool:
        return self in (BubbleColor.EXPLOSIVE, BubbleColor.LASER)


class ItemType(Enum):
    BOMB = "BOMB"
    LASER = "LASER"


# Ordinary colors used for generation
COLORS: Tuple[BubbleColor, ...] = tuple(c for c in BubbleColor if not c.is_special)


@dataclass(eq=False)
class Bubble:
    id: int
    row: int
    col: int
    x: float
    y: float
    color: BubbleColor
    active: bool = True
    scale: float = 1.0  # animation only, owned by the renderer
    item: Optional[ItemType] = None

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    def relocate(self, row: int, col: int,
                 radius: float = MODIFIERS.bubble_radius) -> None:
        """Move to (row, col) and refresh the pixel center."""
        self.row, self.col = row, col
        self.x, self.y = grid_to_pixel(row, col, radius)

    def __repr__(self) -> str:
        return f"Bubble(id={self.id}, ({self.row},{self.col}), {self.color.name})"


class BubbleField:
    """Active bubbles indexed by lattice coordinate.

    At most one active bubble occupies a cell. Deactivated bubbles are dropped
    from the index immediately, so every lookup only ever sees active ones.
    """

    def __init__(self, cols: int = MODIFIERS.grid_cols,
                 bubbles: Iterable[Bubble] = ()):
        self.cols = cols
        self._cells: Dict[Coord, Bubble] = {}
        self.extend(bubbles)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Bubble]:
        return iter(self._cells.values())

    def __contains__(self, coord: Coord) -> bool:
        return coord in self._cells

    def get(self, coord: Coord) -> Optional[Bubble]:
        return self._cells.get(coord)

    def is_empty(self) -> bool:
        return not self._cells

    def add(self, bubble: Bubble) -> Bubble:
        coord = bubble.coord
        if not in_bounds(coord[0], coord[1], self.cols):
            raise ValueError(f"cell {coord} is outside the lattice")
        if coord in self._cells:
            raise ValueError(f"cell {coord} is already occupied by {self._cells[coord]!r}")
        if not bubble.active:
            raise ValueError(f"{bubble!r} is inactive")
        self._cells[coord] = bubble
        return bubble

    def extend(self, bubbles: Iterable[Bubble]) -> None:
        for b in bubbles:
            self.add(b)

    def deactivate(self, bubble: Bubble) -> Bubble:
        """Mark ``bubble`` inactive and remove it from the index."""
        if self._cells.get(bubble.coord) is bubble:
            del self._cells[bubble.coord]
        bubble.active = False
        return bubble

    def bubbles(self) -> List[Bubble]:
        """Active bubbles sorted by (row, col)."""
        return [self._cells[k] for k in sorted(self._cells)]

    def reindex(self) -> None:
        """Rebuild the index after bubbles were relocated in place."""
        moved = list(self._cells.values())
        self._cells = {}
        self.extend(moved)

    def max_row(self) -> int:
        return max((r for r, _ in self._cells), default=-1)
