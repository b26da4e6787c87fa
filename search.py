"""Breadth-first searches over the bubble lattice.

Visited sets hold bubble objects rather than ids.
"""
from collections import deque
from typing import Dict, Iterable, List, Set, Tuple

from bubbles import Bubble
from hexgrid import Coord, neighbors
from modifiers import MODIFIERS


def index_cells(bubbles) -> Dict[Coord, Bubble]:
    """Return a ``(row, col) -> Bubble`` lookup of the active bubbles.

    Objects that already answer ``get((row, col))`` (a ``BubbleField`` or a
    dict) are returned unchanged.
    """
    if hasattr(bubbles, "get"):
        return bubbles
    return {(b.row, b.col): b for b in bubbles if b.active}


def _cols_of(cells, default: int) -> int:
    return getattr(cells, "cols", default)


def find_cluster(start: Bubble, cells, cols: int = MODIFIERS.grid_cols) -> List[Bubble]:
    """Maximal same-color connected group containing ``start``.

    Breadth-first over lattice neighbors; a neighbor joins when it is active,
    has ``start``'s color and has not been visited. ``start`` is always the
    first element.
    """
    cells = index_cells(cells)
    cols = _cols_of(cells, cols)
    cluster: List[Bubble] = [start]
    visited: Set[Bubble] = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for coord in neighbors(current.row, current.col, cols):
            b = cells.get(coord)
            if b is None or not b.active or b in visited:
                continue
            if b.color != start.color:
                continue
            visited.add(b)
            cluster.append(b)
            queue.append(b)
    return cluster


def _reach_from_ceiling(bubbles, cols: int) -> Tuple[List[Bubble], Set[Bubble]]:
    if hasattr(bubbles, "get"):
        cells = bubbles
        pool = bubbles.values() if isinstance(bubbles, dict) else bubbles
        active = [b for b in pool if b.active]
    else:
        active = [b for b in bubbles if b.active]
        cells = index_cells(active)
    cols = _cols_of(cells, cols)
    visited: Set[Bubble] = set()
    queue = deque()
    for b in active:
        if b.row == 0:
            visited.add(b)
            queue.append(b)
    while queue:
        current = queue.popleft()
        for coord in neighbors(current.row, current.col, cols):
            b = cells.get(coord)
            if b is not None and b.active and b not in visited:
                visited.add(b)
                queue.append(b)
    return active, visited


def find_floating(bubbles: Iterable[Bubble], cols: int = MODIFIERS.grid_cols) -> List[Bubble]:
    """Active bubbles with no path of any color back to row 0."""
    active, grounded = _reach_from_ceiling(bubbles, cols)
    return [b for b in active if b not in grounded]


def find_grounded(bubbles: Iterable[Bubble], cols: int = MODIFIERS.grid_cols) -> List[Bubble]:
    """Complement of :func:`find_floating` within the active bubbles."""
    active, grounded = _reach_from_ceiling(bubbles, cols)
    return [b for b in active if b in grounded]


def blast_targets(row: int, col: int, cols: int = MODIFIERS.grid_cols) -> Set[Coord]:
    """Cells within two neighbor hops of (row, col), center included."""
    ring1 = neighbors(row, col, cols)
    targets: Set[Coord] = {(row, col)}
    targets.update(ring1)
    for r1, c1 in ring1:
        targets.update(neighbors(r1, c1, cols))
    return targets
