# levelgen.py - initial field of full rows with rare collectible items
from __future__ import annotations

import itertools
import logging
from typing import Iterator, List, Optional

import numpy as np

from bubbles import COLORS, Bubble, ItemType
from hexgrid import columns_for_row, grid_to_pixel
from modifiers import MODIFIERS

logger = logging.getLogger(__name__)


def generate_level(rows: int, rng=None, ids: Optional[Iterator[int]] = None,
                   item_chance: float = MODIFIERS.item_chance,
                   cols: int = MODIFIERS.grid_cols,
                   radius: float = MODIFIERS.bubble_radius) -> List[Bubble]:
    """Return ``rows`` full rows of randomly colored bubbles.

    Colors are drawn uniformly from the ordinary palette. Each bubble carries
    the LASER collectible with independent probability ``item_chance``; the
    item draw happens before the color draw. ``rng`` is anything accepted by
    :func:`numpy.random.default_rng` (a Generator, a seed, or ``None``), so a
    fixed seed reproduces the same field. ``ids`` supplies bubble ids and
    defaults to a fresh counter starting at 0.
    """
    if rows < 0:
        raise ValueError(f"rows must be >= 0, got {rows}")
    if not 0.0 <= item_chance <= 1.0:
        raise ValueError(f"item_chance {item_chance!r} outside [0, 1]")

    rng = np.random.default_rng(rng)
    ids = itertools.count() if ids is None else ids
    bubbles: List[Bubble] = []
    for r in range(rows):
        for c in range(columns_for_row(r, cols)):
            x, y = grid_to_pixel(r, c, radius)
            has_item = rng.random() < item_chance
            color = COLORS[int(rng.integers(len(COLORS)))]
            bubbles.append(Bubble(
                id=next(ids),
                row=r,
                col=c,
                x=x,
                y=y,
                color=color,
                active=True,
                scale=1.0,
                item=ItemType.LASER if has_item else None,
            ))
    logger.debug("generated %d bubbles over %d rows (%d items)", len(bubbles), rows,
                 sum(1 for b in bubbles if b.item is not None))
    return bubbles
