from __future__ import annotations

import os
from typing import Tuple

from PIL import Image, ImageDraw

from bubbles import BubbleColor, BubbleField
from hexgrid import columns_for_row, grid_to_pixel
from modifiers import MODIFIERS, GridModifiers

BACKGROUND = (16, 18, 24, 255)
EMPTY_CELL = (40, 44, 56, 255)
DEATH_LINE = (239, 68, 68, 160)
ITEM_RING = (34, 211, 238, 255)

# Special markers have no paint color of their own
SPECIAL_COLORS = {
    BubbleColor.EXPLOSIVE: (239, 68, 68),
    BubbleColor.LASER: (34, 211, 238),
}


def _rgb(color: BubbleColor) -> Tuple[int, int, int]:
    if color in SPECIAL_COLORS:
        return SPECIAL_COLORS[color]
    h = color.value.lstrip("#")
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def render_topdown(field: BubbleField, path_png: str,
                   modifiers: GridModifiers = MODIFIERS,
                   show_grid: bool = True) -> None:
    """Render the field as seen from the shooter, one disc per bubble."""

    radius = modifiers.bubble_radius
    img_w = int(modifiers.canvas_width)
    img_h = int(modifiers.canvas_height)

    img = Image.new("RGBA", (img_w, img_h), BACKGROUND)
    draw = ImageDraw.Draw(img, "RGBA")

    if show_grid:
        rows = max(modifiers.grid_rows, field.max_row() + 1)
        for r in range(rows):
            for c in range(columns_for_row(r, field.cols)):
                cx, cy = grid_to_pixel(r, c, radius)
                if cy - radius > img_h:
                    break
                draw.ellipse((cx - 2, cy - 2, cx + 2, cy + 2), fill=EMPTY_CELL)

    for b in field.bubbles():
        r = radius * b.scale - 1
        box = (b.x - r, b.y - r, b.x + r, b.y + r)
        draw.ellipse(box, fill=_rgb(b.color) + (255,))
        if b.item is not None:
            draw.ellipse(box, outline=ITEM_RING, width=3)

    y = modifiers.death_line_y
    draw.line((0, y, img_w, y), fill=DEATH_LINE, width=2)

    os.makedirs(os.path.dirname(path_png) or ".", exist_ok=True)
    img.save(path_png)


__all__ = ["render_topdown"]
