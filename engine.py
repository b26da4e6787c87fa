from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import json
import math
import logging

import numpy as np

from bubbles import Bubble, BubbleColor, BubbleField, ItemType
from collision import beam_hits, find_snap_cell, first_contact
from hexgrid import grid_to_pixel
from levelgen import generate_level
from modifiers import MODIFIERS, GridModifiers
from projectile import Projectile, advance, aim_angle, launch, reached_ceiling
from search import blast_targets, find_cluster, find_floating

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class ShotOutcome(Enum):
    MISS = "miss"        # placed, nothing popped
    POP = "pop"          # same-color cluster popped
    BLAST = "blast"      # explosive two-ring blast
    BEAM = "beam"        # instant laser beam
    NO_SNAP = "no_snap"  # no free cell near the impact point: the shot loses


@dataclass
class ShotResult:
    outcome: ShotOutcome
    placed: Optional[Bubble] = None
    popped: List[Bubble] = field(default_factory=list)
    dropped: List[Bubble] = field(default_factory=list)
    items: List[ItemType] = field(default_factory=list)
    cleared: bool = False
    crossed_death_line: bool = False

    @property
    def successful(self) -> bool:
        return bool(self.popped)


def _as_int(value: Any, name: str) -> int:
    """Coerce a snapshot field to ``int``; loose strings are accepted with a warning."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        s = value.strip()
        if s and (s.isdigit() or (s[0] in {"+", "-"} and s[1:].isdigit())):
            logger.warning("snapshot: coercing %s=%r to int", name, value)
            return int(s)
    raise ValueError(f"snapshot field {name!r} is not an integer: {value!r}")


# =============================== ENGINE =======================================

class BubbleEngine:
    """Owns one bubble field and resolves shots against it.

    The searches and geometry it calls are pure; this class is the caller that
    mutates the field between them.
    """

    def __init__(self, rows: Optional[int] = None, seed: Optional[int] = None,
                 modifiers: GridModifiers = MODIFIERS):
        self.mods = modifiers
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.next_id = 0
        self.field = BubbleField(cols=modifiers.grid_cols)
        rows = modifiers.initial_rows if rows is None else rows
        self.field.extend(self._generate(rows))

    def _take_id(self) -> int:
        nid = self.next_id
        self.next_id += 1
        return nid

    def _generate(self, rows: int) -> List[Bubble]:
        m = self.mods
        return generate_level(rows, self.rng, ids=iter(self._take_id, None),
                              item_chance=m.item_chance, cols=m.grid_cols,
                              radius=m.bubble_radius)

    def place(self, row: int, col: int, color: BubbleColor,
              item: Optional[ItemType] = None) -> Bubble:
        """Insert a new active bubble at (row, col)."""
        x, y = grid_to_pixel(row, col, self.mods.bubble_radius)
        bubble = Bubble(id=self.next_id, row=row, col=col, x=x, y=y,
                        color=color, item=item)
        self.field.add(bubble)
        self._take_id()
        return bubble

    # ------------------------------------------------------------------ shots

    def launch(self, target: Tuple[float, float], color: BubbleColor) -> Optional[Projectile]:
        m = self.mods
        return launch(m.shooter_origin, target, color, m.projectile_speed, m.aim_margin)

    def step(self, p: Projectile) -> bool:
        """Advance ``p`` one tick; True once it touches the ceiling or a bubble."""
        m = self.mods
        advance(p, m.canvas_width, m.bubble_radius)
        if reached_ceiling(p, m.bubble_radius):
            return True
        hit = first_contact(p.pos, self.field, m.bubble_radius, m.collision_forgiveness)
        return hit is not None

    def resolve_landing(self, p: Projectile) -> ShotResult:
        """Snap ``p`` into the lattice and apply pops and drops."""
        if p.color is BubbleColor.LASER:
            raise ValueError("laser shots do not land; use fire_beam")
        m = self.mods
        p.active = False
        cell = find_snap_cell(p.x, p.y, self.field, m.grid_cols, m.bubble_radius)
        if cell is None:
            logger.info("no free cell near (%.1f, %.1f); shot is lost", p.x, p.y)
            return ShotResult(ShotOutcome.NO_SNAP, cleared=self.field.is_empty(),
                              crossed_death_line=self.crossed_death_line())

        placed = self.place(cell[0], cell[1], p.color)
        if p.color is BubbleColor.EXPLOSIVE:
            popped = [placed]
            for coord in sorted(blast_targets(cell[0], cell[1], m.grid_cols)):
                b = self.field.get(coord)
                if b is not None and b is not placed:
                    popped.append(b)
            return self._settle(ShotOutcome.BLAST, placed, popped)

        cluster = find_cluster(placed, self.field)
        if len(cluster) >= m.min_cluster:
            return self._settle(ShotOutcome.POP, placed, cluster)
        return self._settle(ShotOutcome.MISS, placed, [])

    def fire_beam(self, angle: float) -> ShotResult:
        """Pop every bubble on the beam from the shooter at ``angle``."""
        m = self.mods
        hits = beam_hits(m.shooter_origin, angle, self.field.bubbles(), m.bubble_radius)
        return self._settle(ShotOutcome.BEAM, None, hits)

    def play_shot(self, target: Tuple[float, float],
                  color: BubbleColor) -> Optional[ShotResult]:
        """Fire at ``target`` and run the shot to completion.

        Returns ``None`` when the aim is rejected. Valid aims always travel
        upward, so the flight ends at the ceiling at the latest.
        """
        m = self.mods
        if color is BubbleColor.LASER:
            angle = aim_angle(m.shooter_origin, target, m.aim_margin)
            return None if angle is None else self.fire_beam(angle)
        p = self.launch(target, color)
        if p is None:
            return None
        while not self.step(p):
            pass
        return self.resolve_landing(p)

    def _settle(self, outcome: ShotOutcome, placed: Optional[Bubble],
                popped: List[Bubble]) -> ShotResult:
        for b in popped:
            self.field.deactivate(b)
        dropped: List[Bubble] = []
        if outcome is not ShotOutcome.MISS:
            dropped = find_floating(self.field)
            for b in dropped:
                self.field.deactivate(b)
        items = [b.item for b in popped + dropped if b.item is not None]
        result = ShotResult(outcome, placed, popped, dropped, items,
                            cleared=self.field.is_empty(),
                            crossed_death_line=self.crossed_death_line())
        logger.debug("%s: placed=%r popped=%d dropped=%d items=%d cleared=%s",
                     outcome.value, placed, len(popped), len(dropped), len(items),
                     result.cleared)
        return result

    # ------------------------------------------------------------------ field

    def push_rows(self, count: Optional[int] = None) -> List[Bubble]:
        """Shift the field down ``count`` rows and fill the top with new rows."""
        m = self.mods
        count = m.penalty_rows if count is None else count
        if count <= 0 or count % 2:
            raise ValueError(f"push_rows needs a positive even count, got {count}")
        for b in self.field:
            b.relocate(b.row + count, b.col, m.bubble_radius)
        self.field.reindex()
        new_rows = self._generate(count)
        self.field.extend(new_rows)
        logger.info("pushed %d rows; %d bubbles on the field", count, len(self.field))
        return new_rows

    def crossed_death_line(self) -> bool:
        m = self.mods
        return any(b.y + m.bubble_radius > m.death_line_y for b in self.field)

    def summary(self) -> Dict:
        colors: Dict[str, int] = {}
        for b in self.field:
            colors[b.color.name] = colors.get(b.color.name, 0) + 1
        return {
            "bubbles": len(self.field),
            "rows": self.field.max_row() + 1,
            "colors": dict(sorted(colors.items())),
            "items": sum(1 for b in self.field if b.item is not None),
            "floating": len(find_floating(self.field)),
            "crossed_death_line": self.crossed_death_line(),
            "next_id": self.next_id,
        }

    # ---------------------------------------------------------------- persist

    def snapshot(self) -> Dict:
        return {
            "version": SNAPSHOT_VERSION,
            "cols": self.field.cols,
            "radius": self.mods.bubble_radius,
            "next_id": self.next_id,
            "bubbles": [
                {
                    "id": b.id,
                    "row": b.row,
                    "col": b.col,
                    "color": b.color.name,
                    "item": b.item.name if b.item is not None else None,
                }
                for b in self.field.bubbles()
            ],
        }

    def restore(self, data: Dict) -> None:
        """Replace the field with the bubbles of a :meth:`snapshot` dict."""
        try:
            cols = _as_int(data["cols"], "cols")
            entries = data["bubbles"]
        except KeyError as exc:
            raise ValueError(f"snapshot is missing {exc.args[0]!r}") from None
        if cols != self.mods.grid_cols:
            raise ValueError(f"snapshot has {cols} columns, modifiers use {self.mods.grid_cols}")

        radius = self.mods.bubble_radius
        saved_radius = data.get("radius")
        if saved_radius is not None and not math.isclose(float(saved_radius), radius):
            raise ValueError(f"snapshot has radius {saved_radius}, modifiers use {radius}")
        restored = BubbleField(cols=cols)
        seen_ids = set()
        max_id = -1
        for entry in entries:
            try:
                bid = _as_int(entry["id"], "id")
                row = _as_int(entry["row"], "row")
                col = _as_int(entry["col"], "col")
                color = BubbleColor[entry["color"]]
                item_name = entry.get("item")
                item = ItemType[item_name] if item_name is not None else None
            except KeyError as exc:
                raise ValueError(f"bad snapshot bubble {entry!r}: {exc.args[0]!r}") from None
            if bid in seen_ids:
                raise ValueError(f"snapshot reuses bubble id {bid}")
            seen_ids.add(bid)
            x, y = grid_to_pixel(row, col, radius)
            restored.add(Bubble(id=bid, row=row, col=col, x=x, y=y, color=color, item=item))
            max_id = max(max_id, bid)

        self.field = restored
        self.next_id = max(_as_int(data.get("next_id", 0), "next_id"), max_id + 1)

    def save_json(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.snapshot(), f, indent=2)

    def load_json(self, path: str) -> None:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        self.restore(data)
