import math

from bubbles import Bubble, BubbleColor, BubbleField
from collision import beam_hits, collides, find_snap_cell, first_contact
from hexgrid import grid_to_pixel

RADIUS = 20.0
FORGIVENESS = 4.0


def _bubble(row, col, color=BubbleColor.RED, bid=None):
    x, y = grid_to_pixel(row, col, RADIUS)
    return Bubble(id=bid if bid is not None else row * 100 + col, row=row, col=col,
                  x=x, y=y, color=color)


def test_collision_forgiveness_boundary():
    b = _bubble(2, 3)
    reach = 2 * RADIUS - FORGIVENESS
    assert collides((b.x + reach - 1, b.y), b, RADIUS, FORGIVENESS)
    assert not collides((b.x + reach + 1, b.y), b, RADIUS, FORGIVENESS)
    assert not collides((b.x, b.y + reach), b, RADIUS, FORGIVENESS)


def test_first_contact_skips_inactive():
    a = _bubble(0, 0)
    b = _bubble(0, 1)
    a.active = False
    point = (a.x, a.y + 10)
    assert first_contact(point, [a], RADIUS, FORGIVENESS) is None
    assert first_contact((b.x, b.y + 10), [a, b], RADIUS, FORGIVENESS) is b


def test_snap_cell_prefers_nearest_free_cell():
    field = BubbleField(cols=12, bubbles=[_bubble(0, 4), _bubble(0, 5)])
    x, y = grid_to_pixel(1, 4, RADIUS)
    assert find_snap_cell(x + 3, y - 2, field, 12, RADIUS) == (1, 4)
    # Impact right on an occupied center picks a free neighbor instead
    bx, by = grid_to_pixel(0, 4, RADIUS)
    assert find_snap_cell(bx, by, field, 12, RADIUS) in {(0, 3), (1, 3), (1, 4)}


def test_snap_cell_none_when_block_is_full():
    cells = {}
    for r in range(3):
        for c in range(12 if r % 2 == 0 else 11):
            cells[(r, c)] = _bubble(r, c)
    x, y = grid_to_pixel(1, 5, RADIUS)
    assert find_snap_cell(x, y, cells, 12, RADIUS) is None


def test_snap_cell_clamps_to_lattice():
    x, y = grid_to_pixel(0, 0, RADIUS)
    cell = find_snap_cell(x - 30, y - 15, {}, 12, RADIUS)
    assert cell == (0, 0)


def test_beam_hits_bubbles_on_the_ray():
    origin = (240.0, 670.0)
    on_ray = _bubble(1, 5)           # x == 240 on an odd row
    beside = Bubble(id=98, row=0, col=5, x=217.0, y=20.0, color=BubbleColor.RED)
    behind = Bubble(id=99, row=0, col=0, x=240.0, y=700.0, color=BubbleColor.BLUE)
    hits = beam_hits(origin, -math.pi / 2, [on_ray, beside, behind], RADIUS)
    assert hits == [on_ray]


def test_beam_ignores_inactive():
    b = _bubble(1, 5)
    b.active = False
    assert beam_hits((240.0, 670.0), -math.pi / 2, [b], RADIUS) == []
