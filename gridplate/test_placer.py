# gridplate/test_placer.py
# Grid placer: move / rotate / place / remove must be all-or-nothing and keep
# the grid free of overlaps.

from __future__ import annotations

import random

from gridplate.placer import (
    add_anywhere,
    can_fit_anywhere,
    can_place,
    check_placement,
    clamp_position,
    find_free_position,
    move,
    place,
    remove,
    ring_offsets,
    rotate,
)
from gridplate.types import (
    DUPLICATE_ID,
    NO_VALID_ROTATION,
    NOT_FOUND,
    OUT_OF_BOUNDS,
    OVERLAP,
    UNFITTABLE,
    Grid,
    PlacedItem,
)
from gridplate.validate import validate_grid


def _bin(uid: str, x: int, y: int, w: int, d: int) -> PlacedItem:
    return PlacedItem(item_id=uid, x=x, y=y, width=w, depth=d, source_id=uid)


def _grid() -> Grid:
    return Grid(cols=6, rows=5, items=(_bin("a", 0, 0, 2, 2), _bin("b", 3, 0, 1, 3)))


def test_can_place_excludes_self() -> None:
    g = _grid()
    assert not can_place(g, 1, 0, 2, 2)
    assert can_place(g, 1, 0, 2, 2, exclude_id="a")
    assert check_placement(g, 5, 0, 2, 1) == OUT_OF_BOUNDS
    assert check_placement(g, 2, 1, 2, 1) == OVERLAP
    assert check_placement(g, 4, 0, 2, 5) is None


def test_move_success_and_rejection() -> None:
    g = _grid()
    res = move(g, "a", 0, 3)
    assert res.ok
    assert res.grid.get("a").y == 3
    # the input snapshot is untouched
    assert g.get("a").y == 0

    bad = move(g, "a", 2, 0)
    assert not bad.ok
    assert bad.rejection.reason == OVERLAP
    assert bad.grid == g

    oob = move(g, "a", 5, 4)
    assert oob.rejection.reason == OUT_OF_BOUNDS
    assert oob.grid == g

    missing = move(g, "zzz", 0, 0)
    assert missing.rejection.reason == NOT_FOUND


def test_move_to_current_position_is_noop() -> None:
    g = _grid()
    for it in g.items:
        res = move(g, it.item_id, it.x, it.y)
        assert res.ok
        assert res.grid == g


def test_rotate_in_place_when_room() -> None:
    g = Grid(cols=6, rows=6, items=(_bin("a", 1, 1, 3, 1),))
    res = rotate(g, "a")
    assert res.ok
    a = res.grid.get("a")
    assert (a.x, a.y, a.width, a.depth, a.rotation) == (1, 1, 1, 3, 90)

    back = rotate(res.grid, "a").grid.get("a")
    assert (back.width, back.depth, back.rotation) == (3, 1, 0)


def test_rotate_moves_away_from_edge() -> None:
    # 3x1 on the last row: the 1x3 footprint has to shift up
    g = Grid(cols=4, rows=4, items=(_bin("a", 0, 3, 3, 1),))
    res = rotate(g, "a")
    assert res.ok
    a = res.grid.get("a")
    assert (a.width, a.depth) == (1, 3)
    assert a.y + a.depth <= 4
    # search window clips y to [0, 1]; first in-window origin is (0, 1) at distance 2
    assert (a.x, a.y) == (0, 1)
    assert validate_grid(res.grid) == []


def test_rotate_prefers_distance_zero() -> None:
    g = Grid(cols=5, rows=5, items=(_bin("a", 2, 2, 2, 1), _bin("b", 0, 0, 1, 1)))
    a = rotate(g, "a").grid.get("a")
    assert (a.x, a.y) == (2, 2)


def test_rotate_rejected_when_grid_full() -> None:
    # 3x1 bins filling a 3x3 grid: no 1x3 footprint anywhere
    g = Grid(cols=3, rows=3, items=(_bin("a", 0, 0, 3, 1), _bin("b", 0, 1, 3, 1), _bin("c", 0, 2, 3, 1)))
    res = rotate(g, "a")
    assert not res.ok
    assert res.rejection.reason == NO_VALID_ROTATION
    assert res.grid is g
    assert res.grid == Grid(cols=3, rows=3, items=(_bin("a", 0, 0, 3, 1), _bin("b", 0, 1, 3, 1), _bin("c", 0, 2, 3, 1)))


def test_rotate_rejected_when_rotated_footprint_exceeds_grid() -> None:
    g = Grid(cols=4, rows=2, items=(_bin("a", 0, 0, 4, 1),))
    res = rotate(g, "a")
    assert res.rejection.reason == NO_VALID_ROTATION
    assert res.grid == g


def test_ring_offsets_order() -> None:
    offs = list(ring_offsets(1))
    assert offs[0] == (0, 0)
    assert offs[1:] == [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]
    assert len(list(ring_offsets(2))) == 25
    assert list(ring_offsets(3)) == list(ring_offsets(3))


def test_can_fit_anywhere() -> None:
    g = _grid()
    assert can_fit_anywhere(g, 2, 2)
    assert find_free_position(g, 2, 2) == (4, 0)
    assert not can_fit_anywhere(g, 7, 1)

    full = Grid(cols=2, rows=2, items=(_bin("a", 0, 0, 2, 2),))
    assert not can_fit_anywhere(full, 1, 1)


def test_place_add_remove() -> None:
    g = _grid()
    res = place(g, _bin("c", 0, 3, 2, 2))
    assert res.ok and len(res.grid.items) == 3

    assert place(res.grid, _bin("c", 4, 4, 1, 1)).rejection.reason == DUPLICATE_ID
    assert place(g, _bin("d", 1, 1, 1, 1)).rejection.reason == OVERLAP

    added = add_anywhere(g, _bin("e", 99, 99, 2, 2))
    assert added.ok
    e = added.grid.get("e")
    assert (e.x, e.y) == (4, 0)

    full = Grid(cols=2, rows=2, items=(_bin("a", 0, 0, 2, 2),))
    assert add_anywhere(full, _bin("x", 0, 0, 1, 1)).rejection.reason == UNFITTABLE

    gone = remove(g, "a")
    assert gone.ok and gone.grid.get("a") is None
    assert remove(g, "nope").rejection.reason == NOT_FOUND


def test_clamp_position() -> None:
    g = _grid()
    assert clamp_position(g, 2, 2, -3, 10) == (0, 3)
    assert clamp_position(g, 2, 2, 2.6, 1.2) == (3, 1)


def test_random_edits_keep_grid_valid() -> None:
    rnd = random.Random(7)
    g = Grid(cols=10, rows=8)
    for k in range(12):
        w, d = rnd.randint(1, 4), rnd.randint(1, 4)
        g = add_anywhere(g, _bin(f"b{k}", 0, 0, w, d)).grid

    for _ in range(300):
        it = rnd.choice(g.items)
        if rnd.random() < 0.3:
            g = rotate(g, it.item_id).grid
        else:
            g = move(g, it.item_id, rnd.randint(-1, 10), rnd.randint(-1, 8)).grid
        assert validate_grid(g) == []
