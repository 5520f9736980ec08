# gridplate/test_geometry.py
# Overlap / containment predicates. Run with:
#   pytest gridplate

from __future__ import annotations

from gridplate.geometry import contains, find_overlap, overlaps, rects_overlap
from gridplate.types import Piece, PlacedItem, Rect


def _it(uid: str, x, y, w, d) -> PlacedItem:
    return PlacedItem(item_id=uid, x=x, y=y, width=w, depth=d)


def test_shared_edge_is_not_overlap() -> None:
    a = _it("a", 0, 0, 2, 2)
    b = _it("b", 2, 0, 2, 2)
    assert not overlaps(a, b)
    assert not overlaps(b, a)

    c = _it("c", 0, 2, 2, 2)
    assert not overlaps(a, c)


def test_overlap_is_symmetric() -> None:
    rects = [
        _it("a", 0, 0, 3, 3),
        _it("b", 2, 2, 3, 3),
        _it("c", 3, 3, 1, 1),
        _it("d", 1, 0, 1, 5),
        _it("e", 0.5, 0.5, 0.25, 0.25),
    ]
    for a in rects:
        for b in rects:
            assert overlaps(a, b) == overlaps(b, a)

    assert overlaps(rects[0], rects[1])
    assert not overlaps(rects[0], rects[2])
    assert overlaps(rects[0], rects[3])
    assert overlaps(rects[0], rects[4])


def test_contained_rect_overlaps_container_item() -> None:
    assert rects_overlap(0, 0, 10, 10, 4, 4, 1, 1)


def test_contains_bounds() -> None:
    assert contains(4, 4, _it("a", 0, 0, 4, 4))
    assert contains(4, 4, _it("a", 2, 1, 2, 3))
    assert not contains(4, 4, _it("a", 3, 0, 2, 1))
    assert not contains(4, 4, _it("a", 0, 1, 1, 4))
    assert not contains(4, 4, _it("a", -1, 0, 1, 1))


def test_find_overlap_reports_first_pair() -> None:
    items = [_it("a", 0, 0, 2, 2), _it("b", 2, 0, 2, 2), _it("c", 3, 1, 2, 2)]
    pair = find_overlap(items)
    assert pair is not None
    assert (pair[0].item_id, pair[1].item_id) == ("b", "c")
    assert find_overlap(items[:2]) is None


def test_rect_rotated_swaps_extents() -> None:
    r = Rect(3, 1)
    assert r.rotated() == Rect(1, 3)
    assert r.rotated().rotated() == r
    assert r.area == 3


def test_items_and_pieces_expose_rect() -> None:
    it = _it("a", 1, 2, 3, 1)
    assert it.rect == Rect(3, 1)
    turned = it.rotated(0, 0)
    assert turned.rect == it.rect.rotated()
    assert turned.rotation == 90

    p = Piece("p", 126, 42)
    assert p.rect == Rect(126, 42)
    assert p.area == p.rect.area == 5292
