# gridplate/geometry.py
# Overlap / containment predicates shared by the placer, packer and validators.
# Rectangles are half-open: an item covers [x, x+width) x [y, y+depth), so
# touching edges never count as overlap.

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from .types import Number, PlacedItem


def rects_overlap(
    ax: Number, ay: Number, aw: Number, ad: Number,
    bx: Number, by: Number, bw: Number, bd: Number,
) -> bool:
    return ax < bx + bw and bx < ax + aw and ay < by + bd and by < ay + ad


def overlaps(a: PlacedItem, b: PlacedItem) -> bool:
    return rects_overlap(a.x, a.y, a.width, a.depth, b.x, b.y, b.width, b.depth)


def rect_within(
    x: Number, y: Number, width: Number, depth: Number,
    container_w: Number, container_d: Number,
) -> bool:
    return x >= 0 and y >= 0 and x + width <= container_w and y + depth <= container_d


def contains(container_w: Number, container_d: Number, item: PlacedItem) -> bool:
    return rect_within(item.x, item.y, item.width, item.depth, container_w, container_d)


def find_overlap(items: Iterable[PlacedItem]) -> Optional[Tuple[PlacedItem, PlacedItem]]:
    """First overlapping pair (in input order), or None."""
    seen = list(items)
    for i in range(len(seen)):
        for j in range(i + 1, len(seen)):
            if overlaps(seen[i], seen[j]):
                return seen[i], seen[j]
    return None
