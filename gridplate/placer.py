# gridplate/placer.py
# Interactive editing on the bin grid:
# - placement validation (bounds + collisions against the *other* items)
# - move / rotate / place / remove as all-or-nothing snapshot transforms
# - "nearest valid rotated position" search in Chebyshev rings
#
# Every edit takes a Grid snapshot and returns an EditResult. A rejected edit
# carries the untouched input grid, so callers can always render result.grid.

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, Optional, Tuple

from .config import clamp_int
from .geometry import rect_within, rects_overlap
from .types import (
    DUPLICATE_ID,
    NO_VALID_ROTATION,
    NOT_FOUND,
    OUT_OF_BOUNDS,
    OVERLAP,
    UNFITTABLE,
    Grid,
    PlacedItem,
)


@dataclass(frozen=True)
class Rejection:
    reason: str
    item_id: Optional[str] = None
    message: str = ""


@dataclass(frozen=True)
class EditResult:
    grid: Grid
    rejection: Optional[Rejection] = None

    @property
    def ok(self) -> bool:
        return self.rejection is None


def _reject(grid: Grid, reason: str, item_id: Optional[str], message: str) -> EditResult:
    return EditResult(grid=grid, rejection=Rejection(reason=reason, item_id=item_id, message=message))


# ----------------------------
# Validation
# ----------------------------

def check_placement(
    grid: Grid,
    x: int,
    y: int,
    width: int,
    depth: int,
    exclude_id: Optional[str] = None,
) -> Optional[str]:
    """Return None if the footprint is valid, else OUT_OF_BOUNDS or OVERLAP."""
    if not rect_within(x, y, width, depth, grid.cols, grid.rows):
        return OUT_OF_BOUNDS
    for it in grid.items:
        if it.item_id == exclude_id:
            continue
        if rects_overlap(x, y, width, depth, it.x, it.y, it.width, it.depth):
            return OVERLAP
    return None


def can_place(
    grid: Grid,
    x: int,
    y: int,
    width: int,
    depth: int,
    exclude_id: Optional[str] = None,
) -> bool:
    return check_placement(grid, x, y, width, depth, exclude_id) is None


def find_free_position(grid: Grid, width: int, depth: int) -> Optional[Tuple[int, int]]:
    """First collision-free origin scanning rows top to bottom, left to right."""
    for y in range(0, grid.rows - depth + 1):
        for x in range(0, grid.cols - width + 1):
            if can_place(grid, x, y, width, depth):
                return x, y
    return None


def can_fit_anywhere(grid: Grid, width: int, depth: int) -> bool:
    return find_free_position(grid, width, depth) is not None


def clamp_position(grid: Grid, width: int, depth: int, x: float, y: float) -> Tuple[int, int]:
    """Snap a pointer position to a valid origin range. Callers clamp before move()."""
    return (
        clamp_int(x, 0, max(0, grid.cols - width)),
        clamp_int(y, 0, max(0, grid.rows - depth)),
    )


# ----------------------------
# Edits
# ----------------------------

def move(grid: Grid, item_id: str, new_x: int, new_y: int) -> EditResult:
    item = grid.get(item_id)
    if item is None:
        return _reject(grid, NOT_FOUND, item_id, f"No item with id {item_id!r}")

    reason = check_placement(grid, new_x, new_y, item.width, item.depth, exclude_id=item_id)
    if reason is not None:
        return _reject(
            grid, reason, item_id,
            f"Cannot move {item_id} to ({new_x},{new_y}): {reason}",
        )
    return EditResult(grid=grid.with_item(item.moved(new_x, new_y)))


def ring_offsets(radius: int) -> Iterator[Tuple[int, int]]:
    """
    (dx, dy) offsets in square rings of Chebyshev distance 0..radius.
    Within a ring: dx ascending, then dy ascending.
    """
    for distance in range(0, radius + 1):
        for dx in range(-distance, distance + 1):
            for dy in range(-distance, distance + 1):
                if abs(dx) == distance or abs(dy) == distance:
                    yield dx, dy


def rotation_candidates(grid: Grid, item: PlacedItem) -> Iterator[Tuple[int, int]]:
    """Candidate origins for the rotated footprint, nearest first, clipped to the grid."""
    turned = item.rect.rotated()
    radius = max(item.width, item.depth)

    min_x = max(0, item.x - radius)
    max_x = min(grid.cols - turned.width, item.x + radius)
    min_y = max(0, item.y - radius)
    max_y = min(grid.rows - turned.depth, item.y + radius)
    if min_x > max_x or min_y > max_y:
        return

    for dx, dy in ring_offsets(radius):
        cx, cy = item.x + dx, item.y + dy
        if min_x <= cx <= max_x and min_y <= cy <= max_y:
            yield cx, cy


def rotate(grid: Grid, item_id: str) -> EditResult:
    item = grid.get(item_id)
    if item is None:
        return _reject(grid, NOT_FOUND, item_id, f"No item with id {item_id!r}")

    turned = item.rect.rotated()
    for cx, cy in rotation_candidates(grid, item):
        if can_place(grid, cx, cy, turned.width, turned.depth, exclude_id=item_id):
            return EditResult(grid=grid.with_item(item.rotated(cx, cy)))

    return _reject(
        grid, NO_VALID_ROTATION, item_id,
        f"No room to rotate {item_id} to {turned.width}x{turned.depth} near ({item.x},{item.y})",
    )


def place(grid: Grid, item: PlacedItem) -> EditResult:
    """Add a new item at its own (x, y)."""
    if grid.get(item.item_id) is not None:
        return _reject(grid, DUPLICATE_ID, item.item_id, f"Item id {item.item_id!r} already on grid")

    reason = check_placement(grid, item.x, item.y, item.width, item.depth)
    if reason is not None:
        return _reject(
            grid, reason, item.item_id,
            f"Cannot place {item.item_id} at ({item.x},{item.y}): {reason}",
        )
    return EditResult(grid=replace(grid, items=grid.items + (item,)))


def add_anywhere(grid: Grid, item: PlacedItem) -> EditResult:
    """Add a new (or duplicated) item at the first free position; item.x/y are ignored."""
    if grid.get(item.item_id) is not None:
        return _reject(grid, DUPLICATE_ID, item.item_id, f"Item id {item.item_id!r} already on grid")

    pos = find_free_position(grid, item.width, item.depth)
    if pos is None:
        return _reject(
            grid, UNFITTABLE, item.item_id,
            f"{item.width}x{item.depth} does not fit anywhere on the {grid.cols}x{grid.rows} grid",
        )
    return place(grid, item.moved(*pos))


def remove(grid: Grid, item_id: str) -> EditResult:
    if grid.get(item_id) is None:
        return _reject(grid, NOT_FOUND, item_id, f"No item with id {item_id!r}")
    return EditResult(grid=replace(grid, items=tuple(it for it in grid.items if it.item_id != item_id)))
