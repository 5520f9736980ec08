# gridplate/validate.py
# Validation utilities:
# - grid items lie inside the drawer grid and do not overlap
# - plate items lie inside their plate and do not overlap
# - oversized plates are reported as warnings
#
# Useful both during development and to sanity-check planner output.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .geometry import contains, find_overlap
from .types import Grid, Number, PlacedItem, Plate


@dataclass(frozen=True)
class ValidationIssue:
    level: str   # "ERROR" or "WARN"
    message: str
    plate_id: Optional[str] = None
    item_id: Optional[str] = None


def _check_items(
    items: Iterable[PlacedItem],
    W: Number,
    D: Number,
    where: str,
    plate_id: Optional[str] = None,
) -> List[ValidationIssue]:
    items = list(items)
    issues: List[ValidationIssue] = []

    for it in items:
        if not contains(W, D, it):
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=(
                        f"Item out of bounds on {where}: "
                        f"x={it.x}, y={it.y}, w={it.width}, d={it.depth}, bounds={W}x{D}"
                    ),
                    plate_id=plate_id,
                    item_id=it.item_id,
                )
            )

    ids = [it.item_id for it in items]
    for dup in sorted({i for i in ids if ids.count(i) > 1}):
        issues.append(
            ValidationIssue(level="ERROR", message=f"Duplicate item id on {where}", plate_id=plate_id, item_id=dup)
        )

    pair = find_overlap(items)
    if pair is not None:
        a, b = pair
        issues.append(
            ValidationIssue(
                level="ERROR",
                message=(
                    f"Overlap on {where}: {a.item_id} ({a.x},{a.y},{a.width}x{a.depth}) "
                    f"with {b.item_id} ({b.x},{b.y},{b.width}x{b.depth})"
                ),
                plate_id=plate_id,
                item_id=a.item_id,
            )
        )
    return issues


def validate_grid(grid: Grid) -> List[ValidationIssue]:
    return _check_items(grid.items, grid.cols, grid.rows, "grid")


def validate_plates(plates: Iterable[Plate]) -> List[ValidationIssue]:
    """
    Validate a plate set. Returns a list of issues (empty if OK).
    """
    issues: List[ValidationIssue] = []
    seen_ids = set()
    for p in plates:
        if p.plate_id in seen_ids:
            issues.append(ValidationIssue(level="ERROR", message="Duplicate plate id", plate_id=p.plate_id))
        seen_ids.add(p.plate_id)

        issues.extend(_check_items(p.items, p.width, p.depth, f"plate {p.plate_id}", plate_id=p.plate_id))

        if p.oversized:
            issues.append(
                ValidationIssue(
                    level="WARN",
                    message=p.warning or "Plate exceeds the printer bed",
                    plate_id=p.plate_id,
                )
            )
    return issues


def raise_on_errors(issues: List[ValidationIssue]) -> None:
    errs = [i for i in issues if i.level.upper() == "ERROR"]
    if errs:
        msg = "\n".join(
            f"[{e.level}] plate={e.plate_id} item={e.item_id} :: {e.message}" for e in errs
        )
        raise ValueError("Validation failed:\n" + msg)
