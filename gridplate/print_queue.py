# gridplate/print_queue.py
# Print-queue bookkeeping on top of generated plates:
# - progress summary
# - status updates and per-bin failure marks (returning new plate lists)
# - repacking failed bins into reprint plates

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Sequence

from .packer import pack
from .types import KIND_REPRINT, PLATE_STATUSES, STATUS_DONE, STATUS_FAILED, Number, Piece, PlacedItem, Plate


@dataclass(frozen=True)
class Progress:
    total: int
    completed: int
    failed: int
    percentage: int


def calculate_progress(plates: Sequence[Plate]) -> Progress:
    total = len(plates)
    if total == 0:
        return Progress(total=0, completed=0, failed=0, percentage=0)
    completed = sum(1 for p in plates if p.status == STATUS_DONE)
    failed = sum(1 for p in plates if p.status == STATUS_FAILED)
    # round half up
    percentage = (completed * 100 * 2 + total) // (2 * total)
    return Progress(total=total, completed=completed, failed=failed, percentage=percentage)


def failed_items(plates: Sequence[Plate]) -> List[PlacedItem]:
    return [it for p in plates for it in p.items if it.failed]


def has_failed_items(plates: Sequence[Plate]) -> bool:
    return any(it.failed for p in plates for it in p.items)


def _index_of(plates: Sequence[Plate], plate_id: str) -> int:
    for idx, p in enumerate(plates):
        if p.plate_id == plate_id:
            return idx
    raise KeyError(f"No plate with id {plate_id!r}")


def set_plate_status(plates: Sequence[Plate], plate_id: str, status: str) -> List[Plate]:
    if status not in PLATE_STATUSES:
        raise ValueError(f"status must be one of {PLATE_STATUSES}, got {status!r}")
    idx = _index_of(plates, plate_id)
    out = list(plates)
    out[idx] = replace(plates[idx], status=status)
    return out


def mark_item_failed(plates: Sequence[Plate], plate_id: str, item_index: int, failed: bool = True) -> List[Plate]:
    idx = _index_of(plates, plate_id)
    plate = plates[idx]
    if not 0 <= item_index < len(plate.items):
        raise IndexError(f"Plate {plate_id} has no item #{item_index}")

    items = list(plate.items)
    items[item_index] = replace(items[item_index], failed=bool(failed))
    out = list(plates)
    out[idx] = replace(plate, items=items)
    return out


def repack_failed_items(plate: Plate, bed_width: Number, bed_depth: Number) -> List[Plate]:
    """
    Pack the failed bins of one plate onto fresh reprint plates.
    Items go back in their un-rotated footprint so the packer may pick again.
    """
    pieces: List[Piece] = []
    for it in plate.items:
        if not it.failed:
            continue
        r = it.rect.rotated() if it.rotation == 90 else it.rect
        pieces.append(
            Piece(
                uid=it.source_id or it.item_id,
                width=r.width,
                depth=r.depth,
                height=it.height,
                label=it.label,
                kind=it.kind,
            )
        )
    if not pieces:
        return []

    return pack(
        pieces,
        bed_width,
        bed_depth,
        kind=KIND_REPRINT,
        id_prefix=f"reprint-{plate.plate_id}",
        name_prefix=f"Reprint of {plate.name} -",
    )
