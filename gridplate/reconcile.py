# gridplate/reconcile.py
# Change detection + status carry-over for regenerated plate sets.
#
# Plates are recomputed whenever the bin layout changes. To avoid losing what
# was already printed, statuses are copied from the previous plate set onto
# new plates with the same structural key (kind, width, depth).
#
# Note:
# Matching is first-come-first-served per key. Two different plates of the
# same kind and size are indistinguishable here.

from __future__ import annotations

import hashlib
import json
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .types import KIND_REPRINT, Number, PlacedItem, Plate

EMPTY_FINGERPRINT = "empty"


def _identity(item: PlacedItem) -> Dict[str, object]:
    return {
        "id": item.item_id,
        "type": item.kind,
        "width": item.width,
        "depth": item.depth,
        "height": item.height,
        "x": item.x,
        "y": item.y,
    }


def fingerprint(items: Iterable[PlacedItem]) -> str:
    """
    Order-independent digest of the identity fields of a bin collection.
    Labels and failure flags are not part of it.
    """
    ordered = sorted(items, key=lambda it: it.item_id)
    if not ordered:
        return EMPTY_FINGERPRINT

    payload = json.dumps([_identity(it) for it in ordered], sort_keys=True, separators=(",", ":"))
    h = hashlib.blake2b(digest_size=8)
    h.update(payload.encode("utf-8"))
    return h.hexdigest()


def needs_regeneration(
    stored_fingerprint: Optional[str],
    stored_plates: Optional[Sequence[Plate]],
    current_items: Iterable[PlacedItem],
) -> bool:
    if stored_plates is None or stored_fingerprint is None:
        return True
    return fingerprint(current_items) != stored_fingerprint


def _carry_failed_flags(old: Plate, new: Plate) -> List[PlacedItem]:
    # Same index and same source bin -> same physical print
    out: List[PlacedItem] = []
    for idx, it in enumerate(new.items):
        if idx < len(old.items) and old.items[idx].source_id == it.source_id:
            out.append(replace(it, failed=old.items[idx].failed))
        else:
            out.append(it)
    return out


def reconcile(old_plates: Optional[Sequence[Plate]], new_plates: Sequence[Plate]) -> List[Plate]:
    """
    Return copies of new_plates with status (and item failure flags) inherited
    from matching old plates. Neither input is modified.
    """
    if not old_plates:
        return [replace(p, items=list(p.items)) for p in new_plates]

    pool: Dict[Tuple[str, Number, Number], List[Plate]] = {}
    for p in old_plates:
        if p.kind == KIND_REPRINT or p.oversized:
            continue
        pool.setdefault(p.key, []).append(p)

    merged: List[Plate] = []
    for p in new_plates:
        matches = pool.get(p.key)
        if matches:
            old = matches.pop(0)
            merged.append(replace(p, status=old.status, items=_carry_failed_flags(old, p)))
        else:
            merged.append(replace(p, items=list(p.items)))
    return merged
