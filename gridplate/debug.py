# gridplate/debug.py
# Debug / inspection helpers:
# - pretty-print plates and their items
# - quick per-plan summary
# - helpful when checking why a bin landed on a given plate

from __future__ import annotations

from typing import Iterable

from .metrics import compute_fill_ratio, compute_plan_metrics
from .types import PlacedItem, Plate


def print_items(items: Iterable[PlacedItem]) -> None:
    for it in items:
        print(
            f"  {it.item_id:24s} "
            f"x={it.x:6g} y={it.y:6g} w={it.width:6g} d={it.depth:6g} "
            f"{'R' if it.rotation == 90 else ' '}{' FAILED' if it.failed else ''}"
        )


def print_plate(plate: Plate) -> None:
    print(f"=== {plate.name} [{plate.plate_id}] ===")
    print(
        f"Kind: {plate.kind}  Size: {plate.width:g}×{plate.depth:g} mm  "
        f"Items: {len(plate.items)}  Fill: {compute_fill_ratio(plate):.0%}  Status: {plate.status}"
    )
    if plate.warning:
        print(f"WARNING: {plate.warning}")
    print_items(plate.items)


def print_plates(plates: Iterable[Plate]) -> None:
    plates = list(plates)
    m = compute_plan_metrics(plates)
    print(
        f"Plates: {m.num_plates} (baseplates={m.num_baseplates}, bins={m.num_bin_plates}, "
        f"reprint={m.num_reprint_plates}, oversized={m.num_oversized})"
    )
    for p in plates:
        print_plate(p)
    print(f"MEAN FILL (bin plates): {m.mean_fill:.0%}")
