# gridplate/metrics.py
# Plate-level metrics:
# - used area (sum of item footprints)
# - fill ratio against the plate area
# - plan totals (plates by kind, oversized count)
#
# These work for any plate set, packed or partitioned.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .types import KIND_BASEPLATE, KIND_BINS, KIND_REPRINT, Number, Plate


@dataclass(frozen=True)
class PlanMetrics:
    num_plates: int
    num_baseplates: int
    num_bin_plates: int
    num_reprint_plates: int
    num_oversized: int
    num_items: int
    mean_fill: float


def compute_used_area(plate: Plate) -> Number:
    return sum(it.width * it.depth for it in plate.items)


def compute_fill_ratio(plate: Plate) -> float:
    """Used area / plate area. Oversized plates are 1.0 by construction."""
    total = plate.width * plate.depth
    if total <= 0:
        return 0.0
    return float(compute_used_area(plate)) / float(total)


def compute_plan_metrics(plates: Iterable[Plate]) -> PlanMetrics:
    plates = list(plates)
    fills = [compute_fill_ratio(p) for p in plates if p.kind != KIND_BASEPLATE]
    return PlanMetrics(
        num_plates=len(plates),
        num_baseplates=sum(1 for p in plates if p.kind == KIND_BASEPLATE),
        num_bin_plates=sum(1 for p in plates if p.kind == KIND_BINS),
        num_reprint_plates=sum(1 for p in plates if p.kind == KIND_REPRINT),
        num_oversized=sum(1 for p in plates if p.oversized),
        num_items=sum(len(p.items) for p in plates),
        mean_fill=sum(fills) / len(fills) if fills else 0.0,
    )
