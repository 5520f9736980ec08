# gridplate/partition.py
# Split a drawer floor into printer-bed-sized baseplate sections.
# Each section is snapped down to whole grid units; a section that ends up
# with zero units in either direction cannot be printed and is dropped.

from __future__ import annotations

import math
from typing import List

from .types import KIND_BASEPLATE, Number, PlacedItem, Plate


def _grid_counts(area_width: Number, area_depth: Number, bed_width: Number, bed_depth: Number):
    if bed_width <= 0 or bed_depth <= 0:
        raise ValueError(f"Invalid bed size: {bed_width}x{bed_depth}")
    return math.ceil(area_width / bed_width), math.ceil(area_depth / bed_depth)


def partition(
    area_width: Number,
    area_depth: Number,
    bed_width: Number,
    bed_depth: Number,
    unit: Number,
    *,
    magnets: bool = False,
) -> List[Plate]:
    """
    Returns one baseplate Plate per surviving section, row by row.
    Section (row, col) starts at (col * bed_width, row * bed_depth).
    """
    if unit <= 0:
        raise ValueError(f"Invalid grid unit: {unit}")
    cols, rows = _grid_counts(area_width, area_depth, bed_width, bed_depth)

    plates: List[Plate] = []
    for row in range(rows):
        for col in range(cols):
            start_x = col * bed_width
            start_y = row * bed_depth
            raw_w = min(bed_width, area_width - start_x)
            raw_d = min(bed_depth, area_depth - start_y)

            grid_w = math.floor(raw_w / unit)
            grid_d = math.floor(raw_d / unit)
            if grid_w <= 0 or grid_d <= 0:
                continue

            width = grid_w * unit
            depth = grid_d * unit
            item = PlacedItem(
                item_id=f"baseplate-{row}-{col}",
                x=0,
                y=0,
                width=width,
                depth=depth,
                kind=KIND_BASEPLATE,
                label=f"{grid_w}×{grid_d} units ({width}×{depth}mm)",
                meta={"grid_width": grid_w, "grid_depth": grid_d, "magnets": bool(magnets)},
            )
            plates.append(
                Plate(
                    plate_id=f"baseplate-{row}-{col}",
                    name=f"Baseplate {len(plates) + 1}",
                    kind=KIND_BASEPLATE,
                    width=width,
                    depth=depth,
                    items=[item],
                )
            )
    return plates


def estimate_section_count(
    area_width: Number,
    area_depth: Number,
    bed_width: Number,
    bed_depth: Number,
) -> int:
    """Quick upper bound for previews (before unit snapping drops slivers)."""
    cols, rows = _grid_counts(area_width, area_depth, bed_width, bed_depth)
    return cols * rows
