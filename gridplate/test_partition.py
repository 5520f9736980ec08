# gridplate/test_partition.py
# Baseplate partitioning: section counts, unit snapping, dropped slivers.

from __future__ import annotations

import pytest

from gridplate.partition import estimate_section_count, partition
from gridplate.types import KIND_BASEPLATE


def test_single_section_when_area_fits_bed() -> None:
    plates = partition(200, 150, 220, 220, 42)
    assert len(plates) == 1
    p = plates[0]
    assert p.kind == KIND_BASEPLATE
    assert (p.width, p.depth) == (168, 126)
    assert p.plate_id == "baseplate-0-0"
    assert p.items[0].meta["grid_width"] == 4
    assert p.items[0].meta["grid_depth"] == 3
    assert p.items[0].label == "4×3 units (168×126mm)"


def test_large_drawer_split_row_by_row() -> None:
    plates = partition(500, 300, 220, 220, 42)
    # cols=3 (220, 220, 60), rows=2 (220, 80)
    assert [p.plate_id for p in plates] == [
        "baseplate-0-0", "baseplate-0-1", "baseplate-0-2",
        "baseplate-1-0", "baseplate-1-1", "baseplate-1-2",
    ]
    dims = [(p.width, p.depth) for p in plates]
    assert dims == [(210, 210), (210, 210), (42, 210), (210, 42), (210, 42), (42, 42)]
    assert [p.name for p in plates] == [f"Baseplate {i}" for i in range(1, 7)]


def test_sections_are_unit_multiples_and_cover_area() -> None:
    unit = 42
    plates = partition(610, 455, 220, 200, unit, magnets=True)
    for p in plates:
        assert p.width % unit == 0 and p.depth % unit == 0
        assert len(p.items) == 1
        it = p.items[0]
        assert (it.x, it.y, it.width, it.depth) == (0, 0, p.width, p.depth)
        assert it.meta["magnets"] is True

    # unsnapped remainder per row/column stays below one unit per section
    assert estimate_section_count(610, 455, 220, 200) == 9
    assert len(plates) == 9


def test_sliver_sections_dropped() -> None:
    # 460 = 220 + 220 + 20: the 20mm column is less than one unit
    plates = partition(460, 100, 220, 220, 42)
    assert len(plates) == 2
    assert [p.plate_id for p in plates] == ["baseplate-0-0", "baseplate-0-1"]
    assert estimate_section_count(460, 100, 220, 220) == 3


def test_area_smaller_than_unit() -> None:
    assert partition(30, 500, 220, 220, 42) == []


def test_invalid_bed_rejected() -> None:
    with pytest.raises(ValueError):
        partition(100, 100, 0, 220, 42)
    with pytest.raises(ValueError):
        partition(100, 100, 220, 220, 0)
