# gridplate/config.py
# Centralized defaults and configuration helpers.
# Keeps "magic numbers" (grid unit, height unit, bed size) in one place.

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Defaults:
    # Size of one grid cell (mm); bins and baseplates snap to this
    grid_unit_mm: int = 42

    # One bin height unit (mm)
    height_unit_mm: int = 7

    # Typical desktop printer bed (mm)
    default_bed_w: int = 220
    default_bed_d: int = 220

    # Baseplate sections get magnet pockets unless the project says otherwise
    default_baseplate_magnets: bool = False


DEFAULTS = Defaults()


def clamp_int(v: float | int, lo: int, hi: int) -> int:
    """Clamp a numeric value to an int range."""
    x = int(round(float(v)))
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def parse_dims_text(dims_text: str) -> Tuple[float, float]:
    """
    Parse '220x220' -> (220.0, 220.0)
    """
    s = dims_text.lower().replace(" ", "")
    if "x" not in s:
        raise ValueError("dims_text must be like '220x220'")
    a, b = s.split("x", 1)
    w, d = float(a), float(b)
    if w <= 0 or d <= 0:
        raise ValueError(f"dimensions must be positive, got {dims_text!r}")
    return w, d
