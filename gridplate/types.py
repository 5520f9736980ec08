# gridplate/types.py
# Core data structures for bin layout planning and plate generation.
# Keep this file dependency-light so it can be imported everywhere.

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Tuple, Union

Number = Union[int, float]


# ----------------------------
# Enumerated string values
# ----------------------------

KIND_BINS = "bins"
KIND_BASEPLATE = "baseplate"
KIND_REPRINT = "reprint"
PLATE_KINDS = (KIND_BINS, KIND_BASEPLATE, KIND_REPRINT)

STATUS_NONE = "none"          # not started
STATUS_PRINTING = "printing"  # in progress
STATUS_DONE = "done"          # complete
STATUS_FAILED = "failed"
PLATE_STATUSES = (STATUS_NONE, STATUS_PRINTING, STATUS_DONE, STATUS_FAILED)

# Rejection reasons reported by the grid placer
OUT_OF_BOUNDS = "out_of_bounds"
OVERLAP = "overlap"
NO_VALID_ROTATION = "no_valid_rotation"
UNFITTABLE = "unfittable"
NOT_FOUND = "not_found"
DUPLICATE_ID = "duplicate_id"


# ----------------------------
# Rectangles and items
# ----------------------------

@dataclass(frozen=True)
class Rect:
    """Axis-aligned extents. Half-open: covers [0,width) x [0,depth)."""
    width: Number
    depth: Number

    def rotated(self) -> "Rect":
        return Rect(width=self.depth, depth=self.width)

    @property
    def area(self) -> Number:
        return self.width * self.depth


@dataclass(frozen=True)
class PlacedItem:
    """
    A rectangle positioned inside a container (Grid or Plate).
    (x, y) is the minimum corner; width/depth are the extents at the current rotation.
    """
    item_id: str
    x: Number
    y: Number
    width: Number
    depth: Number
    rotation: int = 0
    source_id: Optional[str] = None

    # Identity fields that take part in the fingerprint
    kind: str = "bin"
    height: Number = 0

    # Presentation / production fields
    label: str = ""
    failed: bool = False
    meta: Dict[str, Union[int, float, str, bool]] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if self.width <= 0 or self.depth <= 0:
            raise ValueError(f"Invalid item size for {self.item_id}: {self.width}x{self.depth}")
        if self.rotation not in (0, 90):
            raise ValueError(f"rotation must be 0 or 90 for {self.item_id}, got {self.rotation}")

    @property
    def rect(self) -> Rect:
        return Rect(self.width, self.depth)

    def moved(self, x: Number, y: Number) -> "PlacedItem":
        return replace(self, x=x, y=y)

    def rotated(self, x: Number, y: Number) -> "PlacedItem":
        """Rotated copy (extents swapped, flag toggled) at a new origin."""
        r = self.rect.rotated()
        return replace(
            self,
            x=x,
            y=y,
            width=r.width,
            depth=r.depth,
            rotation=90 if self.rotation == 0 else 0,
        )


@dataclass(frozen=True)
class Grid:
    """Bounded lattice of cols x rows cells holding non-overlapping items."""
    cols: int
    rows: int
    items: Tuple[PlacedItem, ...] = ()

    def __post_init__(self):
        if self.cols < 0 or self.rows < 0:
            raise ValueError(f"Invalid grid size: {self.cols}x{self.rows}")
        # Accept any sequence but store a tuple so grids stay hashable snapshots
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def get(self, item_id: str) -> Optional[PlacedItem]:
        for it in self.items:
            if it.item_id == item_id:
                return it
        return None

    def with_item(self, item: PlacedItem) -> "Grid":
        """Copy of the grid with the item of the same id replaced."""
        return replace(self, items=tuple(item if it.item_id == item.item_id else it for it in self.items))


# ----------------------------
# Packing inputs / outputs
# ----------------------------

@dataclass(frozen=True)
class Piece:
    """A rectangle waiting to be packed onto a plate (physical units)."""
    uid: str
    width: Number
    depth: Number
    height: Number = 0
    label: str = ""
    kind: str = "bin"

    def __post_init__(self):
        if self.width <= 0 or self.depth <= 0:
            raise ValueError(f"Invalid piece size for {self.uid}: {self.width}x{self.depth}")

    @property
    def rect(self) -> Rect:
        return Rect(self.width, self.depth)

    @property
    def area(self) -> Number:
        return self.rect.area


@dataclass(frozen=True)
class PackingRequest:
    pieces: Tuple[Piece, ...]
    plate_width: Number
    plate_depth: Number

    def __post_init__(self):
        if self.plate_width <= 0 or self.plate_depth <= 0:
            raise ValueError(f"Invalid plate bound: {self.plate_width}x{self.plate_depth}")
        if not isinstance(self.pieces, tuple):
            object.__setattr__(self, "pieces", tuple(self.pieces))


@dataclass
class Plate:
    """One production unit: bounded area + placed items + print status."""
    plate_id: str
    name: str
    kind: str
    width: Number
    depth: Number
    items: List[PlacedItem] = field(default_factory=list)
    status: str = STATUS_NONE

    # Set on single-item plates whose item exceeds the bed
    warning: Optional[str] = None
    oversized: bool = False

    def __post_init__(self):
        if self.kind not in PLATE_KINDS:
            raise ValueError(f"Plate.kind must be one of {PLATE_KINDS}, got {self.kind!r}")
        if self.status not in PLATE_STATUSES:
            raise ValueError(f"Plate.status must be one of {PLATE_STATUSES}, got {self.status!r}")

    @property
    def key(self) -> Tuple[str, Number, Number]:
        """Structural key used when carrying status across regeneration."""
        return (self.kind, self.width, self.depth)


def total_items(plates: Sequence[Plate]) -> int:
    return sum(len(p.items) for p in plates)
