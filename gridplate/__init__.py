# gridplate/__init__.py
"""
gridplate: drawer bin layout planning + printer plate generation.

Current state:
- Grid placer for interactive editing (move / rotate / place / remove) with
  all-or-nothing edits and a nearest-valid-position search for rotations
- First-fit-decreasing bin packer with rotation and bottom-left placement,
  oversized bins get their own flagged plate instead of failing the run
- Baseplate partitioner that splits the drawer floor into bed-sized,
  grid-snapped sections
- Fingerprint-based change detection + status carry-over for regenerated plates
- Print queue helpers (progress, failed bins, reprint plates)
"""

from .types import (
    Rect,
    PlacedItem,
    Grid,
    Piece,
    PackingRequest,
    Plate,
)

from .geometry import (
    overlaps,
    contains,
    find_overlap,
)

from .placer import (
    Rejection,
    EditResult,
    check_placement,
    can_place,
    can_fit_anywhere,
    find_free_position,
    move,
    rotate,
    place,
    add_anywhere,
    remove,
)

from .packer import (
    pack,
    pack_request,
)

from .partition import (
    partition,
    estimate_section_count,
)

from .reconcile import (
    fingerprint,
    needs_regeneration,
    reconcile,
)

from .print_queue import (
    Progress,
    calculate_progress,
    repack_failed_items,
)

from .plan import (
    Project,
    PrintQueue,
    generate_plates,
    refresh_queue,
)

__all__ = [
    # types
    "Rect",
    "PlacedItem",
    "Grid",
    "Piece",
    "PackingRequest",
    "Plate",
    # geometry
    "overlaps",
    "contains",
    "find_overlap",
    # placer
    "Rejection",
    "EditResult",
    "check_placement",
    "can_place",
    "can_fit_anywhere",
    "find_free_position",
    "move",
    "rotate",
    "place",
    "add_anywhere",
    "remove",
    # packer
    "pack",
    "pack_request",
    # partition
    "partition",
    "estimate_section_count",
    # reconcile
    "fingerprint",
    "needs_regeneration",
    "reconcile",
    # print queue
    "Progress",
    "calculate_progress",
    "repack_failed_items",
    # planning
    "Project",
    "PrintQueue",
    "generate_plates",
    "refresh_queue",
]
