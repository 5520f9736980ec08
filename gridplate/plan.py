# gridplate/plan.py
# High-level planning that ties together:
# - the drawer grid (bins in grid units)
# - baseplate partitioning + bin packing (plates in mm)
# - change detection + status carry-over for a stored print queue
# - optional validation
#
# This is meant to be called from the CLI or from whatever app layer owns
# the project storage. Example:
#   from gridplate.plan import refresh_queue
#   queue = refresh_queue(project, stored_queue)

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .config import DEFAULTS
from .logger import get_logger
from .packer import pack
from .partition import partition
from .reconcile import fingerprint, needs_regeneration, reconcile
from .types import KIND_BASEPLATE, KIND_BINS, Grid, Number, Piece, PlacedItem, Plate
from .validate import raise_on_errors, validate_grid, validate_plates


@dataclass(frozen=True)
class Project:
    """A drawer layout: physical drawer/bed sizes (mm) and bins in grid units."""
    project_id: str
    name: str
    drawer_width: Number
    drawer_depth: Number
    bed_width: Number = DEFAULTS.default_bed_w
    bed_depth: Number = DEFAULTS.default_bed_d
    bins: Tuple[PlacedItem, ...] = ()
    baseplate_magnets: bool = DEFAULTS.default_baseplate_magnets
    grid_unit: Number = DEFAULTS.grid_unit_mm
    height_unit: Number = DEFAULTS.height_unit_mm

    def __post_init__(self):
        if self.drawer_width <= 0 or self.drawer_depth <= 0:
            raise ValueError(f"Invalid drawer size: {self.drawer_width}x{self.drawer_depth}")
        if self.bed_width <= 0 or self.bed_depth <= 0:
            raise ValueError(f"Invalid bed size: {self.bed_width}x{self.bed_depth}")
        if not isinstance(self.bins, tuple):
            object.__setattr__(self, "bins", tuple(self.bins))


@dataclass
class PrintQueue:
    project_id: str
    fingerprint: str
    generated_at: float
    plates: List[Plate] = field(default_factory=list)


def project_grid(project: Project) -> Grid:
    """Drawer floor as a grid of whole cells holding the project's bins."""
    return Grid(
        cols=int(math.floor(project.drawer_width / project.grid_unit)),
        rows=int(math.floor(project.drawer_depth / project.grid_unit)),
        items=project.bins,
    )


def bins_to_pieces(bins: Iterable[PlacedItem], unit: Number, height_unit: Number) -> List[Piece]:
    """Grid-unit bins -> mm pieces for the packer (current rotation kept)."""
    return [
        Piece(
            uid=b.item_id,
            width=b.width * unit,
            depth=b.depth * unit,
            height=b.height * height_unit,
            label=b.label or f"{b.kind} bin",
            kind=b.kind,
        )
        for b in bins
    ]


def _baseplates(project: Project) -> List[Plate]:
    return partition(
        project.drawer_width,
        project.drawer_depth,
        project.bed_width,
        project.bed_depth,
        project.grid_unit,
        magnets=project.baseplate_magnets,
    )


def generate_plates(project: Project) -> List[Plate]:
    """Baseplate sections first, then packed bin plates."""
    baseplates = _baseplates(project)
    bin_plates = pack(
        bins_to_pieces(project.bins, project.grid_unit, project.height_unit),
        project.bed_width,
        project.bed_depth,
    )
    return baseplates + bin_plates


def plates_match_bed(project: Project, plates: Iterable[Plate]) -> bool:
    """
    True when stored plates were generated for the project's current bed:
    regular bin plates span the bed exactly and the baseplate sections equal
    a fresh partition of the drawer.
    """
    plates = list(plates)
    bed = (project.bed_width, project.bed_depth)
    for p in plates:
        if p.kind == KIND_BINS and not p.oversized and (p.width, p.depth) != bed:
            return False

    stored = [p.key for p in plates if p.kind == KIND_BASEPLATE]
    return stored == [p.key for p in _baseplates(project)]


def build_queue(
    project: Project,
    previous: Optional[PrintQueue] = None,
    *,
    validate: bool = True,
    now: Optional[float] = None,
) -> PrintQueue:
    """Generate plates for the project and inherit statuses from a previous queue."""
    if validate:
        raise_on_errors(validate_grid(project_grid(project)))

    plates = generate_plates(project)
    if previous is not None:
        plates = reconcile(previous.plates, plates)

    if validate:
        raise_on_errors(validate_plates(plates))

    return PrintQueue(
        project_id=project.project_id,
        fingerprint=fingerprint(project.bins),
        generated_at=time.time() if now is None else float(now),
        plates=plates,
    )


def refresh_queue(
    project: Project,
    stored: Optional[PrintQueue],
    *,
    validate: bool = True,
    now: Optional[float] = None,
) -> PrintQueue:
    """
    Return the stored queue when the bins and the printer bed are unchanged,
    otherwise a regenerated queue carrying statuses over from the stored one.
    """
    log = get_logger()
    if stored is None:
        log.info(f"Generating print queue for {project.project_id}")
    elif needs_regeneration(stored.fingerprint, stored.plates, project.bins):
        log.info(f"Bins changed for {project.project_id}, regenerating plates")
    elif not plates_match_bed(project, stored.plates):
        log.info(f"Printer bed changed for {project.project_id}, regenerating plates")
    else:
        log.debug(f"Print queue for {project.project_id} is up to date")
        return stored
    return build_queue(project, stored, validate=validate, now=now)
