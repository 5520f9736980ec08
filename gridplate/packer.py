# gridplate/packer.py
# First-Fit-Decreasing (FFD) packing of bins onto printer-bed-sized plates.
# Placement on a plate uses the Bottom-Left (BL) heuristic: candidate origins
# are the plate origin plus the free corners of already placed items, tried
# lowest row first, then leftmost.

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from .geometry import rects_overlap
from .logger import get_logger
from .types import KIND_BINS, Number, PackingRequest, Piece, PlacedItem, Plate

OVERSIZED_LABEL_SUFFIX = "(Too large for printer bed!)"


def pack(
    pieces: Iterable[Piece],
    plate_width: Number,
    plate_depth: Number,
    *,
    kind: str = KIND_BINS,
    id_prefix: str = "bins",
    name_prefix: str = "Bin Plate",
) -> List[Plate]:
    """
    Pack pieces onto as few plate_width x plate_depth plates as the heuristic finds.

    Every piece ends up on exactly one plate. A piece larger than the plate in
    both orientations gets its own oversized plate with a warning instead of
    failing the run.
    """
    if plate_width <= 0 or plate_depth <= 0:
        raise ValueError(f"Invalid plate bound: {plate_width}x{plate_depth}")

    log = get_logger()
    # sorted() is stable, so equal areas keep input order
    ordered = sorted(pieces, key=lambda p: p.area, reverse=True)
    plates: List[Plate] = []

    for piece in ordered:
        # Oversized plates hold exactly one piece, never reopen them
        open_plates = [pl for pl in plates if not pl.oversized]

        if _place_on_first_plate(piece, open_plates, plate_width, plate_depth, rotated=False):
            continue
        if piece.width != piece.depth and _place_on_first_plate(
            piece, open_plates, plate_width, plate_depth, rotated=True
        ):
            continue

        number = len(plates) + 1
        if piece.width <= plate_width and piece.depth <= plate_depth:
            plate = _new_plate(kind, f"{id_prefix}-{number}", f"{name_prefix} {number}", plate_width, plate_depth)
            plate.items.append(_as_item(piece, 0, 0, rotated=False))
        elif piece.depth <= plate_width and piece.width <= plate_depth:
            plate = _new_plate(kind, f"{id_prefix}-{number}", f"{name_prefix} {number}", plate_width, plate_depth)
            plate.items.append(_as_item(piece, 0, 0, rotated=True))
        else:
            log.warn(
                f"{piece.uid} ({piece.width}x{piece.depth}) exceeds the "
                f"{plate_width}x{plate_depth} bed in both orientations"
            )
            plate = _oversized_plate(kind, piece, number, id_prefix, name_prefix)
        plates.append(plate)

    log.debug(f"Packed {len(ordered)} pieces onto {len(plates)} plates")
    return plates


def pack_request(req: PackingRequest, **kwargs) -> List[Plate]:
    return pack(req.pieces, req.plate_width, req.plate_depth, **kwargs)


def _place_on_first_plate(
    piece: Piece,
    plates: List[Plate],
    W: Number,
    D: Number,
    *,
    rotated: bool,
) -> bool:
    r = piece.rect.rotated() if rotated else piece.rect
    for plate in plates:
        pos = find_bottomleft_position(plate.items, W, D, r.width, r.depth)
        if pos is not None:
            plate.items.append(_as_item(piece, pos[0], pos[1], rotated=rotated))
            return True
    return False


def candidate_positions(placed: Iterable[PlacedItem]) -> List[Tuple[Number, Number]]:
    """Origin plus the three non-origin corners of each placed item, sorted by (y, x)."""
    candidates: List[Tuple[Number, Number]] = [(0, 0)]
    for it in placed:
        candidates.append((it.x + it.width, it.y))
        candidates.append((it.x, it.y + it.depth))
        candidates.append((it.x + it.width, it.y + it.depth))

    unique = list(dict.fromkeys(candidates))
    unique.sort(key=lambda p: (p[1], p[0]))
    return unique


def find_bottomleft_position(
    placed: List[PlacedItem],
    W: Number,
    D: Number,
    w: Number,
    d: Number,
) -> Optional[Tuple[Number, Number]]:
    """
    Find bottom-left position for a rectangle (w, d) on a W x D plate.
    Returns (x, y) or None if it doesn't fit.
    """
    if w > W or d > D:
        return None

    for x, y in candidate_positions(placed):
        if x + w > W or y + d > D:
            continue
        if not any(rects_overlap(x, y, w, d, it.x, it.y, it.width, it.depth) for it in placed):
            return x, y
    return None


def _as_item(piece: Piece, x: Number, y: Number, *, rotated: bool) -> PlacedItem:
    r = piece.rect.rotated() if rotated else piece.rect
    return PlacedItem(
        item_id=piece.uid,
        x=x,
        y=y,
        width=r.width,
        depth=r.depth,
        rotation=90 if rotated else 0,
        source_id=piece.uid,
        kind=piece.kind,
        height=piece.height,
        label=piece.label or f"{piece.kind} {piece.uid}",
    )


def _new_plate(kind: str, plate_id: str, name: str, W: Number, D: Number) -> Plate:
    return Plate(plate_id=plate_id, name=name, kind=kind, width=W, depth=D)


def _oversized_plate(kind: str, piece: Piece, number: int, id_prefix: str, name_prefix: str) -> Plate:
    item = _as_item(piece, 0, 0, rotated=False)
    if not item.label.endswith(OVERSIZED_LABEL_SUFFIX):
        item = replace(item, label=f"{item.label} {OVERSIZED_LABEL_SUFFIX}")
    return Plate(
        plate_id=f"{id_prefix}-oversized-{number}",
        name=f"{name_prefix} {number} (OVERSIZED)",
        kind=kind,
        width=piece.width,
        depth=piece.depth,
        items=[item],
        warning="This bin exceeds your printer bed dimensions",
        oversized=True,
    )
