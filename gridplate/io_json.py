# gridplate/io_json.py
# Load the app's project JSON into our Project/PlacedItem types and convert
# print queues to/from plain dicts (the caller decides where they are stored).
#
# Expected project JSON shape (as saved by the layout editor):
# {
#   "id": "p1", "name": "Kitchen drawer",
#   "drawerWidth": 450, "drawerDepth": 500,
#   "printerBedWidth": 220, "printerBedDepth": 220,
#   "baseplateWithMagnets": false,
#   "bins": [{"id": "b1", "type": "hollow", "width": 2, "depth": 1, "height": 3, "x": 0, "y": 0}, ...]
# }

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from .config import DEFAULTS
from .plan import PrintQueue, Project
from .types import STATUS_FAILED, STATUS_NONE, PlacedItem, Plate


def bin_from_dict(d: Dict[str, Any]) -> PlacedItem:
    bid = str(d.get("id") or "").strip()
    if not bid:
        raise ValueError(f"Bin missing id: {d}")
    return PlacedItem(
        item_id=bid,
        x=int(d.get("x", 0)),
        y=int(d.get("y", 0)),
        width=int(d["width"]),
        depth=int(d["depth"]),
        rotation=int(d.get("rotation", 0)),
        source_id=bid,
        kind=str(d.get("type", "bin")),
        height=int(d.get("height", 1)),
        label=str(d.get("label") or ""),
    )


def project_from_dict(data: Dict[str, Any]) -> Project:
    return Project(
        project_id=str(data.get("id") or "project"),
        name=str(data.get("name") or ""),
        drawer_width=float(data["drawerWidth"]),
        drawer_depth=float(data["drawerDepth"]),
        bed_width=float(data.get("printerBedWidth", DEFAULTS.default_bed_w)),
        bed_depth=float(data.get("printerBedDepth", DEFAULTS.default_bed_d)),
        bins=tuple(bin_from_dict(b) for b in (data.get("bins") or [])),
        baseplate_magnets=bool(data.get("baseplateWithMagnets", DEFAULTS.default_baseplate_magnets)),
    )


def load_project_json(path: str | Path) -> Project:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return project_from_dict(data)


def _item_to_dict(it: PlacedItem) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": it.item_id,
        "binId": it.source_id,
        "type": it.kind,
        "x": it.x,
        "y": it.y,
        "width": it.width,
        "depth": it.depth,
        "height": it.height,
        "rotation": it.rotation,
        "label": it.label,
    }
    if it.failed:
        out["status"] = STATUS_FAILED
    if it.meta:
        out["meta"] = dict(it.meta)
    return out


def _item_from_dict(d: Dict[str, Any]) -> PlacedItem:
    return PlacedItem(
        item_id=str(d.get("id") or d.get("binId") or ""),
        x=d.get("x", 0),
        y=d.get("y", 0),
        width=d["width"],
        depth=d["depth"],
        rotation=int(d.get("rotation", 0)),
        source_id=d.get("binId"),
        kind=str(d.get("type", "bin")),
        height=d.get("height", 0),
        label=str(d.get("label") or ""),
        failed=d.get("status") == STATUS_FAILED,
        meta=dict(d.get("meta") or {}),
    )


def plate_to_dict(p: Plate) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": p.plate_id,
        "name": p.name,
        "type": p.kind,
        "width": p.width,
        "depth": p.depth,
        "status": p.status,
        "items": [_item_to_dict(it) for it in p.items],
    }
    if p.warning:
        out["warning"] = p.warning
    if p.oversized:
        out["oversized"] = True
    return out


def plate_from_dict(d: Dict[str, Any]) -> Plate:
    return Plate(
        plate_id=str(d["id"]),
        name=str(d.get("name") or d["id"]),
        kind=str(d["type"]),
        width=d["width"],
        depth=d["depth"],
        items=[_item_from_dict(it) for it in (d.get("items") or [])],
        status=str(d.get("status") or STATUS_NONE),
        warning=d.get("warning"),
        # Older queues only flagged oversized plates through the id
        oversized=bool(d.get("oversized", "-oversized-" in str(d["id"]))),
    )


def queue_to_dict(q: PrintQueue) -> Dict[str, Any]:
    return {
        "projectId": q.project_id,
        "generatedAt": q.generated_at,
        "projectBinsHash": q.fingerprint,
        "plates": [plate_to_dict(p) for p in q.plates],
    }


def queue_from_dict(data: Dict[str, Any]) -> PrintQueue:
    return PrintQueue(
        project_id=str(data.get("projectId") or ""),
        fingerprint=str(data.get("projectBinsHash") or ""),
        generated_at=float(data.get("generatedAt") or 0.0),
        plates=[plate_from_dict(p) for p in (data.get("plates") or [])],
    )


def load_queue_json(path: str | Path) -> Optional[PrintQueue]:
    """Returns None when no queue has been saved yet."""
    path = Path(path)
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as f:
        return queue_from_dict(json.load(f))


def save_queue_json(q: PrintQueue, path: str | Path, *, indent: int = 2) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(queue_to_dict(q), f, ensure_ascii=False, indent=indent)

