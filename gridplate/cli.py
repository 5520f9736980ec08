# gridplate/cli.py
# Command line planner:
# - loads a project JSON (drawer, printer bed, bins in grid units)
# - reuses a stored print queue JSON when the bins are unchanged,
#   otherwise regenerates plates and carries statuses over
# - prints per-plate details and optionally writes the queue back
#
# Run:
#   python -m gridplate --project project.json
#   python -m gridplate --project project.json --queue queue.json --save
#   python -m gridplate --project project.json --bed 256x256 --out out/queue.json

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config import parse_dims_text
from .debug import print_plates
from .io_json import load_project_json, load_queue_json, save_queue_json
from .logger import get_logger, set_enabled, set_verbose
from .metrics import compute_plan_metrics
from .plan import project_grid, refresh_queue
from .print_queue import calculate_progress
from .validate import validate_plates


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Plan baseplate + bin plates for a drawer layout")
    p.add_argument("--project", type=str, required=True, help="Path to project JSON")
    p.add_argument("--queue", type=str, default="", help="Stored print queue JSON (optional)")
    p.add_argument("--bed", type=str, default="", help="Override printer bed WxD in mm, e.g. 256x256")
    p.add_argument("--save", action="store_true", help="Write the refreshed queue back to --queue")
    p.add_argument("--out", type=str, default="", help="Write the refreshed queue to this path")
    p.add_argument("--quiet", action="store_true", help="Silence planner log output")
    p.add_argument("--verbose", action="store_true", help="Show debug log output")
    p.add_argument("--summary", action="store_true", help="Only print totals, no per-plate details")
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_argparser().parse_args(argv)
    set_enabled(not args.quiet)
    set_verbose(bool(args.verbose))

    project_path = Path(args.project)
    if not project_path.exists():
        raise SystemExit(f"Project JSON not found: {project_path}")
    project = load_project_json(project_path)

    if args.bed.strip():
        bed_w, bed_d = parse_dims_text(args.bed)
        project = replace(project, bed_width=bed_w, bed_depth=bed_d)

    queue_path = Path(args.queue) if args.queue.strip() else None
    stored = load_queue_json(queue_path) if queue_path is not None else None

    queue = refresh_queue(project, stored)
    plates = queue.plates

    grid = project_grid(project)
    m = compute_plan_metrics(plates)
    progress = calculate_progress(plates)

    print(f"Project: {project.name or project.project_id}")
    print(f"Drawer: {project.drawer_width:g}x{project.drawer_depth:g} mm  grid={grid.cols}x{grid.rows}")
    print(f"Bed: {project.bed_width:g}x{project.bed_depth:g} mm")
    print(f"Bins: {len(project.bins)}  fingerprint={queue.fingerprint}")
    print(f"Plates: {m.num_plates} (baseplates={m.num_baseplates}, bins={m.num_bin_plates}, oversized={m.num_oversized})")
    print(f"Progress: {progress.completed}/{progress.total} done ({progress.percentage}%), failed={progress.failed}")

    for issue in validate_plates(plates):
        if issue.level == "WARN":
            print(f"- WARN plate={issue.plate_id}: {issue.message}")

    if not args.summary:
        print_plates(plates)

    out_path: Optional[Path] = None
    if args.out.strip():
        out_path = Path(args.out)
    elif args.save:
        if queue_path is None:
            raise SystemExit("--save needs --queue")
        out_path = queue_path

    if out_path is not None:
        save_queue_json(queue, out_path)
        get_logger().info(f"Saved print queue to: {out_path}")


if __name__ == "__main__":
    main()
