#!/usr/bin/env python3
"""
Interactive tree CLI

Usage modes:
- Default run: compile a YAML/JSON tree, mount it, apply clicks, print draw plans
- Frames: sample each draw plan into eased frames
- Export: write the full tree as GraphML for external tools
- Utility: list sample trees, show version, dump the tree after the clicks
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from glob import glob
from pathlib import Path
from typing import Any, Dict, List

from itree_core.config import Margin, TreeConfig  # type: ignore
from itree_core.compiler import compile_from_file, tree_to_dict  # type: ignore
from itree_core.errors import TreeError  # type: ignore
from itree_core.tree import export_graphml  # type: ignore
from itree_anim.adapters.jsonl import JsonlInteractionSource, JsonlPlanRecorder  # type: ignore
from itree_anim.adapters.live import TreeStepper  # type: ignore
from itree_anim.script.compiler import compile_plan_to_frames  # type: ignore


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Lay out a collapsible tree, apply clicks and dump draw plans",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Utilities / meta
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")
    p.add_argument("--list-samples", action="store_true", help="List bundled sample trees and exit")

    # Primary input
    p.add_argument("tree", nargs="?", help="Path to YAML/JSON tree (e.g., scripts/sample_tree.yaml)")

    # Interactions
    p.add_argument("--click", action="append", default=[], metavar="KEY", help="Click a node by key (repeatable)")
    p.add_argument("--interactions", type=str, default="", help="JSONL file of {\"type\": \"Click\", \"key\": ...} records")

    # Geometry overrides
    p.add_argument("--width", type=float, default=None, help="Canvas width")
    p.add_argument("--height", type=float, default=None, help="Canvas height")
    p.add_argument("--margin", type=float, default=None, help="Margin applied on all four sides")
    p.add_argument("--band-height", type=float, default=None, help="Vertical distance between depth levels")
    p.add_argument("--duration", type=float, default=None, help="Transition duration")

    # Output
    p.add_argument("--frames", type=int, default=0, help="Sample each plan at this many frames per second (also written to --out)")
    p.add_argument("--out", type=str, default="", help="Write draw plans as JSONL to this path")
    p.add_argument("--dump-tree", action="store_true", help="Print the tree (with collapse state) after all clicks")
    p.add_argument("--export-graphml", type=str, default="", help="Export the tree to GraphML at given path")

    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> TreeConfig:
    cfg = TreeConfig()
    if args.width is not None:
        cfg.width = float(args.width)
    if args.height is not None:
        cfg.height = float(args.height)
    if args.margin is not None:
        m = float(args.margin)
        cfg.margin = Margin(m, m, m, m)
    if args.band_height is not None:
        cfg.band_height = float(args.band_height)
    if args.duration is not None:
        cfg.duration = float(args.duration)
    return cfg


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def find_sample_trees() -> List[str]:
    here = Path(__file__).resolve()
    candidates = []
    for pattern in ("*.yaml", "*.json"):
        candidates.extend(sorted(glob(str(here.parent / pattern))))
    return candidates


def main(argv: List[str] | None = None) -> int:
    try:
        from itree_core import __version__ as itree_version  # type: ignore
    except ImportError:
        itree_version = "unknown"

    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.version:
        print(itree_version)
        return 0

    if args.list_samples:
        print(json.dumps(find_sample_trees(), indent=2))
        return 0

    if not args.tree:
        print("error: missing tree path (try --list-samples)", file=sys.stderr)
        return 2

    cfg = build_config(args)
    clicks = list(args.click)
    if args.interactions:
        clicks.extend(JsonlInteractionSource(args.interactions).stream_interactions())

    logging.info("Compiling tree from %s", args.tree)
    try:
        root = compile_from_file(args.tree)
        out_stream = open(args.out, "w", encoding="utf-8") if args.out else None
        try:
            presenter = JsonlPlanRecorder(out_stream, fps=args.frames) if out_stream else None
            stepper = TreeStepper(root, cfg, presenter=presenter)
            passes = list(stepper.stream_passes(clicks))
        finally:
            if out_stream:
                out_stream.close()
    except TreeError as e:
        logging.error("%s: %s", type(e).__name__, e)
        return 1

    logging.info("Completed %d render passes for %d clicks", len(passes), len(clicks))

    if args.export_graphml:
        logging.info("Exporting GraphML to %s", args.export_graphml)
        export_graphml(root, args.export_graphml)

    if args.dump_tree:
        print(json.dumps(tree_to_dict(root), indent=2))
        return 0

    if args.out:
        return 0

    report: List[Dict[str, Any]] = []
    for rp in passes:
        entry = rp.to_dict()
        if args.frames > 0:
            entry["frames"] = [f.to_dict() for f in compile_plan_to_frames(rp.plan, fps=args.frames)]
        report.append(entry)
    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
