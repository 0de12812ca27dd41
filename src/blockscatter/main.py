"""
Command-line Entry Point
========================
Scatters blocks over a flat rectangle and prints the placements as JSON.

Usage:
    $ python -m blockscatter --width 20 --height 10 --count 200 --items 3 --seed 1
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from blockscatter import config
from blockscatter.controller.commands import ScatterOptions, scatter_blocks
from blockscatter.errors import ScatterError
from blockscatter.logging_config import setup_logging
from blockscatter.model.mesh import TriangleMesh
from blockscatter.model.placement import Item

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockscatter",
        description="Scatter blocks over a rectangle with area-proportional density.",
    )
    parser.add_argument("--width", type=float, default=10.0, help="Rectangle extent along X.")
    parser.add_argument("--height", type=float, default=10.0, help="Rectangle extent along Y.")
    parser.add_argument("--count", type=int, default=config.DEFAULT_TARGET_COUNT, help="Number of blocks to scatter.")
    parser.add_argument("--items", type=int, default=1, help="Number of distinct blocks.")
    parser.add_argument("--mesher", choices=("grid", "gmsh"), default="grid", help="How to triangulate the rectangle.")
    parser.add_argument("--divisions", type=int, default=4, help="Grid cells per side (grid mesher).")
    parser.add_argument("--mesh-size", type=float, default=config.DEFAULT_MESH_SIZE, help="Element size (gmsh mesher).")
    parser.add_argument("--scale", type=float, default=0.0, help="Random scale multiplier, 0 for none.")
    parser.add_argument("--rotate", action="store_true", help="Random rotation around Z.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    return parser


def build_mesh(args: argparse.Namespace) -> TriangleMesh:
    if args.mesher == "gmsh":
        # gmsh is only loaded when requested
        from blockscatter.controller.mesher import GmshTriangulator

        outline = [(0.0, 0.0), (args.width, 0.0), (args.width, args.height), (0.0, args.height)]
        return GmshTriangulator().triangulate(outline, mesh_size=args.mesh_size)
    return TriangleMesh.rectangle(args.width, args.height, divisions=args.divisions)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    items = [Item(name=f"block-{i + 1}") for i in range(args.items)]
    options = ScatterOptions(
        target_count=args.count,
        scale=args.scale,
        random_rotation=args.rotate,
        seed=args.seed,
    )

    try:
        mesh = build_mesh(args)
        result = scatter_blocks(mesh, items, options)
    except ScatterError as e:
        logger.error(f"Failed to execute: {e}")
        return 1

    json.dump(
        {
            "requested": result.requested_count,
            "emitted": result.emitted_count,
            "placements": [command.to_dict() for command in result.commands],
        },
        sys.stdout,
        indent=2,
    )
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
