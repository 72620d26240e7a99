"""Command-line entry point: shapes, thresholding and orientation fixes.

Commands:
    shape      Generate a shape drawing and optionally save it as drawing.v1 YAML
    threshold  Turn near-white pixels of an image black
    orient     Print the normalized transform for a track transform

CLI:
    inkmark shape star 0 0 90 90 --output star.yaml
    inkmark shape circle 10 10 200 100 --tool-width 6
    inkmark shape triangle          # canvas default region from inkmark.yaml
    inkmark threshold scan.png scan_bw.png --workers 4
    inkmark orient 0 1 -1 0 0 0 --natural-size 1920 1080

Global options (before the command):
    --config PATH      alternate inkmark.yaml
    --log-level LEVEL  overrides logging.level from the config

Exit status is 1 when a conversion, config or file error occurs.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from inkmark.canvas.document import Canvas
from inkmark.configs.loader import AppConfig, ConfigError, load_config
from inkmark.ink.export import save_drawing
from inkmark.ink.model import InkingTool, InkStyle
from inkmark.ink.shapes import ShapeKind
from inkmark.media.orientation import classify, normalize_transform
from inkmark.raster.errors import ConversionError
from inkmark.raster.threshold import DEFAULT_THRESHOLD, convert_image
from inkmark.utils import fs
from inkmark.utils.geometry import AffineTransform, Rect, Size
from inkmark.utils.logging_config import push_context, setup_logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _run_shape(args: argparse.Namespace, cfg: AppConfig) -> int:
    shape = ShapeKind.parse(args.kind)
    if args.bounds and len(args.bounds) != 4:
        raise ValueError(f"Bounds take 4 values (X Y W H), got {len(args.bounds)}")
    ink = InkStyle(tool=cfg.ink.tool, color=cfg.ink.color)
    tool = InkingTool(ink=ink, width=args.tool_width) if args.tool_width is not None else None

    canvas = Canvas.from_config(cfg.canvas, tool)
    drawing = canvas.draw_shape(
        shape,
        Rect(*args.bounds) if args.bounds else None,
        opacity=cfg.shapes.opacity if args.opacity is None else args.opacity,
        thickness=cfg.shapes.thickness if args.thickness is None else args.thickness,
        ink=ink,
    )
    points = sum(len(s.path) for s in drawing)
    logger.info("Generated %s: %d strokes, %d control points", shape.value, len(drawing), points)

    if args.output:
        path = save_drawing(drawing, args.output)
        logger.info("Saved drawing to %s", path)
    return 0


def _run_threshold(args: argparse.Namespace, cfg: AppConfig) -> int:
    img = fs.load_image(args.input)
    logger.info("Loaded %s (%dx%d, %s)", args.input, img.width, img.height, img.mode)

    workers = args.workers if args.workers is not None else cfg.raster.max_workers
    rows = args.rows_per_chunk if args.rows_per_chunk is not None else cfg.raster.rows_per_chunk

    out = convert_image(img, DEFAULT_THRESHOLD, rows_per_chunk=rows, max_workers=workers)
    fs.atomic_save_image(out, args.output)
    logger.info("Saved black-and-white image to %s", args.output)
    return 0


def _run_orient(args: argparse.Namespace, cfg: AppConfig) -> int:
    transform = AffineTransform(*args.transform)
    natural = Size(*args.natural_size)
    fixed = normalize_transform(transform, natural)
    logger.info("Orientation: %s", classify(transform).value)
    print(f"{fixed.a:g} {fixed.b:g} {fixed.c:g} {fixed.d:g} {fixed.tx:g} {fixed.ty:g}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inkmark",
        description="Shape strokes, black-and-white thresholding and media orientation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="Path to inkmark.yaml (default: bundled defaults)",
    )
    parser.add_argument(
        "--log-level", type=str.upper, default=None, choices=LOG_LEVELS,
        help="Override logging level (DEBUG, INFO, WARNING, ...)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    shape = sub.add_parser("shape", help="Generate a shape drawing")
    shape.add_argument(
        "kind", choices=[k.value for k in ShapeKind] + [k.name.lower() for k in ShapeKind],
        help="Shape to generate",
    )
    shape.add_argument(
        "bounds", type=float, nargs="*", metavar="COORD",
        help="Bounding rectangle X Y W H in points (default: canvas default region)",
    )
    shape.add_argument("--thickness", type=float, default=None, help="Nib size (default: config)")
    shape.add_argument("--opacity", type=float, default=None, help="Opacity 0-1 (default: config)")
    shape.add_argument(
        "--tool-width", type=float, default=None,
        help="Active tool width; a floor on the thickness",
    )
    shape.add_argument("--output", "-o", type=Path, default=None, help="Write drawing.v1 YAML here")
    shape.set_defaults(handler=_run_shape)

    threshold = sub.add_parser("threshold", help="Turn near-white pixels black")
    threshold.add_argument("input", type=Path, help="Input image")
    threshold.add_argument("output", type=Path, help="Output image (format from extension)")
    threshold.add_argument("--workers", type=int, default=None, help="Thread count (default: config)")
    threshold.add_argument(
        "--rows-per-chunk", type=int, default=None,
        help="Rows per work unit (default: config)",
    )
    threshold.set_defaults(handler=_run_threshold)

    orient = sub.add_parser("orient", help="Normalize a track transform")
    orient.add_argument(
        "transform", type=float, nargs=6, metavar=("A", "B", "C", "D", "TX", "TY"),
        help="Track preferred transform",
    )
    orient.add_argument(
        "--natural-size", type=float, nargs=2, required=True, metavar=("W", "H"),
        help="Natural (untransformed) content size",
    )
    orient.set_defaults(handler=_run_orient)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
    except (ConfigError, FileNotFoundError) as e:
        setup_logging(level="INFO")
        logger.error("%s", e)
        return 1

    log_kwargs = cfg.logging.as_kwargs()
    if args.log_level:
        log_kwargs["level"] = args.log_level
    setup_logging(**log_kwargs, quiet_libs=["PIL"], context={"app": "inkmark"})
    push_context(command=args.command)

    try:
        return args.handler(args, cfg)
    except (ConversionError, FileNotFoundError, RuntimeError, ValueError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
