#!/usr/bin/env python
"""
Command-line interface for osmcanvas

Usage:
    python cli.py render --input map.osm --output map.svg
    python cli.py render --input map.osm --output map.png --display 800x1200 --zoom-in 2
    python cli.py stats --input map.osm
    python cli.py fetch --bbox 45.50,-73.60,45.52,-73.55 --output map.osm
"""

import os
import sys
import json
import argparse
from pathlib import Path

from loguru import logger

from osmcanvas.config import get_config, validate_config
from osmcanvas.exceptions import FetchError
from osmcanvas.osm.source import ExtractSource, parse_bbox
from osmcanvas.pipeline import MapSession
from osmcanvas.render.raster import rasterize
from osmcanvas.render.svg import render_svg
from osmcanvas.viewport import ViewportController


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def parse_size(value: str):
    """Parse 'WIDTHxHEIGHT'"""
    try:
        width, height = (float(v) for v in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got {value!r}")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"Size must be positive, got {value!r}")
    return width, height


def _load_scene(path: str):
    return MapSession().load(ExtractSource.from_file(path))


def cmd_render(args):
    """Render an OSM extract to SVG or PNG"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    scene = _load_scene(args.input)
    if not scene.ok:
        # Still write the (empty) map, as the interactive view would
        logger.warning(f"Rendering empty map: {scene.error}")

    viewport_state = None
    width, height = scene.canvas_width, scene.canvas_height
    if args.display:
        width, height = args.display
        viewport = ViewportController(display_size=args.display)
        for _ in range(args.zoom_in):
            viewport.zoom("in")
        for _ in range(args.zoom_out):
            viewport.zoom("out")
        viewport_state = viewport.get_state()
        logger.info(f"Viewport: {viewport.css_transform()}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if output_path.suffix.lower() == ".svg":
        svg = render_svg(scene.paths, width, height, viewport=viewport_state, background=args.background)
        output_path.write_text(svg, encoding="utf-8")
        logger.info(f"✓ Generated: {output_path}")
    else:
        rasterize(scene.paths, int(width), int(height), output_path, viewport=viewport_state,
                  background=args.background)
        logger.info(f"✓ Generated: {output_path}")

    return 0


def cmd_stats(args):
    """Print extract statistics as JSON"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    scene = _load_scene(args.input)
    print(json.dumps(scene.summary(), indent=2))
    return 0 if scene.ok else 1


def cmd_fetch(args):
    """Download an extract from the OSM API"""
    setup_logging(args.verbose)

    try:
        bbox = parse_bbox(args.bbox)
    except ValueError as e:
        logger.error(f"Invalid bounding box: {e}")
        return 1

    source = ExtractSource(cache_dir=args.cache_dir)
    try:
        text = source.download(bbox)
    except FetchError as e:
        logger.error(f"Failed to fetch extract: {e}")
        return 1

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    logger.info(f"✓ Saved extract: {output_path}")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="osmcanvas - render OpenStreetMap extracts onto a fixed canvas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render an extract to SVG or PNG")
    render_parser.add_argument("--input", "-i", required=True, help="Input OSM XML file")
    render_parser.add_argument("--output", "-o", required=True, help="Output file (.svg, .png, .jpg)")
    render_parser.add_argument("--display", type=parse_size,
                               help="Render through the viewport for a WIDTHxHEIGHT display")
    render_parser.add_argument("--zoom-in", type=int, default=0, help="Zoom-in steps (with --display)")
    render_parser.add_argument("--zoom-out", type=int, default=0, help="Zoom-out steps (with --display)")
    render_parser.add_argument("--background", default="#F2EFE9", help="Background color")
    render_parser.set_defaults(func=cmd_render)

    # Stats command
    stats_parser = subparsers.add_parser("stats", help="Print node/way/category counts")
    stats_parser.add_argument("--input", "-i", required=True, help="Input OSM XML file")
    stats_parser.set_defaults(func=cmd_stats)

    # Fetch command
    fetch_parser = subparsers.add_parser("fetch", help="Download an extract from the OSM API")
    fetch_parser.add_argument("--bbox", required=True, help="min_lat,min_lon,max_lat,max_lon")
    fetch_parser.add_argument("--output", "-o", required=True, help="Output OSM XML file")
    fetch_parser.add_argument("--cache-dir", help="Cache downloaded extracts here")
    fetch_parser.set_defaults(func=cmd_fetch)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    validate_config(get_config())
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
