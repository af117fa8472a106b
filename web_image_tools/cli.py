"""
Command-line entry point.

Usage examples:

  # Crop transparent padding and convert to WebP
  web-image-tools optimize logo.png logo.webp --quality 85

  # Rasterize an SVG at 4x for smoother edges, then crop
  web-image-tools optimize icon.svg icon.webp --svg-scale 4

  # Halve an image, or fit it to a width keeping the aspect ratio
  web-image-tools scale photo.jpg small.jpg --factor 0.5
  web-image-tools scale photo.jpg thumb.png --width 320 --algorithm bicubic

  # Write a 100x100 PNG with a padded red square
  web-image-tools sample test-image.png
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .errors import ImageToolError
from .processor import (
    DEFAULT_OPTIMIZE_QUALITY,
    DEFAULT_SCALE_QUALITY,
    DEFAULT_SVG_SCALE,
    optimize_image,
    scale_image,
)
from .samples import write_padded_square
from .scaling import DEFAULT_ALGORITHM, build_scale_spec

logger = logging.getLogger(__name__)


def with_webp_extension(output_path: str) -> str:
    if output_path.lower().endswith(".webp"):
        return output_path
    base_name, _extension = os.path.splitext(output_path)
    return base_name + ".webp"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="web-image-tools",
        description="Image tools for web optimization: crop transparent padding, rescale, convert to WebP.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    optimize_parser = subparsers.add_parser(
        "optimize",
        help="Crop transparent areas and convert to WebP.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    optimize_parser.add_argument("input", help="Input image (PNG/JPG/HEIF/SVG).")
    optimize_parser.add_argument("output", help="Output path; the extension is forced to .webp.")
    optimize_parser.add_argument("--quality", "-q", type=float, default=DEFAULT_OPTIMIZE_QUALITY, help="WebP quality (0-100).")
    optimize_parser.add_argument("--svg-scale", type=float, default=DEFAULT_SVG_SCALE, help="SVG supersampling factor (clamped to 1-4).")

    scale_parser = subparsers.add_parser(
        "scale",
        help="Resize an image by factor or to a width and/or height.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    scale_parser.add_argument("input", help="Input image (PNG/JPG/HEIF/SVG).")
    scale_parser.add_argument("output", help="Output path; .png, .jpg, .jpeg or .webp.")
    scale_parser.add_argument("--factor", "-f", type=float, default=None, help="Uniform scale factor, e.g. 0.5 or 2.")
    scale_parser.add_argument("--width", "-W", type=int, default=None, help="Target width in pixels.")
    scale_parser.add_argument("--height", "-H", type=int, default=None, help="Target height in pixels.")
    scale_parser.add_argument(
        "--algorithm", "-a",
        default=DEFAULT_ALGORITHM,
        help="Resampling algorithm: nearest, bilinear, bicubic, lanczos.",
    )
    scale_parser.add_argument("--quality", "-q", type=float, default=DEFAULT_SCALE_QUALITY, help="Quality for JPEG/WebP output (0-100).")
    scale_parser.add_argument("--svg-scale", type=float, default=DEFAULT_SVG_SCALE, help="SVG supersampling factor (clamped to 1-4).")

    sample_parser = subparsers.add_parser(
        "sample",
        help="Write a PNG with transparent padding around a red square.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    sample_parser.add_argument("output", help="Output path, e.g. test-image.png.")
    sample_parser.add_argument("--size", type=int, default=100, help="Canvas width and height in pixels.")
    sample_parser.add_argument("--margin", type=int, default=30, help="Transparent margin around the square.")

    return parser


def run_command(arguments: argparse.Namespace) -> None:
    if arguments.command == "optimize":
        output_path = with_webp_extension(arguments.output)
        if output_path != arguments.output:
            print(f"Output will be saved as: {output_path}")
        optimize_image(arguments.input, output_path, quality=arguments.quality, svg_scale=arguments.svg_scale)
        print(f"SUCCESS: {arguments.input} -> {output_path}")
    elif arguments.command == "scale":
        spec = build_scale_spec(factor=arguments.factor, width=arguments.width, height=arguments.height)
        scale_image(
            arguments.input,
            arguments.output,
            spec,
            algorithm=arguments.algorithm,
            quality=arguments.quality,
            svg_scale=arguments.svg_scale,
        )
        print(f"SUCCESS: {arguments.input} -> {arguments.output}")
    elif arguments.command == "sample":
        write_padded_square(arguments.output, canvas_size=arguments.size, margin=arguments.margin)
        print(f"SUCCESS: wrote {arguments.output}")


def main(argv: Optional[List[str]] = None) -> int:
    arguments = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if arguments.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        run_command(arguments)
    except ImageToolError as error:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
