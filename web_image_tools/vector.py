"""
SVG loading and rasterization.

Documents are rendered with cairosvg at a multiple of their intrinsic size
(supersampling), then point-sampled back down to the intrinsic size:
output pixel (x, y) takes the rendered pixel at (floor(x * s), floor(y * s)).
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from typing import Tuple
from xml.etree import ElementTree

import cairosvg
import numpy as np
from cairocffi import CairoError
from cairosvg.parser import Tree
from PIL import Image

from .errors import DecodeError, ImageIOError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_VIEWBOX_SIZE = 512.0
MIN_RENDER_SCALE = 1.0
MAX_RENDER_SCALE = 4.0


@dataclass(frozen=True)
class VectorDocument:
    data: bytes
    tree: Tree
    intrinsic_width: float
    intrinsic_height: float


def parse_viewbox_size(viewbox_attribute: str | None) -> Tuple[float, float]:
    """Return (width, height) from a viewBox value, or (0, 0) when it is not set."""
    if viewbox_attribute is None or not viewbox_attribute.strip():
        return 0.0, 0.0
    number_tokens = re.split(r"[\s,]+", viewbox_attribute.strip())
    if len(number_tokens) != 4:
        raise ParseError(f"Malformed viewBox: {viewbox_attribute!r}")
    try:
        _min_x, _min_y, width, height = (float(token) for token in number_tokens)
    except ValueError as error:
        raise ParseError(f"Malformed viewBox: {viewbox_attribute!r}") from error
    return width, height


def parse_vector_document(svg_bytes: bytes) -> VectorDocument:
    if not svg_bytes.strip():
        raise ParseError("Empty SVG document")
    try:
        svg_tree = Tree(bytestring=svg_bytes)
    except (ElementTree.ParseError, ValueError) as error:
        raise ParseError(f"Failed to parse SVG: {error}") from error
    if svg_tree.tag.rsplit("}", 1)[-1] != "svg":
        raise ParseError(f"Root element is <{svg_tree.tag}>, expected <svg>")

    width, height = parse_viewbox_size(svg_tree.get("viewBox"))
    if width <= 0 or height <= 0:
        width, height = DEFAULT_VIEWBOX_SIZE, DEFAULT_VIEWBOX_SIZE
    return VectorDocument(data=svg_bytes, tree=svg_tree, intrinsic_width=width, intrinsic_height=height)


def load_vector_document(svg_path: str) -> VectorDocument:
    try:
        with open(svg_path, "rb") as svg_file_handle:
            svg_bytes = svg_file_handle.read()
    except OSError as error:
        raise ImageIOError(f"Failed to read SVG file {svg_path}: {error}") from error
    logger.info("Loading SVG: %d bytes", len(svg_bytes))
    return parse_vector_document(svg_bytes)


def clamp_render_scale(scale_factor: float) -> float:
    return min(MAX_RENDER_SCALE, max(MIN_RENDER_SCALE, float(scale_factor)))


def point_sample(working_rgba: np.ndarray, output_width: int, output_height: int, scale_factor: float) -> np.ndarray:
    """
    Build an output_height x output_width RGBA array from a supersampled one.

    Samples falling outside working_rgba are left fully transparent.
    """
    working_height, working_width = working_rgba.shape[:2]
    source_columns = np.floor(np.arange(output_width) * scale_factor).astype(np.int64)
    source_rows = np.floor(np.arange(output_height) * scale_factor).astype(np.int64)

    target_columns = np.nonzero(source_columns < working_width)[0]
    target_rows = np.nonzero(source_rows < working_height)[0]

    sampled = np.zeros((output_height, output_width, 4), dtype=np.uint8)
    sampled[np.ix_(target_rows, target_columns)] = working_rgba[
        np.ix_(source_rows[target_rows], source_columns[target_columns])
    ]
    return sampled


def rasterize(document: VectorDocument, scale_factor: float) -> Image.Image:
    """
    Render a vector document to an RGBA image at its intrinsic size.

    Args:
        document: Parsed SVG document.
        scale_factor: Supersampling factor, clamped to [1, 4].

    Returns:
        A new RGBA image of int(intrinsic_width) x int(intrinsic_height)
        pixels on a transparent background.
    """
    scale_factor = clamp_render_scale(scale_factor)
    width, height = document.intrinsic_width, document.intrinsic_height
    render_width = max(1, int(width * scale_factor))
    render_height = max(1, int(height * scale_factor))

    logger.info("Rendering SVG at %.0fx%.0f (%.1fx scale for quality)", width, height, scale_factor)
    try:
        png_bytes = cairosvg.svg2png(
            bytestring=document.data,
            output_width=render_width,
            output_height=render_height,
        )
        with Image.open(io.BytesIO(png_bytes)) as rendered_image:
            working_image = rendered_image.convert("RGBA")
    except (CairoError, OSError, ValueError, IndexError, TypeError, ZeroDivisionError) as error:
        raise DecodeError(
            f"Failed to render SVG at {render_width}x{render_height}: {error}"
        ) from error

    if scale_factor == 1.0:
        return working_image

    output_width = max(1, int(width))
    output_height = max(1, int(height))
    sampled = point_sample(np.array(working_image), output_width, output_height, scale_factor)
    logger.debug("Point-sampled %dx%d down to %dx%d", render_width, render_height, output_width, output_height)
    return Image.fromarray(sampled)
