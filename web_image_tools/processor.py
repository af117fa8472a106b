"""
Optimize and scale pipelines.

  optimize: load (decode or rasterize) -> crop padding -> encode WebP
  scale:    load (decode or rasterize) -> resample      -> encode by extension
"""

from __future__ import annotations

import logging
import os

from PIL import Image

from . import codec
from .bounds import crop_transparent_areas
from .errors import pipeline_stage
from .scaling import DEFAULT_ALGORITHM, ScaleSpec, resolve_resampling_filter, scale_image_buffer
from .vector import load_vector_document, rasterize

logger = logging.getLogger(__name__)

DEFAULT_OPTIMIZE_QUALITY = 80.0
DEFAULT_SCALE_QUALITY = 90.0
DEFAULT_SVG_SCALE = 2.0


def is_vector_path(input_path: str) -> bool:
    return os.path.splitext(input_path)[1].lower() == ".svg"


def load_image(input_path: str, svg_scale: float = DEFAULT_SVG_SCALE) -> Image.Image:
    """Decode a raster file, or parse and rasterize an SVG file."""
    if is_vector_path(input_path):
        with pipeline_stage("decode"):
            document = load_vector_document(input_path)
        with pipeline_stage("rasterize"):
            image = rasterize(document, svg_scale)
        logger.info("SVG successfully converted to raster image")
        return image
    with pipeline_stage("decode"):
        return codec.decode_image(input_path)


def report_output_size(byte_count: int) -> None:
    print(f"Output file size: {byte_count / 1024:.2f} KB")


def optimize_image(
        input_path: str,
        output_path: str,
        quality: float = DEFAULT_OPTIMIZE_QUALITY,
        svg_scale: float = DEFAULT_SVG_SCALE,
) -> int:
    """
    Crop blank padding and re-encode as WebP.

    The output is always WebP, whatever the extension of `output_path`.
    Returns the size of the written file in bytes.
    """
    image = load_image(input_path, svg_scale)
    with pipeline_stage("crop"):
        cropped_image = crop_transparent_areas(image)
    with pipeline_stage("encode"):
        byte_count = codec.save_image(cropped_image, output_path, quality, format_name="WEBP")
    report_output_size(byte_count)
    return byte_count


def scale_image(
        input_path: str,
        output_path: str,
        spec: ScaleSpec,
        algorithm: str = DEFAULT_ALGORITHM,
        quality: float = DEFAULT_SCALE_QUALITY,
        svg_scale: float = DEFAULT_SVG_SCALE,
) -> int:
    """
    Resample an image and encode it in the format named by the output extension.

    The algorithm name and output extension are checked before the input
    is read, so a bad request touches no files.
    Returns the size of the written file in bytes.
    """
    with pipeline_stage("resample"):
        resolve_resampling_filter(algorithm)
    with pipeline_stage("encode"):
        format_name = codec.output_format_for_path(output_path)

    image = load_image(input_path, svg_scale)
    with pipeline_stage("resample"):
        scaled_image = scale_image_buffer(image, spec, algorithm)
    with pipeline_stage("encode"):
        byte_count = codec.save_image(scaled_image, output_path, quality, format_name=format_name)
    report_output_size(byte_count)
    return byte_count
