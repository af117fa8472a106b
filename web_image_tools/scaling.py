"""
Target-size arithmetic and resampling.

A scale request is exactly one of four variants, so "nothing set" and
"factor plus width" cannot be represented once a spec is built:

  ScaleFactor(0.5)       -> round(original * 0.5) on both axes
  TargetSize(640, 480)   -> used as-is, aspect ratio not preserved
  TargetWidth(640)       -> height follows the original aspect ratio
  TargetHeight(480)      -> width follows the original aspect ratio
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from PIL import Image

from .errors import InvalidParameters, UnsupportedAlgorithm

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "lanczos"

RESAMPLING_FILTERS: Dict[str, Image.Resampling] = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "linear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "cubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


@dataclass(frozen=True)
class ScaleFactor:
    factor: float


@dataclass(frozen=True)
class TargetSize:
    width: int
    height: int


@dataclass(frozen=True)
class TargetWidth:
    width: int


@dataclass(frozen=True)
class TargetHeight:
    height: int


ScaleSpec = Union[ScaleFactor, TargetSize, TargetWidth, TargetHeight]


def build_scale_spec(
        factor: Optional[float] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
) -> ScaleSpec:
    """Turn loose command-line options into a single ScaleSpec variant."""
    if factor is not None and (width is not None or height is not None):
        raise InvalidParameters("Cannot combine a scale factor with width or height")
    if factor is not None:
        if not (math.isfinite(factor) and factor > 0):
            raise InvalidParameters(f"Scale factor must be a positive finite number, got {factor}")
        return ScaleFactor(float(factor))
    for label, value in (("width", width), ("height", height)):
        if value is not None and value <= 0:
            raise InvalidParameters(f"Target {label} must be positive, got {value}")
    if width is not None and height is not None:
        return TargetSize(width, height)
    if width is not None:
        return TargetWidth(width)
    if height is not None:
        return TargetHeight(height)
    raise InvalidParameters("Specify a scale factor, a width, a height, or both width and height")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_target_dimensions(original_width: int, original_height: int, spec: ScaleSpec) -> Tuple[int, int]:
    if isinstance(spec, ScaleFactor):
        target_width = round_half_up(original_width * spec.factor)
        target_height = round_half_up(original_height * spec.factor)
    elif isinstance(spec, TargetSize):
        target_width, target_height = spec.width, spec.height
    elif isinstance(spec, TargetWidth):
        target_width = spec.width
        target_height = round_half_up(spec.width * original_height / original_width)
    elif isinstance(spec, TargetHeight):
        target_height = spec.height
        target_width = round_half_up(spec.height * original_width / original_height)
    else:
        raise TypeError(f"Unknown scale spec: {spec!r}")
    return max(1, target_width), max(1, target_height)


def resolve_resampling_filter(algorithm: str) -> Image.Resampling:
    try:
        return RESAMPLING_FILTERS[algorithm.strip().lower()]
    except KeyError:
        raise UnsupportedAlgorithm(
            f"Unsupported resampling algorithm: {algorithm} (use: nearest, bilinear, bicubic, lanczos)"
        ) from None


def scale_image_buffer(image: Image.Image, spec: ScaleSpec, algorithm: str = DEFAULT_ALGORITHM) -> Image.Image:
    """
    Resample an image to the size described by `spec`.

    Args:
        image: Source image. It is not modified.
        spec: One ScaleSpec variant.
        algorithm: nearest, bilinear, bicubic or lanczos.

    Returns:
        A new image at the computed target size.
    """
    resampling_filter = resolve_resampling_filter(algorithm)
    original_width, original_height = image.size
    target_width, target_height = compute_target_dimensions(original_width, original_height, spec)
    logger.info("Scaling from %dx%d to %dx%d", original_width, original_height, target_width, target_height)
    return image.resize((target_width, target_height), resampling_filter)
