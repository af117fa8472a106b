"""Crop, rescale and re-encode images for the web."""

from .bounds import BoundingRect, crop_transparent_areas, find_content_bounds
from .errors import (
    DecodeError,
    EncodeError,
    ImageIOError,
    ImageToolError,
    InvalidParameters,
    ParseError,
    UnsupportedAlgorithm,
    UnsupportedFormat,
)
from .processor import load_image, optimize_image, scale_image
from .scaling import ScaleFactor, ScaleSpec, TargetHeight, TargetSize, TargetWidth, build_scale_spec
from .vector import VectorDocument, parse_vector_document, rasterize

__version__ = "0.1.0"
