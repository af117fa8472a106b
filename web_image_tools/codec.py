"""
Decoding and encoding at the file boundary.

This is the only module that looks at file extensions for output formats.
Decoding goes through Pillow with the HEIF/HEIC opener registered.
"""

from __future__ import annotations

import io
import logging
import os
from typing import Dict, Optional

from PIL import Image, UnidentifiedImageError
from pillow_heif import register_heif_opener

from .errors import DecodeError, EncodeError, ImageIOError, InvalidParameters, UnsupportedFormat

register_heif_opener()

logger = logging.getLogger(__name__)

OUTPUT_FORMATS: Dict[str, str] = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".webp": "WEBP",
}


def ensure_directory(directory_path: str) -> None:
    if directory_path:
        os.makedirs(directory_path, exist_ok=True)


def read_file_bytes(file_path: str) -> bytes:
    try:
        with open(file_path, "rb") as file_handle:
            return file_handle.read()
    except OSError as error:
        raise ImageIOError(f"Failed to open input file {file_path}: {error}") from error


def decode_image_bytes(image_bytes: bytes, source_name: str = "<bytes>") -> Image.Image:
    try:
        with Image.open(io.BytesIO(image_bytes)) as image_pil:
            image_pil.load()
            if image_pil.mode != "RGBA":
                return image_pil.convert("RGBA")
            return image_pil.copy()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as error:
        raise DecodeError(f"Failed to decode image {source_name}: {error}") from error


def decode_image(image_path: str) -> Image.Image:
    """
    Read and decode a raster image into an RGBA buffer.

    Raises:
        ImageIOError: the file cannot be read.
        DecodeError: the bytes are not an image Pillow understands.
    """
    return decode_image_bytes(read_file_bytes(image_path), source_name=image_path)


def output_format_for_path(output_path: str) -> str:
    extension = os.path.splitext(output_path)[1].lower()
    try:
        return OUTPUT_FORMATS[extension]
    except KeyError:
        raise UnsupportedFormat(
            f"Unsupported output format: {extension or '(none)'} (use: .png, .jpg, .jpeg, .webp)"
        ) from None


def jpeg_quality(quality: float) -> int:
    return max(1, min(100, int(round(quality))))


def flatten_onto_black(image: Image.Image) -> Image.Image:
    """JPEG has no alpha channel; transparent areas come out black."""
    if image.mode != "RGBA":
        return image.convert("RGB")
    black_background = Image.new("RGBA", image.size, (0, 0, 0, 255))
    return Image.alpha_composite(black_background, image).convert("RGB")


def encode_image(image: Image.Image, format_name: str, quality: float) -> bytes:
    buffer = io.BytesIO()
    try:
        if format_name == "WEBP":
            if not 0 <= quality <= 100:
                raise InvalidParameters(f"WebP quality must be within [0, 100], got {quality}")
            image.save(buffer, format="WEBP", quality=float(quality), lossless=False)
        elif format_name == "JPEG":
            flatten_onto_black(image).save(buffer, format="JPEG", quality=jpeg_quality(quality))
        elif format_name == "PNG":
            image.save(buffer, format="PNG")
        else:
            raise UnsupportedFormat(f"Unsupported output format: {format_name}")
    except (OSError, ValueError, KeyError) as error:
        raise EncodeError(f"Failed to encode {format_name}: {error}") from error
    return buffer.getvalue()


def save_image(image: Image.Image, output_path: str, quality: float, format_name: Optional[str] = None) -> int:
    """
    Encode an image and write it to `output_path`.

    The format defaults to the one implied by the output extension.
    Returns the number of bytes written.
    """
    format_name = format_name or output_format_for_path(output_path)
    encoded_bytes = encode_image(image, format_name, quality)
    try:
        ensure_directory(os.path.dirname(output_path))
        with open(output_path, "wb") as output_handle:
            output_handle.write(encoded_bytes)
    except OSError as error:
        raise ImageIOError(f"Failed to write output file {output_path}: {error}") from error
    logger.debug("Wrote %d bytes of %s to %s", len(encoded_bytes), format_name, output_path)
    return len(encoded_bytes)
