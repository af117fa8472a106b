"""Generate a PNG with transparent padding around a solid square, for trying out `optimize`."""

from __future__ import annotations

from typing import Tuple

from PIL import Image, ImageDraw, ImageColor

from .codec import save_image
from .errors import InvalidParameters


def generate_padded_square(
        canvas_size: int = 100,
        margin: int = 30,
        fill_color: str = "red",
) -> Image.Image:
    """Draw a filled square inset by `margin` pixels on a fully transparent canvas."""
    if margin * 2 >= canvas_size:
        raise InvalidParameters(f"Margin {margin} leaves no room on a {canvas_size}px canvas")
    fill_rgb: Tuple[int, ...] = ImageColor.getrgb(fill_color)
    image = Image.new("RGBA", (canvas_size, canvas_size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    # rectangle() includes both corner points
    draw.rectangle(
        [margin, margin, canvas_size - margin - 1, canvas_size - margin - 1],
        fill=tuple(fill_rgb[:3]) + (255,),
    )
    return image


def write_padded_square(output_path: str, canvas_size: int = 100, margin: int = 30) -> int:
    return save_image(generate_padded_square(canvas_size, margin), output_path, quality=100)
