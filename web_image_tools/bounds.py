"""
Bounding-box detection and cropping of blank image padding.

A pixel counts as content when any of its R, G, B or A channels is
non-zero. This also keeps fully transparent pixels that still carry a
color value, which some editors leave behind in PNG files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import cv2
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundingRect:
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    def as_crop_box(self) -> tuple[int, int, int, int]:
        # PIL crop boxes are exclusive on the right and bottom edges
        return self.min_x, self.min_y, self.max_x + 1, self.max_y + 1


def content_mask(image_rgba: np.ndarray) -> np.ndarray:
    """Return an HxW uint8 mask, 255 where the pixel has any non-zero channel."""
    return np.any(image_rgba > 0, axis=2).astype(np.uint8) * 255


def find_content_bounds(image: Image.Image) -> Optional[BoundingRect]:
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    mask_uint8 = content_mask(np.array(image))
    if cv2.countNonZero(mask_uint8) == 0:
        return None

    content_points = cv2.findNonZero(mask_uint8)
    left, top, box_width, box_height = cv2.boundingRect(content_points)
    return BoundingRect(
        min_x=int(left),
        min_y=int(top),
        max_x=int(left + box_width - 1),
        max_y=int(top + box_height - 1),
    )


def crop_transparent_areas(image: Image.Image) -> Image.Image:
    """
    Trim blank padding from the edges of an image.

    Args:
        image: Decoded image of at least 1x1 pixels.

    Returns:
        A new RGBA image covering exactly the content rectangle. Every pixel
        inside the rectangle is copied as-is. When the image has no content
        at all, a 1x1 fully transparent image is returned instead.
    """
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    bounds = find_content_bounds(image)
    if bounds is None:
        logger.info("No content found, returning 1x1 transparent image")
        return Image.new("RGBA", (1, 1), (0, 0, 0, 0))

    logger.debug(
        "Content bounds (%d,%d)-(%d,%d) in %dx%d image",
        bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y, image.width, image.height,
    )
    cropped_image = image.crop(bounds.as_crop_box())
    cropped_image.load()
    return cropped_image
