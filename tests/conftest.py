import numpy as np
import pytest
import svgwrite
from PIL import Image


def padded_square_array(canvas_size=100, start=30, stop=70, color=(255, 0, 0, 255)):
    pixels = np.zeros((canvas_size, canvas_size, 4), dtype=np.uint8)
    pixels[start:stop, start:stop] = color
    return pixels


def square_svg(viewbox_size=64, square_offset=16, square_size=32, with_viewbox=True):
    drawing_kwargs = {"size": (f"{viewbox_size}px", f"{viewbox_size}px")}
    if with_viewbox:
        drawing_kwargs["viewBox"] = f"0 0 {viewbox_size} {viewbox_size}"
    drawing = svgwrite.Drawing(**drawing_kwargs)
    drawing.add(drawing.rect(insert=(square_offset, square_offset), size=(square_size, square_size), fill="#ff0000"))
    return drawing.tostring().encode("utf-8")


@pytest.fixture
def padded_image():
    return Image.fromarray(padded_square_array())


@pytest.fixture
def padded_png_path(tmp_path, padded_image):
    image_path = tmp_path / "padded.png"
    padded_image.save(image_path)
    return str(image_path)


@pytest.fixture
def svg_path(tmp_path):
    path = tmp_path / "square.svg"
    path.write_bytes(square_svg())
    return str(path)
