import pytest
from PIL import Image

from web_image_tools import codec
from web_image_tools.errors import DecodeError, ImageIOError, InvalidParameters, UnsupportedFormat


@pytest.mark.parametrize(
    "path, expected",
    [
        ("out.png", "PNG"),
        ("out.JPG", "JPEG"),
        ("dir/out.jpeg", "JPEG"),
        ("out.WebP", "WEBP"),
    ],
)
def test_output_format_for_path(path, expected):
    assert codec.output_format_for_path(path) == expected


@pytest.mark.parametrize("path", ["out.gif", "out.bmp", "out"])
def test_unsupported_output_format(path):
    with pytest.raises(UnsupportedFormat):
        codec.output_format_for_path(path)


@pytest.mark.parametrize("quality, expected", [(0, 1), (-20, 1), (150, 100), (89.6, 90), (80, 80)])
def test_jpeg_quality_clamped(quality, expected):
    assert codec.jpeg_quality(quality) == expected


def test_decode_png_as_rgba(padded_png_path):
    image = codec.decode_image(padded_png_path)
    assert image.mode == "RGBA"
    assert image.size == (100, 100)


def test_decode_rgb_is_converted(tmp_path):
    path = tmp_path / "photo.jpg"
    Image.new("RGB", (8, 6), (10, 200, 30)).save(path)
    image = codec.decode_image(str(path))
    assert image.mode == "RGBA"
    assert image.size == (8, 6)


def test_decode_garbage(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"definitely not an image")
    with pytest.raises(DecodeError):
        codec.decode_image(str(path))


def test_decode_missing_file(tmp_path):
    with pytest.raises(ImageIOError):
        codec.decode_image(str(tmp_path / "nope.png"))


def test_webp_quality_out_of_range(padded_image):
    with pytest.raises(InvalidParameters):
        codec.encode_image(padded_image, "WEBP", 120)


def test_jpeg_flattens_transparency_onto_black(tmp_path, padded_image):
    encoded = codec.encode_image(padded_image, "JPEG", 95)
    path = tmp_path / "flat.jpg"
    path.write_bytes(encoded)
    with Image.open(path) as decoded:
        assert decoded.mode == "RGB"
        corner = decoded.getpixel((0, 0))
    assert max(corner) < 16


def test_save_image_creates_directory(tmp_path, padded_image):
    output_path = tmp_path / "nested" / "deeper" / "out.png"
    byte_count = codec.save_image(padded_image, str(output_path), quality=90)
    assert output_path.stat().st_size == byte_count > 0


def test_save_image_format_override(tmp_path, padded_image):
    output_path = tmp_path / "named.png"
    codec.save_image(padded_image, str(output_path), quality=80, format_name="WEBP")
    with Image.open(output_path) as decoded:
        assert decoded.format == "WEBP"


def test_decompression_bomb_is_a_decode_error(tmp_path, monkeypatch):
    path = tmp_path / "huge.png"
    Image.new("RGBA", (400, 400), (1, 2, 3, 255)).save(path)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(DecodeError) as raised:
        codec.decode_image(str(path))
    assert isinstance(raised.value.__cause__, Image.DecompressionBombError)
