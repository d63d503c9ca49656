"""
Tests for Pillow-backed decoding.
"""

import io

import pytest
from PIL import Image

from icon_packer.packer.decoder import DecodeError, decode_image, open_image


def _encode(image: Image.Image, fmt: str = "PNG", **params) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt, **params)
    return buffer.getvalue()


class TestDecodeImage:

    def test_decode_when_rgba_png_then_pixels_preserved(self):
        data = _encode(Image.new("RGBA", (20, 10), (1, 2, 3, 4)))
        image = decode_image(data)
        assert (image.width, image.height, image.mode) == (20, 10, "RGBA")
        assert image.data[:4] == bytes([1, 2, 3, 4])

    def test_decode_when_jpeg_then_rgb(self):
        image = decode_image(_encode(Image.new("RGB", (16, 16), "white"), "JPEG"))
        assert image.mode == "RGB"

    def test_decode_when_palette_then_expanded_to_rgb(self):
        palette = Image.new("RGB", (8, 8), "blue").convert("P")
        assert decode_image(_encode(palette)).mode == "RGB"

    def test_decode_when_palette_with_transparency_then_expanded_to_rgba(self):
        palette = Image.new("P", (8, 8), 0)
        image = decode_image(_encode(palette, transparency=0))
        assert image.mode == "RGBA"

    def test_decode_when_bilevel_then_expanded_to_grayscale(self):
        assert decode_image(_encode(Image.new("1", (8, 8), 1))).mode == "L"

    def test_decode_when_16_bit_then_mode_kept(self):
        image = decode_image(_encode(Image.new("I;16", (8, 8))))
        assert image.pixel_format is None

    def test_decode_when_garbage_then_decode_error(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_image(b"not an image", source="broken.png")
        assert exc_info.value.source == "broken.png"
        assert "broken.png" in str(exc_info.value)

    def test_decode_when_size_exceeds_bomb_limit_then_decode_error(self, oversized_png):
        with pytest.raises(DecodeError) as exc_info:
            decode_image(oversized_png, source="huge.png")
        assert exc_info.value.source == "huge.png"
        assert isinstance(exc_info.value.__cause__, Image.DecompressionBombError)

    def test_decode_when_truncated_png_then_decode_error(self):
        data = _encode(Image.linear_gradient("L").convert("RGB"))
        with pytest.raises(DecodeError):
            decode_image(data[: len(data) // 2])


class TestOpenImage:

    def test_open_when_png_file_then_decoded(self, write_png):
        path = write_png("icon@2x.png", 32)
        image = open_image(path)
        assert (image.width, image.height) == (32, 32)

    def test_open_when_missing_file_then_os_error(self, tmp_path):
        with pytest.raises(OSError):
            open_image(tmp_path / "missing.png")
