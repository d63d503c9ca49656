"""
Unit tests for square resampling.
"""

import pytest
from PIL import Image

from icon_packer.core.models import PixelImage
from icon_packer.packer.resample import resample_square


def test_resample_when_larger_square_then_exact_target(make_image):
    out = resample_square(make_image(600), 512)
    assert (out.width, out.height) == (512, 512)
    assert out.mode == "RGBA"


def test_resample_when_already_target_then_same_object(make_image):
    img = make_image(64)
    assert resample_square(img, 64) is img


def test_resample_when_non_square_then_squashed_to_square(make_image):
    out = resample_square(make_image(600, 512), 512)
    assert (out.width, out.height) == (512, 512)


def test_resample_when_target_above_shorter_edge_then_refuses(make_image):
    with pytest.raises(ValueError, match="upscale"):
        resample_square(make_image(600, 300), 512)


def test_resample_when_zero_target_then_raises_error(make_image):
    with pytest.raises(ValueError):
        resample_square(make_image(16), 0)


def test_resample_when_repeated_then_deterministic():
    gradient = Image.linear_gradient("L").resize((300, 300))
    img = PixelImage.from_pil(gradient)
    assert resample_square(img, 256).data == resample_square(img, 256).data


def test_resample_when_box_filter_then_solid_colour_kept(make_image):
    out = resample_square(make_image(100, color=(10, 20, 30, 255)), 64, resample=Image.Resampling.BOX)
    assert out.to_pil().getpixel((10, 10)) == (10, 20, 30, 255)
