"""
Module: packer.resample

Purpose:
    Shrink images to an exact square size for their slot.

Key Functions:
    - resample_square(): Resize to size x size with a high quality filter

Dependencies:
    - PIL: Image resizing

Used By:
    - packer.builder
"""

from __future__ import annotations

import logging

from PIL import Image

from icon_packer.core.models import PixelImage

logger = logging.getLogger(__name__)


def resample_square(
    image: PixelImage,
    size: int,
    *,
    resample: Image.Resampling = Image.Resampling.LANCZOS,
) -> PixelImage:
    """
    Resample an image to exactly size x size.

    Non-square images are squashed to the square (no cropping), matching
    an exact resize. Deterministic for the same input.

    Args:
        image: Source image in a supported pixel format
        size: Target side length
        resample: Pillow filter

    Returns:
        New PixelImage (the input is not modified)

    Raises:
        ValueError: If size is not positive or exceeds the shorter edge
        UnsupportedPixelFormatError: If the image cannot be converted

    Example:
        >>> small = resample_square(image_600, 512)
        >>> (small.width, small.height)
        (512, 512)
    """
    if size <= 0:
        raise ValueError(f"size must be positive: {size}")
    if size > image.side:
        raise ValueError(f"refusing to upscale {image.width}x{image.height} to {size}x{size}")
    if image.width == size and image.height == size:
        return image

    resized = image.to_pil().resize((size, size), resample)
    logger.debug(f"Resampled {image.width}x{image.height} -> {size}x{size}")
    return PixelImage.from_pil(resized)
