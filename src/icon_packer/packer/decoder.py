"""
Module: packer.decoder

Purpose:
    Decode icon source files into PixelImage buffers using Pillow.

Key Functions:
    - decode_image(): Decode from bytes
    - open_image(): Decode from a file path

Palette and bilevel images are expanded to RGB/RGBA/L so that ordinary
PNG exports pack without extra steps. High bit depth, float and CMYK
images keep their mode and are rejected later as unsupported.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from icon_packer.core.models import PixelImage

logger = logging.getLogger(__name__)


class DecodeError(Exception):
    """Image bytes could not be decoded."""

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source


def _expand_mode(image: Image.Image) -> Image.Image:
    if image.mode in ("P", "PA"):
        has_alpha = image.mode == "PA" or "transparency" in image.info
        return image.convert("RGBA" if has_alpha else "RGB")
    if image.mode == "1":
        return image.convert("L")
    return image


def decode_image(data: bytes, source: str = "") -> PixelImage:
    """
    Decode image bytes.

    Args:
        data: Encoded image (PNG, JPEG, ...)
        source: Name used in error messages

    Raises:
        DecodeError: If Pillow cannot identify or load the data, or the
            declared size exceeds its decompression bomb limit
    """
    label = source or "<bytes>"
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            pixels = PixelImage.from_pil(_expand_mode(image))
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise DecodeError(f"Failed to decode {label}: {e}", source=source) from e

    logger.debug(f"Decoded {label}: {pixels.width}x{pixels.height} {pixels.mode}")
    return pixels


def open_image(path: Path) -> PixelImage:
    """
    Read and decode an image file.

    Raises:
        DecodeError: If the file is not a decodable image
        OSError: If the file cannot be read
    """
    return decode_image(path.read_bytes(), source=str(path))
