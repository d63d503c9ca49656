"""
Module: image

Purpose:
    Provides PixelImage, the decoded raster handed between the decoder,
    the classifier and the resampler, plus the PixelFormat enumeration of
    buffer layouts the packer can encode.

Key Classes:
    - PixelFormat: Supported buffer layouts (Gray, GrayAlpha, RGB, RGBA)
    - PixelImage: Immutable width x height buffer with a Pillow mode
    - UnsupportedPixelFormatError: Raised for any other layout

Dependencies:
    - PIL.Image: Conversion to and from Pillow images

Used By:
    - packer.decoder
    - packer.builder
    - packer.resample
    - packer.codec
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from PIL import Image


class PixelFormat(str, Enum):
    """Pixel layouts accepted by the packer, valued by Pillow mode."""
    GRAY = "L"
    GRAY_ALPHA = "LA"
    RGB = "RGB"
    RGBA = "RGBA"

    def __str__(self) -> str:
        return self.value

    @property
    def bytes_per_pixel(self) -> int:
        return _BYTES_PER_PIXEL[self]

    @classmethod
    def from_mode(cls, mode: str) -> Optional["PixelFormat"]:
        """Return the format for a Pillow mode, or None if unsupported."""
        try:
            return cls(mode)
        except ValueError:
            return None


_BYTES_PER_PIXEL = {
    PixelFormat.GRAY: 1,
    PixelFormat.GRAY_ALPHA: 2,
    PixelFormat.RGB: 3,
    PixelFormat.RGBA: 4,
}


class UnsupportedPixelFormatError(ValueError):
    """
    Image uses a pixel layout the packer cannot encode.

    Attributes:
        mode: The offending Pillow mode
        source: Where the image came from, if known
        slot: Slot the image would have filled, if classified
    """

    def __init__(self, mode: str, source: Optional[str] = None, slot: Optional[str] = None):
        where = f" ({source})" if source else ""
        target = f" for slot {slot}" if slot else ""
        super().__init__(
            f"Unsupported pixel format {mode!r}{where}{target}; "
            f"expected one of {', '.join(f.value for f in PixelFormat)}"
        )
        self.mode = mode
        self.source = source
        self.slot = slot


@dataclass(frozen=True)
class PixelImage:
    """
    Decoded raster (immutable).

    Attributes:
        width: Width in pixels
        height: Height in pixels
        mode: Pillow mode string; only the PixelFormat modes can be packed
        data: Raw pixel bytes, row-major

    Invariants:
        - width > 0 and height > 0
        - len(data) == width * height * bytes_per_pixel for supported modes

    Example:
        >>> img = PixelImage(2, 2, "L", bytes(4))
        >>> img.side
        2
        >>> img.is_square
        True
    """
    width: int
    height: int
    mode: str
    data: bytes

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")
        fmt = PixelFormat.from_mode(self.mode)
        if fmt is not None:
            expected = self.width * self.height * fmt.bytes_per_pixel
            if len(self.data) != expected:
                raise ValueError(
                    f"buffer length {len(self.data)} does not match "
                    f"{self.width}x{self.height} {self.mode} ({expected} bytes)"
                )

    @property
    def side(self) -> int:
        """Square side length used for classification (shorter edge)."""
        return min(self.width, self.height)

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    @property
    def pixel_format(self) -> Optional[PixelFormat]:
        return PixelFormat.from_mode(self.mode)

    def require_format(self, source: Optional[str] = None, slot: Optional[str] = None) -> PixelFormat:
        """Return the pixel format or raise UnsupportedPixelFormatError."""
        fmt = self.pixel_format
        if fmt is None:
            raise UnsupportedPixelFormatError(self.mode, source=source, slot=slot)
        return fmt

    # ─────────────────────────────────────────────────────────────────────────
    # Conversion
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_pil(cls, image: Image.Image) -> "PixelImage":
        """Snapshot a Pillow image's pixels."""
        return cls(image.width, image.height, image.mode, image.tobytes())

    def to_pil(self) -> Image.Image:
        """
        Rebuild a Pillow image from the buffer.

        Raises:
            UnsupportedPixelFormatError: mode is not a PixelFormat
        """
        self.require_format()
        return Image.frombytes(self.mode, (self.width, self.height), self.data)

    def __repr__(self) -> str:
        return f"PixelImage({self.width}x{self.height} {self.mode}, {len(self.data)} bytes)"
